import time
import traceback
from dataclasses import dataclass, field

from rosters import config
from rosters.catalog import CatalogClient
from rosters.pipeline.enrich import enrich_event
from rosters.pipeline.fanout import fan_out
from rosters.pipeline.groups import resolve_groups
from rosters.pipeline.io import console_log
from rosters.pipeline.metrics import SeasonMetrics
from rosters.pipeline.snapshot import snapshot_key, write_snapshot
from rosters.pipeline.validate import validate_enriched_event


@dataclass
class RunResult:
    """Outcome of one scrape run, filled in as seasons complete."""
    seasons: list = field(default_factory=list)
    updated: list = field(default_factory=list)
    skipped: list = field(default_factory=list)
    metrics: dict = field(default_factory=dict)
    season_errors: dict = field(default_factory=dict)
    snapshot_key: str | None = None
    fatal_error: str | None = None

    @property
    def success(self):
        return self.fatal_error is None

    def summary(self):
        body = {"updated": self.updated, "skipped": self.skipped}
        if self.fatal_error:
            body = {"error": self.fatal_error, **body}
        elif self.snapshot_key:
            body["key"] = self.snapshot_key
        return body


def season_label(season):
    return str(season.get("name") or season.get("id"))


def select_seasons(client, mode="current", season_id=None):
    """
    Seasons to process for a run mode.
    "all": every season, newest first. "season": the one season_id. "current": the newest.
    """
    if mode == "all":
        return client.list_seasons()
    if mode == "season":
        if not season_id:
            raise ValueError("season_id is required when mode is 'season'")
        season = client.get_season(season_id)
        return [{"id": season.get("id") or season_id, "name": season.get("name")}]
    if mode == "current":
        return [client.get_most_recent_season()]
    raise ValueError(f"Unknown mode: {mode}")


def scrape_season(client, season, concurrency=config.MAX_CONCURRENCY, log_func=None):
    """
    Enrich every event of a season.
    Returns (season_record, metrics); season_record is None when the season has no events.
    Season-level errors (event or group list fetch) propagate.
    """
    log = log_func or console_log
    metrics = SeasonMetrics(name=season_label(season))

    events = client.list_events(season["id"])
    if not events:
        log(f"  Skipping {metrics.name}: no events")
        return None, metrics

    group_map = resolve_groups(client, season["id"])
    log(f"  {len(events)} events, {len(group_map)} registered groups")

    def worker(event):
        return enrich_event(client, event, group_map, log_func=log)

    records = fan_out(events, worker, concurrency=concurrency)

    invalid = [r.get("id") for r in records if not validate_enriched_event(r)]
    if invalid:
        log(f"  WARNING: {len(invalid)} malformed event records: {invalid}", "WARNING")

    metrics.record_events(records)
    return {"id": season["id"], "name": season.get("name"), "events": records}, metrics


def scrape_seasons(client, seasons, concurrency=config.MAX_CONCURRENCY, log_func=None, result=None):
    """
    Process seasons one after another. A failing or empty season is skipped
    and the run moves on.
    """
    log = log_func or console_log
    result = result if result is not None else RunResult()

    for season in seasons:
        name = season_label(season)
        # Repeated season names get their id appended
        if name in result.metrics:
            name = f"{name} [{season.get('id')}]"
        log(f"Scraping season {name}...")
        start_time = time.time()

        try:
            record, metrics = scrape_season(client, season, concurrency=concurrency, log_func=log)
        except Exception as e:
            metrics = SeasonMetrics(name=name, errors=1, error_messages=[str(e)])
            log(f"  ERROR: Failed to scrape {name}: {e}", "ERROR")
            log(f"  Traceback:\n{traceback.format_exc()}", "ERROR")
            result.season_errors[name] = str(e)
            record = None

        metrics.name = name
        metrics.duration_ms = (time.time() - start_time) * 1000
        result.metrics[name] = metrics

        if record is None:
            result.skipped.append(name)
            continue

        log(f"  {metrics.event_count} events ({metrics.failed_events} failed), "
            f"{metrics.groups_matched}/{metrics.groups_scraped} groups matched")
        result.seasons.append(record)
        result.updated.append(name)

    return result


def run_scrape(settings, mode="current", season_id=None, log_func=None):
    """
    Full run: authenticate, select seasons, enrich them and write the snapshot.
    Fatal failures (token, season list, snapshot write) stop the run and are
    reported on the result together with the progress made so far.
    """
    log = log_func or console_log
    result = RunResult()

    try:
        client = CatalogClient.connect(settings)
        seasons = select_seasons(client, mode=mode, season_id=season_id)
        log(f"Selected {len(seasons)} season(s): {', '.join(season_label(s) for s in seasons)}")

        scrape_seasons(client, seasons, concurrency=settings.concurrency, log_func=log, result=result)

        season_name = seasons[0].get("name") if mode == "season" and seasons else None
        key = snapshot_key(mode, season_name)
        write_snapshot(result.seasons, key, settings, log_func=log)
        result.snapshot_key = key
    except Exception as e:
        result.fatal_error = str(e)
        log(f"ERROR: Scrape run failed: {e}", "ERROR")
        log(f"Traceback:\n{traceback.format_exc()}", "ERROR")

    return result
