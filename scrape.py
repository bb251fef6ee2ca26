#!/usr/bin/env python3
"""
Scrape CompetitionSuite events with their group rosters and save a snapshot.

For each selected season:
- list the season's events and its registered groups
- fetch each event's schedule page and pull the performing groups (3 at a time)
- match schedule names to registered group ids
- keep recap links only once the recap is published

Modes:
- default: the most recent season -> current-season.json
- --all: every season, newest first -> events-with-groups/all-seasons.json
- --season-id ID: one season -> events-with-groups/<season name>.json
"""

import argparse
import json
import sys
from datetime import datetime

from botocore.exceptions import BotoCoreError, ClientError

from rosters import config
from rosters.pipeline.io import build_season_status, load_existing_status, make_run_logger, save_run_log, save_status
from rosters.pipeline.seasons import run_scrape


def log_summary_table(log, metrics_by_season):
    log("")
    log("=" * 72)
    log("SEASON SUMMARY")
    log("=" * 72)
    log(f"{'Season':<24} {'Events':>7} {'Failed':>7} {'Matched':>9} {'Groups':>7} {'Time':>10}")
    log("-" * 72)
    for name, m in metrics_by_season.items():
        time_str = f"{m.duration_ms:.0f}ms"
        log(f"{name:<24} {m.event_count:>7} {m.failed_events:>7} {m.groups_matched:>9} {m.groups_scraped:>7} {time_str:>10}")
    log("-" * 72)
    total_events = sum(m.event_count for m in metrics_by_season.values())
    total_failed = sum(m.failed_events for m in metrics_by_season.values())
    total_matched = sum(m.groups_matched for m in metrics_by_season.values())
    total_groups = sum(m.groups_scraped for m in metrics_by_season.values())
    total_time = sum(m.duration_ms for m in metrics_by_season.values())
    log(f"{'TOTAL':<24} {total_events:>7} {total_failed:>7} {total_matched:>9} {total_groups:>7} {total_time:.0f}ms")
    log("=" * 72)


def build_status(result, run_timestamp, existing_status):
    season_statuses = {}
    for name, metrics in result.metrics.items():
        error = result.season_errors.get(name)
        if error is None and name in result.skipped:
            error = "no events"
        season_statuses[name] = build_season_status(
            name,
            run_timestamp,
            existing_status,
            metrics=None if error else metrics,
            error=error,
        )

    return {
        "last_run": run_timestamp,
        "success": result.success,
        "error": result.fatal_error,
        "all_success": result.success and all(s["success"] for s in season_statuses.values()),
        "any_success": any(s["success"] for s in season_statuses.values()),
        "updated": result.updated,
        "skipped": result.skipped,
        "snapshot_key": result.snapshot_key,
        "seasons": season_statuses,
    }


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Scrape CompetitionSuite events with group rosters")
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--all", action="store_true", help="Scrape every season, newest first")
    target.add_argument("--season-id", default=None, help="Scrape a single season by id")
    parser.add_argument("--no-upload", action="store_true", help="Skip R2 download/upload; write local files only")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    run_timestamp = datetime.utcnow().isoformat() + "Z"
    log_lines = []
    log = make_run_logger(log_lines)

    try:
        settings = config.load_settings(upload=not args.no_upload)
    except ValueError as e:
        print(json.dumps({"error": str(e)}))
        return 2

    if args.all:
        mode = "all"
    elif args.season_id:
        mode = "season"
    else:
        mode = "current"

    log(f"Starting scrape run at {run_timestamp} (mode: {mode})")
    existing_status = load_existing_status(settings)

    result = run_scrape(settings, mode=mode, season_id=args.season_id, log_func=log)

    log_summary_table(log, result.metrics)
    if result.skipped:
        log(f"Skipped seasons: {', '.join(result.skipped)}", "WARNING")

    status = build_status(result, run_timestamp, existing_status)
    try:
        save_status(settings, status)
        log(f"Status saved to {settings.status_path}")
    except (OSError, BotoCoreError, ClientError) as e:
        log(f"WARNING: Could not save status: {e}", "WARNING")

    save_run_log(settings.log_path, log_lines)
    print(f"Log saved to {settings.log_path}")

    print(json.dumps(result.summary()))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
