from rosters.pipeline.groups import match_group
from rosters.pipeline.io import console_log
from rosters.recap import validate_recap
from rosters.schedule import scrape_schedule


def extract_competition_urls(detail):
    """
    Return (schedule_url, recap_url) from the first competition of an event detail.
    Events without competitions yield (None, None).
    """
    competitions = detail.get("competitions") if isinstance(detail, dict) else None
    if not isinstance(competitions, list) or not competitions:
        return None, None

    first = competitions[0]
    if not isinstance(first, dict):
        return None, None
    return first.get("standardScheduleUrl") or None, first.get("recapUrl") or None


def reconcile_groups(entries, group_map):
    return [
        {"name": e["name"], "class": e["class"], "groupId": match_group(e["name"], group_map)}
        for e in entries
    ]


def failed_event(event, error):
    return {
        "id": event.get("id"),
        "name": event.get("name"),
        "location": event.get("location"),
        "scheduleUrl": None,
        "recapUrl": "",
        "groups": [],
        "error": error,
    }


def enrich_event(client, event, group_map, log_func=None):
    """
    Build the enriched record for one event: detail fetch, schedule scrape,
    registry matching and recap check.
    Never raises; failures come back as a record with "error" set.
    """
    log = log_func or console_log

    try:
        detail = client.get_event(event["id"])
        schedule_url, recap_url = extract_competition_urls(detail)

        groups = []
        if schedule_url:
            groups = reconcile_groups(scrape_schedule(schedule_url), group_map)

        recap = validate_recap(recap_url, log_func=log) if recap_url else ""

        return {
            "id": event.get("id"),
            "name": event.get("name"),
            "location": event.get("location"),
            "scheduleUrl": schedule_url,
            "recapUrl": recap,
            "groups": groups,
        }
    except Exception as e:
        log(f"    Error enriching event {event.get('id')} ({event.get('name')}): {e}", "WARNING")
        return failed_event(event, str(e))
