import json
import re
from datetime import datetime, timedelta

from rosters import config
from rosters.pipeline.r2 import download_from_r2, upload_to_r2


def trim_log_by_time(log_path, retention_days=14):
    """
    Remove log entries older than retention_days.
    Returns list of lines to keep.
    """
    if not log_path.exists():
        return []

    cutoff = datetime.utcnow() - timedelta(days=retention_days)
    cutoff_str = cutoff.strftime("%Y-%m-%d %H:%M:%S")

    kept_lines = []
    current_entry_recent = False

    with open(log_path, "r") as f:
        for line in f:
            match = re.match(r"\[(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\]", line)
            if match:
                current_entry_recent = match.group(1) >= cutoff_str

            if current_entry_recent:
                kept_lines.append(line)

    return kept_lines


def save_run_log(log_path, log_lines, retention_days=config.LOG_RETENTION_DAYS):
    """Append this run's lines to the log file, dropping entries past retention."""
    existing = trim_log_by_time(log_path, retention_days=retention_days)
    content = existing + ["\n--- New Run ---\n"] + [line + "\n" for line in log_lines]

    log_path.parent.mkdir(parents=True, exist_ok=True)
    with open(log_path, "w") as f:
        f.writelines(content)


def load_existing_status(settings):
    """Load the previous run status (download from R2 first if available)."""
    download_from_r2(settings, config.STATUS_KEY, settings.status_path)

    try:
        if settings.status_path.exists():
            with open(settings.status_path, "r") as f:
                status = json.load(f)
            if isinstance(status, dict) and isinstance(status.get("seasons", {}), dict):
                return status
    except (OSError, ValueError):
        pass
    return {"seasons": {}}


def build_season_status(name, run_timestamp, existing_status, metrics=None, error=None):
    """
    Status entry for one season. last_success* carry over from the previous run
    unless this run succeeded.
    """
    status = {
        "last_run": run_timestamp,
        "success": error is None and metrics is not None,
        "event_count": metrics.event_count if metrics else 0,
        "error_count": metrics.failed_events if metrics else 0,
        "error": error,
    }

    previous = existing_status.get("seasons", {}).get(name, {})
    if previous.get("last_success"):
        status["last_success"] = previous["last_success"]
        status["last_success_count"] = previous.get("last_success_count", 0)

    if status["success"]:
        status["last_success"] = run_timestamp
        status["last_success_count"] = metrics.event_count

    return status


def save_status(settings, status):
    """Write the status file locally and to R2 (best effort)."""
    body = json.dumps(status, indent=2)
    settings.status_path.parent.mkdir(parents=True, exist_ok=True)
    with open(settings.status_path, "w") as f:
        f.write(body)
    return upload_to_r2(settings, config.STATUS_KEY, body.encode("utf-8"))


def console_log(message, level="INFO"):
    print(message)


def make_run_logger(log_lines):
    """Return a log(message, level) function that prints and buffers timestamped lines."""

    def log(message, level="INFO"):
        timestamp = datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S")
        print(message)
        log_lines.append(f"[{timestamp}] [{level}] {message}")

    return log
