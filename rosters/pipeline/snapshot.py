"""
Snapshot persistence: the whole run result is written under one key, replacing
whatever the key held before.
"""

import json
import os
import tempfile

from botocore.exceptions import BotoCoreError, ClientError

from rosters import config
from rosters.pipeline.r2 import upload_to_r2


class SnapshotWriteError(RuntimeError):
    """Raised when a snapshot cannot be persisted."""


def snapshot_key(mode, season_name=None):
    """Cache key for a run mode: "all", "current" or "season"."""
    if mode == "all":
        return config.ALL_SEASONS_KEY
    if mode == "current":
        return config.CURRENT_SEASON_KEY
    if mode == "season":
        if not season_name:
            raise ValueError("season_name is required for a single-season snapshot")
        return config.SEASON_KEY_TEMPLATE.format(season_name=season_name)
    raise ValueError(f"Unknown snapshot mode: {mode}")


def _write_local(path, body):
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(body)
        os.replace(tmp_path, path)
    except OSError:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def write_snapshot(seasons, key, settings, log_func=None):
    """
    Serialize season records and overwrite `key` in the local mirror and in R2.
    Returns the local path. Raises SnapshotWriteError on any write failure.
    """
    log = log_func or console_log
    body = json.dumps(seasons, indent=2).encode("utf-8")
    local_path = settings.data_dir / key

    try:
        _write_local(local_path, body)
    except OSError as e:
        raise SnapshotWriteError(f"Could not write {local_path}: {e}") from e
    log(f"Snapshot saved to {local_path}")

    try:
        uploaded = upload_to_r2(settings, key, body)
    except (BotoCoreError, ClientError) as e:
        raise SnapshotWriteError(f"R2 upload of {key} failed: {e}") from e

    if uploaded:
        log(f"Uploaded to R2: {key}")
    else:
        log("R2 upload skipped: missing R2 credentials")
    return local_path
