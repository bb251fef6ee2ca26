import json
from dataclasses import replace

import pytest
from botocore.exceptions import ClientError

from rosters.pipeline import r2
from rosters.pipeline.io import load_existing_status, save_status
from rosters.pipeline.snapshot import SnapshotWriteError, snapshot_key, write_snapshot

SEASONS = [{"id": "S1", "name": "2026", "events": []}]


class FakeS3:
    def __init__(self, objects=None, fail_put=False):
        self.objects = objects or {}
        self.fail_put = fail_put

    def put_object(self, Bucket, Key, Body, ContentType):
        if self.fail_put:
            raise ClientError({"Error": {"Code": "500", "Message": "boom"}}, "PutObject")
        self.objects[Key] = (Body, ContentType)

    def get_object(self, Bucket, Key):
        if Key not in self.objects:
            raise ClientError({"Error": {"Code": "NoSuchKey", "Message": "missing"}}, "GetObject")
        body = self.objects[Key][0]

        class Stream:
            def read(self):
                return body

        return {"Body": Stream()}


@pytest.fixture
def r2_settings(settings):
    return replace(
        settings,
        r2_account_id="acct",
        r2_access_key_id="key",
        r2_secret_access_key="secret",
    )


def test_snapshot_key():
    assert snapshot_key("all") == "events-with-groups/all-seasons.json"
    assert snapshot_key("current") == "current-season.json"
    assert snapshot_key("season", "2026") == "events-with-groups/2026.json"
    with pytest.raises(ValueError):
        snapshot_key("season")
    with pytest.raises(ValueError):
        snapshot_key("hourly")


def test_write_snapshot_overwrites_local_mirror(settings, quiet_log):
    path = write_snapshot([{"id": "old"}], "current-season.json", settings, log_func=quiet_log)
    path = write_snapshot(SEASONS, "current-season.json", settings, log_func=quiet_log)

    assert json.loads(path.read_text()) == SEASONS
    assert sorted(p.name for p in path.parent.iterdir()) == ["current-season.json"]
    assert ("INFO", "R2 upload skipped: missing R2 credentials") in quiet_log.lines


def test_write_snapshot_uploads_to_r2(r2_settings, monkeypatch, quiet_log):
    s3 = FakeS3()
    monkeypatch.setattr(r2, "get_r2_client", lambda settings: s3)

    write_snapshot(SEASONS, "events-with-groups/all-seasons.json", r2_settings, log_func=quiet_log)

    body, content_type = s3.objects["events-with-groups/all-seasons.json"]
    assert json.loads(body) == SEASONS
    assert content_type == "application/json"


def test_write_snapshot_upload_failure_is_fatal(r2_settings, monkeypatch, quiet_log):
    monkeypatch.setattr(r2, "get_r2_client", lambda settings: FakeS3(fail_put=True))

    with pytest.raises(SnapshotWriteError, match="R2 upload"):
        write_snapshot(SEASONS, "current-season.json", r2_settings, log_func=quiet_log)


def test_write_snapshot_local_failure_is_fatal(settings, quiet_log):
    (settings.data_dir / "events-with-groups").write_text("not a directory")

    with pytest.raises(SnapshotWriteError):
        write_snapshot(SEASONS, "events-with-groups/2026.json", settings, log_func=quiet_log)


def test_status_round_trip_through_r2(r2_settings, monkeypatch):
    s3 = FakeS3()
    monkeypatch.setattr(r2, "get_r2_client", lambda settings: s3)
    status = {"last_run": "2026-03-20T12:00:00Z", "seasons": {"2026": {"success": True}}}

    assert save_status(r2_settings, status) is True
    r2_settings.status_path.unlink()

    assert load_existing_status(r2_settings) == status


def test_load_existing_status_defaults(settings):
    assert load_existing_status(settings) == {"seasons": {}}

    settings.status_path.write_text("{broken")
    assert load_existing_status(settings) == {"seasons": {}}

    settings.status_path.write_text("[]")
    assert load_existing_status(settings) == {"seasons": {}}

    settings.status_path.write_text(json.dumps({"seasons": []}))
    assert load_existing_status(settings) == {"seasons": {}}
