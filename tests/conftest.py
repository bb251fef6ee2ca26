from pathlib import Path

import pytest

from rosters.config import Settings

API = "https://api.example.test/v3"
FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        client_id="client-id",
        client_secret="client-secret",
        api_base_url=API,
        token_url=f"{API}/oauth2/token",
        data_dir=tmp_path,
    )


@pytest.fixture
def fixture_text():
    def read(name):
        return (FIXTURES / name).read_text()

    return read


@pytest.fixture
def quiet_log():
    lines = []

    def log(message, level="INFO"):
        lines.append((level, message))

    log.lines = lines
    return log
