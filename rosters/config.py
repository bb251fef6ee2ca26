import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

REPO_ROOT = Path(__file__).resolve().parents[1]
DATA_DIR = REPO_ROOT / "data"
STATUS_PATH = DATA_DIR / "scrape-status.json"
LOG_PATH = DATA_DIR / "scrape-log.txt"

CLIENT_ID = os.environ.get("CLIENT_ID")
CLIENT_SECRET = os.environ.get("CLIENT_SECRET")
CS_API_BASE_URL = os.environ.get("CS_API_BASE_URL", "https://api.competitionsuite.com/v3")
CS_TOKEN_URL = f"{CS_API_BASE_URL}/oauth2/token"
API_TIMEOUT = 30

R2_ACCOUNT_ID = os.environ.get("R2_ACCOUNT_ID")
R2_ACCESS_KEY_ID = os.environ.get("R2_ACCESS_KEY_ID")
R2_SECRET_ACCESS_KEY = os.environ.get("R2_SECRET_ACCESS_KEY")
R2_BUCKET_NAME = os.environ.get("R2_BUCKET_NAME", "cs-rosters-data")

ALL_SEASONS_KEY = "events-with-groups/all-seasons.json"
CURRENT_SEASON_KEY = "current-season.json"
SEASON_KEY_TEMPLATE = "events-with-groups/{season_name}.json"
STATUS_KEY = "scrape-status.json"

# Max event enrichments in flight against the schedule host
MAX_CONCURRENCY = 3

HTML_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Connection": "keep-alive",
}
HTML_TIMEOUT = 20

SCHEDULE_ROW_SELECTOR = ".schedule-row"
SCHEDULE_NAME_SELECTOR = ".schedule-row__name"
SCHEDULE_CLASS_SELECTOR = ".schedule-row__initials"
RECAP_UNAVAILABLE_MARKER = "not available"

LOG_RETENTION_DAYS = 14


@dataclass(frozen=True)
class Settings:
    """Credentials and locations for one scrape run."""
    client_id: str
    client_secret: str
    api_base_url: str = CS_API_BASE_URL
    token_url: str = CS_TOKEN_URL
    concurrency: int = MAX_CONCURRENCY
    data_dir: Path = DATA_DIR
    r2_account_id: str | None = None
    r2_access_key_id: str | None = None
    r2_secret_access_key: str | None = None
    r2_bucket_name: str = R2_BUCKET_NAME

    @property
    def r2_configured(self):
        return all([self.r2_account_id, self.r2_access_key_id, self.r2_secret_access_key])

    @property
    def status_path(self):
        return self.data_dir / STATUS_PATH.name

    @property
    def log_path(self):
        return self.data_dir / LOG_PATH.name


def load_settings(upload=True):
    """
    Build Settings from the environment.
    R2 credentials are left out when upload is False, which keeps the run local.
    Raises ValueError when the catalog API credentials are missing.
    """
    if not CLIENT_ID or not CLIENT_SECRET:
        raise ValueError("CLIENT_ID and CLIENT_SECRET must be set")

    r2 = {}
    if upload:
        r2 = {
            "r2_account_id": R2_ACCOUNT_ID,
            "r2_access_key_id": R2_ACCESS_KEY_ID,
            "r2_secret_access_key": R2_SECRET_ACCESS_KEY,
        }
    return Settings(client_id=CLIENT_ID, client_secret=CLIENT_SECRET, **r2)
