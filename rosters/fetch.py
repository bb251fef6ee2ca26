import requests

from rosters import config


class FetchError(RuntimeError):
    """Raised when a public HTML page cannot be retrieved."""

    def __init__(self, url, message, status_code=None):
        super().__init__(f"{message} ({url})")
        self.url = url
        self.status_code = status_code


def fetch_html(url, timeout=config.HTML_TIMEOUT):
    """GET a public page and return its text. Non-2xx and network errors raise FetchError."""
    try:
        resp = requests.get(url, headers=config.HTML_HEADERS, timeout=timeout)
    except requests.RequestException as e:
        raise FetchError(url, f"{type(e).__name__}: {e}") from e

    if not resp.ok:
        raise FetchError(url, f"HTTP {resp.status_code}", status_code=resp.status_code)
    return resp.text
