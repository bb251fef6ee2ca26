from rosters import config
from rosters.fetch import FetchError, fetch_html
from rosters.pipeline.io import console_log


def validate_recap(url, log_func=None):
    """
    Return url if its recap page is published, otherwise "".
    A missing url, an unavailable page and a failed fetch all count as no recap.
    """
    log = log_func or console_log
    if not url:
        return ""

    try:
        html = fetch_html(url)
    except FetchError as e:
        log(f"    Recap fetch failed for {url}: {e}")
        return ""

    if config.RECAP_UNAVAILABLE_MARKER in html:
        log(f"    Recap not available yet: {url}")
        return ""
    return url
