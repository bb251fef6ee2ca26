from bs4 import BeautifulSoup

from rosters import config
from rosters.fetch import fetch_html


def parse_schedule_html(html):
    """
    Extract performer rows from a CompetitionSuite schedule page.
    Returns [{"name", "class"}] in document order. Rows missing either field are skipped;
    repeated rows are kept.
    """
    soup = BeautifulSoup(html, "html.parser")
    entries = []
    for row in soup.select(config.SCHEDULE_ROW_SELECTOR):
        name_tag = row.select_one(config.SCHEDULE_NAME_SELECTOR)
        class_tag = row.select_one(config.SCHEDULE_CLASS_SELECTOR)
        name = name_tag.get_text().strip() if name_tag else ""
        class_code = class_tag.get_text().strip() if class_tag else ""
        if name and class_code:
            entries.append({"name": name, "class": class_code})
    return entries


def scrape_schedule(url):
    """Fetch a schedule page and parse its rows. FetchError propagates."""
    return parse_schedule_html(fetch_html(url))
