import logging
from typing import List, Optional

import requests
from requests.adapters import HTTPAdapter

from hndigest.errors import FetchError
from hndigest.extractor import ITEM_MARKER, parse_rsc_payload
from hndigest.storage.models import NewsItem
from .base import BaseFeed

logger = logging.getLogger(__name__)

# ---------- shared HTTP session: pooled, no retries (a failed fetch aborts the run) ----------
_SESSION = requests.Session()
_ADAPTER = HTTPAdapter(pool_connections=4, pool_maxsize=4, max_retries=0)
_SESSION.mount("https://", _ADAPTER)
_SESSION.mount("http://", _ADAPTER)
_SESSION.headers.update({"User-Agent": "hndigest/1.0"})


def build_source_url(base_url: str, date: str) -> str:
    return f"{base_url.rstrip('/')}/{date}.txt"


class RscDigestFeed(BaseFeed):
    """Daily RSC payload ``{base_url}/{date}.txt`` holding the ranked HN items."""

    TIMEOUT = 15

    def __init__(
        self,
        base_url: str,
        date: str,
        marker: str = ITEM_MARKER,
        session: Optional[requests.Session] = None,
    ):
        self.base_url: str = base_url
        self.date: str = date
        self.marker: str = marker
        self.session: requests.Session = session or _SESSION

    @property
    def url(self) -> str:
        return build_source_url(self.base_url, self.date)

    def fetch_text(self) -> str:
        url = self.url
        logger.info("Fetching data from: %s", url)
        try:
            response = self.session.get(url, timeout=self.TIMEOUT)
        except requests.RequestException as e:
            raise FetchError(f"HTTP request failed: {e}") from e

        if response.status_code != 200:
            raise FetchError(f"unexpected status code: {response.status_code}")

        # text/plain without charset would otherwise be decoded as latin-1
        return response.content.decode("utf-8", errors="replace")

    def fetch(self) -> List[NewsItem]:
        items = parse_rsc_payload(self.fetch_text(), self.marker)
        logger.info("Found %d news items", len(items))
        return items
