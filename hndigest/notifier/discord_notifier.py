# discord_notifier.py
"""
DiscordNotifier: posts the ranked daily digest to a Discord Incoming Webhook.

- Items are sent in batches of BATCH_SIZE, one embed per request.
- The first embed is titled "Hacker News 日本語まとめ (date)", the following
  ones carry the " - 続き" (continued) suffix.
- Each item is one embed field: "N位 | Score: S" -> "[title](url)" plus the
  comment summary with HTML stripped.
- A non-2xx response aborts the remaining batches (WebhookError). Nothing is
  retried and batches already posted stay posted.

Example:
    notifier = DiscordNotifier(webhook_url)
    notifier.notify(rank_items(items), date="2025-01-31")
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Sequence

import requests

from hndigest.errors import WebhookError
from hndigest.storage.models import NewsItem
from hndigest.utils.text_utils import strip_html, truncate

logger = logging.getLogger(__name__)

BATCH_SIZE = 3
EMBED_COLOR = 0xFF6600
TITLE_LIMIT = 200
SUMMARY_LIMIT = 800
SEND_DELAY_SEC = 0.5
DIGEST_TITLE = "Hacker News 日本語まとめ ({date})"
CONTINUED_SUFFIX = " - 続き"


def batched(items: Sequence[NewsItem], size: int = BATCH_SIZE) -> List[List[NewsItem]]:
    if size <= 0:
        raise ValueError("batch size must be positive")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


class DiscordNotifier:
    """Renders and sends digest embeds to a Discord webhook."""

    TIMEOUT = 10

    def __init__(
        self,
        webhook_url: str,
        send_delay_sec: float = SEND_DELAY_SEC,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Parameters
        ----------
        webhook_url : str
            Discord Incoming Webhook URL.
        send_delay_sec : float
            Pause between two consecutive posts (webhook rate limit).
        session : requests.Session, optional
            HTTP session; module-level ``requests`` is used when omitted.
        sleep : callable
            Injected for tests.
        """
        self.webhook_url = webhook_url
        self.send_delay_sec = send_delay_sec
        self._http = session or requests
        self._sleep = sleep

    # ---------- Rendering ----------
    @staticmethod
    def render_field(item: NewsItem) -> Dict[str, Any]:
        value = f"[{truncate(item.title_ja, TITLE_LIMIT)}]({item.url})"
        if item.comment_summary_html:
            summary = truncate(strip_html(item.comment_summary_html), SUMMARY_LIMIT)
            value = f"{value}\n{summary}"
        return {"name": f"{item.rank}位 | Score: {item.score}", "value": value}

    @staticmethod
    def render_title(date: str, batch_index: int) -> str:
        title = DIGEST_TITLE.format(date=date)
        if batch_index > 0:
            title += CONTINUED_SUFFIX
        return title

    def render_payload(
        self,
        batch: Sequence[NewsItem],
        date: str,
        batch_index: int,
        url: Optional[str] = None,
    ) -> Dict[str, Any]:
        embed: Dict[str, Any] = {
            "title": self.render_title(date, batch_index),
            "color": EMBED_COLOR,
            "fields": [self.render_field(it) for it in batch],
        }
        if url:
            embed["url"] = url
        return {"embeds": [embed]}

    def render_payloads(self, items: Sequence[NewsItem], date: str) -> List[Dict[str, Any]]:
        return [self.render_payload(b, date, i) for i, b in enumerate(batched(items))]

    # ---------- Sending ----------
    def send_payload(self, payload: Dict[str, Any]) -> None:
        try:
            resp = self._http.post(self.webhook_url, json=payload, timeout=self.TIMEOUT)
        except requests.RequestException as e:
            raise WebhookError(None, str(e)) from e

        if not 200 <= resp.status_code < 300:
            raise WebhookError(resp.status_code, resp.text)

    def notify(self, items: Sequence[NewsItem], date: str) -> Dict[str, Any]:
        """
        Send all ranked items, one request per batch.
        Returns a dict with status, item count and number of batches sent.
        """
        if not items:
            return {"status": "no_items", "count": 0, "batches": 0}

        payloads = self.render_payloads(items, date)
        for i, payload in enumerate(payloads):
            self.send_payload(payload)
            logger.info("Sent batch %d/%d", i + 1, len(payloads))
            if i < len(payloads) - 1:
                self._sleep(self.send_delay_sec)

        return {"status": "sent", "count": len(items), "batches": len(payloads)}
