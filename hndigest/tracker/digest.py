import logging
import time
from typing import Any, Callable, Dict, List, Optional

import requests

from hndigest.feeds.rsc import RscDigestFeed
from hndigest.notifier.discord_notifier import DiscordNotifier
from hndigest.settings import Settings
from hndigest.storage.models import NewsItem
from hndigest.tracker.ranker import rank_items
from hndigest.utils.tz_utils import today_str, validate_date

logger = logging.getLogger(__name__)


def resolve_date(settings: Settings, date: Optional[str] = None) -> str:
    if date:
        return validate_date(date)
    return today_str(settings.timezone)


def collect_ranked(
    settings: Settings,
    date: str,
    session: Optional[requests.Session] = None,
) -> List[NewsItem]:
    feed = RscDigestFeed(settings.source_base_url, date, session=session)
    return rank_items(feed.fetch(), settings.top_n)


def run_digest(
    settings: Settings,
    date: Optional[str] = None,
    session: Optional[requests.Session] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Dict[str, Any]:
    """
    Fetch the payload for ``date`` (default: today), rank it and post it.

    Any DigestError propagates; batches sent before a failure stay sent.
    """
    webhook_url = settings.require_webhook()
    run_date = resolve_date(settings, date)

    top = collect_ranked(settings, run_date, session=session)
    notifier = DiscordNotifier(
        webhook_url,
        send_delay_sec=settings.send_delay_sec,
        session=session,
        sleep=sleep,
    )
    result = notifier.notify(top, run_date)
    result["date"] = run_date
    if result["status"] == "sent":
        logger.info("Successfully sent %d news items for %s", result["count"], run_date)
    else:
        logger.warning("No news items found for %s, nothing sent", run_date)
    return result
