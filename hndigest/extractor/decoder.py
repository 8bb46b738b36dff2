import json
import logging
from typing import List, Optional

from pydantic import ValidationError

from hndigest.extractor.scanner import ITEM_MARKER, iter_candidates
from hndigest.storage.models import NewsItem

logger = logging.getLogger(__name__)


def decode_item(candidate: str) -> Optional[NewsItem]:
    """
    Decode one candidate object into a NewsItem.

    Returns None instead of raising: a malformed candidate is simply dropped.
    JSON ``null`` behaves like an absent field.
    """
    try:
        raw = json.loads(candidate)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, int digit limit, nesting too deep
        logger.debug("Skipping candidate, invalid JSON: %s", e)
        return None

    if not isinstance(raw, dict):
        logger.debug("Skipping candidate, not an object: %r", type(raw).__name__)
        return None

    data = {k: v for k, v in raw.items() if v is not None}
    try:
        return NewsItem.model_validate(data)
    except ValidationError as e:
        logger.debug("Skipping candidate, schema mismatch: %s", e.errors()[0].get("msg", e))
        return None


def is_publishable(item: NewsItem) -> bool:
    return bool(item.title_ja) and bool(item.url)


def parse_rsc_payload(text: str, marker: str = ITEM_MARKER) -> List[NewsItem]:
    """Scan ``text`` and return the decodable, publishable items in order."""
    items: List[NewsItem] = []
    failed = 0
    for candidate in iter_candidates(text, marker):
        if candidate.text is None:
            failed += 1
            continue
        item = decode_item(candidate.text)
        if item is None:
            failed += 1
            continue
        if is_publishable(item):
            items.append(item)

    if failed:
        logger.debug("%d candidate(s) dropped while parsing payload", failed)
    return items
