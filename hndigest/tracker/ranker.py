from typing import Iterable, List

from hndigest.storage.models import NewsItem

DEFAULT_TOP_N = 20


def rank_items(items: Iterable[NewsItem], limit: int = DEFAULT_TOP_N) -> List[NewsItem]:
    """
    Sort by score (desc), keep the first ``limit`` and number them 1..k.

    Items are frozen, so ranked copies are returned and the input is untouched.
    Ties keep their input order.
    """
    if limit <= 0:
        return []
    ordered = sorted(items, key=lambda it: it.score, reverse=True)[:limit]
    return [it.model_copy(update={"rank": pos}) for pos, it in enumerate(ordered, start=1)]
