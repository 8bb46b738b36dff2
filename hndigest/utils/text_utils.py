import re

TRUNCATION_MARKER = "..."

_TAG_RE = re.compile(r"<[^>]*>")
_SPACE_RE = re.compile(r"\s+")


def truncate(text: str, limit: int) -> str:
    """Cut ``text`` to at most ``limit`` characters, ending with '...' when cut."""
    if len(text) <= limit:
        return text
    if limit < len(TRUNCATION_MARKER):
        return text[:max(limit, 0)]
    return text[:limit - len(TRUNCATION_MARKER)] + TRUNCATION_MARKER


def strip_html(text: str) -> str:
    """Remove every <...> span and collapse whitespace runs to a single space."""
    return _SPACE_RE.sub(" ", _TAG_RE.sub("", text))
