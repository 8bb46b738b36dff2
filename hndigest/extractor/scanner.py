"""
Scanner for JSON object literals embedded in a React Server Components
payload (or any other non-JSON text).

The payload interleaves markup and JSON fragments, so instead of parsing it
we look for a marker such as ``"item":`` and cut out the ``{ ... }`` that
follows it by counting braces. Quotes and backslashes are tracked so that
braces inside string literals never count.
"""

from enum import Enum
from typing import Iterator, List, NamedTuple, Optional

ITEM_MARKER = '"item":'
_BLANKS = (" ", "\t")


class ScanState(Enum):
    DEFAULT = "default"
    IN_STRING = "in_string"
    ESCAPED = "escaped"


class Candidate(NamedTuple):
    offset: int  # position of the opening brace
    text: Optional[str]  # None when the object never closed


def match_object(text: str, start: int) -> Optional[int]:
    """
    Return the index just past the brace that closes the object opened at
    ``text[start]``, or ``None`` if the text ends first.

    Depth only changes in the DEFAULT state.
    """
    if start >= len(text) or text[start] != "{":
        return None

    state = ScanState.DEFAULT
    depth = 0
    for i in range(start, len(text)):
        ch = text[i]
        if state is ScanState.ESCAPED:
            state = ScanState.IN_STRING
        elif state is ScanState.IN_STRING:
            if ch == "\\":
                state = ScanState.ESCAPED
            elif ch == '"':
                state = ScanState.DEFAULT
        elif ch == '"':
            state = ScanState.IN_STRING
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
    return None


def iter_candidates(text: str, marker: str = ITEM_MARKER) -> Iterator[Candidate]:
    """
    Single forward pass over ``text`` yielding one Candidate per marker that
    is followed (after spaces/tabs) by an opening brace.

    Markers followed by anything else are false matches and are skipped.
    The cursor always moves forward, so the scan is linear in ``len(text)``.
    """
    if not marker:
        raise ValueError("marker must not be empty")

    cursor = 0
    n = len(text)
    while True:
        found = text.find(marker, cursor)
        if found == -1:
            return
        pos = found + len(marker)
        while pos < n and text[pos] in _BLANKS:
            pos += 1

        if pos >= n:
            return
        if text[pos] != "{":
            # resume right after the blanks; the marker itself is behind us
            cursor = pos
            continue

        end = match_object(text, pos)
        if end is None:
            yield Candidate(pos, None)
            cursor = pos + 1
            continue

        yield Candidate(pos, text[pos:end])
        cursor = end


def extract_objects(text: str, marker: str = ITEM_MARKER) -> List[str]:
    """Every successfully delimited object following ``marker``, in order."""
    return [c.text for c in iter_candidates(text, marker) if c.text is not None]
