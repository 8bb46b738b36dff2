from .scanner import ITEM_MARKER, Candidate, ScanState, extract_objects, iter_candidates, match_object
from .decoder import decode_item, is_publishable, parse_rsc_payload

__all__ = [
    "ITEM_MARKER",
    "Candidate",
    "ScanState",
    "extract_objects",
    "iter_candidates",
    "match_object",
    "decode_item",
    "is_publishable",
    "parse_rsc_payload",
]
