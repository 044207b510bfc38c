"""
Tag codec.

Tags are persisted as a single comma-joined string (the "tag scalar") instead of
a relation. Callers only ever go through ``encode_tags``/``decode_tags`` so the
storage representation can change without touching them.

A tag containing a literal comma is not supported: it is split into several
tags on the way back.
"""
from typing import Iterable, List, Optional

TAG_SEPARATOR = ","


def _clean(parts: Iterable[str]) -> List[str]:
    return [part.strip() for part in parts if part and part.strip()]


def encode_tags(tags: Optional[Iterable[str]]) -> Optional[str]:
    """Join trimmed, non-empty tags in caller order; None when nothing is left."""
    if tags is None:
        return None
    cleaned = _clean(tags)
    if not cleaned:
        return None
    return TAG_SEPARATOR.join(cleaned)


def decode_tags(scalar: Optional[str]) -> List[str]:
    """Inverse of ``encode_tags``. Empty or missing scalars decode to []."""
    if not scalar:
        return []
    return _clean(scalar.split(TAG_SEPARATOR))


def parse_tag_filter(raw: Optional[str]) -> List[str]:
    """Split a raw ``tags=a,b`` filter value into the required tags."""
    return decode_tags(raw)
