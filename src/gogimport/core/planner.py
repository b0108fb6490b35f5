"""Plan the output order of one import block."""

from typing import AbstractSet, Dict, List, Optional, Sequence

from .classifier import classify
from .logging import get_debug_logger
from .types import CANONICAL_ORDER, Category, ImportEntry, PlanItem, SeparatorMarker

debug_log = get_debug_logger()


def sort_key(entry: ImportEntry) -> bytes:
    """Byte-wise key on the unquoted path; the alias is ignored."""
    return entry.path.encode("utf-8")


def partition(
    entries: Sequence[ImportEntry],
    local_prefix: str,
    std_set: Optional[AbstractSet[str]],
    third_party_prefixes: Optional[Sequence[str]] = None,
) -> Dict[Category, List[ImportEntry]]:
    """Classify entries into buckets, keeping discovery order.

    Entries without a path are left out.
    """
    buckets: Dict[Category, List[ImportEntry]] = {category: [] for category in Category}
    for entry in entries:
        if not entry.path:
            debug_log.debug("Dropping import line without a path: %s", entry.text)
            continue
        entry.category = classify(entry.path, local_prefix, std_set, third_party_prefixes)
        buckets[entry.category].append(entry)
    return buckets


def plan(
    entries: Sequence[ImportEntry],
    local_prefix: str,
    std_set: Optional[AbstractSet[str]],
    third_party_prefixes: Optional[Sequence[str]] = None,
    order: Sequence[Category] = CANONICAL_ORDER,
) -> List[PlanItem]:
    """Return the block's entries grouped, sorted and separated.

    Groups follow ``order``. A SeparatorMarker sits between two consecutive
    non-empty groups and nowhere else.
    """
    buckets = partition(entries, local_prefix, std_set, third_party_prefixes)

    items: List[PlanItem] = []
    for category in order:
        bucket = sorted(buckets[category], key=sort_key)
        if not bucket:
            continue
        if items:
            items.append(SeparatorMarker())
        items.extend(bucket)
    return items
