"""Relocate planned import entries and rewrite the line table to match."""

from typing import Dict, List, Sequence

from .document import Document
from .errors import LineTableError
from .logging import get_debug_logger
from .types import ImportBlock, ImportEntry, PlanItem, SeparatorMarker

debug_log = get_debug_logger()


def reconcile(doc: Document, block: ImportBlock, items: Sequence[PlanItem]) -> Document:
    """Apply a plan to ``block`` in place.

    Line starts inside the block's original range are removed, then one line
    start per planned entry and separator is inserted while a cursor walks
    forward from the block's first entry. Entries keep their span length.
    When the new layout is longer than the block, everything after the block
    is shifted first. The line table is checked afterwards and a violation
    is raised, never repaired.
    """
    index_of: Dict[int, int] = {id(doc.entries[i]): i for i in block.specs}
    for item in items:
        if isinstance(item, ImportEntry) and id(item) not in index_of:
            raise LineTableError(f"planned import {item.path!r} does not belong to the block")

    if not block.grouped:
        block.specs = [index_of[id(item)] for item in items if isinstance(item, ImportEntry)]
        return doc

    if not block.specs:
        return doc

    cursor = min(doc.entries[i].start for i in block.specs)

    # one character per newline and per separator line
    layout_end = cursor + sum(
        1 if isinstance(item, SeparatorMarker) else item.length + 1 for item in items
    )
    growth = layout_end - (block.close_offset + 1)
    if growth > 0:
        debug_log.debug("Growing block at offset %d by %d", block.open_offset, growth)
        doc.shift(block.close_offset, growth)
        block.close_offset += growth

    at = doc.lines.delete_range(block.open_offset, block.close_offset)

    specs: List[int] = []
    separators = 0
    for item in items:
        doc.lines.insert(at, cursor)
        at += 1
        if isinstance(item, SeparatorMarker):
            separators += 1
            cursor += 1
            continue
        item.relocate(cursor)
        cursor = item.end + 1
        specs.append(index_of[id(item)])

    if cursor > block.close_offset + 1:
        raise LineTableError(
            f"import block at offset {block.open_offset} ended at {cursor}, "
            f"past its close offset {block.close_offset}"
        )

    block.specs = specs
    doc.lines.check()
    debug_log.debug(
        "Reconciled block at offset %d: %d imports, %d separators",
        block.open_offset,
        len(specs),
        separators,
    )
    return doc
