"""Tests for relocating planned imports and rewriting the line table."""

import pytest

from gogimport.core.document import parse_document
from gogimport.core.errors import LineTableError
from gogimport.core.planner import plan
from gogimport.core.reconciler import reconcile
from gogimport.core.types import SeparatorMarker

STD = frozenset({"io", "fmt"})

SOURCE = '''package main

import (
	"github.com/acme/x"
	"io"
	"localmod/a"
	"localmod/b"
)

func main() {}
'''


def reconcile_all(doc):
    for block in list(doc.blocks()):
        items = plan([doc.entries[i] for i in block.specs], "localmod", STD)
        reconcile(doc, block, items)
    return doc


def test_entries_relocated_in_plan_order():
    """Test that entries get increasing positions in output order."""
    doc = reconcile_all(parse_document(SOURCE))
    block = next(doc.blocks())
    entries = [doc.entries[i] for i in block.specs]
    assert [e.path for e in entries] == ["io", "localmod/a", "localmod/b", "github.com/acme/x"]
    starts = [e.start for e in entries]
    assert starts == sorted(starts)
    assert all(a.end < b.start for a, b in zip(entries, entries[1:]))


def test_span_lengths_preserved():
    """Test that relocation keeps each entry's length and text."""
    doc = parse_document(SOURCE)
    before = {e.path: (e.length, e.text) for e in doc.entries}
    reconcile_all(doc)
    assert {e.path: (e.length, e.text) for e in doc.entries} == before


def test_line_table_gaps_mark_separators():
    """Test that separators show up as skipped lines."""
    doc = reconcile_all(parse_document(SOURCE))
    block = next(doc.blocks())
    lines = [doc.lines.line_of(doc.entries[i].start) for i in block.specs]
    assert lines == [4, 6, 7, 9]


def test_line_table_stays_valid():
    """Test monotonicity and bounds after reconciliation."""
    doc = reconcile_all(parse_document(SOURCE))
    doc.lines.check()
    offsets = list(doc.lines)
    assert all(a < b for a, b in zip(offsets, offsets[1:]))
    assert offsets[-1] < doc.size


def test_lines_outside_block_untouched():
    """Test that line starts before and after the block survive."""
    doc = parse_document(SOURCE)
    block = next(doc.blocks())
    outside = [o for o in doc.lines if o < block.open_offset or o > block.close_offset]
    reconcile_all(doc)
    assert all(o in list(doc.lines) for o in outside)


def test_dropped_entries_remove_lines():
    """Test that comment-only lines disappear from the block."""
    src = 'package main\n\nimport (\n\t"io"\n\t// gone\n\t"fmt"\n)\n'
    doc = reconcile_all(parse_document(src))
    block = next(doc.blocks())
    assert [doc.entries[i].path for i in block.specs] == ["fmt", "io"]
    assert len(doc.lines) == 6


def test_unindented_block_grows():
    """Test that a layout longer than the block shifts what follows."""
    src = 'package main\n\nimport (\n"github.com/acme/x"\n"io"\n)\n'
    doc = parse_document(src)
    block = next(doc.blocks())
    decl = doc.import_decls()[0]
    rparen, tail = decl.rparen, doc.decls[-1].start

    items = plan([doc.entries[i] for i in block.specs], "localmod", STD)
    assert any(isinstance(item, SeparatorMarker) for item in items)
    reconcile(doc, block, items)

    assert doc.size == len(src) + 1
    assert decl.rparen == rparen + 1
    assert doc.decls[-1].start == tail + 1
    doc.lines.check()
    lines = [doc.lines.line_of(doc.entries[i].start) for i in block.specs]
    assert lines == [4, 6]
    assert doc.lines.line_of(decl.rparen) == 7


def test_foreign_entry_is_rejected():
    """Test that a plan naming entries of another block raises."""
    src = 'package main\n\nimport (\n\t"io"\n\n\t"fmt"\n)\n'
    doc = parse_document(src)
    first, second = list(doc.blocks())
    with pytest.raises(LineTableError):
        reconcile(doc, first, [doc.entries[second.specs[0]]])


def test_single_import_keeps_line_table():
    """Test that an ungrouped import leaves the line table alone."""
    src = 'package main\n\nimport "io"\n'
    doc = parse_document(src)
    before = list(doc.lines)
    reconcile_all(doc)
    assert list(doc.lines) == before
