"""Tests for grouping and ordering of import entries."""

from gogimport.core.planner import plan
from gogimport.core.types import Category, ImportEntry, SeparatorMarker

STD = frozenset({"io", "fmt", "net/http"})


def make_entries(*paths):
    entries = []
    offset = 0
    for path in paths:
        text = f'"{path}"' if path else "// comment"
        entries.append(ImportEntry(text=text, path=path, start=offset, length=len(text)))
        offset += len(text) + 2
    return entries


def layout(items):
    """Render a plan as paths with '|' for separators."""
    return ["|" if isinstance(item, SeparatorMarker) else item.path for item in items]


def test_scenario_three_groups():
    """Test that all three groups are emitted with separators between them."""
    entries = make_entries("github.com/acme/x", "io", "localmod/a", "localmod/b")
    items = plan(entries, "localmod", frozenset({"io"}))
    assert layout(items) == ["io", "|", "localmod/a", "localmod/b", "|", "github.com/acme/x"]


def test_single_entry_unchanged():
    """Test that a single import produces no separators."""
    entries = make_entries("io")
    items = plan(entries, "localmod", STD)
    assert items == entries


def test_single_group_sorted_without_separators():
    """Test sorting inside one group."""
    items = plan(make_entries("b/x", "a/y"), "localmod", STD)
    assert layout(items) == ["a/y", "b/x"]


def test_empty_path_entries_dropped():
    """Test that comment-only lines are dropped and order is kept."""
    entries = make_entries("fmt", "", "io")
    items = plan(entries, "localmod", STD)
    assert layout(items) == ["fmt", "io"]
    assert entries[1].category is None


def test_empty_middle_group_has_single_separator():
    """Test that an empty bucket adds no separator."""
    items = plan(make_entries("github.com/z", "fmt"), "localmod", STD)
    assert layout(items) == ["fmt", "|", "github.com/z"]


def test_sort_is_bytewise_and_ignores_alias():
    """Test byte-wise ordering on the unquoted path."""
    entries = make_entries("Zeta/a", "alpha/b")
    entries[1].alias = "aaa"
    items = plan(entries, "localmod", STD)
    assert layout(items) == ["Zeta/a", "alpha/b"]


def test_stable_for_duplicate_paths():
    """Test that identical paths keep their relative order."""
    entries = make_entries("fmt", "fmt")
    entries[0].alias = "f"
    items = plan(entries, "localmod", STD)
    assert items[0] is entries[0]
    assert items[1] is entries[1]


def test_categories_assigned():
    """Test that every entry with a path gets exactly one category."""
    entries = make_entries("fmt", "localmod/x", "github.com/y")
    plan(entries, "localmod", STD)
    assert [e.category for e in entries] == [
        Category.STANDARD,
        Category.LOCAL,
        Category.THIRD_PARTY,
    ]


def test_partition_complete():
    """Test that output holds each input entry exactly once."""
    entries = make_entries("net/http", "localmod/x", "github.com/y", "fmt", "localmod/a")
    items = [item for item in plan(entries, "localmod", STD) if not isinstance(item, SeparatorMarker)]
    assert sorted(map(id, items)) == sorted(map(id, entries))


def test_custom_group_order():
    """Test that the group order policy can put local imports first."""
    order = (Category.LOCAL, Category.STANDARD, Category.THIRD_PARTY)
    items = plan(make_entries("fmt", "localmod/x", "github.com/y"), "localmod", STD, order=order)
    assert layout(items) == ["localmod/x", "|", "fmt", "|", "github.com/y"]
