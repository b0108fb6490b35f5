"""Tests for import path classification."""

import pytest

from gogimport.core.classifier import classify
from gogimport.core.types import Category

STD = frozenset({"io", "fmt", "net/http"})


@pytest.mark.parametrize(
    "path, expected",
    [
        ("io", Category.STANDARD),
        ("net/http", Category.STANDARD),
        ("localmod/a", Category.LOCAL),
        ("localmod", Category.LOCAL),
        ("github.com/acme/x", Category.THIRD_PARTY),
        ("net", Category.THIRD_PARTY),
        ("IO", Category.THIRD_PARTY),
    ],
)
def test_classify_with_std_set(path, expected):
    """Test classification against a standard library set."""
    assert classify(path, "localmod", STD) == expected


def test_local_prefix_wins_over_std():
    """Test that the local prefix takes precedence."""
    assert classify("io", "io", STD) == Category.LOCAL


def test_empty_std_set_is_third_party():
    """Test that missing std data degrades to third-party."""
    assert classify("io", "localmod", frozenset()) == Category.THIRD_PARTY
    assert classify("io", "localmod", None) == Category.THIRD_PARTY


def test_third_party_prefix_fallback():
    """Test the static prefix fallback used without a std set."""
    prefixes = ["github.com/", "golang.org/"]
    assert classify("golang.org/x/net", "localmod", None, prefixes) == Category.THIRD_PARTY
    assert classify("strings", "localmod", None, prefixes) == Category.STANDARD
    assert classify("localmod/x", "localmod", None, prefixes) == Category.LOCAL


def test_std_set_ignores_prefix_fallback():
    """Test that a real std set takes precedence over the prefix list."""
    assert classify("strings", "localmod", STD, ["github.com/"]) == Category.THIRD_PARTY


def test_empty_local_prefix_matches_nothing():
    """Test that an empty local prefix does not make every path local."""
    assert classify("io", "", STD) == Category.STANDARD
    assert classify("github.com/acme/x", "", STD) == Category.THIRD_PARTY
