"""Classify import paths into standard library, local and third-party groups."""

from typing import AbstractSet, Optional, Sequence

from .types import Category


def classify(
    path: str,
    local_prefix: str,
    std_set: Optional[AbstractSet[str]],
    third_party_prefixes: Optional[Sequence[str]] = None,
) -> Category:
    """Return the group an import path belongs to.

    The local prefix wins over everything else. With a standard library set
    only exact members are STANDARD. Without one, ``third_party_prefixes``
    acts as a static fallback: matching paths are THIRD_PARTY and the rest
    are STANDARD. With neither, every non-local path is THIRD_PARTY.
    """
    if local_prefix and path.startswith(local_prefix):
        return Category.LOCAL
    if std_set:
        return Category.STANDARD if path in std_set else Category.THIRD_PARTY
    if third_party_prefixes:
        if any(path.startswith(prefix) for prefix in third_party_prefixes):
            return Category.THIRD_PARTY
        return Category.STANDARD
    return Category.THIRD_PARTY
