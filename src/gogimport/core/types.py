# src/gogimport/core/types.py

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union


class Category(Enum):
    """Groups an import can be sorted into."""
    STANDARD = "standard"        # Go standard library
    LOCAL = "local"              # Packages under the local module prefix
    THIRD_PARTY = "third_party"  # Everything else


CANONICAL_ORDER = (Category.STANDARD, Category.LOCAL, Category.THIRD_PARTY)


class FileState(Enum):
    """Steps a document goes through while its imports are regrouped."""
    UNPARSED = "unparsed"
    PARSED = "parsed"
    BLOCK_SCAN = "block_scan"
    BLOCK_PLANNED = "block_planned"
    BLOCK_RECONCILED = "block_reconciled"
    FINALIZED = "finalized"


class Stage(Enum):
    """Stages of the file pipeline, used when reporting failures."""
    READ = "read"
    PARSE = "parse"
    PLAN = "plan"
    RECONCILE = "reconcile"
    PRINT = "print"
    FORMAT = "format"
    WRITE = "write"


@dataclass
class ImportEntry:
    """One import spec, stored as the text of its line without indentation."""
    text: str
    path: str
    start: int
    length: int
    alias: Optional[str] = None
    category: Optional[Category] = None

    @property
    def end(self) -> int:
        return self.start + self.length

    def relocate(self, start: int):
        """Move the entry to a new start offset, keeping its span length."""
        self.start = start


@dataclass
class SeparatorMarker:
    """A blank line between two non-empty groups."""

    def __repr__(self) -> str:
        return "SeparatorMarker()"


PlanItem = Union[ImportEntry, SeparatorMarker]


@dataclass
class ImportBlock:
    """A run of imports with no blank line between them.

    ``specs`` holds indices into the document's entry arena. ``open_offset``
    and ``close_offset`` bound the run: the start of its first line and the
    newline that ends its last line.
    """
    specs: List[int]
    open_offset: int
    close_offset: int
    grouped: bool = True


@dataclass
class ImportDecl:
    """An ``import`` declaration, either single or parenthesized."""
    pos: int
    end: int
    blocks: List[ImportBlock] = field(default_factory=list)
    lparen: Optional[int] = None
    rparen: Optional[int] = None
    opener: str = ""
    trailer: str = ""
    inline: bool = False

    @property
    def grouped(self) -> bool:
        return self.lparen is not None


@dataclass
class RawSegment:
    """Source text the tool never touches, with its current span."""
    start: int
    end: int
    text: str = ""


Decl = Union[RawSegment, ImportDecl]


@dataclass
class Settings:
    """Values the engine needs to process one file."""
    local_prefix: str
    std_packages: Optional[frozenset] = None
    third_party_prefixes: List[str] = field(default_factory=list)
    group_order: tuple = CANONICAL_ORDER
    gofmt: bool = False
    gofmt_binary: str = "gofmt"


@dataclass
class FileResult:
    """Result of processing a single file."""
    path: Optional[Path]
    original: Optional[str] = None
    output: Optional[str] = None
    written: bool = False
    error: Optional[Exception] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def changed(self) -> bool:
        return self.success and self.output != self.original
