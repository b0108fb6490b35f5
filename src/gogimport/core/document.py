"""Document model for Go source: import declarations plus a line table."""

import re
from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List

from .errors import LineTableError, MalformedSourceError
from .types import Decl, FileState, ImportBlock, ImportDecl, ImportEntry, RawSegment

_PACKAGE = re.compile(r"package[ \t]+[^\W\d]\w*")
_IMPORT = re.compile(r"import\b")
_SPEC = re.compile(
    r"""
    (?:(?P<alias>[^\W\d]\w*|\.)\s*)?
    (?P<lit>"(?:[^"\\\n]|\\.)*"|`[^`]*`)
    \s*;?\s*
    (?P<comment>//.*|/\*.*?\*/)?
    $""",
    re.VERBOSE,
)


class LineTable:
    """Sorted line-start offsets for a document of ``size`` characters.

    Offsets are edited with ``delete_range`` followed by positional
    ``insert`` calls. Insertion does not re-sort, so a bad offset shows up
    in ``check`` instead of being silently absorbed.
    """

    def __init__(self, offsets: Iterable[int], size: int):
        self.offsets = list(offsets)
        self.size = size

    @classmethod
    def from_text(cls, text: str) -> "LineTable":
        size = len(text)
        offsets = [0]
        offsets.extend(m.end() for m in re.finditer("\n", text) if m.end() < size)
        return cls(offsets, size)

    def __len__(self) -> int:
        return len(self.offsets)

    def __iter__(self) -> Iterator[int]:
        return iter(self.offsets)

    def __getitem__(self, index: int) -> int:
        return self.offsets[index]

    def line_of(self, offset: int) -> int:
        """Return the 1-based line number containing ``offset``."""
        return bisect_right(self.offsets, offset)

    def delete_range(self, lo: int, hi: int) -> int:
        """Remove every offset in ``[lo, hi]`` and return the index they occupied."""
        left = bisect_left(self.offsets, lo)
        right = bisect_right(self.offsets, hi)
        del self.offsets[left:right]
        return left

    def insert(self, index: int, offset: int) -> None:
        """Insert ``offset`` at position ``index`` without re-sorting."""
        if not 0 <= offset < self.size:
            raise LineTableError(f"line offset {offset} outside document of size {self.size}")
        self.offsets.insert(index, offset)

    def shift(self, after: int, delta: int) -> None:
        """Move every offset past ``after`` by ``delta`` and grow the size to match."""
        self.offsets = [o + delta if o > after else o for o in self.offsets]
        self.size += delta

    def check(self) -> None:
        """Raise LineTableError unless offsets increase strictly and stay in bounds."""
        if not self.offsets:
            raise LineTableError("line table is empty")
        for i in range(1, len(self.offsets)):
            if self.offsets[i - 1] >= self.offsets[i]:
                raise LineTableError(
                    f"line {i + 1} starts at {self.offsets[i]}, "
                    f"not after line {i} at {self.offsets[i - 1]}"
                )
        if self.size and self.offsets[-1] >= self.size:
            raise LineTableError(
                f"last line offset {self.offsets[-1]} not below document size {self.size}"
            )


@dataclass
class Document:
    """Parsed source: top-level declarations, an entry arena and a line table."""

    text: str
    lines: LineTable
    newline: str = "\n"
    entries: List[ImportEntry] = field(default_factory=list)
    decls: List[Decl] = field(default_factory=list)
    state: FileState = FileState.UNPARSED

    @property
    def size(self) -> int:
        return self.lines.size

    def add_entry(self, entry: ImportEntry) -> int:
        self.entries.append(entry)
        return len(self.entries) - 1

    def import_decls(self) -> List[ImportDecl]:
        return [decl for decl in self.decls if isinstance(decl, ImportDecl)]

    def blocks(self) -> Iterator[ImportBlock]:
        for decl in self.import_decls():
            yield from decl.blocks

    def shift(self, after: int, delta: int) -> None:
        """Move every position past ``after`` by ``delta``.

        Used when a block needs more room than it had; text stays where it
        is, only spans, block bounds and line starts move.
        """
        if delta <= 0:
            return
        self.lines.shift(after, delta)
        for entry in self.entries:
            if entry.start > after:
                entry.start += delta
        for block in self.blocks():
            if block.open_offset > after:
                block.open_offset += delta
            if block.close_offset > after:
                block.close_offset += delta
        for decl in self.decls:
            for name in ("start", "end", "pos", "lparen", "rparen"):
                value = getattr(decl, name, None)
                if value is not None and value > after:
                    setattr(decl, name, value + delta)


def _skip_trivia(text: str, i: int) -> int:
    """Skip whitespace and comments starting at ``i``."""
    size = len(text)
    while i < size:
        if text[i].isspace():
            i += 1
        elif text.startswith("//", i):
            eol = text.find("\n", i)
            i = size if eol == -1 else eol
        elif text.startswith("/*", i):
            close = text.find("*/", i + 2)
            if close == -1:
                raise MalformedSourceError("unterminated block comment", i)
            i = close + 2
        else:
            break
    return i


def _line_end(text: str, i: int) -> int:
    eol = text.find("\n", i)
    return len(text) if eol == -1 else eol


def _content_end(text: str, eol: int) -> int:
    """Back off a line end over the carriage return of a CRLF terminator."""
    return eol - 1 if eol > 0 and text[eol - 1] == "\r" else eol


def _parse_spec(line: str, start: int) -> ImportEntry:
    """Build an entry from one import line stripped of surrounding whitespace."""
    if line.startswith("//") or (line.startswith("/*") and line.endswith("*/")):
        return ImportEntry(text=line, path="", start=start, length=len(line))
    if line.startswith("/*"):
        raise MalformedSourceError("multi-line comment inside import declaration", start)

    match = _SPEC.match(line)
    if not match:
        raise MalformedSourceError(f"cannot parse import spec {line!r}", start)
    return ImportEntry(
        text=line,
        path=match.group("lit")[1:-1],
        start=start,
        length=len(line),
        alias=match.group("alias"),
    )


def _parse_single(doc: Document, pos: int, i: int) -> ImportDecl:
    eol = _line_end(doc.text, i)
    line = doc.text[i:eol].rstrip()
    entry = _parse_spec(line, i)
    if not entry.path:
        raise MalformedSourceError("import declaration without a path", i)
    idx = doc.add_entry(entry)
    block = ImportBlock(specs=[idx], open_offset=i, close_offset=entry.end, grouped=False)
    return ImportDecl(pos=pos, end=_content_end(doc.text, eol), blocks=[block])


def _parse_group(doc: Document, pos: int, lparen: int) -> ImportDecl:
    text = doc.text
    eol = _line_end(text, lparen)
    rest = text[lparen + 1:eol].strip()

    if rest.startswith(")"):
        rparen = text.index(")", lparen)
        trailer = text[rparen + 1:eol].rstrip()
        return ImportDecl(
            pos=pos,
            end=_content_end(text, eol),
            lparen=lparen,
            rparen=rparen,
            trailer=trailer,
            inline=True,
        )
    if rest and not rest.startswith("//"):
        raise MalformedSourceError("import group must list one import per line", lparen)

    decl = ImportDecl(
        pos=pos, end=eol, lparen=lparen, opener=text[lparen + 1:eol].rstrip()
    )
    run: List[int] = []
    run_open = run_close = 0

    def close_run():
        if run:
            decl.blocks.append(ImportBlock(specs=list(run), open_offset=run_open, close_offset=run_close))
            run.clear()

    line_start = eol + 1
    while True:
        if line_start >= len(text):
            raise MalformedSourceError("unterminated import group", lparen)
        eol = _line_end(text, line_start)
        line = text[line_start:eol]
        stripped = line.strip()
        indent = len(line) - len(line.lstrip())

        if not stripped:
            close_run()
        elif stripped.startswith(")"):
            close_run()
            decl.rparen = line_start + indent
            decl.trailer = line[indent + 1:].rstrip()
            decl.end = _content_end(text, eol)
            return decl
        else:
            if not run:
                run_open = line_start
            run.append(doc.add_entry(_parse_spec(stripped, line_start + indent)))
            run_close = eol
        line_start = eol + 1


def parse_document(text: str) -> Document:
    """Parse the package clause and import declarations of a Go file.

    Everything after the last import declaration is kept as raw text.
    """
    newline = "\r\n" if "\r\n" in text else "\n"
    doc = Document(text=text, lines=LineTable.from_text(text), newline=newline)

    i = _skip_trivia(text, 0)
    match = _PACKAGE.match(text, i)
    if not match:
        raise MalformedSourceError("expected package clause", i)

    segment_start = 0
    i = match.end()
    while True:
        j = _skip_trivia(text, i)
        if not _IMPORT.match(text, j):
            break
        k = j + len("import")
        while k < len(text) and text[k] in " \t":
            k += 1
        if k < len(text) and text[k] == "(":
            decl = _parse_group(doc, j, k)
        else:
            decl = _parse_single(doc, j, k)

        doc.decls.append(RawSegment(segment_start, j, text[segment_start:j]))
        doc.decls.append(decl)
        segment_start = i = decl.end

    doc.decls.append(RawSegment(segment_start, len(text), text[segment_start:]))
    doc.lines.check()
    doc.state = FileState.PARSED
    return doc
