"""Serialize a document back to Go source."""

import shutil
import subprocess
from typing import List, Optional

from .document import Document
from .errors import FormatError
from .logging import get_debug_logger
from .types import ImportDecl, ImportEntry, RawSegment

debug_log = get_debug_logger()


def _print_import_decl(doc: Document, decl: ImportDecl) -> str:
    if not decl.grouped:
        entry = doc.entries[decl.blocks[0].specs[0]]
        return f"import {entry.text}"

    if decl.inline:
        return f"import (){decl.trailer}"

    nl = doc.newline
    parts = [f"import ({decl.opener}{nl}"]
    prev: Optional[ImportEntry] = None
    for block in decl.blocks:
        for idx in block.specs:
            entry = doc.entries[idx]
            # a gap of more than one line in the line table is a blank line
            if prev is not None and doc.lines.line_of(entry.start) - doc.lines.line_of(prev.end) > 1:
                parts.append(nl)
            parts.append(f"\t{entry.text}{nl}")
            prev = entry
    parts.append(f"){decl.trailer}")
    return "".join(parts)


def print_document(doc: Document) -> str:
    """Render ``doc``; text outside import declarations is copied unchanged."""
    parts: List[str] = []
    for decl in doc.decls:
        if isinstance(decl, RawSegment):
            parts.append(decl.text)
        else:
            parts.append(_print_import_decl(doc, decl))
    return "".join(parts)


def gofmt_source(source: str, gofmt_binary: str = "gofmt") -> str:
    """Run ``source`` through gofmt and return the formatted text."""
    gofmt_path = shutil.which(gofmt_binary)
    if not gofmt_path:
        raise FormatError(f"{gofmt_binary} not found in PATH")

    debug_log.debug("Running %s on %d characters", gofmt_path, len(source))
    try:
        result = subprocess.run(
            [gofmt_path], input=source, capture_output=True, text=True, check=True
        )
    except subprocess.CalledProcessError as e:
        raise FormatError(f"gofmt failed: {e.stderr.strip()}") from e
    except OSError as e:
        raise FormatError(f"could not run {gofmt_path}: {e}") from e
    return result.stdout
