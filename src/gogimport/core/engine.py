"""Regroup the imports of Go source text and files."""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, List, Optional

from .config import Config
from .document import parse_document
from .errors import FileError, GogimportError, StdPackagesError
from .logging import get_audit_logger, get_debug_logger
from .planner import plan
from .printer import gofmt_source, print_document
from .reconciler import reconcile
from .stdpkgs import StdPackages
from .types import FileResult, FileState, Settings, Stage

audit_log = get_audit_logger()
debug_log = get_debug_logger()


@contextmanager
def _stage(path: Optional[Path], stage: Stage):
    """Tag gogimport and I/O errors with the file and stage they happened in."""
    try:
        yield
    except FileError:
        raise
    except (GogimportError, OSError, UnicodeError) as e:
        raise FileError(path, stage, e) from e


def build_settings(config: Config, local_prefix: str, std_packages: Optional[StdPackages] = None) -> Settings:
    """Turn a Config into engine settings, loading the standard library set.

    When the Go toolchain cannot be queried the classifier falls back to
    ``third_party_prefixes``.
    """
    std_packages = std_packages or StdPackages(Path(config.cache_dir), config.go_binary)
    try:
        std_set = std_packages.names()
    except StdPackagesError as e:
        debug_log.warning("Standard library list unavailable, using prefix fallback: %s", e)
        std_set = None

    return Settings(
        local_prefix=local_prefix,
        std_packages=std_set,
        third_party_prefixes=list(config.third_party_prefixes),
        group_order=config.categories(),
        gofmt=config.gofmt,
        gofmt_binary=config.gofmt_binary,
    )


def sort_source(text: str, settings: Settings, path: Optional[Path] = None) -> str:
    """Return ``text`` with every import block grouped and sorted.

    Raises FileError naming the stage that failed.
    """
    with _stage(path, Stage.PARSE):
        doc = parse_document(text)

    for block in list(doc.blocks()):
        doc.state = FileState.BLOCK_SCAN
        entries = [doc.entries[i] for i in block.specs]

        with _stage(path, Stage.PLAN):
            items = plan(
                entries,
                settings.local_prefix,
                settings.std_packages,
                settings.third_party_prefixes,
                settings.group_order,
            )
        doc.state = FileState.BLOCK_PLANNED

        with _stage(path, Stage.RECONCILE):
            reconcile(doc, block, items)
        doc.state = FileState.BLOCK_RECONCILED

    doc.state = FileState.FINALIZED
    with _stage(path, Stage.PRINT):
        output = print_document(doc)

    if settings.gofmt:
        with _stage(path, Stage.FORMAT):
            output = gofmt_source(output, settings.gofmt_binary)
    return output


def process_file(path: Path, settings: Settings, write: bool = False) -> FileResult:
    """Process one file; failures are returned in the result, not raised."""
    result = FileResult(path=path)
    try:
        with _stage(path, Stage.READ):
            with open(path, "r", encoding="utf-8", newline="") as f:
                result.original = f.read()

        result.output = sort_source(result.original, settings, path)

        if write and result.output != result.original:
            with _stage(path, Stage.WRITE):
                with open(path, "w", encoding="utf-8", newline="") as f:
                    f.write(result.output)
            result.written = True
            audit_log.info("Rewrote imports in %s", path)
    except FileError as e:
        debug_log.debug("Abandoned rewrite: %s", e)
        result.error = e
        result.output = None
    return result


def process_files(paths: Iterable[Path], settings: Settings, write: bool = False) -> List[FileResult]:
    """Process several files; one failing file does not stop the others."""
    return [process_file(Path(path), settings, write=write) for path in paths]
