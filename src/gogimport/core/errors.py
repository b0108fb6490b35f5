"""Exception types raised by gogimport."""

from pathlib import Path
from typing import Optional

from .types import Stage


class GogimportError(Exception):
    """Base class for gogimport errors."""


class ConfigError(GogimportError):
    """Configuration values are missing or invalid."""


class MalformedSourceError(GogimportError):
    """The source file cannot be parsed."""

    def __init__(self, message: str, offset: Optional[int] = None):
        self.offset = offset
        if offset is not None:
            message = f"{message} (offset {offset})"
        super().__init__(message)


class LineTableError(GogimportError):
    """The line table lost its ordering or bounds invariants."""


class FormatError(GogimportError):
    """The final gofmt pass failed."""


class StdPackagesError(GogimportError):
    """The standard library package list could not be built."""


class FileError(GogimportError):
    """Failure while processing one file, tagged with the failing stage."""

    def __init__(self, path: Optional[Path], stage: Stage, cause: Exception):
        self.path = path
        self.stage = stage
        self.cause = cause
        name = str(path) if path is not None else "<stdin>"
        super().__init__(f"{name}: {stage.value}: {cause}")
