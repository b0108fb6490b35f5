"""Go standard library package names, cached per toolchain version."""

import shutil
import subprocess
from pathlib import Path
from typing import FrozenSet, List, Optional

from .errors import StdPackagesError
from .logging import get_debug_logger

# A cache file smaller than this cannot hold a real package list
STD_CACHE_MIN_SIZE = 10

debug_log = get_debug_logger()


class StdPackages:
    """Lazily loaded, read-only set of standard library import paths.

    The list comes from ``go list std`` and is stored in ``cache_dir`` under
    the toolchain version, so a Go upgrade gets a fresh list.
    """

    def __init__(self, cache_dir: Path, go_binary: str = "go"):
        self.cache_dir = Path(cache_dir)
        self.go_binary = go_binary
        self._version: Optional[str] = None
        self._names: Optional[FrozenSet[str]] = None

    def _run_go(self, args: List[str]) -> str:
        go_path = shutil.which(self.go_binary)
        if not go_path:
            raise StdPackagesError(f"{self.go_binary} not found in PATH")

        cmd = [go_path, *args]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=True)
        except subprocess.CalledProcessError as e:
            raise StdPackagesError(f"go {' '.join(args)} failed: {e.stderr.strip()}") from e
        except OSError as e:
            raise StdPackagesError(f"could not run {go_path}: {e}") from e
        return result.stdout

    def go_version(self) -> str:
        if self._version is None:
            version = self._run_go(["env", "GOVERSION"]).strip()
            if not version:
                raise StdPackagesError("go env GOVERSION returned nothing")
            self._version = version
        return self._version

    @property
    def cache_path(self) -> Path:
        return self.cache_dir / self.go_version()

    @staticmethod
    def _parse(listing: str) -> FrozenSet[str]:
        return frozenset(line.strip() for line in listing.splitlines() if line.strip())

    def refresh(self) -> FrozenSet[str]:
        """Rebuild the cache file from the toolchain."""
        path = self.cache_path
        listing = self._run_go(["list", "std"])
        names = self._parse(listing)
        if not names:
            raise StdPackagesError("go list std returned no packages")

        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(listing)
        except OSError as e:
            raise StdPackagesError(f"write cache file failed: {e}") from e

        debug_log.debug("Cached %d standard packages in %s", len(names), path)
        self._names = names
        return names

    def names(self) -> FrozenSet[str]:
        """Return the package set, reading or rebuilding the cache on first use."""
        if self._names is None:
            path = self.cache_path
            if not path.is_file() or path.stat().st_size < STD_CACHE_MIN_SIZE:
                debug_log.debug("Standard package cache %s missing or too small", path)
                return self.refresh()
            try:
                self._names = self._parse(path.read_text())
            except OSError as e:
                raise StdPackagesError(f"read cache file failed: {e}") from e
        return self._names
