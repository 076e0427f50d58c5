"""
Version-keyed cache of the Go standard library package list.

Each toolchain version gets its own JSON file under the cache directory:

    {"data": {"fmt": {}, "net/http": {}, ...}, "version": "go1.22.1"}

Files are only ever replaced whole, so versions never share state.
"""
import json
import logging
from pathlib import Path
import subprocess
import threading
from typing import Callable, Iterable

from sortimport.support.exceptions import CacheMiss, CachePersistError, FetchError
from sortimport.support.file_operations import atomic_write
from sortimport.support.models import ReferenceSet

LOG = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path.home() / ".cache" / "sortimport"

Enumerator = Callable[[str], Iterable[str]]


def _run_go(args: list[str], go_binary: str = "go") -> str:
    try:
        completed = subprocess.run(
            [go_binary, *args],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise FetchError(f"Could not run '{go_binary}': {e}") from e

    if completed.returncode != 0:
        stderr = completed.stderr.strip()
        raise FetchError(f"'{go_binary} {' '.join(args)}' failed: {stderr}")
    return completed.stdout


def go_version(go_binary: str = "go") -> str:
    """
    Return the active toolchain version, e.g. "go1.22.1".
    """
    try:
        version = _run_go(["env", "GOVERSION"], go_binary).strip()
    except FetchError:
        version = ""
    if version:
        return version

    # Toolchains before go1.16 have no GOVERSION: "go version go1.15 linux/amd64"
    parts = _run_go(["version"], go_binary).split()
    if len(parts) >= 3:
        return parts[2]
    raise FetchError("Could not determine the Go version")


def list_std_packages(version: str, go_binary: str = "go") -> list[str]:
    """Enumerate standard library packages with 'go list std'."""
    output = _run_go(["list", "std"], go_binary)
    return [line.strip() for line in output.splitlines() if line.strip()]


class ReferenceCache:
    """
    Persisted set of standard package identifiers, one file per Go version.

    The identifier set is loaded at most once per instance by builtins() and
    shared read-only afterwards.
    """

    def __init__(
        self,
        cache_dir: Path | str | None = None,
        version: str | None = None,
        enumerator: Enumerator | None = None,
        go_binary: str = "go",
    ):
        self.cache_dir = Path(cache_dir).expanduser() if cache_dir else DEFAULT_CACHE_DIR
        self.go_binary = go_binary
        self._version = version
        self._enumerator = enumerator
        self._builtins: frozenset[str] | None = None
        self._lock = threading.Lock()

    @property
    def version(self) -> str:
        if self._version is None:
            self._version = go_version(self.go_binary)
        return self._version

    def cache_file(self, version: str | None = None) -> Path:
        """Path of the cache file for version (spaces replaced for the filename)."""
        safe_version = (version or self.version).replace(" ", "_")
        return self.cache_dir / f"{safe_version}.json"

    def legacy_cache_file(self) -> Path:
        """Old single-file cache location, which carried no version."""
        return self.cache_dir.with_name(self.cache_dir.name + ".json")

    def read(self, version: str | None = None) -> ReferenceSet:
        version = version or self.version
        cache_file = self.cache_file(version)

        if not cache_file.exists():
            raise CacheMiss(version, cache_file)

        try:
            with open(cache_file, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as e:
            LOG.warning("ignoring unreadable cache %s: %s", cache_file, e)
            raise CacheMiss(version, cache_file, str(e)) from e

        if not isinstance(payload, dict) or not isinstance(payload.get("data"), dict):
            raise CacheMiss(version, cache_file, "malformed cache file")
        if payload.get("version") != version:
            raise CacheMiss(version, cache_file, f"cache is for {payload.get('version')!r}")

        LOG.debug("load standard package cache from %s", cache_file)
        return ReferenceSet(version=version, identifiers=frozenset(payload["data"]))

    def load(self, version: str | None = None) -> frozenset[str]:
        """
        Read the cached identifiers for version.
        Raises CacheMiss if the file is absent or unreadable.
        """
        return self.read(version).identifiers

    def write(self, identifiers: Iterable[str], version: str | None = None) -> Path:
        """Replace the cache file for version. Raises CachePersistError on failure."""
        version = version or self.version
        cache_file = self.cache_file(version)
        payload = {
            "data": {identifier: {} for identifier in sorted(set(identifiers))},
            "version": version,
        }

        try:
            atomic_write(cache_file, json.dumps(payload))
        except OSError as e:
            raise CachePersistError(cache_file, str(e)) from e

        LOG.debug("write standard package cache to %s", cache_file)
        return cache_file

    def fetch(self, version: str | None = None) -> frozenset[str]:
        """Enumerate identifiers from the source. Raises FetchError."""
        version = version or self.version
        if self._enumerator is not None:
            try:
                identifiers = frozenset(self._enumerator(version))
            except FetchError:
                raise
            except Exception as e:
                raise FetchError(f"Could not enumerate standard packages: {e}") from e
        else:
            identifiers = frozenset(list_std_packages(version, self.go_binary))

        if not identifiers:
            raise FetchError(f"No standard packages found for {version}")
        return identifiers

    def refresh(self, version: str | None = None) -> frozenset[str]:
        """Fetch and overwrite the cache for version. All errors propagate."""
        version = version or self.version
        identifiers = self.fetch(version)
        self.write(identifiers, version)
        if version == self._version:
            self._builtins = identifiers
        return identifiers

    def load_or_fetch(self, version: str | None = None) -> frozenset[str]:
        """
        Load from cache if available, otherwise fetch and cache.
        A failed cache write is logged; the fetched set is still returned.
        """
        version = version or self.version
        try:
            return self.load(version)
        except CacheMiss as e:
            LOG.debug("%s", e)

        identifiers = self.fetch(version)
        try:
            self.write(identifiers, version)
        except CachePersistError as e:
            LOG.warning("failed to write cache: %s", e)
        return identifiers

    def builtins(self) -> frozenset[str]:
        """
        Identifier set for the active version, loaded once per instance.
        """
        if self._builtins is None:
            with self._lock:
                if self._builtins is None:
                    self._builtins = self.load_or_fetch()
        return self._builtins
