"""
Data models for sortimport.
"""
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Iterator


class Group(IntEnum):
    """Import groups, in rendering order."""
    STANDARD = 0
    THIRD_PARTY = 1
    SECOND_PARTY = 2
    LOCAL = 3


@dataclass(frozen=True)
class ImportEntry:
    """A single import spec parsed from source."""
    path: str  # as written, quotes included
    alias: str | None = None

    @property
    def bare_path(self) -> str:
        """The import path without its surrounding quote characters."""
        return self.path.strip('"`')

    def sort_key(self) -> tuple[str, str]:
        return (self.path, self.alias or "")

    def render(self) -> str:
        if not self.alias:
            return self.path
        return f"{self.alias} {self.path}"


@dataclass
class ClassifiedImports:
    """Imports bucketed by group."""
    standard: list[ImportEntry] = field(default_factory=list)
    third_party: list[ImportEntry] = field(default_factory=list)
    second_party: list[ImportEntry] = field(default_factory=list)
    local: list[ImportEntry] = field(default_factory=list)

    def group(self, group: Group) -> list[ImportEntry]:
        if group is Group.STANDARD:
            return self.standard
        if group is Group.THIRD_PARTY:
            return self.third_party
        if group is Group.SECOND_PARTY:
            return self.second_party
        if group is Group.LOCAL:
            return self.local
        raise ValueError(f"Unknown import group: {group!r}")

    def append(self, group: Group, entry: ImportEntry) -> None:
        self.group(group).append(entry)

    def groups(self) -> Iterator[tuple[Group, list[ImportEntry]]]:
        """Yield (group, entries) pairs in rendering order."""
        for group in Group:
            yield group, self.group(group)

    def count(self) -> int:
        return sum(len(entries) for _, entries in self.groups())


@dataclass(frozen=True)
class PrefixConfig:
    """Configured local and second-party prefixes."""
    local_prefixes: tuple[str, ...] = ()
    second_prefixes: tuple[str, ...] = ()

    @classmethod
    def from_strings(cls, local: str | None = "", second: str | None = "") -> "PrefixConfig":
        """
        Build from comma-separated strings, e.g. "github.com/org/a,github.com/org/b".
        """
        return cls(
            local_prefixes=split_prefixes(local),
            second_prefixes=split_prefixes(second),
        )


def split_prefixes(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class ModuleDescriptor:
    """The enclosing Go module of a path."""
    root_path: Path
    namespace: str


@dataclass(frozen=True)
class ReferenceSet:
    """Built-in package identifiers for one toolchain version."""
    version: str
    identifiers: frozenset[str]


@dataclass
class RewriteResult:
    """Outcome of rewriting one source text."""
    source: str
    output: str
    changed: bool


@dataclass
class FileResult:
    """Outcome of processing one file in a batch."""
    path: Path | None
    changed: bool = False
    output: str | None = None
    error: str | None = None
