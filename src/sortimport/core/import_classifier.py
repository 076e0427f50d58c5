"""
Classification of imports into standard, third-party, second-party or local groups.
"""
from typing import Iterable

from sortimport.support.exceptions import InvalidImportPath
from sortimport.support.models import ClassifiedImports, Group, ImportEntry, PrefixConfig


def has_prefix(path: str, prefix: str) -> bool:
    """
    Check whether an import path starts with prefix, with or without the
    opening quote. This is a plain string test: "foo" matches "foobar/x".
    """
    if not prefix:
        return False
    return path.startswith(prefix) or path.startswith('"' + prefix)


def matches_any(path: str, prefixes: Iterable[str]) -> bool:
    return any(has_prefix(path, prefix) for prefix in prefixes)


def classify_import(
    entry: ImportEntry,
    prefixes: PrefixConfig,
    builtins: frozenset[str],
) -> Group:
    """
    Classify a single import.
    Local prefixes win over the standard library, which wins over
    second-party prefixes. Anything else is third-party.
    """
    if not entry.bare_path:
        raise InvalidImportPath(entry.path)

    # 1. Local prefixes are checked first
    if prefixes.local_prefixes and matches_any(entry.path, prefixes.local_prefixes):
        return Group.LOCAL

    # 2. Standard library
    if entry.bare_path in builtins:
        return Group.STANDARD

    # 3. Second-party prefixes
    if prefixes.second_prefixes and matches_any(entry.path, prefixes.second_prefixes):
        return Group.SECOND_PARTY

    # 4. Default to third-party
    return Group.THIRD_PARTY


def classify_all(
    entries: Iterable[ImportEntry],
    prefixes: PrefixConfig,
    builtins: frozenset[str],
) -> ClassifiedImports:
    """
    Classify a list of imports, keeping source order within each group.
    """
    classified = ClassifiedImports()

    for entry in entries:
        classified.append(classify_import(entry, prefixes, builtins), entry)

    return classified
