"""
Ordering of imports within their groups.
"""
from typing import Iterable

from sortimport.support.models import ClassifiedImports, ImportEntry


def sort_group(entries: Iterable[ImportEntry]) -> list[ImportEntry]:
    """
    Sort by path, then by alias. A missing alias sorts first.
    """
    return sorted(entries, key=ImportEntry.sort_key)


def sort_imports(classified: ClassifiedImports) -> ClassifiedImports:
    """Return a copy of classified with every group sorted."""
    result = ClassifiedImports()
    for group, entries in classified.groups():
        result.group(group).extend(sort_group(entries))
    return result


def dedupe(entries: Iterable[ImportEntry]) -> list[ImportEntry]:
    """Drop exact (path, alias) duplicates, keeping the first occurrence."""
    seen = set()
    unique = []
    for entry in entries:
        if entry in seen:
            continue
        seen.add(entry)
        unique.append(entry)
    return unique
