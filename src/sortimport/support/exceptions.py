"""
Custom exceptions for sortimport.
"""
from pathlib import Path


class SortImportError(Exception):
    """Base exception for all sortimport errors."""
    pass


class ParseError(SortImportError):
    """Raised when Go source cannot be parsed."""
    def __init__(self, file_path: str, line_number: int, message: str):
        self.file_path = file_path
        self.line_number = line_number
        self.message = message
        super().__init__(f"Syntax error in {file_path or '<input>'} at line {line_number}: {message}")


class InvalidImportPath(SortImportError):
    """Raised when an import spec has an empty or malformed path."""
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Invalid import path: {path!r}")


class CacheMiss(SortImportError):
    """Raised when no readable reference set is cached for a version."""
    def __init__(self, version: str, cache_file: Path, reason: str = "not found"):
        self.version = version
        self.cache_file = cache_file
        super().__init__(f"No cached standard packages for {version} at {cache_file}: {reason}")


class FetchError(SortImportError):
    """Raised when the standard package list cannot be enumerated."""
    pass


class CachePersistError(SortImportError):
    """Raised when the reference set cannot be written to disk."""
    def __init__(self, cache_file: Path, reason: str):
        self.cache_file = cache_file
        super().__init__(f"Could not write cache {cache_file}: {reason}")
