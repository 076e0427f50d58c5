"""
Discovery of Go source files to rewrite.
"""

from pathlib import Path
from sortimport.support.config import SortImportConfig


def is_go_file(path: Path, config: SortImportConfig, root: Path | None = None) -> bool:
    """
    Check if a file is a Go source file that should be processed.
    Rules:
    - Must be a .go file
    - Must not be hidden (name starting with '.')
    - Must not be in excluded directories (checked relative to root when given)
    """
    if path.suffix != ".go":
        return False

    if path.name.startswith("."):
        return False

    parts = path.parts
    if root is not None:
        try:
            parts = path.relative_to(root).parts
        except ValueError:
            pass

    for part in parts[:-1]:
        if part in config.exclude_dirs:
            return False

    return True


def discover_go_files(target_path: Path, config: SortImportConfig) -> list[Path]:
    """
    Find all Go files at target_path.
    A file target is returned as-is; a directory is searched recursively.
    """
    if target_path.is_file():
        return [target_path]

    go_files = []
    for file_path in target_path.rglob("*.go"):
        if not file_path.is_file():
            continue
        if not is_go_file(file_path, config, root=target_path):
            continue
        go_files.append(file_path)

    return sorted(go_files)
