"""
Safe file I/O operations.
"""
from pathlib import Path
import os
import stat
import tempfile


def atomic_write(path: Path, content: str) -> None:
    """
    Replace the file at path with content in one step.
    Writes to a temp file beside the target and renames it over the target,
    keeping the original permission bits when the target already exists.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    mode = None
    if path.exists():
        mode = stat.S_IMODE(path.stat().st_mode)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        if mode is not None:
            os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def read_file(path: Path) -> str:
    """Read file content."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()
