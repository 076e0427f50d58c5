"""
Go module detection.
"""
import logging
import os
from pathlib import Path
import re

from sortimport.support.models import ModuleDescriptor

LOG = logging.getLogger(__name__)

MODULE_MARKER = "go.mod"

_MODULE_LINE = re.compile(r"^[ \t]*module[ \t]+(\S.*?)[ \t]*\r?$", re.MULTILINE)


def parse_module_path(content: str) -> str:
    """
    Extract the module path from go.mod content.
    e.g. 'module github.com/org/proj // comment' -> "github.com/org/proj"
    """
    for match in _MODULE_LINE.finditer(content):
        value = match.group(1).split("//", 1)[0].strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"`":
            value = value[1:-1]
        if value:
            return value
    return ""


def _is_file(path: Path) -> bool:
    """Like Path.is_file, but a path that cannot be stat-ed is not there."""
    try:
        return path.is_file()
    except OSError as e:
        LOG.debug("cannot stat %s: %s", path, e)
        return False


def find_module(start_path: Path | str) -> ModuleDescriptor | None:
    """
    Find the enclosing Go module by walking up looking for go.mod.
    The start path does not have to exist. Returns None when the
    filesystem root is reached without finding a marker.
    """
    current = Path(os.path.abspath(start_path))
    if _is_file(current):
        current = current.parent

    # We walk up to root
    for parent in [current] + list(current.parents):
        marker = parent / MODULE_MARKER
        if not _is_file(marker):
            continue
        try:
            content = marker.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            LOG.warning("error when reading mod file %s: %s", marker, e)
            return None
        namespace = parse_module_path(content)
        LOG.debug("found module %s from %s", namespace, marker)
        return ModuleDescriptor(root_path=parent, namespace=namespace)

    LOG.debug("no %s found above %s", MODULE_MARKER, current)
    return None


def find_module_path(start_path: Path | str) -> str:
    """Return the module path enclosing start_path, or "" if there is none."""
    module = find_module(start_path)
    if module is None:
        return ""
    return module.namespace


def get_module_name(cwd: Path | None = None) -> str:
    """
    Read the module path from go.mod in the working directory only.
    Used when no file path is available, e.g. when reading stdin.
    """
    root = cwd if cwd is not None else Path.cwd()
    marker = root / MODULE_MARKER
    try:
        content = marker.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        LOG.debug("error when reading mod file: %s", e)
        return ""
    return parse_module_path(content)
