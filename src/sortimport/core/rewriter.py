"""
Orchestrator for rewriting the import section of Go source files.
"""
import difflib
import logging
from pathlib import Path
import sys
from typing import TextIO

from sortimport.core.block_renderer import render_block
from sortimport.core.import_classifier import classify_all
from sortimport.core.import_sorter import dedupe, sort_imports
from sortimport.core.module_resolver import find_module_path
from sortimport.core.reference_cache import ReferenceCache
from sortimport.core.source_parser import parse_source
from sortimport.support.file_operations import atomic_write, read_file
from sortimport.support.models import FileResult, PrefixConfig, RewriteResult

LOG = logging.getLogger(__name__)

MODES = ("check", "list", "write", "diff")


def rewrite(
    source: str,
    builtins: frozenset[str],
    local_prefix: str = "",
    second_prefix: str = "",
    file_path: Path | str | None = None,
) -> RewriteResult:
    """
    Rewrite every import declaration in source as one canonical block.

    When no local prefix is given, the module path of the go.mod enclosing
    file_path is used. Sources without imports are returned unchanged.
    """
    filename = str(file_path) if file_path else ""
    parsed = parse_source(source, filename)

    if not parsed.imports:
        return RewriteResult(source=source, output=source, changed=False)

    if not local_prefix and file_path:
        local_prefix = find_module_path(file_path)
        if not local_prefix:
            LOG.debug("module name not found, skipping local prefix")

    prefixes = PrefixConfig.from_strings(local_prefix, second_prefix)
    classified = classify_all(dedupe(parsed.imports), prefixes, builtins)
    block = render_block(sort_imports(classified))

    output = parsed.with_import_block(block)
    return RewriteResult(source=source, output=output, changed=output != source)


def unified_diff(original: str, updated: str, filename: str) -> str:
    return "".join(difflib.unified_diff(
        original.splitlines(keepends=True),
        updated.splitlines(keepends=True),
        fromfile=f"{filename}.orig",
        tofile=filename,
    ))


class Rewriter:
    """
    Rewrites files against one builtin set and one prefix configuration.
    """

    def __init__(
        self,
        cache: ReferenceCache | None = None,
        local_prefix: str = "",
        second_prefix: str = "",
        builtins: frozenset[str] | None = None,
        out: TextIO | None = None,
    ):
        if cache is None and builtins is None:
            raise ValueError("Rewriter needs a reference cache or a builtin set")
        self.cache = cache
        self.local_prefix = local_prefix
        self.second_prefix = second_prefix
        self._builtins = builtins
        self.out = out

    @property
    def builtins(self) -> frozenset[str]:
        if self._builtins is None:
            self._builtins = self.cache.builtins()
        return self._builtins

    def rewrite_text(self, source: str, file_path: Path | str | None = None) -> RewriteResult:
        return rewrite(
            source,
            self.builtins,
            local_prefix=self.local_prefix,
            second_prefix=self.second_prefix,
            file_path=file_path,
        )

    def process_file(self, path: Path, mode: str = "check") -> FileResult:
        """
        Rewrite one file.

        Modes:
            check: only compute the result
            list:  print the rewritten source if it changed
            write: replace the file if it changed
            diff:  print a unified diff if it changed
        """
        if mode not in MODES:
            raise ValueError(f"Unknown mode {mode!r}, expected one of {', '.join(MODES)}")

        LOG.debug("processing %s", path)
        source = read_file(path)
        result = self.rewrite_text(source, path)

        if not result.changed:
            LOG.debug("file has not been changed: %s", path)
            return FileResult(path=path, changed=False, output=result.output)

        out = self.out or sys.stdout
        if mode == "list":
            print(result.output, file=out, end="")
        elif mode == "diff":
            print(unified_diff(source, result.output, str(path)), file=out, end="")
        elif mode == "write":
            atomic_write(path, result.output)

        return FileResult(path=path, changed=True, output=result.output)
