"""
sortimport CLI Entry Point.
"""

import argparse
import logging
import sys
from pathlib import Path

from sortimport.support.config import SortImportConfig, load_config
from sortimport.support.exceptions import FetchError, SortImportError
from sortimport.support.models import FileResult
from sortimport.core.discovery import discover_go_files
from sortimport.core.module_resolver import get_module_name
from sortimport.core.reference_cache import ReferenceCache
from sortimport.core.rewriter import Rewriter, unified_diff
from sortimport import __version__

LOG = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="sortimport",
        description=(
            "Sort Go imports into four groups: standard library, third-party, "
            "second-party and local packages."
        ),
    )

    parser.add_argument(
        "paths",
        nargs="*",
        help="Go files or directories to process. Reads stdin when omitted.",
    )

    parser.add_argument(
        "-l", dest="list", action="store_true", help="Write results to stdout."
    )

    parser.add_argument(
        "-w",
        dest="write",
        action="store_true",
        help="Write result to (source) file instead of stdout.",
    )

    parser.add_argument(
        "-d", "--diff", action="store_true", help="Display diffs instead of rewriting files."
    )

    parser.add_argument(
        "--local",
        help=(
            "Put imports beginning with this string after 2nd-party packages; "
            "comma-separated list. Defaults to the module path in go.mod."
        ),
    )

    parser.add_argument(
        "--second",
        help=(
            "Put imports beginning with this string after 3rd-party packages; "
            "comma-separated list."
        ),
    )

    parser.add_argument(
        "--update-cache",
        action="store_true",
        help="Update the standard package cache for the current Go version.",
    )

    parser.add_argument(
        "--cache-dir", help="Directory for the standard package cache (default: ~/.cache/sortimport)."
    )

    parser.add_argument(
        "--no-builtins",
        action="store_true",
        help="Do not load the standard package list; treat every import as non-standard.",
    )

    parser.add_argument("--config", help="Path to a .sortimport.toml configuration file.")

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging."
    )

    parser.add_argument(
        "--version", action="version", version=f"sortimport {__version__}"
    )

    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s.%(msecs)03d %(name)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")


def output_mode(args: argparse.Namespace) -> str:
    if args.diff:
        return "diff"
    if args.write:
        return "write"
    if args.list:
        return "list"
    return "check"


def build_cache(args: argparse.Namespace, config: SortImportConfig) -> ReferenceCache:
    return ReferenceCache(
        cache_dir=args.cache_dir or config.cache_dir,
        go_binary=config.go_binary,
    )


def update_cache(cache: ReferenceCache) -> int:
    try:
        cache.refresh()
    except SortImportError as e:
        print(f"Error: failed to update cache: {e}", file=sys.stderr)
        return 1

    print(f"Cache updated for {cache.version}")
    legacy = cache.legacy_cache_file()
    if legacy.exists():
        print(f"Note: old unversioned cache {legacy} is no longer used and can be removed.")
    return 0


def process_stdin(rewriter: Rewriter, mode: str) -> int:
    """Rewrite source read from stdin; the result always goes to stdout."""
    if mode == "write":
        print("Error: cannot use -w with standard input", file=sys.stderr)
        return 2

    source = sys.stdin.read()
    try:
        result = rewriter.rewrite_text(source)
    except SortImportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if mode == "diff":
        if result.changed:
            print(unified_diff(source, result.output, "<standard input>"), end="")
    else:
        print(result.output, end="")
    return 0


def process_paths(paths: list[Path], rewriter: Rewriter, config: SortImportConfig, mode: str) -> int:
    """Process every Go file under paths; one file failing does not stop the rest."""
    results: list[FileResult] = []

    for path in paths:
        if not path.exists():
            print(f"Error: Path not found: {path}", file=sys.stderr)
            results.append(FileResult(path=path, error="path not found"))
            continue

        for file_path in discover_go_files(path, config):
            try:
                results.append(rewriter.process_file(file_path, mode))
            except (SortImportError, OSError, UnicodeDecodeError) as e:
                print(f"Error: {file_path}: {e}", file=sys.stderr)
                results.append(FileResult(path=file_path, error=str(e)))

    errors = [r for r in results if r.error]
    if mode == "check" or len(results) > 1:
        changed = len([r for r in results if r.changed])
        verb = "Rewritten" if mode == "write" else "Would change"
        print("\nsortimport Summary", file=sys.stderr)
        print("──────────────────", file=sys.stderr)
        print(f"Processed {len(results)} files", file=sys.stderr)
        print(f"{verb}: {changed} files", file=sys.stderr)
        if errors:
            print(f"Errors:   {len(errors)} files failed", file=sys.stderr)

    return 1 if errors else 0


def run(args: argparse.Namespace) -> int:
    """Main command logic.
    Returns exit code (0 for success, non-zero for error).
    """
    configure_logging(args.verbose)

    config = load_config(Path(args.config) if args.config else None)
    cache = build_cache(args, config)

    if args.update_cache:
        return update_cache(cache)

    local_prefix = args.local if args.local is not None else config.local
    second_prefix = args.second if args.second is not None else config.second
    if not local_prefix and not args.paths:
        # Reading stdin: there is no file location to resolve go.mod from
        LOG.debug("no prefix found, using module name")
        local_prefix = get_module_name()

    builtins = None
    if args.no_builtins:
        builtins = frozenset()
    else:
        try:
            builtins = cache.builtins()
        except FetchError as e:
            print(f"Error: could not load standard packages: {e}", file=sys.stderr)
            print("Use --no-builtins to sort without a standard library group.", file=sys.stderr)
            return 1

    rewriter = Rewriter(
        cache=cache,
        local_prefix=local_prefix,
        second_prefix=second_prefix,
        builtins=builtins,
    )
    mode = output_mode(args)

    if not args.paths:
        return process_stdin(rewriter, mode)

    return process_paths([Path(p) for p in args.paths], rewriter, config, mode)


def main():
    """Entry point for console script."""
    sys.exit(run(parse_args()))


if __name__ == "__main__":
    main()
