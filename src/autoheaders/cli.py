#!/usr/bin/env python3
"""
autoheaders: Outline numbering for Markdown headings

Each document must start with a signifier giving the starting counters, for example
`@autoHeader:1` or `<!-- autoHeader:2-1 -->`.

Common usage:
  autoheaders README.md
  autoheaders --inplace docs/
  autoheaders --levels 2-4 --separator . guide.md
  autoheaders --html guide.md -o guide.html
  autoheaders --list-files .

Options not given on the command line are read from `.autoheaders.toml`,
`autoheaders.toml` or `pyproject.toml [tool.autoheaders]`.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from strif import atomic_output_file

from autoheaders.config import (
    DEFAULT_LEVELS,
    DEFAULT_SEPARATOR,
    AutoHeadersConfig,
    find_config_file,
    load_config,
    merge_cli_with_config,
)
from autoheaders.engine import AutoHeaders
from autoheaders.file_resolver import FileResolver, FileResolverConfig
from autoheaders.numbering.level_range import parse_level_spec

logger = logging.getLogger(__name__)


@dataclass
class Options:
    """Command-line options for the autoheaders tool."""

    files: list[str]
    output: str
    inplace: bool
    nobackup: bool
    separator: str | None
    levels: Any
    sidebar: bool | None
    debug: bool | None
    verbose: bool
    version: bool
    # File discovery options
    list_files: bool
    extend_include: list[str] | None
    exclude: list[str] | None
    extend_exclude: list[str] | None
    respect_gitignore: bool | None


# Options whose presence on the command line overrides the config file
_TRACKED_FLAGS = (
    "separator",
    "levels",
    "sidebar",
    "debug",
    "extend_include",
    "exclude",
    "extend_exclude",
    "respect_gitignore",
)


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns `(options, explicit_flags)`. Tracked options default to `None` so that
    `explicit_flags` records exactly the ones the user passed.
    """
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "files",
        nargs="*",
        type=str,
        default=[],
        help="Input files or directories (use '-' for stdin, '.' for current directory)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default="-",
        help="Output file (use '-' for stdout)",
    )
    parser.add_argument(
        "-i", "--inplace", action="store_true", help="Edit the files in place (ignores --output)"
    )
    parser.add_argument(
        "--nobackup",
        action="store_true",
        help="Do not keep a .orig backup of the original file when using --inplace",
    )
    parser.add_argument(
        "--separator",
        type=str,
        default=None,
        help="Character between label segments, or one of decimal, dot, dash, hyphen, "
        f"bracket, parenthesis (default: {DEFAULT_SEPARATOR!r})",
    )
    parser.add_argument(
        "--levels",
        type=parse_level_spec,
        default=None,
        metavar="N|START-FINISH",
        help=f"Heading levels to label, e.g. '3' or '2-4' (default: {DEFAULT_LEVELS})",
    )
    parser.add_argument(
        "--html",
        action="store_const",
        const=False,
        dest="sidebar",
        default=None,
        help="Render to HTML and number the headings of the parsed document",
    )
    parser.add_argument(
        "--no-debug",
        action="store_const",
        const=False,
        dest="debug",
        default=None,
        help="On errors, warn and leave documents unchanged instead of failing",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log each processed file"
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    # File discovery options
    parser.add_argument(
        "--list-files",
        action="store_true",
        dest="list_files",
        help="Print resolved file paths without numbering",
    )
    parser.add_argument(
        "--extend-include",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Additional file patterns to include (e.g., '*.markdown'). Can be repeated",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Replace all default exclusion patterns. Can be repeated",
    )
    parser.add_argument(
        "--extend-exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Add to default exclusion patterns (e.g., 'drafts/'). Can be repeated",
    )
    parser.add_argument(
        "--no-respect-gitignore",
        action="store_const",
        const=False,
        dest="respect_gitignore",
        default=None,
        help="Disable .gitignore integration",
    )
    opts = parser.parse_args(args)

    options = Options(
        files=opts.files,
        output=opts.output,
        inplace=opts.inplace,
        nobackup=opts.nobackup,
        separator=opts.separator,
        levels=opts.levels,
        sidebar=opts.sidebar,
        debug=opts.debug,
        verbose=opts.verbose,
        version=opts.version,
        list_files=opts.list_files,
        extend_include=opts.extend_include,
        exclude=opts.exclude,
        extend_exclude=opts.extend_exclude,
        respect_gitignore=opts.respect_gitignore,
    )
    explicit_flags = {name for name in _TRACKED_FLAGS if getattr(options, name) is not None}
    return options, explicit_flags


def _numbering_config(options: Options) -> AutoHeadersConfig:
    """Fill in built-in defaults for anything neither the CLI nor config file set."""
    return AutoHeadersConfig(
        separator=options.separator if options.separator is not None else DEFAULT_SEPARATOR,
        levels=options.levels if options.levels is not None else DEFAULT_LEVELS,
        sidebar=options.sidebar if options.sidebar is not None else True,
        debug=options.debug if options.debug is not None else True,
    )


def _resolve_files(options: Options) -> list[str]:
    """Expand directories and globs to Markdown files. '-' (stdin) passes through."""
    resolvable = [f for f in options.files if f != "-"]
    stdin_present = len(resolvable) < len(options.files)

    config = FileResolverConfig(
        extend_include=options.extend_include or [],
        exclude=options.exclude,
        extend_exclude=options.extend_exclude or [],
        respect_gitignore=options.respect_gitignore is not False,
    )
    result = [str(p) for p in FileResolver(config).resolve(resolvable)]
    if stdin_present:
        result.insert(0, "-")
    return result


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _write_inplace(path: str, content: str, nobackup: bool) -> None:
    if not nobackup:
        shutil.copyfile(path, path + ".orig")
    with atomic_output_file(path) as tmp_path:
        Path(tmp_path).write_text(content, encoding="utf-8")


def number_files(files: list[str], engine: AutoHeaders, options: Options) -> None:
    """
    Number each file and write it to stdout, to `options.output`, or back in place.

    Raises:
        ValueError: for invalid combinations of options, and (when `debug` is on)
            for numbering errors, which are `ValueError` subclasses.
    """
    if options.inplace and "-" in files:
        raise ValueError("Cannot use --inplace with stdin")
    if options.inplace and engine.config.sidebar is False:
        raise ValueError("Cannot use --inplace with --html")
    if not options.inplace and options.output != "-" and len(files) > 1:
        raise ValueError("Use --inplace or stdout when numbering more than one file")

    for path in files:
        logger.debug("Numbering headings: %s", path)
        result = engine.process(_read_input(path))
        if options.inplace:
            _write_inplace(path, result, options.nobackup)
        elif options.output == "-":
            sys.stdout.write(result)
        else:
            with atomic_output_file(options.output, make_parents=True) as tmp_path:
                Path(tmp_path).write_text(result, encoding="utf-8")


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the autoheaders CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for usage or numbering errors, 2 for other errors)
    """
    options, explicit_flags = _parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if options.version:
        try:
            version = importlib.metadata.version("autoheaders")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    if not options.files:
        print(
            "Error: No input specified. Provide files, directories (use '.' for current"
            " directory), or '-' for stdin. Use --help for more options.",
            file=sys.stderr,
        )
        return 1

    config_path = find_config_file(Path.cwd())
    if config_path:
        merge_cli_with_config(options, load_config(config_path), explicit_flags)

    try:
        resolved_files = _resolve_files(options)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if options.list_files:
        for f in resolved_files:
            print(f)
        return 0

    try:
        engine = AutoHeaders(_numbering_config(options))
        number_files(resolved_files, engine, options)
    except ValueError as e:
        # Bad option combinations, and numbering errors when debug is on
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
