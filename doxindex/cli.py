"""Command-line front door for doxindex.

``search`` and ``check`` read an index, ``convert`` rewrites one in another
format, and ``build`` scans C/C++ sources into a Doxygen search directory.
Defaults for style, page prefix, section and result cap come from the user
config, which ``config`` shows and updates, and are overridden by flags.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .builder import SECTION_KINDS, build_sections
from .codec import load_index, save_index, write_native, write_search_directory
from .declarations import scan_paths
from .errors import DoxIndexError
from .highlight import format_results

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _section_list(value: str) -> list[str]:
    """argparse type for a comma-separated list of known section names."""
    sections = [part.strip() for part in value.split(",") if part.strip()]
    unknown = [section for section in sections if section not in SECTION_KINDS]
    if unknown:
        raise argparse.ArgumentTypeError(
            f"unknown section(s) {', '.join(unknown)}; choose from {', '.join(SECTION_KINDS)}"
        )
    if not sections:
        raise argparse.ArgumentTypeError("at least one section is required")
    return sections


def _existing_path(value: str) -> Path:
    path = Path(value)
    if not path.exists():
        raise argparse.ArgumentTypeError(f"path not found: {path}")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doxindex",
        description="Build, inspect and search symbol search indexes for generated documentation.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress details to stderr.")
    commands = parser.add_subparsers(dest="command", required=True)

    search = commands.add_parser("search", help="Print entries whose name contains QUERY.")
    search.add_argument("index", type=_existing_path, help="Index file (.json or .js) or search directory.")
    search.add_argument("query", nargs="?", default="", help="Case-insensitive substring. Empty lists everything.")
    search.add_argument("--section", default=None, help="Section to read from a search directory.")
    search.add_argument("--style", default=None, help="Pygments style name for highlighted labels.")
    search.add_argument("--no-color", action="store_true", help="Disable color output.")
    search.add_argument("--max-results", type=_positive_int, default=None, help="Maximum entries to print.")

    check = commands.add_parser("check", help="Load an index and report its size.")
    check.add_argument("index", type=_existing_path, help="Index file (.json or .js) or search directory.")
    check.add_argument("--section", default=None, help="Section to read from a search directory.")

    convert = commands.add_parser("convert", help="Rewrite an index; the output suffix picks the format.")
    convert.add_argument("source", type=_existing_path, help="Index file or search directory to read.")
    convert.add_argument("destination", type=Path, help="Output file (.js for Doxygen, otherwise native JSON).")
    convert.add_argument("--section", default=None, help="Section to read from a search directory.")

    build = commands.add_parser("build", help="Scan C/C++ sources and write search indexes.")
    build.add_argument("sources", type=_existing_path, nargs="+", help="Source files or directories.")
    build.add_argument("-o", "--output", type=Path, required=True, help="Output directory.")
    build.add_argument(
        "--sections",
        type=_section_list,
        default=list(SECTION_KINDS),
        help=f"Comma-separated sections to build (default: {','.join(SECTION_KINDS)}).",
    )
    build.add_argument("--page-prefix", default=None, help="Prefix for page references (default from config).")
    build.add_argument("--include-private", action="store_true", help="Index private class members too.")
    build.add_argument(
        "--format",
        choices=("doxygen", "native"),
        default="doxygen",
        help="doxygen: per-character .js files plus searchdata.js; native: one <section>.json per section.",
    )

    settings = commands.add_parser("config", help="Show saved defaults, changing any that are given.")
    settings.add_argument("--style", default=None, help="Pygments style name for highlighted labels.")
    settings.add_argument("--page-prefix", default=None, help="Prefix for page references written by build.")
    settings.add_argument("--default-section", default=None, help="Section read from search directories.")
    settings.add_argument("--max-results", type=_positive_int, default=None, help="Maximum entries search prints.")
    return parser


def _run_search(args: argparse.Namespace) -> None:
    table = load_index(args.index, args.section or config.load_default_section())
    matches = table.query(args.query)
    max_results = args.max_results if args.max_results is not None else config.load_max_results()
    output = format_results(
        matches,
        style=args.style or config.load_style(),
        no_color=args.no_color or not sys.stdout.isatty(),
        max_results=max_results,
    )
    sys.stdout.write(output)


def _run_check(args: argparse.Namespace) -> None:
    table = load_index(args.index, args.section or config.load_default_section())
    sys.stdout.write(f"{args.index}: {len(table)} entries, {table.target_count()} targets\n")


def _run_convert(args: argparse.Namespace) -> None:
    table = load_index(args.source, args.section or config.load_default_section())
    save_index(args.destination, table)
    logger.info("converted %s -> %s (%d entries)", args.source, args.destination, len(table))


def _run_build(args: argparse.Namespace) -> None:
    page_prefix = args.page_prefix if args.page_prefix is not None else config.load_page_prefix()
    declarations = scan_paths(args.sources, include_private=args.include_private)
    sections = build_sections(declarations, page_prefix=page_prefix, sections=args.sections)
    if args.format == "native":
        for section, table in sections.items():
            write_native(args.output / f"{section}.json", table)
    else:
        write_search_directory(args.output, sections)
    summary = ", ".join(f"{section}={len(table)}" for section, table in sections.items())
    sys.stdout.write(f"{len(declarations)} declarations -> {args.output} ({summary})\n")


def _run_config(args: argparse.Namespace) -> None:
    if args.style is not None:
        config.save_style(args.style)
    if args.page_prefix is not None:
        config.save_page_prefix(args.page_prefix)
    if args.default_section is not None:
        config.save_default_section(args.default_section)
    if args.max_results is not None:
        config.save_max_results(args.max_results)
    sys.stdout.write(
        f"style={config.load_style()}\n"
        f"page_prefix={config.load_page_prefix()}\n"
        f"default_section={config.load_default_section()}\n"
        f"max_results={config.load_max_results()}\n"
    )


_COMMANDS = {
    "search": _run_search,
    "check": _run_check,
    "convert": _run_convert,
    "build": _run_build,
    "config": _run_config,
}


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the selected command.

    Library failures surface as ``SystemExit`` with an ``error:`` message.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        _COMMANDS[args.command](args)
    except DoxIndexError as exc:
        logger.debug("command %s failed", args.command, exc_info=True)
        raise SystemExit(f"error: {exc}") from exc


if __name__ == "__main__":
    main()
