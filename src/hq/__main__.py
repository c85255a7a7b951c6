#!/usr/bin/env python3
"""Command-line interface for hq."""

from __future__ import annotations

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from .errors import InputError, SelectorError
from .extract import ContentMode
from .query import QueryOptions, SelectMode, query_html

logger = logging.getLogger("hq")


def _get_version() -> str:
    try:
        return version("hq")
    except PackageNotFoundError:  # pragma: no cover
        return "dev"


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="hq",
        description="Query HTML documents with CSS selectors, like jq does for JSON.",
        epilog=(
            "Examples:\n"
            "  hq 'main p' page.html\n"
            "  curl -s https://example.com | hq a\n"
            "  hq --first-match --text title page.html\n"
            "  hq --inner-html --indent 'ul.nav' page.html\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("query", help="CSS selector to run")
    parser.add_argument(
        "path",
        nargs="?",
        help="HTML file to query, or '-' to read from stdin (defaults to stdin)",
    )

    select_group = parser.add_mutually_exclusive_group()
    select_group.add_argument(
        "-a",
        "--all-matches",
        dest="select_mode",
        action="store_const",
        const=SelectMode.ALL,
        default=SelectMode.ALL,
        help="Output every match (default)",
    )
    select_group.add_argument(
        "-f",
        "--first-match",
        dest="select_mode",
        action="store_const",
        const=SelectMode.FIRST,
        help="Output only the first match",
    )

    content_group = parser.add_mutually_exclusive_group()
    content_group.add_argument(
        "-o",
        "--outer-html",
        dest="content_mode",
        action="store_const",
        const=ContentMode.OUTER,
        default=ContentMode.OUTER,
        help="Output the matched elements including their own tags (default)",
    )
    content_group.add_argument(
        "-i",
        "--inner-html",
        dest="content_mode",
        action="store_const",
        const=ContentMode.INNER,
        help="Output only the contents of the matched elements",
    )
    content_group.add_argument(
        "-t",
        "--text",
        dest="content_mode",
        action="store_const",
        const=ContentMode.TEXT,
        help="Output the text content of the matched elements",
    )

    parser.add_argument(
        "--indent",
        action="store_true",
        help="Print each match as an indented tree instead of a single line",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Log debugging information to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"hq {_get_version()}",
    )

    return parser.parse_args(argv)


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _has_piped_stdin() -> bool:
    stdin = sys.stdin
    return stdin is not None and not stdin.isatty()


def _read_html(path: str | None) -> str:
    if path is None or path == "-":
        if path is None and not _has_piped_stdin():
            raise InputError("no-input")
        try:
            return sys.stdin.read()
        except OSError as e:
            raise InputError("stdin-error", detail=str(e)) from e

    file_path = Path(path)
    if not file_path.exists():
        raise InputError("no-file", path=path)
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError("file-error", path=path, detail=str(e)) from e


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    _setup_logging(args.debug)

    options = QueryOptions(
        select_mode=args.select_mode,
        content_mode=args.content_mode,
        indented=args.indent,
    )
    logger.debug("Running %r with %r", args.query, options)

    try:
        html = _read_html(args.path)
    except InputError as e:
        print(str(e), file=sys.stderr)
        return 1
    logger.debug("Read %d character(s) of input", len(html))

    try:
        outputs = query_html(html, args.query, options)
    except SelectorError as e:
        print(f"Error parsing query: {e}", file=sys.stderr)
        return 2

    for output in outputs:
        sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
