"""mdBook preprocessor entry point."""

from __future__ import annotations

import argparse
import io
import logging
import sys
from typing import IO, Sequence

from .book import parse_input, write_book
from .config import Config
from .constants import CONFIG_KEY, PREPROCESSOR_NAME
from .errors import TracePreprocessorError
from .preprocessor import TracePreprocessor, supports_renderer

LOGGER = logging.getLogger(__name__)


class ExitCode:
    SUCCESS = 0
    FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PREPROCESSOR_NAME,
        description="mdBook preprocessor adding numbered trace footnotes and matrices",
    )
    sub = parser.add_subparsers(dest="command")
    supports = sub.add_parser(
        "supports", help="Check whether a renderer is supported"
    )
    supports.add_argument("renderer")
    return parser


def handle_supports(renderer: str) -> int:
    return ExitCode.SUCCESS if supports_renderer(renderer) else ExitCode.FAILURE


def handle_preprocessing(
    stdin: IO[str] | None = None, stdout: IO[str] | None = None
) -> None:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    payload = parse_input(stdin)
    config = Config.from_mapping(payload.preprocessor_config(CONFIG_KEY))
    preprocessor = TracePreprocessor(config)
    preprocessor.check_version(payload.mdbook_version)
    LOGGER.debug("preprocessing book for the %s renderer", payload.renderer)

    processed = preprocessor.run(payload.book)
    # only a fully processed book reaches stdout
    buffer = io.StringIO()
    write_book(processed, buffer)
    stdout.write(buffer.getvalue())


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.command == "supports":
        return handle_supports(args.renderer)

    # stdout carries the book, so log records go to stderr
    logging.basicConfig(
        level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s"
    )
    try:
        handle_preprocessing()
    except (TracePreprocessorError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return ExitCode.FAILURE
    return ExitCode.SUCCESS


if __name__ == "__main__":
    raise SystemExit(main())
