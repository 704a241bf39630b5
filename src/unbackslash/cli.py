from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List

from pydantic import ValidationError

from unbackslash.literal import unquote
from unbackslash.scanner import decode_with
from unbackslash.table import PRESETS, EscapeTable, TableHandler, load_table

logger = logging.getLogger(__name__)


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="unbackslash",
        description="Decode backslash escape sequences",
    )
    subparsers = parser.add_subparsers(dest="command")

    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode escape sequences in the given texts or in each line of stdin",
    )
    decode_parser.add_argument(
        "text",
        nargs="*",
        help="Texts to decode. Reads stdin line by line if omitted",
    )
    table_group = decode_parser.add_mutually_exclusive_group()
    table_group.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default="default",
        help="Built-in escape dialect",
    )
    table_group.add_argument(
        "--table",
        type=Path,
        help="JSON file describing the escape dialect",
    )
    decode_parser.add_argument(
        "--quoted",
        action="store_true",
        help='Inputs are literals delimited by \'"\'',
    )
    decode_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)
    command: str | None = args.command

    if command is None:
        parser.print_help()
        sys.exit(1)

    if command == "decode":
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )
        texts: List[str] = args.text or [line.rstrip("\n") for line in sys.stdin]
        sys.exit(decode_command(texts, args.preset, args.table, args.quoted))


def decode_command(
    texts: Iterable[str], preset: str, table_path: Path | None, quoted: bool
) -> int:
    try:
        table: EscapeTable = (
            PRESETS[preset] if table_path is None else load_table(table_path)
        )
    except (OSError, ValidationError) as exc:
        print(f"error: cannot load escape table: {exc}", file=sys.stderr)
        return 2
    logger.debug("Using escape table %r", table)

    handler = TableHandler(table)
    for text in texts:
        try:
            if quoted:
                result = unquote(text, handler=handler)
            else:
                result = decode_with(text, handler)
        except ValueError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        print(result)
    return 0


if __name__ == "__main__":
    main()
