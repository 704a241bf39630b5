"""Decode delimited string literals such as ``"tmp/x\\076y"``."""

from typing import Optional, Set

from unbackslash.error import (
    InvalidEscapeError,
    MissingDelimiterError,
    UnescapedDelimiterError,
    UnexpectedInputTypeError,
)
from unbackslash.handler import IEscapeHandler, ResolveFunction
from unbackslash.helpers import BACKSLASH, utf8_length, utf8_width
from unbackslash.scanner import decode, decode_with
from unbackslash.types import Unescaped


def unquote(
    literal: str,
    opening: str = '"',
    closing: Optional[str] = None,
    handler: IEscapeHandler | ResolveFunction | None = None,
) -> Unescaped:
    """
    Strip the delimiters of ``literal`` and decode the escapes between them.

    ``literal`` must start with ``opening`` and end with ``closing`` (or
    ``opening`` if ``closing`` is None). Delimiters inside must be escaped.
    Error indices are byte offsets into ``literal``, delimiters included.
    """
    if not isinstance(literal, str):
        raise UnexpectedInputTypeError(type(literal).__name__)
    if closing is None:
        closing = opening
    for name, delimiter in (("opening", opening), ("closing", closing)):
        if not isinstance(delimiter, str):
            raise TypeError(f"'{name}' must be a string")
        if len(delimiter) != 1:
            raise ValueError(f"'{name}' must contain exactly one character")

    if len(literal) < 2 or literal[0] != opening or literal[-1] != closing:
        raise MissingDelimiterError(literal, opening, closing)

    body = literal[1:-1]
    _check_delimiters_escaped(literal, body, {opening, closing})

    try:
        if handler is None:
            return decode(body)
        return decode_with(body, handler)
    except InvalidEscapeError as exc:
        raise InvalidEscapeError(exc.index + utf8_width(opening)) from exc


def _check_delimiters_escaped(literal: str, body: str, delimiters: Set[str]) -> None:
    position = 0
    while position < len(body):
        ch = body[position]
        if ch == BACKSLASH:
            position += 2
            continue
        if ch in delimiters:
            raise UnescapedDelimiterError(
                literal, ch, utf8_length(literal[: position + 1])
            )
        position += 1
