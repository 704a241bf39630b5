from typing import Optional, Tuple

from unbackslash.cursor import Cursor
from unbackslash.error import EscapeSequenceError
from unbackslash.helpers import BACKSLASH, digit_value, is_scalar_value

MAX_CODE_POINT = 0x10FFFF
HIGH_SURROGATES = range(0xD800, 0xDC00)
LOW_SURROGATES = range(0xDC00, 0xE000)


def read_digits(
    cursor: Cursor,
    base: int,
    max_digits: Optional[int] = None,
    limit: Optional[int] = None,
) -> Tuple[int, int]:
    """
    Read ASCII digits of ``base`` from ``cursor`` and return ``(value, count)``.

    Reading stops after ``max_digits`` digits (never, if ``None``), at the
    first character that is not a digit (that character is not consumed), or
    right after the digit that makes ``value`` exceed ``limit``.
    """
    if not 2 <= base <= 16:
        raise ValueError(f"Unsupported base {base}, must be between 2 and 16.")
    if max_digits is not None and max_digits < 0:
        raise ValueError("max_digits must not be negative.")

    value = 0
    count = 0
    while max_digits is None or count < max_digits:
        ch = cursor.peek()
        if ch is None:
            break
        digit = digit_value(ch, base)
        if digit is None:
            break
        cursor.advance()
        value = value * base + digit
        count += 1
        if limit is not None and value > limit:
            break
    return value, count


def decode_hex(cursor: Cursor) -> str:
    value, count = read_digits(cursor, 16, 2)
    if count != 2:
        raise EscapeSequenceError("truncated \\xXX escape sequence")
    return chr(value)


def decode_unicode(
    cursor: Cursor, surrogate_pairs: bool = False, braced: bool = True
) -> str:
    r"""
    Decode the part of ``\u{HEX}`` or ``\uXXXX`` following the ``u``.

    Without ``braced`` only the ``\uXXXX`` form is accepted. With
    ``surrogate_pairs`` a high surrogate in ``\uXXXX`` form may be
    followed by ``\uXXXX`` holding a low surrogate, as JSON encodes characters
    outside the Basic Multilingual Plane. The pair is consumed as one escape.
    """
    if braced and cursor.peek() == "{":
        cursor.advance()
        code_point, count = read_digits(cursor, 16, limit=MAX_CODE_POINT)
        if count == 0:
            raise EscapeSequenceError("empty \\u{} escape sequence")
        if code_point > MAX_CODE_POINT:
            raise EscapeSequenceError("\\u{...} escape sequence out of range")
        if cursor.peek() != "}":
            raise EscapeSequenceError("unterminated \\u{...} escape sequence")
        cursor.advance()
    else:
        code_point = _read_code_unit(cursor)
        if surrogate_pairs and code_point in HIGH_SURROGATES:
            code_point = _join_surrogate_pair(cursor, code_point)

    if not is_scalar_value(code_point):
        raise EscapeSequenceError(f"{code_point:#x} is not a Unicode scalar value")
    return chr(code_point)


def decode_octal(cursor: Cursor, first: str) -> str:
    value = digit_value(first, 8)
    if value is None:
        raise EscapeSequenceError(f"{first!r} is not an octal digit")
    rest, count = read_digits(cursor, 8, 2)
    return chr(value * 8**count + rest)


def _read_code_unit(cursor: Cursor) -> int:
    code_unit, count = read_digits(cursor, 16, 4)
    if count != 4:
        raise EscapeSequenceError("truncated \\uXXXX escape sequence")
    return code_unit


def _join_surrogate_pair(cursor: Cursor, high: int) -> int:
    # unpaired high surrogates are left to the scalar value check
    if not cursor.remaining.startswith(BACKSLASH + "u"):
        return high
    cursor.skip(2)
    low = _read_code_unit(cursor)
    if low not in LOW_SURROGATES:
        raise EscapeSequenceError(
            f"Invalid low surrogate: {low:#04x} after high surrogate: {high:#04x}"
        )
    return 0x10000 + ((high - 0xD800) << 10) + (low - 0xDC00)
