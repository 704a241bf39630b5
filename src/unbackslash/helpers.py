import string

BACKSLASH = "\\"

_HEX_DIGITS = frozenset(string.hexdigits)


def utf8_width(ch: str) -> int:
    code_point = ord(ch)
    if code_point < 0x80:
        return 1
    if code_point < 0x800:
        return 2
    if code_point < 0x10000:
        return 3
    return 4


def utf8_length(text: str) -> int:
    if text.isascii():
        return len(text)
    return sum(utf8_width(ch) for ch in text)


def digit_value(ch: str, base: int) -> int | None:
    # ASCII only: int() would also accept digits from other scripts
    if ch not in _HEX_DIGITS:
        return None
    value = int(ch, 16)
    if value >= base:
        return None
    return value


def is_scalar_value(code_point: int) -> bool:
    return 0 <= code_point <= 0x10FFFF and not 0xD800 <= code_point <= 0xDFFF
