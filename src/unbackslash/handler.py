from typing import Callable, Optional, Protocol, TypeAlias, runtime_checkable

from unbackslash.cursor import Cursor
from unbackslash.error import EscapeSequenceError, UnexpectedHandlerTypeError
from unbackslash.primitives import decode_hex, decode_octal, decode_unicode

ResolveFunction: TypeAlias = Callable[[int, str, Cursor], Optional[str]]

OCTAL_TRIGGERS = frozenset("01234567")


@runtime_checkable
class IEscapeHandler(Protocol):
    def resolve(self, index: int, trigger: str, cursor: Cursor) -> Optional[str]:
        """
        Resolve the escape sequence started by a backslash at byte offset
        ``index`` and followed by ``trigger``.

        ``cursor`` is positioned right after ``trigger``; characters consumed
        from it belong to the escape sequence. Return the replacement
        character, ``None`` to drop the sequence, or raise
        ``EscapeSequenceError`` to reject it.
        """
        ...


class DefaultHandler:
    r"""
    Handler for the common C-like escapes.
    Handles \a, \b, \t, \n, \v, \f, \r, \e, \', \", \`, \\, \xNN, \uXXXX,
    \u{HEX} and one to three octal digits.
    """

    escape_map = {
        "a": "\x07",
        "b": "\b",
        "t": "\t",
        "n": "\n",
        "v": "\v",
        "f": "\f",
        "r": "\r",
        "e": "\x1b",
        "'": "'",
        '"': '"',
        "`": "`",
        "\\": "\\",
    }

    def resolve(self, index: int, trigger: str, cursor: Cursor) -> Optional[str]:
        replacement = self.escape_map.get(trigger)
        if replacement is not None:
            return replacement
        if trigger == "x":
            return decode_hex(cursor)
        if trigger == "u":
            return decode_unicode(cursor)
        if trigger in OCTAL_TRIGGERS:
            return decode_octal(cursor, trigger)
        raise EscapeSequenceError(f"unknown escape sequence: '\\{trigger}'")

    def __repr__(self) -> str:
        return "DefaultHandler()"


class CallableHandler:
    def __init__(self, function: ResolveFunction) -> None:
        if not callable(function):
            raise UnexpectedHandlerTypeError(type(function).__name__)
        self._function = function

    def resolve(self, index: int, trigger: str, cursor: Cursor) -> Optional[str]:
        return self._function(index, trigger, cursor)

    def __repr__(self) -> str:
        return f"CallableHandler({self._function!r})"


def as_handler(handler: IEscapeHandler | ResolveFunction) -> IEscapeHandler:
    if isinstance(handler, IEscapeHandler):
        return handler
    if callable(handler):
        return CallableHandler(handler)
    raise UnexpectedHandlerTypeError(type(handler).__name__)
