from unbackslash.cursor import Cursor
from unbackslash.error import EscapeSequenceError, InvalidEscapeError
from unbackslash.handler import (
    CallableHandler,
    DefaultHandler,
    IEscapeHandler,
    as_handler,
)
from unbackslash.literal import unquote
from unbackslash.scanner import Scanner, decode, decode_with
from unbackslash.table import DEFAULT_TABLE, JSON_TABLE, EscapeTable, TableHandler
from unbackslash.types import Borrowed, Owned, ScanState, Unescaped

__all__ = [
    "Borrowed",
    "CallableHandler",
    "Cursor",
    "DEFAULT_TABLE",
    "DefaultHandler",
    "EscapeSequenceError",
    "EscapeTable",
    "IEscapeHandler",
    "InvalidEscapeError",
    "JSON_TABLE",
    "Owned",
    "ScanState",
    "Scanner",
    "TableHandler",
    "Unescaped",
    "as_handler",
    "decode",
    "decode_with",
    "unquote",
]
