from __future__ import annotations

from typing import Iterator, Optional, Tuple

from unbackslash.helpers import utf8_length, utf8_width


class Cursor:
    """
    Forward-only view over the not yet consumed part of a string.

    Positions are tracked twice: as an index into the ``str`` and as the
    UTF-8 byte offset of the next character, which is what errors report.
    """

    def __init__(self, text: str, position: int = 0) -> None:
        if not 0 <= position <= len(text):
            raise IndexError(
                f"Cursor position {position} out of range for text of length {len(text)}."
            )
        self._text: str = text
        self._position: int = position
        self._offset: int = utf8_length(text[:position]) if position else 0

    @property
    def text(self) -> str:
        return self._text

    @property
    def position(self) -> int:
        return self._position

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def at_end(self) -> bool:
        return self._position >= len(self._text)

    @property
    def remaining(self) -> str:
        return self._text[self._position :]

    def peek(self) -> Optional[str]:
        if self.at_end:
            return None
        return self._text[self._position]

    def advance(self) -> Optional[Tuple[int, str]]:
        if self.at_end:
            return None
        ch = self._text[self._position]
        offset = self._offset
        self._position += 1
        self._offset += utf8_width(ch)
        return offset, ch

    def skip(self, count: int) -> int:
        if count < 0:
            raise ValueError("Cannot skip a negative number of characters.")
        skipped = 0
        while skipped < count and self.advance() is not None:
            skipped += 1
        return skipped

    def __iter__(self) -> Iterator[Tuple[int, str]]:
        return self

    def __next__(self) -> Tuple[int, str]:
        item = self.advance()
        if item is None:
            raise StopIteration
        return item

    def __repr__(self) -> str:
        return f"Cursor(position={self._position}, offset={self._offset}, remaining={self.remaining!r})"
