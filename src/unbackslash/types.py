from abc import ABC, abstractmethod
from enum import Enum


class ScanState(Enum):
    NORMAL = "normal"
    IN_ESCAPE = "in_escape"
    # terminal
    TERMINATED = "terminated"
    FINISHED = "finished"


class Unescaped(ABC):
    """
    Copy-on-write result of decoding.

    Compares, hashes and renders like its text so callers can treat it as a
    string; ``is_borrowed`` tells whether the input was returned as is.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def text(self) -> str: ...

    @property
    @abstractmethod
    def is_borrowed(self) -> bool: ...

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        return len(self.text)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Unescaped):
            return self.text == other.text
        if isinstance(other, str):
            return self.text == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.text)


class Borrowed(Unescaped):
    __slots__ = ("_source",)

    def __init__(self, source: str) -> None:
        self._source = source

    @property
    def source(self) -> str:
        return self._source

    @property
    def text(self) -> str:
        return self._source

    @property
    def is_borrowed(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Borrowed({self._source!r})"


class Owned(Unescaped):
    __slots__ = ("_value",)

    def __init__(self, value: str) -> None:
        self._value = value

    @property
    def value(self) -> str:
        return self._value

    @property
    def text(self) -> str:
        return self._value

    @property
    def is_borrowed(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"Owned({self._value!r})"
