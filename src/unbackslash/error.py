class InvalidEscapeError(ValueError):
    def __init__(self, index: int) -> None:
        super().__init__(f"invalid escape sequence at index {index}")
        self.index = index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidEscapeError):
            return NotImplemented
        return self.index == other.index

    def __hash__(self) -> int:
        return hash((InvalidEscapeError, self.index))


class EscapeSequenceError(Exception):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            "Escape sequence rejected" + (f": {message}" if message else "")
        )
        self.message = message


class UnexpectedInputTypeError(TypeError):
    def __init__(self, actual_type: str) -> None:
        super().__init__(f"Input must be of type 'str', got '{actual_type}'")
        self.actual_type = actual_type


class UnexpectedHandlerTypeError(TypeError):
    def __init__(self, actual_type: str) -> None:
        super().__init__(
            f"'{actual_type}' is not an escape handler. Handler must conform to IEscapeHandler or be callable."
        )
        self.actual_type = actual_type


class InvalidReplacementError(TypeError):
    def __init__(self, trigger: str, replacement: object) -> None:
        super().__init__(
            f"Handler for trigger {trigger!r} returned {replacement!r}. Expected a single character or None."
        )
        self.trigger = trigger
        self.replacement = replacement


class MissingDelimiterError(ValueError):
    def __init__(self, literal: str, opening: str, closing: str) -> None:
        super().__init__(
            f"Literal not delimited by {opening!r} and {closing!r}: {literal!r}"
        )
        self.literal = literal


class UnescapedDelimiterError(ValueError):
    def __init__(self, literal: str, delimiter: str, index: int) -> None:
        super().__init__(
            f"Literal contains an unescaped {delimiter!r} at index {index}: {literal!r}"
        )
        self.literal = literal
        self.delimiter = delimiter
        self.index = index
