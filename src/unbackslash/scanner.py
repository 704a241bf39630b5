import logging
from typing import List, Optional

from unbackslash.cursor import Cursor
from unbackslash.error import (
    EscapeSequenceError,
    InvalidEscapeError,
    InvalidReplacementError,
    UnexpectedInputTypeError,
)
from unbackslash.handler import (
    DefaultHandler,
    IEscapeHandler,
    ResolveFunction,
    as_handler,
)
from unbackslash.helpers import BACKSLASH
from unbackslash.types import Borrowed, Owned, ScanState, Unescaped

logger = logging.getLogger(__name__)


class Scanner:
    """
    Single pass over ``text`` that resolves every backslash escape through
    ``handler``.

    Text before the first escape is only tracked as a prefix length; the
    output buffer is created when the first backslash is read and the input
    itself is returned when there is none.
    """

    def __init__(
        self,
        text: str,
        handler: IEscapeHandler | ResolveFunction | None = None,
    ) -> None:
        if not isinstance(text, str):
            raise UnexpectedInputTypeError(type(text).__name__)
        self._text: str = text
        self._handler: IEscapeHandler = (
            DefaultHandler() if handler is None else as_handler(handler)
        )
        self._cursor: Cursor = Cursor(text)
        self._state: ScanState = ScanState.NORMAL
        self._borrowed_end: int = 0
        self._buffer: Optional[List[str]] = None
        self._result: Optional[Unescaped] = None
        self._failure: Optional[BaseException] = None

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def handler(self) -> IEscapeHandler:
        return self._handler

    def run(self) -> Unescaped:
        if self._state is ScanState.FINISHED and self._result is not None:
            return self._result
        if self._state is ScanState.TERMINATED and self._failure is not None:
            raise self._failure

        while (item := self._cursor.advance()) is not None:
            index, ch = item
            if ch != BACKSLASH:
                if self._buffer is not None:
                    self._buffer.append(ch)
                else:
                    self._borrowed_end = self._cursor.position
                continue
            self._state = ScanState.IN_ESCAPE
            self._resolve_escape(index)
            self._state = ScanState.NORMAL

        if self._buffer is None:
            self._result = Borrowed(self._text)
        else:
            self._result = Owned("".join(self._buffer))
        self._state = ScanState.FINISHED
        return self._result

    def _resolve_escape(self, index: int) -> None:
        trigger_item = self._cursor.advance()
        if trigger_item is None:
            raise self._terminate(index, "trailing backslash")

        if self._buffer is None:
            logger.debug(
                "First escape at index %d, copying %d characters",
                index,
                self._borrowed_end,
            )
            self._buffer = [self._text[: self._borrowed_end]]

        _, trigger = trigger_item
        try:
            replacement = self._handler.resolve(index, trigger, self._cursor)
        except EscapeSequenceError as exc:
            raise self._terminate(index, str(exc)) from exc
        except BaseException as exc:
            self._abort(exc)
            raise

        if replacement is None:
            return
        if not isinstance(replacement, str) or len(replacement) != 1:
            error = InvalidReplacementError(trigger, replacement)
            self._abort(error)
            raise error
        self._buffer.append(replacement)

    def _terminate(self, index: int, reason: str) -> InvalidEscapeError:
        logger.debug("Rejected escape at index %d: %s", index, reason)
        error = InvalidEscapeError(index)
        self._abort(error)
        return error

    def _abort(self, failure: BaseException) -> None:
        self._state = ScanState.TERMINATED
        self._failure = failure
        self._buffer = None


def decode(text: str) -> Unescaped:
    r"""
    Decode backslash escapes in ``text`` with the ``DefaultHandler``.

    >>> decode("Hello,\\nworld!")
    Owned('Hello,\nworld!')
    >>> decode("No escapes here!")
    Borrowed('No escapes here!')

    Raises ``InvalidEscapeError`` carrying the UTF-8 byte offset of the
    backslash that starts the first invalid escape sequence.
    """
    return Scanner(text).run()


def decode_with(text: str, handler: IEscapeHandler | ResolveFunction) -> Unescaped:
    return Scanner(text, handler).run()
