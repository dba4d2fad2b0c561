"""Error type for indent text parsing."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    LINE_TOO_LONG = "line too long"
    TOO_MANY_CLOSERS = "too many closers"
    UNTERMINATED_GROUP = "unterminated group"
    INVALID_TEXT = "invalid text"
    CANCELED = "canceled"


class IndentTextError(Exception):
    """Raised when parsing stops, carrying the kind and a line/column position.

    Malformed input and a visitor-requested stop share this one type;
    callers branch on :attr:`kind` (or :attr:`canceled`) to tell them apart.
    I/O errors from the underlying stream are never wrapped.
    """

    def __init__(self, kind: ErrorKind, message: str, line: int, column: int) -> None:
        self.kind = kind
        self.message = message
        self.line = line
        self.column = column
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"line:{self.line} col:{self.column} Error: {self.message}"

    @property
    def canceled(self) -> bool:
        return self.kind is ErrorKind.CANCELED
