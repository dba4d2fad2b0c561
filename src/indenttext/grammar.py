"""Grammar engine: turns logical lines into Key / Value / Closed items."""

from __future__ import annotations

import io
from typing import BinaryIO, Iterator, Union

from .errors import ErrorKind, IndentTextError
from .items import Item, ItemType, Visitor
from .reader import DEFAULT_CHUNK_SIZE, DEFAULT_MAX_LINE_LENGTH, LineReader

Source = Union[BinaryIO, bytes, str]

_INDENT = b" \t"
_COMMENT = ord("#")
_CONTENT_MARKER = ord("'")
_GROUP_TOKEN = ord(":")
_SPACE = ord(" ")


# ---------------------------------------------------------------------------
# Line classification
# ---------------------------------------------------------------------------

def _content_start(line: bytes) -> int:
    """Index of the first byte that is not a space or tab."""
    i = 0
    while i < len(line) and line[i] in _INDENT:
        i += 1
    return i


def _find_pair_split(line: bytes, start: int, end: int) -> int:
    """Return the index of the colon in the first ``": "`` or -1.

    A run of colons keeps the match alive, so ``a:: b`` splits at the
    second colon.
    """
    colon_seen = False
    for i in range(start, end):
        byte = line[i]
        if byte == _GROUP_TOKEN:
            colon_seen = True
        elif colon_seen and byte == _SPACE:
            return i - 1
        else:
            colon_seen = False
    return -1


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class Parser:
    """Single-pass parser over one stream.

    Holds the open-group stack and the reader; neither is shared between
    parses.  :meth:`items` is a generator, so nothing past the line of the
    last yielded item is read until the caller asks for more.
    """

    def __init__(
        self,
        stream: BinaryIO,
        *,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        encoding: str = "utf-8",
        errors: str = "strict",
    ) -> None:
        self.reader = LineReader(stream, max_line_length, chunk_size)
        self.encoding = encoding
        self.errors = errors
        self.stack: list[str] = []
        self.column = 0

    @property
    def lineno(self) -> int:
        return self.reader.lineno

    def error(self, kind: ErrorKind, message: str, column: int | None = None) -> IndentTextError:
        return IndentTextError(
            kind, message, self.lineno, self.column if column is None else column
        )

    def _text(self, line: bytes, start: int, end: int) -> str:
        try:
            return line[start:end].decode(self.encoding, self.errors)
        except UnicodeDecodeError as exc:
            raise self.error(
                ErrorKind.INVALID_TEXT,
                f"Cannot decode {self.encoding} text: {exc.reason}",
                start + exc.start,
            ) from exc

    def _path(self) -> tuple[str, ...]:
        return tuple(self.stack)

    def items(self) -> Iterator[Item]:
        for line in self.reader:
            yield from self._line_items(line)

        if self.stack:
            raise self.error(
                ErrorKind.UNTERMINATED_GROUP,
                "Unterminated compound group, not enough ':'",
                0,
            )

    def _line_items(self, line: bytes) -> Iterator[Item]:
        start = _content_start(line)
        if start == len(line):
            return

        escaped = False
        if line[start] == _CONTENT_MARKER:
            start += 1
            escaped = True
        elif line[start] == _COMMENT:
            return
        self.column = start

        end = len(line)
        group_token = line[-1] == _GROUP_TOKEN
        if group_token:
            end -= 1
        elif escaped and line[-1] == _CONTENT_MARKER and start != end:
            end -= 1

        split = -1 if escaped else _find_pair_split(line, start, end)

        if group_token:
            if start == end and not escaped:
                if not self.stack:
                    raise self.error(
                        ErrorKind.TOO_MANY_CLOSERS, "Too many compound terminators ':'", 0
                    )
                name = self.stack.pop()
                yield Item(self._path(), name, ItemType.CLOSED)
            else:
                name = self._text(line, start, end)
                yield Item(self._path(), name, ItemType.KEY)
                self.stack.append(name)
        elif split == -1:
            yield Item(self._path(), self._text(line, start, end), ItemType.VALUE)
        else:
            # both halves are decoded before anything is emitted
            name = self._text(line, start, split)
            value = self._text(line, split + 2, end)
            yield Item(self._path(), name, ItemType.KEY)
            self.stack.append(name)
            yield Item(self._path(), value, ItemType.VALUE)
            self.stack.pop()
            yield Item(self._path(), name, ItemType.CLOSED)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def _as_stream(source: Source, encoding: str) -> BinaryIO:
    if isinstance(source, str):
        return io.BytesIO(source.encode(encoding))
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(source))
    return source


def iter_parse(source: Source, **options) -> Iterator[Item]:
    """Lazily yield the items of *source*.

    The iterator is not restartable.  Abandoning it stops the parse: no
    further line is read.  Structural errors are raised from ``next()``.
    """
    stream = _as_stream(source, options.get("encoding", "utf-8"))
    return Parser(stream, **options).items()


def parse(source: Source, visitor: Visitor, **options) -> None:
    """Parse *source*, calling ``visitor(path, item, kind)`` for each item.

    *path* is a tuple of the enclosing keys, outermost first.  For a Key it
    does not yet include the new key; for a Closed it no longer includes the
    closed key.  A visitor returning a true value stops the parse with an
    :class:`IndentTextError` of kind ``CANCELED``.

    Keyword options: ``max_line_length`` (bytes, default 256 KiB),
    ``chunk_size``, ``encoding`` and ``errors``.
    """
    stream = _as_stream(source, options.get("encoding", "utf-8"))
    parser = Parser(stream, **options)
    items = parser.items()
    try:
        for item in items:
            if visitor(item.path, item.text, item.kind):
                raise parser.error(ErrorKind.CANCELED, "Canceled")
    finally:
        items.close()
