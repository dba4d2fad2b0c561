"""Line reader: pulls logical lines out of a binary stream."""

from __future__ import annotations

import io
from typing import BinaryIO

from .errors import ErrorKind, IndentTextError

DEFAULT_MAX_LINE_LENGTH = 256 * 1024
DEFAULT_CHUNK_SIZE = 4096


class LineReader:
    """Reads one logical line per call from *stream*.

    The stream is read in fragments of at most ``chunk_size`` bytes; a line
    longer than that arrives in several pieces which are joined here.  The
    joined length is checked against ``max_line_length`` after each piece,
    so an oversized line is rejected without buffering the rest of it.
    """

    def __init__(
        self,
        stream: BinaryIO,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if max_line_length < 0:
            raise ValueError("max_line_length must not be negative")
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")
        if isinstance(stream, io.TextIOBase) or not hasattr(stream, "readline"):
            raise TypeError("a binary stream with readline() is required")
        self.stream = stream
        self.max_line_length = max_line_length
        self.chunk_size = chunk_size
        self.lineno = 0

    def next_line(self) -> bytes | None:
        """Return the next line without its terminator, or ``None`` at EOF."""
        parts: list[bytes] = []
        length = 0
        terminated = False

        while True:
            chunk = self.stream.readline(self.chunk_size)
            if not chunk:
                break
            if chunk.endswith(b"\n"):
                terminated = True
                chunk = chunk[:-1]
                if chunk.endswith(b"\r"):
                    chunk = chunk[:-1]
                elif not chunk and parts and parts[-1].endswith(b"\r"):
                    parts[-1] = parts[-1][:-1]
                    length -= 1
            parts.append(chunk)
            length += len(chunk)
            # a CR ending a fragment may be the first half of a CRLF
            slack = 0 if terminated or not chunk.endswith(b"\r") else 1
            if length - slack > self.max_line_length:
                raise self._too_long(length)
            if terminated:
                break

        if not parts:
            return None

        if length > self.max_line_length:
            raise self._too_long(length)

        line = b"".join(parts)
        self.lineno += 1
        return line

    def _too_long(self, length: int) -> IndentTextError:
        return IndentTextError(
            ErrorKind.LINE_TOO_LONG, "Line is too long", self.lineno + 1, length
        )

    def __iter__(self):
        while True:
            line = self.next_line()
            if line is None:
                return
            yield line
