"""
Byte-at-a-time input and output for the interpreter.

The engine never touches sys.stdin or sys.stdout directly; it is handed a
source and a sink. StreamSource and StreamSink adapt any binary file
object (a console buffer, an open file, io.BytesIO).
"""

import sys
from typing import BinaryIO, Optional, Protocol, Tuple

from bftape.errors import ProgramIOError


class ByteSource(Protocol):
    def read_byte(self) -> Optional[int]:
        """Return the next byte, or None at end of stream."""
        ...


class ByteSink(Protocol):
    def write_byte(self, value: int) -> None:
        ...

    def flush(self) -> None:
        ...


class StreamSource:
    def __init__(self, raw: BinaryIO):
        self.raw = raw

    def read_byte(self) -> Optional[int]:
        try:
            data = self.raw.read(1)
        except OSError as e:
            raise ProgramIOError(f"read failed: {e}") from e
        if not data:
            return None
        return data[0]


class StreamSink:
    def __init__(self, raw: BinaryIO):
        self.raw = raw

    def write_byte(self, value: int) -> None:
        try:
            self.raw.write(bytes((value,)))
        except OSError as e:
            raise ProgramIOError(f"write failed: {e}") from e

    def flush(self) -> None:
        try:
            self.raw.flush()
        except OSError as e:
            raise ProgramIOError(f"flush failed: {e}") from e


def stdio_streams() -> Tuple[StreamSource, StreamSink]:
    """Source and sink over the process's standard input and output."""
    return StreamSource(sys.stdin.buffer), StreamSink(sys.stdout.buffer)
