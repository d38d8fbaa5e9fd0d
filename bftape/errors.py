"""
Error taxonomy and exit statuses for the interpreter.

Every fatal condition is a BrainfuckError subclass carrying the ExitStatus
a caller should report and, where it applies, the instruction position at
which the run stopped.
"""

from enum import IntEnum
from typing import Optional


class ExitStatus(IntEnum):
    """Result codes, suitable for use as process exit codes."""
    SUCCESS = 0

    ENV = 0x20             # Generic error unrelated to the program
    INVALID_ARGS = 0x21
    IO = 0x22              # Read/write failure, missing program file
    NOMEM = 0x23

    PROGRAM = 0x40         # Generic error in the program
    TAPE_OVERFLOW = 0x41   # Pointer moved past the last cell
    TAPE_UNDERFLOW = 0x42  # Pointer moved before cell 0
    LOOP_UNMATCHED = 0x43  # '[' never closed
    LOOP_UNDERFLOW = 0x44  # ']' with no pending '['
    LOOP_OVERFLOW = 0x45   # Nesting deeper than the configured limit
    STEP_LIMIT = 0x46


class BrainfuckError(Exception):
    """Base class for every fatal interpreter condition."""
    status = ExitStatus.ENV

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.position = position


class InvalidProgram(BrainfuckError):
    """The program was rejected by the bracket matcher."""
    status = ExitStatus.PROGRAM


class LoopOverflow(InvalidProgram):
    status = ExitStatus.LOOP_OVERFLOW


class LoopUnderflow(InvalidProgram):
    status = ExitStatus.LOOP_UNDERFLOW


class LoopUnmatched(InvalidProgram):
    status = ExitStatus.LOOP_UNMATCHED


class TapeError(BrainfuckError):
    status = ExitStatus.PROGRAM


class TapeOverflow(TapeError):
    status = ExitStatus.TAPE_OVERFLOW


class TapeUnderflow(TapeError):
    status = ExitStatus.TAPE_UNDERFLOW


class ProgramIOError(BrainfuckError):
    """Underlying read or write failure (end of input is not one)."""
    status = ExitStatus.IO


class OutOfMemory(BrainfuckError):
    status = ExitStatus.NOMEM


class StepLimitExceeded(BrainfuckError):
    """Raised when execution exceeds the configured step budget."""
    status = ExitStatus.STEP_LIMIT
