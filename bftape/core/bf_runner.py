import io
import logging
from typing import Optional, Tuple

from bftape.brainfuck import BrainfuckInterpreter
from bftape.config import InterpreterConfig
from bftape.core.brackets import Program, match_brackets
from bftape.core.streams import ByteSink, ByteSource, StreamSink, StreamSource
from bftape.errors import BrainfuckError, ExitStatus, ProgramIOError

logger = logging.getLogger(__name__)


def load_program(path: str) -> bytes:
    """Read a program file as raw bytes."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise ProgramIOError(f"{path}: {e.strerror or e}") from e


def run_program(code: Program, source: ByteSource, sink: ByteSink,
                config: Optional[InterpreterConfig] = None,
                interpreter: Optional[BrainfuckInterpreter] = None) -> ExitStatus:
    """Allocate, match and execute; every fatal condition becomes its ExitStatus.

    Tape allocation and bracket matching both happen before any byte is
    read or written.
    """
    try:
        itp = interpreter or BrainfuckInterpreter(config)
        correspondence = match_brackets(code, itp.config.max_loop_depth)
        itp.run(code, source, sink, correspondence)
    except BrainfuckError as e:
        logger.debug("%s (status 0x%02x)", type(e).__name__, e.status)
        return e.status
    return ExitStatus.SUCCESS


def run_once(code: Program, input_data: bytes = b"",
             config: Optional[InterpreterConfig] = None) -> Tuple[ExitStatus, bytes]:
    """Execute BF code against in-memory input and return (status, output).
    A fresh tape is used each time (stateless).
    """
    out = io.BytesIO()
    status = run_program(code, StreamSource(io.BytesIO(input_data)), StreamSink(out), config)
    return status, out.getvalue()
