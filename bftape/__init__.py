from bftape.brainfuck import BrainfuckInterpreter, execute
from bftape.config import MAX_LOOP_DEPTH, TAPE_SIZE, InterpreterConfig
from bftape.core.bf_runner import run_once, run_program
from bftape.core.brackets import LoopCorrespondence, match_brackets
from bftape.errors import (
    BrainfuckError,
    ExitStatus,
    InvalidProgram,
    LoopOverflow,
    LoopUnderflow,
    LoopUnmatched,
    OutOfMemory,
    ProgramIOError,
    StepLimitExceeded,
    TapeError,
    TapeOverflow,
    TapeUnderflow,
)

__version__ = "0.1.0"
