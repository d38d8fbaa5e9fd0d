#!/usr/bin/env python3
"""
Brainfuck Interpreter

Brainfuck is an esoteric programming language with only 8 commands:
    >   Move the pointer to the right
    <   Move the pointer to the left
    +   Increment the memory cell at the pointer
    -   Decrement the memory cell at the pointer
    .   Output the byte held in the cell at the pointer
    ,   Input a byte and store it in the cell at the pointer
    [   Jump past the matching ] if the cell at the pointer is 0
    ]   Jump back to the matching [ if the cell at the pointer is nonzero

All other characters are treated as comments and ignored.

The tape is a fixed-size array of unsigned bytes. Moving off either end of
it is fatal; cells wrap modulo 256.
"""

import logging
from typing import Optional

import numpy as np

from bftape.config import InterpreterConfig
from bftape.core.brackets import LoopCorrespondence, Program, as_text, match_brackets
from bftape.core.streams import ByteSink, ByteSource
from bftape.errors import (
    BrainfuckError,
    ExitStatus,
    OutOfMemory,
    ProgramIOError,
    StepLimitExceeded,
    TapeOverflow,
    TapeUnderflow,
)

logger = logging.getLogger(__name__)


class BrainfuckInterpreter:
    def __init__(self, config: Optional[InterpreterConfig] = None):
        self.config = config or InterpreterConfig()
        try:
            self.memory = np.zeros(self.config.tape_size, dtype=np.uint8)
        except (MemoryError, ValueError) as e:
            # numpy raises ValueError for sizes beyond its maximum dimension
            raise OutOfMemory(f"cannot allocate a tape of {self.config.tape_size} cells") from e
        self.pointer = 0
        self.instruction_pointer = 0
        self.loop_depth = 0
        self.step_count = 0
        self.input_reads = 0
        self.output_writes = 0

    def reset(self):
        """Zero the tape and rewind all execution state."""
        self.memory.fill(0)
        self.pointer = 0
        self.instruction_pointer = 0
        self.loop_depth = 0
        self.step_count = 0
        self.input_reads = 0
        self.output_writes = 0

    def run(self, code: Program, source: ByteSource, sink: ByteSink,
            correspondence: Optional[LoopCorrespondence] = None) -> int:
        """Execute Brainfuck code against the given byte source and sink.

        Returns the number of steps executed. Any fatal condition raises a
        BrainfuckError; output written before it stays written.
        """
        code = as_text(code)
        if correspondence is None:
            correspondence = match_brackets(code, self.config.max_loop_depth)

        self.reset()
        logger.debug("running %d instructions on a %d-cell tape", len(code), len(self.memory))

        try:
            self._run_loop(code, correspondence, source, sink)
        except BrainfuckError as e:
            logger.debug("run aborted at position %s after %d steps: %s", e.position, self.step_count, e)
            try:
                sink.flush()
            except ProgramIOError as flush_error:
                logger.debug("flush after abort failed: %s", flush_error)
            raise
        sink.flush()
        return self.step_count

    def _run_loop(self, code: str, jump_table: LoopCorrespondence,
                  source: ByteSource, sink: ByteSink):
        max_steps = self.config.max_steps
        while self.instruction_pointer < len(code):
            if max_steps is not None and self.step_count >= max_steps:
                raise StepLimitExceeded(f"Execution exceeded {max_steps} steps",
                                        self.instruction_pointer)

            position = self.instruction_pointer
            cmd = code[position]
            self._execute_instruction(cmd, jump_table, source, sink)

            self.instruction_pointer += 1
            self.step_count += 1
            self._after_step(cmd, position)

    def _execute_instruction(self, cmd: str, jump_table: LoopCorrespondence,
                             source: ByteSource, sink: ByteSink):
        if cmd == '>':
            if self.pointer + 1 == len(self.memory):
                raise TapeOverflow(f"Pointer moved beyond cell {len(self.memory) - 1}",
                                   self.instruction_pointer)
            self.pointer += 1

        elif cmd == '<':
            if self.pointer == 0:
                raise TapeUnderflow("Pointer moved before cell 0", self.instruction_pointer)
            self.pointer -= 1

        elif cmd == '+':
            self.memory[self.pointer] = (int(self.memory[self.pointer]) + 1) % 256

        elif cmd == '-':
            self.memory[self.pointer] = (int(self.memory[self.pointer]) - 1) % 256

        elif cmd == '.':
            sink.write_byte(int(self.memory[self.pointer]))
            self.output_writes += 1

        elif cmd == ',':
            # Anything already written must be visible before we block on input
            sink.flush()
            value = source.read_byte()
            self.memory[self.pointer] = 0 if value is None else value
            self.input_reads += 1

        elif cmd == '[':
            if self.memory[self.pointer] == 0:
                self.instruction_pointer = jump_table[self.instruction_pointer]
            else:
                self.loop_depth += 1

        elif cmd == ']':
            if self.memory[self.pointer] != 0:
                self.instruction_pointer = jump_table[self.instruction_pointer]
            else:
                self.loop_depth -= 1

    def _after_step(self, cmd: str, position: int):
        """Called after every executed instruction."""


def execute(code: Program, correspondence: LoopCorrespondence,
            source: ByteSource, sink: ByteSink,
            config: Optional[InterpreterConfig] = None) -> ExitStatus:
    """Run a matched program and report how it ended as an ExitStatus."""
    try:
        BrainfuckInterpreter(config).run(code, source, sink, correspondence)
    except BrainfuckError as e:
        return e.status
    return ExitStatus.SUCCESS
