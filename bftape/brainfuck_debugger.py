#!/usr/bin/env python3
"""
Brainfuck Step-by-Step Debugger

Shows the step-by-step execution of a Brainfuck program, displaying the
state of the memory tape, loop depth, and output after each step.
"""

import sys
from typing import Optional, TextIO

from bftape.brainfuck import BrainfuckInterpreter
from bftape.config import InterpreterConfig
from bftape.core.brackets import LoopCorrespondence, Program, as_text
from bftape.core.streams import ByteSink, ByteSource


class BrainfuckDebugger(BrainfuckInterpreter):
    """Brainfuck interpreter that writes a trace of every step."""

    def __init__(self, config: Optional[InterpreterConfig] = None,
                 show_memory_range: int = 10, stream: Optional[TextIO] = None):
        super().__init__(config)
        self.show_memory_range = show_memory_range
        self.stream = stream
        self.output = bytearray()
        self._code = ""

    def _print(self, text: str = ""):
        print(text, file=self.stream or sys.stderr)

    def run(self, code: Program, source: ByteSource, sink: ByteSink,
            correspondence: Optional[LoopCorrespondence] = None) -> int:
        self.output = bytearray()
        self._code = as_text(code)
        self._print("BRAINFUCK DEBUGGER")
        self._print(f"Program: {self._code}")
        self._print("=" * 80)

        steps = super().run(code, source, sink, correspondence)

        self._print()
        self._print(f"FINAL RESULT after {steps} steps:")
        self._print(f"Output: {bytes(self.output)!r} -> {list(self.output)}")
        return steps

    def _after_step(self, cmd: str, position: int):
        if cmd == '.':
            self.output.append(int(self.memory[self.pointer]))
        self._print()
        self._print(f"Step {self.step_count}: Execute {cmd!r} at position {position}")
        self._show_state()

    def _show_state(self):
        """Show current state of memory, pointer, and program."""
        # Show program with instruction pointer
        program_display = ""
        for i, cmd in enumerate(self._code):
            if i == self.instruction_pointer:
                program_display += f"[{cmd}]"
            else:
                program_display += cmd
        if self.instruction_pointer >= len(self._code):
            program_display += "[END]"
        self._print(f"Program:  {program_display}")

        # Show memory tape (focused around pointer)
        start = max(0, self.pointer - self.show_memory_range // 2)
        end = min(len(self.memory), start + self.show_memory_range)

        # Adjust start if we're near the end
        if end - start < self.show_memory_range:
            start = max(0, end - self.show_memory_range)

        memory_vals = []
        memory_ptrs = []
        memory_addrs = []

        for i in range(start, end):
            memory_vals.append(f"{int(self.memory[i]):3d}")
            memory_ptrs.append(" ^ " if i == self.pointer else "   ")
            memory_addrs.append(f"{i:3d}")

        self._print("Memory:   [" + "|".join(memory_vals) + "]")
        self._print("Pointer:   " + " ".join(memory_ptrs))
        self._print("Address:   " + " ".join(memory_addrs))
        self._print(f"Depth:    {self.loop_depth}")

        if self.output:
            self._print(f"Output:   {bytes(self.output)!r} -> {list(self.output)}")
        else:
            self._print("Output:   (empty)")
