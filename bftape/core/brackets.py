from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

from bftape.config import MAX_LOOP_DEPTH
from bftape.errors import LoopOverflow, LoopUnderflow, LoopUnmatched

logger = logging.getLogger(__name__)

COMMANDS = "><+-.,[]"

Program = Union[str, bytes, bytearray]


def as_text(instructions: Program) -> str:
    """Return the program as text; bytes map 1:1 onto characters via latin-1."""
    if isinstance(instructions, (bytes, bytearray)):
        return bytes(instructions).decode("latin-1")
    return instructions


@dataclass(frozen=True)
class LoopCorrespondence:
    """Position-indexed jump table between matching brackets.

    jump_table maps every bracket position to the position of its partner.
    max_depth is the deepest nesting seen while matching.
    """
    jump_table: Dict[int, int]
    max_depth: int = 0

    def __getitem__(self, position: int) -> int:
        return self.jump_table[position]

    def __contains__(self, position: int) -> bool:
        return position in self.jump_table

    def __len__(self) -> int:
        return len(self.jump_table)

    def pairs(self) -> List[Tuple[int, int]]:
        """(open, close) pairs ordered by open position."""
        return sorted((a, b) for a, b in self.jump_table.items() if a < b)


def match_brackets(instructions: Program, max_depth: int = MAX_LOOP_DEPTH) -> LoopCorrespondence:
    """Build the table mapping bracket positions for efficient jumping.

    Raises LoopOverflow when nesting would exceed max_depth, LoopUnderflow
    on a ']' with nothing open, and LoopUnmatched when a '[' is still open
    at the end of the program.
    """
    code = as_text(instructions)
    jump_table: Dict[int, int] = {}
    stack: List[int] = []
    deepest = 0

    for i, cmd in enumerate(code):
        if cmd == '[':
            if len(stack) >= max_depth:
                raise LoopOverflow(f"Loop nesting exceeds {max_depth} at position {i}", i)
            stack.append(i)
            deepest = max(deepest, len(stack))
        elif cmd == ']':
            if not stack:
                raise LoopUnderflow(f"Unmatched ']' at position {i}", i)
            start = stack.pop()
            jump_table[start] = i
            jump_table[i] = start

    if stack:
        raise LoopUnmatched(f"Unmatched '[' at position {stack[-1]}", stack[-1])

    logger.debug("matched %d loops, max depth %d", len(jump_table) // 2, deepest)
    return LoopCorrespondence(jump_table, deepest)
