import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

TAPE_SIZE = 32768
MAX_LOOP_DEPTH = 512


@dataclass(frozen=True)
class InterpreterConfig:
    """Limits applied to a single run."""
    tape_size: int = TAPE_SIZE
    max_loop_depth: int = MAX_LOOP_DEPTH
    max_steps: Optional[int] = None  # None means no step budget

    def __post_init__(self):
        if self.tape_size < 1:
            raise ValueError(f"tape_size must be positive, got {self.tape_size}")
        if self.max_loop_depth < 1:
            raise ValueError(f"max_loop_depth must be positive, got {self.max_loop_depth}")
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError(f"max_steps must not be negative, got {self.max_steps}")

    @classmethod
    def from_env(cls, **overrides) -> "InterpreterConfig":
        """Build a config from BF_TAPE_SIZE, BF_MAX_LOOP_DEPTH and BF_STEP_LIMIT.

        A .env file in the working directory is loaded first. Keyword
        overrides that are not None win over the environment.
        """
        load_dotenv()
        cfg = cls(
            tape_size=_env_int("BF_TAPE_SIZE", TAPE_SIZE),
            max_loop_depth=_env_int("BF_MAX_LOOP_DEPTH", MAX_LOOP_DEPTH),
            max_steps=_env_int("BF_STEP_LIMIT", None),
        )
        overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(cfg, **overrides) if overrides else cfg


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
