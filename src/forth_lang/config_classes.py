"""Forth configuration data, usually stored in forth.toml"""

from dataclasses import dataclass
from pathlib import Path

from .machine.types import CELL_SIZE

# Constants
DEFAULT_STACK_SIZE = 128 * 1024  # bytes
DEFAULT_STACK_FILE = "stack.fth"
DEFAULT_PRESERVE_STACK_ON = ("stack-overflow",)


@dataclass(unsafe_hash=True)
class InterpreterConfig:
    stack_size: int = DEFAULT_STACK_SIZE
    stack_file: Path = Path(DEFAULT_STACK_FILE)
    # Error tokens after which the stack is kept instead of being reset
    preserve_stack_on: tuple = DEFAULT_PRESERVE_STACK_ON

    def __post_init__(self):
        self.stack_file = Path(self.stack_file)
        self.preserve_stack_on = tuple(self.preserve_stack_on)
        if not isinstance(self.stack_size, int) or self.stack_size < 0:
            raise ValueError(f"stack_size must be a positive integer, not {self.stack_size}")

    @property
    def max_elements(self) -> int:
        """Stack capacity in elements"""
        return stack_size_from_bytes(self.stack_size)


def stack_size_from_bytes(size: int) -> int:
    return size // CELL_SIZE
