"""Run Forth programs and persist the final stack"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .config_classes import DEFAULT_PRESERVE_STACK_ON
from .exceptions import ForthRuntimeError
from .machine.machine import DEFAULT_STACK_SIZE, ForthMachine

LOG = logging.getLogger(__name__)


@dataclass
class RunResult:
    stack: List[int]
    output: str
    error: Optional[ForthRuntimeError] = None

    @property
    def error_token(self) -> Optional[str]:
        return self.error.token if self.error else None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_text(
    text: str,
    stack_size: int = DEFAULT_STACK_SIZE,
    preserve_stack_on: Sequence[str] = DEFAULT_PRESERVE_STACK_ON,
) -> RunResult:
    """Run a program on a fresh machine.

    stack_size is in elements. If the program fails the stack is reset to
    empty, unless the error token is listed in preserve_stack_on.
    """
    machine = ForthMachine(stack_size)
    error = None
    try:
        machine.evaluate(text)
    except ForthRuntimeError as exc:
        error = exc
        LOG.info("Program failed: %s (%s)", exc.token, type(exc).__name__)
        if exc.token not in preserve_stack_on:
            machine.stack.clear()

    return RunResult(stack=machine.stack.snapshot(), output=machine.output, error=error)


def run_file(filename: Union[str, Path], stack_size: int = DEFAULT_STACK_SIZE, **kwargs) -> RunResult:
    "Run a Forth source file"
    LOG.info("Running %s (stack size %d)", filename, stack_size)
    with open(filename, "r", encoding="utf-8") as f:
        text = f.read()

    return run_text(text, stack_size, **kwargs)


def save_stack(values: Sequence[int], filename: Union[str, Path]):
    """Write one value per line, bottom of the stack first"""
    with open(filename, "w") as f:
        f.write("".join(f"{v}\n" for v in values))


def load_stack(filename: Union[str, Path]) -> List[int]:
    with open(filename) as f:
        return [int(line) for line in f if line.strip()]
