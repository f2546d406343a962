"""Bounded data stack"""

from typing import List

from ..exceptions import StackOverflow, StackUnderflow
from .types import INT16_MAX, INT16_MIN


class Stack:
    """A LIFO of 16-bit integers holding at most max_size elements.

    Failed operations never change the stack.
    """

    def __init__(self, max_size: int):
        if max_size < 0:
            raise ValueError(max_size)
        self.max_size = max_size
        self._ds = []

    def push(self, val: int):
        if type(val) != int:
            raise TypeError(f"Cannot store {val} ({type(val)})")
        if not INT16_MIN <= val <= INT16_MAX:
            raise ValueError(f"{val} is not a 16-bit integer")
        if len(self._ds) >= self.max_size:
            raise StackOverflow()
        self._ds.append(val)

    def pop(self) -> int:
        if not self._ds:
            raise StackUnderflow()
        return self._ds.pop()

    def peek(self) -> int:
        return self.peek_at(0)

    def peek_at(self, offset: int) -> int:
        """Peek at the Nth value from the top of the stack (0-indexed)"""
        if len(self._ds) <= offset:
            raise StackUnderflow()
        return self._ds[-(offset + 1)]

    def snapshot(self) -> List[int]:
        """All values, bottom first"""
        return list(self._ds)

    def clear(self):
        self._ds.clear()

    def __len__(self):
        return len(self._ds)

    def __bool__(self):
        return bool(self._ds)

    def __repr__(self):
        return f"<Stack {len(self._ds)}/{self.max_size} {self._ds}>"
