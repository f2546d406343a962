"""Primitive data types

Every value on the data stack is a signed 16-bit integer. Python ints are
unbounded, so arithmetic results are folded back into range here.
"""

import re
from typing import Optional

CELL_SIZE = 2  # bytes per stack element

INT16_MIN = -(2 ** 15)
INT16_MAX = 2 ** 15 - 1

TRUE = -1
FALSE = 0

_INTEGER = re.compile(r"[+-]?[0-9]+\Z")


def to_int16(value: int) -> int:
    """Wrap an integer to 16 bits, two's complement"""
    return (value + 2 ** 15) % 2 ** 16 - 2 ** 15


def parse_int16(text: str) -> Optional[int]:
    """Parse text as a 16-bit integer literal, or return None"""
    if not _INTEGER.match(text):
        return None
    value = int(text)
    if INT16_MIN <= value <= INT16_MAX:
        return value
    return None


def forth_bool(value: bool) -> int:
    """Canonical Forth flag for a Python bool"""
    return TRUE if value else FALSE


def truncated_div(a: int, b: int) -> int:
    """Integer division rounding toward zero"""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q
