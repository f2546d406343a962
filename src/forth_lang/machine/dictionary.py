"""The word dictionary"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..exceptions import InvalidWord
from .types import parse_int16

LOG = logging.getLogger(__name__)

RESERVED_NAMES = (":", ";")


@dataclass(frozen=True, eq=False, repr=False)
class Definition:
    """A compiled word. Definitions are compared by identity.

    Bodies refer to other words by holding their Definition, never a copy of
    its code.
    """

    name: str
    code: tuple

    def __repr__(self):
        return f"<Definition {self.name}>"


class Dictionary:
    """Mapping of (uppercase) word names to their current Definition"""

    def __init__(self):
        self._words = {}

    def define(self, name: str, code: Iterable) -> Definition:
        """Bind name to a new definition, replacing any previous one"""
        key = name.upper()
        if parse_int16(key) is not None:
            raise InvalidWord(f"`{name}' is a number")
        if key in RESERVED_NAMES:
            raise InvalidWord(f"`{name}' is reserved")

        definition = Definition(key, tuple(code))
        if key in self._words:
            LOG.debug("Redefining %s", key)
        self._words[key] = definition
        return definition

    def lookup(self, name: str) -> Optional[Definition]:
        return self._words.get(name.upper())

    def names(self) -> List[str]:
        return sorted(self._words.keys())

    def __contains__(self, name):
        return name.upper() in self._words

    def __len__(self):
        return len(self._words)
