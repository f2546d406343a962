"""Tokens produced by the lexer"""

from dataclasses import dataclass, field
from typing import Optional


class Token:
    """A lexical unit. Tokens are immutable once produced."""


@dataclass(frozen=True)
class T_Number(Token):
    value: int
    lineno: Optional[int] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class T_Symbol(Token):
    """A bare word, with its original casing"""

    name: str
    lineno: Optional[int] = field(default=None, compare=False, repr=False)

    @property
    def key(self) -> str:
        """The name used for matching words"""
        return self.name.upper()


@dataclass(frozen=True)
class T_String(Token):
    """Payload of a ." literal"""

    text: str
    lineno: Optional[int] = field(default=None, compare=False, repr=False)


def is_symbol(token: Token, *keys) -> bool:
    """Check whether token is a symbol matching one of keys (uppercase)"""
    return isinstance(token, T_Symbol) and token.key in keys
