"""Turn Forth source text into a flat list of tokens"""

import logging
import os.path
from functools import lru_cache
from typing import Iterable, Iterator, List

import lark

from ..machine.types import parse_int16
from .tokens import T_Number, T_String, T_Symbol, Token

LOG = logging.getLogger(__name__)

GRAMMAR = os.path.join(os.path.abspath(os.path.dirname(__file__)), "grammar.lark")

STRING_LEAD_IN = 3  # len('." ')


@lru_cache(maxsize=None)
def source_parser() -> lark.Lark:
    return lark.Lark.open(GRAMMAR, parser="lalr", lexer="basic")


def read_token(tok: lark.Token) -> Token:
    """Convert a lark token into a Forth token"""
    if tok.type == "STRING":
        payload = tok.value[STRING_LEAD_IN:-1].replace('\\"', '"')
        return T_String(payload, lineno=tok.line)

    if tok.type == "NUMBER":
        value = parse_int16(tok.value)
        # Out of range literals are plain words
        if value is not None:
            return T_Number(value, lineno=tok.line)

    return T_Symbol(str(tok.value), lineno=tok.line)


def merge_strings(toks: Iterable[Token]) -> Iterator[Token]:
    """Join back-to-back string literals with a single space"""
    pending = None
    for t in toks:
        if isinstance(t, T_String):
            if pending is None:
                pending = t
            else:
                pending = T_String(pending.text + " " + t.text, lineno=pending.lineno)
            continue
        if pending is not None:
            yield pending
            pending = None
        yield t

    if pending is not None:
        yield pending


def tokenize(source: str) -> List[Token]:
    """Tokenize source.

    An unterminated string literal invalidates the whole input, and an empty
    list is returned.
    """
    tree = source_parser().parse(source)

    for tok in tree.children:
        if tok.type == "OPEN_STRING":
            LOG.warning("Unterminated string literal on line %d, ignoring input", tok.line)
            return []

    tokens = list(merge_strings(read_token(tok) for tok in tree.children))
    LOG.debug("%d tokens", len(tokens))
    return tokens
