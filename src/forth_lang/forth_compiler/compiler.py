"""Compile token slices into word bodies

Word bodies are resolved eagerly: every reference to another word is bound to
the Definition the dictionary holds at the moment the body is compiled. A
later redefinition therefore never changes an existing body, and a word may
call the previous definition of its own name.
"""
import logging
from functools import singledispatchmethod
from typing import Optional, Sequence, Tuple

from ..exceptions import InvalidWord, MalformedConditional
from ..forth_parser.tokens import T_Number, T_String, T_Symbol, Token, is_symbol
from ..machine import instructionset as mi
from ..machine.dictionary import Dictionary
from ..machine.instruction import Instruction

LOG = logging.getLogger(__name__)


def find_branches(
    tokens: Sequence[Token], if_index: int, end: int = None
) -> Tuple[Optional[int], int]:
    """Find the ELSE (if any) and THEN that close the IF at if_index.

    Only ELSE/THEN at the nesting level of this IF count. Returns
    (else_index, then_index).
    """
    end = len(tokens) if end is None else end
    depth = 1
    else_index = None
    for j in range(if_index + 1, end):
        tok = tokens[j]
        if is_symbol(tok, "IF"):
            depth += 1
        elif is_symbol(tok, "THEN"):
            depth -= 1
            if depth == 0:
                return else_index, j
        elif depth == 1 and else_index is None and is_symbol(tok, "ELSE"):
            else_index = j

    raise MalformedConditional()


def find_definition(
    tokens: Sequence[Token], colon_index: int, end: int = None
) -> Tuple[str, int, int]:
    """Read `: NAME ... ;` starting at the colon.

    Returns (name, body_start, semicolon_index).
    """
    end = len(tokens) if end is None else end
    name_index = colon_index + 1
    if name_index >= end:
        raise InvalidWord("missing name")

    name_tok = tokens[name_index]
    if not isinstance(name_tok, T_Symbol):
        raise InvalidWord(f"bad name {name_tok}")

    for j in range(name_index + 1, end):
        if is_symbol(tokens[j], ";"):
            return name_tok.name, name_index + 1, j

    raise InvalidWord(f"no ; after `{name_tok.name}'")


class WordCompiler:
    """Compile word definitions against a dictionary"""

    def __init__(self, dictionary: Dictionary):
        self.dictionary = dictionary

    def compile_definition(self, tokens: Sequence[Token], colon_index: int, end: int = None):
        """Compile the definition starting at colon_index and add it.

        Returns (definition, index after the closing ;).
        """
        name, start, stop = find_definition(tokens, colon_index, end)
        # The body is compiled before the new entry exists, so a reference to
        # the name itself resolves to the previous definition.
        code = self.compile_body(tokens, start, stop)
        definition = self.dictionary.define(name, code)
        LOG.debug("Defined %s (%d instructions)", definition.name, len(code))
        return definition, stop + 1

    def compile_body(self, tokens: Sequence[Token], start: int = 0, end: int = None) -> tuple:
        """Compile tokens[start:end] into a tuple of instructions.

        IF ... [ELSE ...] THEN becomes a single Branch. Open conditionals are
        kept on a list, not the Python stack.
        """
        end = len(tokens) if end is None else end
        code = []
        # One entry per IF still waiting for its THEN: [enclosing code, true code]
        open_ifs = []
        for i in range(start, end):
            tok = tokens[i]
            if is_symbol(tok, "IF"):
                open_ifs.append([code, None])
                code = []
            elif open_ifs and open_ifs[-1][1] is None and is_symbol(tok, "ELSE"):
                open_ifs[-1][1] = code
                code = []
            elif open_ifs and is_symbol(tok, "THEN"):
                outer, true_code = open_ifs.pop()
                if true_code is None:
                    outer.append(mi.Branch(tuple(code), ()))
                else:
                    outer.append(mi.Branch(tuple(true_code), tuple(code)))
                code = outer
            elif is_symbol(tok, ":"):
                raise InvalidWord("nested definition")
            else:
                code.append(self.compile_token(tok))

        if open_ifs:
            raise MalformedConditional()
        return tuple(code)

    @singledispatchmethod
    def compile_token(self, tok) -> Instruction:
        raise NotImplementedError(tok)

    @compile_token.register
    def _(self, tok: T_Number):
        return mi.PushV(tok.value)

    @compile_token.register
    def _(self, tok: T_String):
        return mi.PrintS(tok.text)

    @compile_token.register
    def _(self, tok: T_Symbol):
        # User words shadow built-ins
        definition = self.dictionary.lookup(tok.key)
        if definition is not None:
            return mi.Call(definition)
        if tok.key in mi.BUILTINS:
            return mi.BUILTINS[tok.key]()
        return mi.Unknown(tok.name)
