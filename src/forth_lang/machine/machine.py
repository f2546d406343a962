"""The Forth machine

Source is executed directly from the token list. Immediate mode walks raw
token slices; word bodies are compiled once at definition time (see
forth_compiler) and run instruction by instruction.

Neither walk recurses in Python: nested IF ranges and word calls are kept on
explicit lists, so nesting depth is bounded by memory only.
"""

import logging
from functools import singledispatchmethod
from io import StringIO
from typing import Optional, Sequence, TextIO, Tuple

from ..exceptions import DivisionByZero, InvalidCharacter, UnrecognizedWord
from ..forth_compiler import WordCompiler, find_branches
from ..forth_parser import tokenize
from ..forth_parser.tokens import T_Number, T_String, Token, is_symbol
from .dictionary import Dictionary
from .instruction import Instruction
from .instructionset import *
from .stack import Stack
from .types import forth_bool, to_int16, truncated_div

LOG = logging.getLogger(__name__)

DEFAULT_STACK_SIZE = 64 * 1024  # elements


class ForthMachine:
    """Interpreter state for one program: data stack, dictionary and output.

    Output goes to stdout, an in-memory buffer unless a stream is given.
    """

    builtins = BUILTINS

    def __init__(self, stack_size: int = DEFAULT_STACK_SIZE, stdout: TextIO = None):
        self.stack = Stack(stack_size)
        self.dictionary = Dictionary()
        self.compiler = WordCompiler(self.dictionary)
        self.stdout = stdout if stdout is not None else StringIO()

    @property
    def output(self) -> str:
        """Everything written so far (only for the default in-memory stdout)"""
        return self.stdout.getvalue()

    def write(self, text: str):
        self.stdout.write(text)

    def evaluate(self, source: str):
        """Tokenize and run source"""
        tokens = tokenize(source)
        self.execute(tokens)

    ## Immediate mode

    def execute(self, tokens: Sequence[Token], start: int = 0, end: int = None):
        """Run tokens[start:end] in immediate mode"""
        end = len(tokens) if end is None else end
        # Ranges to resume once the current IF branch is done
        pending = [(start, end)]
        while pending:
            i, stop = pending.pop()
            while i < stop:
                tok = tokens[i]
                if isinstance(tok, T_Number):
                    self.stack.push(tok.value)
                    i += 1
                elif isinstance(tok, T_String):
                    self.write(tok.text)
                    i += 1
                elif is_symbol(tok, "IF"):
                    else_index, then_index = find_branches(tokens, i, stop)
                    branch = self.choose_branch(tokens, i, else_index, then_index)
                    if branch is None:
                        i = then_index + 1
                    else:
                        pending.append((then_index + 1, stop))
                        i, stop = branch
                else:
                    i = self.execute_symbol(tokens, i, stop)

    def execute_symbol(self, tokens: Sequence[Token], i: int, end: int) -> int:
        """Run the symbol at tokens[i] and return the index of the next token"""
        tok = tokens[i]
        key = tok.key

        if key == ":":
            _, next_i = self.compiler.compile_definition(tokens, i, end)
            return next_i

        definition = self.dictionary.lookup(key)
        if definition is not None:
            self.run_body(definition.code)
        elif key in self.builtins:
            self.evali(self.builtins[key]())
        else:
            raise UnrecognizedWord(tok.name)

        return i + 1

    def choose_branch(
        self, tokens: Sequence[Token], if_index: int, else_index: Optional[int], then_index: int
    ) -> Optional[Tuple[int, int]]:
        """Pop the flag and return the token range to run, if any"""
        flag = self.stack.pop()
        LOG.debug("IF on line %s: %s", tokens[if_index].lineno, flag)

        if flag:
            return if_index + 1, then_index if else_index is None else else_index
        if else_index is not None:
            return else_index + 1, then_index
        return None

    ## Compiled bodies

    def run_body(self, code: tuple):
        """Run a compiled body.

        Instructions that enter another body (calls, branches) return it from
        evali, and it is run before the rest of the current one.
        """
        frames = [iter(code)]
        while frames:
            for instr in frames[-1]:
                body = self.evali(instr)
                if body:
                    frames.append(iter(body))
                    break
            else:
                frames.pop()

    def _binop(self, op):
        b = self.stack.pop()
        a = self.stack.pop()
        self.stack.push(op(a, b))

    def _require(self, depth: int):
        """Fail with stack-underflow unless the stack holds depth items"""
        self.stack.peek_at(depth - 1)

    @singledispatchmethod
    def evali(self, i: Instruction):
        """Evaluate instruction"""
        raise NotImplementedError(i)

    @evali.register
    def _(self, i: PushV):
        self.stack.push(i.operands[0])

    @evali.register
    def _(self, i: PrintS):
        self.write(i.operands[0])

    @evali.register
    def _(self, i: Call):
        return i.operands[0].code

    @evali.register
    def _(self, i: Branch):
        true_code, false_code = i.operands
        return true_code if self.stack.pop() else false_code

    @evali.register
    def _(self, i: Unknown):
        raise UnrecognizedWord(i.operands[0])

    ## Arithmetic

    @evali.register
    def _(self, i: Plus):
        self._require(2)
        self._binop(lambda a, b: to_int16(a + b))

    @evali.register
    def _(self, i: Minus):
        self._require(2)
        self._binop(lambda a, b: to_int16(a - b))

    @evali.register
    def _(self, i: Multiply):
        self._require(2)
        self._binop(lambda a, b: to_int16(a * b))

    @evali.register
    def _(self, i: Divide):
        # The divisor is checked before the dividend is taken
        b = self.stack.pop()
        if b == 0:
            raise DivisionByZero()
        a = self.stack.pop()
        self.stack.push(to_int16(truncated_div(a, b)))

    ## Comparison and logic

    @evali.register
    def _(self, i: Eq):
        self._require(2)
        self._binop(lambda a, b: forth_bool(a == b))

    @evali.register
    def _(self, i: LessThan):
        self._require(2)
        self._binop(lambda a, b: forth_bool(a < b))

    @evali.register
    def _(self, i: GreaterThan):
        self._require(2)
        self._binop(lambda a, b: forth_bool(a > b))

    @evali.register
    def _(self, i: OpAnd):
        self._require(2)
        self._binop(lambda a, b: forth_bool(a != 0 and b != 0))

    @evali.register
    def _(self, i: OpOr):
        self._require(2)
        self._binop(lambda a, b: forth_bool(a != 0 or b != 0))

    @evali.register
    def _(self, i: Not):
        a = self.stack.pop()
        self.stack.push(forth_bool(a == 0))

    ## Stack manipulation

    @evali.register
    def _(self, i: Dup):
        self.stack.push(self.stack.peek())

    @evali.register
    def _(self, i: Drop):
        self.stack.pop()

    @evali.register
    def _(self, i: Swap):
        self._require(2)
        b = self.stack.pop()
        a = self.stack.pop()
        self.stack.push(b)
        self.stack.push(a)

    @evali.register
    def _(self, i: Over):
        self.stack.push(self.stack.peek_at(1))

    @evali.register
    def _(self, i: Rot):
        self._require(3)
        c = self.stack.pop()
        b = self.stack.pop()
        a = self.stack.pop()
        self.stack.push(b)
        self.stack.push(c)
        self.stack.push(a)

    ## Input-output

    @evali.register
    def _(self, i: Emit):
        value = self.stack.pop()
        if value < 0:
            raise InvalidCharacter(value)
        self.write(chr(value) + " ")

    @evali.register
    def _(self, i: Dot):
        value = self.stack.pop()
        self.write(f"{value} ")

    @evali.register
    def _(self, i: Cr):
        self.write("\n")
