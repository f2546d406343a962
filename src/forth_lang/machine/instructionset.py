"""Instructions that make up compiled word bodies"""

from .dictionary import Definition
from .instruction import Instruction as I

##± Literals ±##################################################################


class PushV(I):
    """Push an immediate (literal) value onto the stack"""

    op_types = [int]


class PrintS(I):
    """Write a string literal to the output"""

    op_types = [str]

    def __repr__(self):
        return f"PRINTS   {self.operands[0]!r}"


##± Control Flow ±##############################################################


class Call(I):
    """Run the body of a word, as it was bound at compile time"""

    op_types = [Definition]

    def __repr__(self):
        return f"CALL     {self.operands[0].name}"


class Branch(I):
    """Pop a flag and run the first body if it is nonzero, else the second"""

    op_types = [tuple, tuple]

    def __repr__(self):
        true_code, false_code = self.operands
        return f"BRANCH   {len(true_code)} | {len(false_code)}"


class Unknown(I):
    """A word that was not defined when the body was compiled"""

    op_types = [str]


##± Arithmetic ±################################################################


class Plus(I):
    """Add the top two elements on the stack"""


class Minus(I):
    pass


class Multiply(I):
    pass


class Divide(I):
    """Divide the second element by the top one, rounding toward zero"""


##± Comparison and Logic ±######################################################


class Eq(I):
    """Check whether the top two items on the stack are equal"""


class LessThan(I):
    pass


class GreaterThan(I):
    pass


class OpAnd(I):
    pass


class OpOr(I):
    pass


class Not(I):
    """Logical (not bitwise) negation"""


##± Stack Manipulation ±########################################################


class Dup(I):
    pass


class Drop(I):
    pass


class Swap(I):
    pass


class Over(I):
    """Copy the second item onto the top"""


class Rot(I):
    """Rotate the third item to the top"""


##± Input-Output ±##############################################################


class Emit(I):
    """Pop a code point and print the character followed by a space"""


class Dot(I):
    """Pop and print the top value followed by a space"""


class Cr(I):
    """Print a newline"""


BUILTINS = {
    "+": Plus,
    "-": Minus,
    "*": Multiply,
    "/": Divide,
    "=": Eq,
    "<": LessThan,
    ">": GreaterThan,
    "AND": OpAnd,
    "OR": OpOr,
    "NOT": Not,
    "DUP": Dup,
    "DROP": Drop,
    "SWAP": Swap,
    "OVER": Over,
    "ROT": Rot,
    "EMIT": Emit,
    ".": Dot,
    "CR": Cr,
}
