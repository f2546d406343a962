"""The Forth Machine Instruction class"""

from ..exceptions import UnexpectedError


class BadOperandsLength(UnexpectedError):
    """Wrong number of operands for instruction"""

    def __init__(self, instr_name: str, num_ops: int, expected_num: int):
        msg = (
            f"Wrong number of operands ({num_ops}, expected {expected_num}) "
            f"for {instr_name.upper()}."
        )
        super().__init__(msg)


class BadOperandsType(UnexpectedError):
    """Bad operand type(s) for instruction"""

    def __init__(self, instr_name: str, got, expected, pos: int):
        msg = (
            f"Wrong operand type (got {got}, expected {expected} "
            f"in position {pos}) for {instr_name.upper()}."
        )
        super().__init__(msg)


class Instruction:
    """One item of a compiled word body.

    Instructions are immutable after construction, so a body can be shared by
    any number of definitions and branches.
    """

    op_types = ()

    def __init__(self, *operands):
        self.name = type(self).__name__

        if len(operands) != len(self.op_types):
            raise BadOperandsLength(self.name, len(operands), len(self.op_types))

        for idx, (a, b) in enumerate(zip(operands, self.op_types)):
            if not isinstance(a, b):
                raise BadOperandsType(self.name, type(a), b, idx)

        self.operands = operands

    def __repr__(self):
        ops = ", ".join(map(str, self.operands))
        name = self.name.upper()
        return f"{name:8} {ops}".rstrip()

    def __eq__(self, other):
        return type(self) == type(other) and all(
            a == b for a, b in zip(self.operands, other.operands)
        )
