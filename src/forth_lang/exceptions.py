"""Top level Forth exceptions"""


class ForthError(Exception):
    """Base for all Forth errors"""


class UserResolvableError(ForthError):
    """An error which the user can probably solve"""

    def __init__(self, msg, suggested_fix):
        self.msg = msg
        self.suggested_fix = suggested_fix

    def __str__(self):
        if type(self) == UserResolvableError:
            return f"{self.msg}\n\n{self.suggested_fix}"
        else:
            return f"{self.__doc__}: {self.msg}\n\n{self.suggested_fix}"


class UnexpectedError(ForthError):
    """An error which is unexpected and with no obvious solution"""

    def __init__(self, msg):
        self.msg = msg

    def __str__(self):
        if type(self) == UnexpectedError:
            return self.msg
        else:
            return f"{self.__doc__}:\n{self.msg}"


##± Program errors ±############################################################


class ForthRuntimeError(ForthError):
    """A Forth program failed.

    The string form is the canonical error token, which the CLI relays
    verbatim.
    """

    token = None

    def __str__(self):
        return self.token


class StackOverflow(ForthRuntimeError):
    """Push onto a full stack"""

    token = "stack-overflow"


class StackUnderflow(ForthRuntimeError):
    """Pop or peek beyond the available depth"""

    token = "stack-underflow"


class DivisionByZero(ForthRuntimeError):
    """Division with a zero divisor"""

    token = "division-by-zero"


class InvalidWord(ForthRuntimeError):
    """Malformed word definition"""

    token = "invalid-word"

    def __init__(self, reason=""):
        super().__init__(reason)
        self.reason = reason


class UnrecognizedWord(ForthRuntimeError):
    """Neither a built-in nor a defined word"""

    token = "?"

    def __init__(self, word):
        super().__init__(word)
        self.word = word


class MalformedConditional(ForthRuntimeError):
    """IF without a matching THEN"""

    token = "malformed-conditional"


class InvalidCharacter(ForthRuntimeError):
    """EMIT of a value that is not a code point"""

    token = "invalid-character"

    def __init__(self, value):
        super().__init__(value)
        self.value = value
