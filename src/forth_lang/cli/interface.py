"""CLI UI related functions"""

import logging
import sys
from traceback import format_exception

from colorama import Fore, Style
from texttable import Texttable

from ..forth_parser.tokens import T_Number, T_String
from ..machine.dictionary import Dictionary

# Flags that modify interface displays
QUIET = False
VERBOSE = False
COLOURS = True


def init(quiet=False, verbose=False, vverbose=False, no_colours=False):
    """Initialise the UI, including logging"""

    if vverbose:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    else:
        level = None

    global QUIET
    global VERBOSE
    global COLOURS
    QUIET = quiet
    VERBOSE = verbose or vverbose
    COLOURS = not no_colours and sys.stdout.isatty()

    root_logger = logging.getLogger("forth_lang")

    if not no_colours:
        import coloredlogs

        if level:
            coloredlogs.install(
                fmt="[%(asctime)s.%(msecs)03d] %(name)-25s %(message)s",
                datefmt="%H:%M:%S",
                level=level,
                logger=root_logger,
            )
    elif level:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(name)-25s %(message)s"))
        root_logger.addHandler(handler)
        root_logger.setLevel(level)


## String colour modifiers


def _style(string, *codes) -> str:
    if not COLOURS:
        return str(string)
    return "".join(codes) + str(string) + Style.RESET_ALL


def dim(string):
    return _style(string, Style.DIM)


def good(string):
    return _style(string, Style.BRIGHT, Fore.CYAN)


def bad(string):
    return _style(string, Style.BRIGHT, Fore.RED)


def primary(string):
    return _style(string, Fore.CYAN)


## And printing messages


def info(msg):
    if not QUIET:
        print(msg)


def describe_token(tok) -> tuple:
    if isinstance(tok, T_Number):
        return "NUMBER", tok.value
    if isinstance(tok, T_String):
        return "STRING", tok.text
    return "WORD", tok.name


def print_tokens(tokens):
    """Print a token listing, one per line"""
    print(" /")
    for tok in tokens:
        kind, value = describe_token(tok)
        print(f" | {tok.lineno or '?':>4} | {primary(f'{kind:6}')} {value!r}")
    print(" \\")


def print_words(dictionary: Dictionary):
    """Print the compiled body of each defined word"""
    if not len(dictionary):
        info(dim("No words defined."))
        return

    table = Texttable(max_width=100)
    alignment = ["l", "r", "l"]
    table.set_cols_align(alignment)
    table.set_header_align(alignment)
    table.header(["Word", "#", "Instruction"])
    table.set_deco(Texttable.HEADER)
    for name in dictionary.names():
        code = dictionary.lookup(name).code
        if not code:
            table.add_row([name, "", "(empty)"])
        for idx, instr in enumerate(code):
            table.add_row([name if idx == 0 else "", idx, repr(instr)])

    print("\n" + table.draw() + "\n")


## graceful exits


def exit_problem(problem: str, suggested_fix: str):
    """Exit because of a user-correctable problem"""
    print("\n" + bad(problem), file=sys.stderr)
    if suggested_fix:
        print(suggested_fix, file=sys.stderr)
    sys.exit(1)


def exit_bug(msg):
    """Something broke unexpectedly while running"""
    print(bad("\nUnexpected error.\n" + str(msg)), file=sys.stderr)

    exc_type, exc_value, exc_traceback = sys.exc_info()
    if exc_type and VERBOSE:
        print("".join(format_exception(exc_type, exc_value, exc_traceback)), file=sys.stderr)

    sys.exit(2)
