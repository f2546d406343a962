"""Forth.

Run Forth source files. The final stack is written to a stack file, one
value per line, bottom first.

STACK_SIZE is a size in bytes; each stack cell takes two.
"""

import logging
import sys

import click

from .. import __version__, config
from ..config_classes import stack_size_from_bytes
from ..exceptions import ForthRuntimeError, UnexpectedError, UserResolvableError
from ..forth_parser import tokenize
from ..machine.machine import ForthMachine
from ..run import run_file, save_stack
from . import interface as ui
from .interface import bad, dim, exit_bug, exit_problem, good

LOG = logging.getLogger(__name__)

PROMPT = ""


def read_source(filename) -> str:
    try:
        with open(filename, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise UserResolvableError(f"Can't read {filename}", str(exc)) from exc


def resolve_stack_size(cfg, stack_size) -> int:
    """Stack capacity in elements, from the command line or the config"""
    if stack_size is None:
        return cfg.interpreter.max_elements
    if stack_size < 0:
        raise UserResolvableError(
            f"Bad stack size: {stack_size}", "STACK_SIZE must be a number of bytes."
        )
    return stack_size_from_bytes(stack_size)


@click.group(help=__doc__)
@click.version_option(__version__)
@click.option("-q", "--quiet", is_flag=True, help="Be quiet.")
@click.option("-v", "--verbose", is_flag=True, help="Be verbose.")
@click.option("-V", "--vverbose", is_flag=True, help="Be very verbose.")
@click.option("--no-colours", is_flag=True, help="Disable colours in CLI output.")
@click.option("--config", "config_file", default=None, help="Config file to use.")
@click.pass_context
def cli(ctx, quiet, verbose, vverbose, no_colours, config_file):
    ui.init(quiet=quiet, verbose=verbose, vverbose=vverbose, no_colours=no_colours)
    ctx.obj = config.load(config_file)
    LOG.debug("Config: %s", ctx.obj)


@cli.command()
@click.argument("filename")
@click.argument("stack_size", type=int, required=False)
@click.option("-o", "--stack-file", default=None, help="Where to write the final stack.")
@click.pass_obj
def run(cfg, filename, stack_size, stack_file):
    """Run a file and save the final stack."""
    max_elements = resolve_stack_size(cfg, stack_size)
    try:
        result = run_file(
            filename, max_elements, preserve_stack_on=cfg.interpreter.preserve_stack_on
        )
    except (OSError, UnicodeDecodeError) as exc:
        raise UserResolvableError(f"Can't read {filename}", str(exc)) from exc

    sys.stdout.write(result.output)
    if not result.ok:
        # The token is relayed verbatim, uncoloured
        print(result.error_token)

    stack_file = stack_file or cfg.interpreter.stack_file
    save_stack(result.stack, stack_file)
    LOG.info("Saved %d values to %s", len(result.stack), stack_file)


@cli.command()
@click.argument("filename")
def lex(filename):
    """Print the tokens of a file."""
    ui.print_tokens(tokenize(read_source(filename)))


@cli.command()
@click.argument("filename")
@click.argument("stack_size", type=int, required=False)
@click.pass_obj
def words(cfg, filename, stack_size):
    """Run a file and list the words it defines."""
    machine = ForthMachine(resolve_stack_size(cfg, stack_size))
    try:
        machine.evaluate(read_source(filename))
    except ForthRuntimeError as exc:
        ui.info(bad(f"Program failed: {exc.token}"))
    ui.print_words(machine.dictionary)


@cli.command()
@click.argument("stack_size", type=int, required=False)
@click.pass_obj
def repl(cfg, stack_size):
    """Read-eval-print loop. Type BYE or send EOF to quit."""
    machine = ForthMachine(resolve_stack_size(cfg, stack_size), stdout=sys.stdout)
    ui.info(dim('Type "BYE" or input an end of file (Ctrl+D) to quit.'))

    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            break
        if line.strip().upper() == "BYE":
            break

        try:
            machine.evaluate(line)
        except ForthRuntimeError as exc:
            print(" " + bad(exc.token))
            if exc.token not in cfg.interpreter.preserve_stack_on:
                machine.stack.clear()
        else:
            print(" " + good("ok"))


def main():
    try:
        cli(prog_name="forth")
    except UserResolvableError as exc:
        exit_problem(exc.msg, exc.suggested_fix)
    except UnexpectedError as exc:
        exit_bug(str(exc))


if __name__ == "__main__":
    main()
