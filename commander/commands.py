"""
Commander: register categorized commands and dispatch one of them per run.

What this module provides
- Commander: the facade owning a Registry, the argument vector and the output
  console. It auto-registers a "Help" category with a "help" command.
- Command / Category: re-exported from commander.registry.

Dispatch (one run)
1. fewer than two tokens → usage is printed, NoSubcommandError is triggered.
2. the first token names no command → an error line and usage are printed,
   UnknownCommandError is triggered.
3. arguments are bound according to the command's shape:
   • Niladic: the context only.
   • Structured: the remaining tokens are parsed into the argument dataclass;
     a ParseError is triggered and the handler is not called on failure.
   • Textual: the next token verbatim, or "" when absent.
4. the handler is called once; any exception escaping it is triggered as a
   DelegatedCommandError.

Faults
- trigger() merges the commander's runtime switches (shell, fancy, colorful) and
  surfaces the fault: raised when shell is False, printed on the error console
  followed by exit status 1 when shell is True.

Quick start
    from commander import Commander, Flag, arguments

    @arguments
    class HeatArgs:
        temperature: int = Flag(default="20", usage="Temperature in Celsius")

    cmdr = Commander(shell=True)
    climate = cmdr.add_category("Climate")

    @climate.command("heat", "Controls the heating system")
    def heat(context, arguments: HeatArgs):
        context.echo("Setting heating temperature to %d°C" % arguments.temperature)

    if __name__ == "__main__":
        cmdr.run()
"""
import os.path
import sys
from collections.abc import Iterable

from rich.console import Console

from . import helper
from .binder import HelpRequested, bind
from .context import Context
from .faults import *
from .faults import trigger as _trigger
from .registry import Command, Category, Registry
from .shapes import Niladic, Structured, Textual
from .utils import *


def _sanitize_argv(argv):
    if isinstance(argv, str) or not isinstance(argv, Iterable):
        raise TypeError("argv must be an iterable of strings")
    argv = list(argv)
    for token in argv:
        if not isinstance(token, str):
            raise TypeError("argv must be an iterable of strings")
    return argv


def _console(output, /, **options):
    if isinstance(output, Console):
        return output
    if output is Unset:
        return Console(**options)
    if not hasattr(output, "write"):
        raise TypeError("output must be a console or a writable file")
    return Console(file=output)


class Commander:
    """
    Command-line application: categories of commands plus a dispatcher.

    Parameters
    - argv: Unset | Iterable[str]
      Full argument vector including the program name; defaults to sys.argv.
    - output: Unset | Console | file
      Sink for help and handler output; defaults to a stdout console.
    - errors: Unset | Console | file
      Sink for faults rendered in shell mode; defaults to a stderr console.
    - shell: bool
      When True faults are printed and errors exit with status 1; when False
      they are raised (errors) or emitted via warnings (warnings).
    - fancy: bool
      Frame help and faults in Rich panels.
    - colorful: bool
      Apply the palette; when False output is plain text.
    """

    def __init__(self, argv=Unset, /, *, output=Unset, errors=Unset, shell=False, fancy=False, colorful=True):
        self._argv = _sanitize_argv(coalesce(argv, sys.argv))
        self._console = _console(output)
        self._errors = _console(errors, stderr=True)
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._registry = Registry(self.trigger)

        self.add_category("Help").register(Command(
            "help",
            self._helper,
            descr="Show help information for commands",
        ))

    argv = mirror("argv")
    console = mirror("console")
    errors = mirror("errors")
    registry = mirror("registry")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    @property
    def prog(self):
        """
        program name used in usage lines and fault headers.

        __prog__ in __main__ wins; otherwise the basename of argv[0].
        """
        main = __import__("__main__")
        if prog := getattr(main, "__prog__", None):
            return str(prog)
        return os.path.basename(self._argv[0]) if self._argv else "commander"

    def add_category(self, name, /):
        """
        create a category of commands (see Registry.add_category).
        """
        return self._registry.add_category(name)

    def find_command(self, name, /):
        """
        return the command registered under name, or raise UnknownCommandError.
        """
        return self._registry.find_command(name)

    def set_output(self, output, /):
        """
        replace the output sink with a console or a writable file.
        """
        self._console = _console(output)

    def print_usage(self):
        self._console.print(helper.render_usage(self))

    def trigger(self, fault, /, **options):
        """
        surface a fault with this commander's runtime switches.
        """
        _trigger(
            fault,
            **options,
            tool=self,
            console=self._errors,
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._colorful,
        )

    def _helper(self, context: Context, name: str):
        if not name:
            self.print_usage()
            return

        try:
            category = self._registry.find_category(name)
        except UnknownCommandError as fault:
            self._console.print(helper.render_error(self, fault.message))
            self.print_usage()
            return

        self._console.print(helper.render_command(self, category, category.commands[name]))

    def _dispatch(self, command, tokens):
        shape = command.shape
        rest = ()

        match shape:
            case Niladic():
                arguments = ()
            case Structured():
                try:
                    bound, rest = bind(shape.model, shape.fields, tokens)
                except HelpRequested:
                    category = self._registry.find_category(command.name)
                    self._console.print(helper.render_command(self, category, command))
                    return
                except ParseError as fault:
                    return self.trigger(fault, command=command)
                arguments = (bound,)
            case Textual():
                arguments = (tokens[0] if tokens else "",)
                rest = tuple(tokens[1:])
            case _:
                raise RuntimeError("unreachable")

        context = Context(self, command, tokens, rest)
        try:
            shape.handler(context, *arguments)
        except Exception as exception:
            self.trigger(DelegatedCommandError(
                "command %r failed: %s" % (command.name, exception),
                title="delegated command error",
                code=FaultCode.DELEGATED_ERROR,
                hint="check the command's own output for details",
                input=command.name,
                command=command,
                exception=exception,
                docs=getdoc(FaultCode.DELEGATED_ERROR),
            ))

    def run(self, argv=Unset, /):
        """
        dispatch one command.

        Parameters
        - argv: Unset | Iterable[str]
          Argument vector for this run (program name first); defaults to the one
          given at construction.

        Faults
        - NoSubcommandError, UnknownCommandError, ParseError subclasses and
          DelegatedCommandError, surfaced through trigger().
        """
        argv = self._argv if argv is Unset else _sanitize_argv(argv)

        if len(argv) < 2:
            self.print_usage()
            return self.trigger(NoSubcommandError(
                "no subcommand provided",
                title="no subcommand",
                code=FaultCode.NO_SUBCOMMAND,
                hint="run '%s help' to see all commands" % self.prog,
                docs=getdoc(FaultCode.NO_SUBCOMMAND),
            ))

        try:
            command = self._registry.find_command(argv[1])
        except UnknownCommandError as fault:
            self._console.print(helper.render_error(self, fault.message))
            self.print_usage()
            return self.trigger(fault)

        self._dispatch(command, tuple(argv[2:]))

    def __repr__(self):
        return "commander(prog=%r, categories=%r)" % (self.prog, tuple(category.name for category in self._registry))


__all__ = (
    "Commander",
    "Command",
    "Category",
)
