"""
The context value handed to every command handler as its first argument.

A Context carries what the handler may need from the dispatch that called it:
the commander and command, the raw tokens after the command name, the tokens
left over after flag parsing, and the output console. It also records a
cancellation request; the library itself never cancels a handler.
"""
from .utils import *


class Context:
    __slots__ = ("_commander", "_command", "_tokens", "_rest", "_cancelled")

    commander = mirror("commander")
    command = mirror("command")
    tokens = mirror("tokens")
    rest = mirror("rest")
    cancelled = mirror("cancelled")

    def __init__(self, commander, command, /, tokens=(), rest=()):
        self._commander = commander
        self._command = command
        self._tokens = tuple(tokens)
        self._rest = tuple(rest)
        self._cancelled = False

    @property
    def console(self):
        """
        the commander's output console (the configured output sink).
        """
        return self._commander.console

    def echo(self, *objects, **options):
        """
        print to the output sink; options are forwarded to Console.print.
        """
        self.console.print(*objects, **options)

    def cancel(self):
        self._cancelled = True

    def __repr__(self):
        return "context(command=%r, tokens=%r, rest=%r, cancelled=%r)" % (
            getattr(self._command, "name", None), self._tokens, self._rest, self._cancelled
        )


__all__ = ("Context",)
