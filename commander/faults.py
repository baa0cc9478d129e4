"""
Commander faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain (routing, handlers, flags, delegated, warnings).
- CommandException / CommandWarning: base types that carry a message plus options
  and know how to render themselves (Rich) and how to surface themselves.
- trigger(): central entry point to surface any fault with runtime options.
- getdoc(): optional description lookup for a code from the host application.

Options understood by the renderers
- tool: the Commander that raised the fault (used for the program name).
- shell: print instead of raise (errors then exit with status 1).
- fancy: render inside a Rich panel.
- colorful: apply the palette; when false all styling is stripped.
- console: the Rich console used in shell mode (stderr when absent).
- title, code, hint, docs: copy shown in the header/body.
- any payload (token, input, category, exception, ...) readable as attributes.

Integration
- The dispatcher builds faults and routes them through Commander.trigger(), which
  merges its runtime switches and calls trigger(fault).
- In non-shell mode exceptions are raised and warnings go to warnings.warn().
"""
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • NO_SUBCOMMAND, UNKNOWN_COMMAND
    - handlers (1120x)
      • INVALID_HANDLER
    - flags (1111x)
      • MALFORMED_FLAG, UNKNOWN_FLAG, MISSING_VALUE, MALFORMED_VALUE
    - delegated errors (11131)
      • DELEGATED_ERROR
    - warnings (121xx)
      • SHADOWED_CATEGORY, SHADOWED_COMMAND
    """
    # --- routing errors (11xxx) ---
    NO_SUBCOMMAND               = 11100
    UNKNOWN_COMMAND             = 11101

    # --- handler errors (11xxx) ---
    INVALID_HANDLER             = 11201

    # --- flag errors (11xxx) ---
    MALFORMED_FLAG              = 11111
    UNKNOWN_FLAG                = 11112
    MISSING_VALUE               = 11117
    MALFORMED_VALUE             = 11118

    # --- delegated errors (11xxx) ---
    DELEGATED_ERROR             = 11131

    # --- warnings (12xxx) ---
    SHADOWED_CATEGORY           = 12101
    SHADOWED_COMMAND            = 12102

    def normalize(self):
        """
        the label shown in fault headers: __codes__[self] from __main__ when the
        host defines it, the numeric value otherwise.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _prog(options):
    main = __import__("__main__")
    tool = options.get("tool")
    return getattr(main, "__prog__", getattr(tool, "prog", "commander"))


def _render(fault, styles):
    """
    shared renderer for exceptions and warnings.

    layout
    - header: "[ prog — code | Title ]"
    - body: message, then " → hint" when a hint is present.
    """
    options = fault.options
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    code = options.get("code")
    header = Text.assemble(
        "[ ",
        text(_prog(options), styler("prog-name")),
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else "", styler("code")),
        " | ",
        text(str(options.get("title", type(fault).__name__)).title(), styler("title")),
        " ]"
    )
    message = text(fault.message, styler("message"))
    renders = [message]
    if hint := options.get("hint"):
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    if fancy:
        return Panel(Group(*renders), title=header, title_align="left")

    return Group(header, *renders)


class _Fault:
    """
    shared behaviour of CommandException and CommandWarning.

    options are frozen into a read-only mapping and exposed as attributes, so a
    ParseError built with token="--x" answers fault.token.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __getattr__(self, name):
        # only called for missing attributes; options never shadow real ones
        if name.startswith("_") or name in ("message", "options"):
            raise AttributeError(name)
        try:
            return self.options[name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__!r} fault has no option {name!r}") from None

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class CommandException(_Fault, Exception):
    __palette__ = {
        "prog-name": "bold #E6E6F0",  # near-white program name
        "code": "bold #00E5FF",  # neon cyan fault code
        "title": "bold #FF4DA6",  # friendly pinky title
        "message": "#C8C8D0",  # soft light gray message
        "hint-arrow": "#9CE19C dim",  # gentle green arrow
        "hint": "italic #9CE19C",  # gentle green hint text
    }

    def __init__(self, message=Unset, /, **options):
        _Fault.__init__(self, message, **options)
        Exception.__init__(self, *(() if message is Unset else (message,)))

    def __rich__(self):
        styles = defaultdict(str, self.__palette__ | getattr(__import__("__main__"), "__styles__", {}))
        return _render(self, styles)

    def __trigger__(self):
        if not self.options.get("shell"):
            raise self from None
        self.options.get("console", Console(stderr=True)).print(self)
        sys.exit(1)


class NoSubcommandError(CommandException): ...
class UnknownCommandError(CommandException): ...
class InvalidHandlerError(CommandException, TypeError): ...
class DelegatedCommandError(CommandException): ...


class ParseError(CommandException):
    """
    the token list does not match a command's flag schema.

    every parse error carries the offending token (fault.token).
    """


class MalformedFlagError(ParseError): ...
class UnknownFlagError(ParseError): ...
class MissingValueError(ParseError): ...
class MalformedValueError(ParseError): ...


class CommandWarning(_Fault, ABC, Warning):
    __palette__ = {
        "prog-name": "bold #E6E6F0",  # near-white program name
        "code": "bold #FFB400",  # amber fault code for warnings
        "title": "bold #FFC2E0",  # softer pinky title for warnings
        "message": "#D6D6DE",  # slightly lighter gray body
        "hint-arrow": "#B8EFAF dim",  # softer green arrow
        "hint": "italic #B8EFAF",  # softer green hint text
    }

    def __init__(self, message=Unset, /, **options):
        _Fault.__init__(self, message, **options)
        Warning.__init__(self, *(() if message is Unset else (message,)))

    def __rich__(self):
        styles = defaultdict(str, self.__palette__ | getattr(__import__("__main__"), "__styles__", {}))
        return _render(self, styles)

    def __trigger__(self):
        if not self.options.get("shell"):
            return warnings.warn(self, stacklevel=self.options.get("stacklevel", len(inspect.stack())))
        self.options.get("console", Console(stderr=True)).print(self)


class ShadowedCategoryWarning(CommandWarning): ...
class ShadowedCommandWarning(CommandWarning): ...


def trigger(fault, /, **options):
    """
    merge options into a copy of fault and let it surface itself.

    errors are raised, and warnings go to warnings.warn, unless shell=True, in
    which case both are printed on options["console"] and errors exit with 1.
    """
    for method in ("__replace__", "__trigger__"):
        if not callable(getattr(fault, method, None)):
            raise TypeError("trigger() expects a fault providing %s" % method)
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    the host's documentation for code, looked up in __main__.__docs__.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "NoSubcommandError",
    "UnknownCommandError",
    "InvalidHandlerError",
    "DelegatedCommandError",
    "ParseError",
    "MalformedFlagError",
    "UnknownFlagError",
    "MissingValueError",
    "MalformedValueError",
    "CommandWarning",
    "ShadowedCategoryWarning",
    "ShadowedCommandWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
