"""
Command registry: categories of named commands.

What this module provides
- Command: a named, described handler whose calling convention (shape) is
  resolved once, at construction.
- Category: a named group of commands; register() inserts or overwrites by name,
  and @category.command(...) wraps a handler and registers it in one step.
- Registry: the ordered mapping of categories with command lookup across all of them.

Rules
- command names are unique across the categories of one registry; registering a
  name owned by another category raises ValueError.
- re-registering a name inside the same category replaces the command, and
  re-adding a category name replaces the category; both emit a warning fault.
  A replaced category is detached and refuses further registrations.
- categories and their commands iterate in insertion order.
"""
import difflib

from rich.text import Text

from .faults import *
from .faults import trigger as _trigger
from .shapes import Structured, resolve
from .utils import *


def _sanitize_name(typename, name):
    if not isinstance(name, str):
        raise TypeError(f"{typename} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{typename} 'name' cannot be empty")
    return name


class Command:
    """
    A named unit of work bound to a handler.

    Parameters
    - name: str
      Token selecting the command on the command line (no whitespace, no leading '-').
    - handler: Callable
      handler(context), handler(context, arguments) or handler(context, text).
    - descr: Unset | str | Text
      One-line description shown in help.

    Errors
    - TypeError/ValueError for bad metadata.
    - InvalidHandlerError when the handler does not follow a supported shape.
    """
    __slots__ = ("_name", "_descr", "_handler", "_shape")

    name = mirror("name")
    descr = mirror("descr")
    handler = mirror("handler")

    def __init__(self, name, handler, /, descr=Unset):
        name = _sanitize_name("command", name)
        if name.startswith("-") or any(char.isspace() for char in name):
            raise ValueError("command 'name' must not start with '-' or contain whitespace")

        if not isinstance(descr, str | Text | Unset):
            raise TypeError("command 'descr' must be a string")
        elif isinstance(descr, str) and not (descr := descr.strip()):
            raise ValueError("command 'descr' cannot be empty")

        self._name = name
        self._descr = coalesce(descr)
        self._handler = handler
        self._shape = resolve(handler)

    @property
    def shape(self):
        """
        the resolved calling convention (Niladic, Structured or Textual).
        """
        return self._shape

    @property
    def fields(self):
        """
        the flag schema of a structured handler; empty for other shapes.
        """
        return self._shape.fields if isinstance(self._shape, Structured) else ()

    def __call__(self, *arguments):
        return self._handler(*arguments)

    def __repr__(self):
        return "command(name=%r, descr=%r, shape=%s)" % (self._name, self._descr, type(self._shape).__name__.lower())

    def __rich_repr__(self):
        yield "name", self._name
        yield "descr", self._descr
        yield "shape", type(self._shape).__name__.lower()
        yield "fields", self.fields


class Category:
    """
    A named group of related commands, owned by a registry.
    """
    __slots__ = ("_name", "_commands", "_registry", "_detached")

    name = mirror("name")
    commands = mirror("commands")
    registry = mirror("registry")
    detached = mirror("detached")

    def __init__(self, name, registry=Unset, /):
        self._name = _sanitize_name("category", name)
        self._commands = {}
        self._registry = coalesce(registry)
        self._detached = False

    def register(self, command, /):
        """
        insert a command, replacing any command of the same name in this category.

        returns the command so calls can be chained or used as expressions.
        """
        if not isinstance(command, Command):
            raise TypeError("register() argument must be a command")
        if self._detached:
            raise ValueError(
                f"category {self._name!r} was replaced in its registry and no longer accepts commands"
            )

        for category in self._registry or ():
            if category is not self and command.name in category._commands:
                raise ValueError(
                    f"command name {command.name!r} is already in use in category {category.name!r}"
                )

        if self._commands.get(command.name, command) is not command:
            self._notify(ShadowedCommandWarning(
                "command %r in category %r was replaced" % (command.name, self._name),
                title="shadowed command",
                code=FaultCode.SHADOWED_COMMAND,
                hint="give the new command another name if both are needed",
                input=command.name,
                category=self._name,
                docs=getdoc(FaultCode.SHADOWED_COMMAND),
            ))

        self._commands[command.name] = command
        return command

    def command(self, name=Unset, /, descr=Unset):
        """
        decorator form of register(): wrap a handler into a Command.

            @engine.command("start", "Starts the car engine")
            def start(context, arguments: StartArgs): ...

        the command name defaults to the handler's __name__; the decorated
        name is bound to the resulting Command.
        """
        @rename("command")
        def wrapper(handler, /):
            return self.register(Command(coalesce(name, getattr(handler, "__name__", Unset)), handler, descr))

        return wrapper

    def _notify(self, fault):
        if self._registry is not None:
            return self._registry._trigger(fault)
        _trigger(fault)

    def __contains__(self, name):
        return name in self._commands

    def __iter__(self):
        return iter(self._commands.values())

    def __len__(self):
        return len(self._commands)

    def __repr__(self):
        return "category(name=%r, commands=%r)" % (self._name, tuple(self._commands))


class Registry:
    """
    Ordered mapping of category name to Category.

    Parameters
    - trigger: Callable[[fault], None]
      Used to surface warning faults; defaults to commander.faults.trigger.
      The Commander passes its own trigger so runtime switches apply.
    """
    __slots__ = ("_categories", "_trigger")

    categories = mirror("categories")

    def __init__(self, trigger=Unset, /):
        self._categories = {}
        self._trigger = coalesce(trigger, _trigger)

    def add_category(self, name, /):
        """
        create a category; an existing category of that name is replaced.

        the replaced category is detached: its register() raises ValueError.
        """
        category = Category(name, self)
        if category.name in self._categories:
            self._trigger(ShadowedCategoryWarning(
                "category %r was replaced" % category.name,
                title="shadowed category",
                code=FaultCode.SHADOWED_CATEGORY,
                hint="reuse the category returned by the first add_category() call",
                input=category.name,
                docs=getdoc(FaultCode.SHADOWED_CATEGORY),
            ))
            self._categories[category.name]._detached = True
        self._categories[category.name] = category
        return category

    def find_category(self, name, /):
        """
        return the category owning the command name.

        raises UnknownCommandError when no category has it.
        """
        for category in self._categories.values():
            if name in category._commands:
                return category

        names = [command.name for category in self._categories.values() for command in category]
        suggestions = difflib.get_close_matches(str(name), names, 3)
        if suggestions:
            hint = "did you mean %r? run 'help' to see all commands" % suggestions[0]
        else:
            hint = "run 'help' to see all commands"
        raise UnknownCommandError(
            "unknown command: %s" % name,
            title="unknown command",
            code=FaultCode.UNKNOWN_COMMAND,
            hint=hint,
            input=name,
            suggestions=suggestions,
            docs=getdoc(FaultCode.UNKNOWN_COMMAND),
        )

    def find_command(self, name, /):
        """
        return the command registered under name in any category.

        raises UnknownCommandError when no category has it.
        """
        return self.find_category(name)._commands[name]

    def __contains__(self, name):
        return any(name in category._commands for category in self._categories.values())

    def __iter__(self):
        return iter(self._categories.values())

    def __len__(self):
        return len(self._categories)

    def __repr__(self):
        return "registry(categories=%r)" % tuple(self._categories)


__all__ = (
    "Command",
    "Category",
    "Registry",
)
