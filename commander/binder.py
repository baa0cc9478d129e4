r"""
Commander argument binder: tags, schema synthesis and token binding.

Overview
- Tags
  • Flag(name, default=..., usage=...): placed as the default of an attribute
    inside an @arguments class; the dataclass-level vocabulary is the field
    metadata keys "flag", "default" and "usage".
- Decorator
  • @arguments: turn a tagged class into a dataclass whose defaults are the
    coerced tag defaults (bool/int/str attributes without one get the zero value).
- Schema
  • Field: (attribute, name, kind, default, usage) descriptor for one flag.
  • schema(model): ordered descriptors for a dataclass; unsupported kinds are skipped.
- Binding
  • bind(model, fields, tokens): parse tokens with the usual flag rules and build
    a populated instance of the model.

Token rules
- "-name" and "--name" are the same flag; "--" ends flag parsing.
- int/str flags take "--name=value" or "--name value".
- bool flags take "--name" (true) or "--name=value"; a spaced value is not consumed.
- parsing stops at the first token that is not a flag; what remains is returned.
- a flag given twice keeps the last value.

Quick example:
    >>> from commander.binder import arguments, Flag
    >>> @arguments
    ... class ACArgs:
    ...     temperature: int = Flag(default="22", usage="Temperature in Celsius")
    ...     fanspeed: int = Flag(default="3", usage="Fan speed (1-5)")
    ...
    >>> ACArgs()
    ACArgs(temperature=22, fanspeed=3)
"""
import dataclasses
import inspect
import re
import typing
from collections import deque
from typing import NamedTuple

from .faults import *
from .kinds import *
from .utils import *

# Field metadata keys understood by schema().
FLAG = "flag"
DEFAULT = "default"
USAGE = "usage"


class Flag:
    """
    Tag describing how one attribute of an argument structure maps to a flag.

    Parameters
    - name: Unset | str
      Flag name without dashes. Defaults to the lower-cased attribute name.
    - default: str
      String form of the default, coerced per the attribute's kind.
    - usage: str
      One-line help text shown next to the flag.
    """
    __slots__ = ("_name", "_default", "_usage")

    name = mirror("name")
    default = mirror("default")
    usage = mirror("usage")

    def __init__(self, name=Unset, /, *, default="", usage=""):
        if not isinstance(name, str | Unset):
            raise TypeError("flag 'name' must be a string")
        elif isinstance(name, str) and not re.fullmatch(r"\w[\w.-]*", name := name.strip()):
            raise ValueError("flag 'name' must be a non-empty word without leading dashes")
        if not isinstance(default, str):
            raise TypeError("flag 'default' must be a string")
        if not isinstance(usage, str):
            raise TypeError("flag 'usage' must be a string")
        self._name = name
        self._default = default
        self._usage = usage

    def __repr__(self):
        return "flag(name=%r, default=%r, usage=%r)" % (self._name, self._default, self._usage)

    def metadata(self):
        """
        return the dataclass field metadata equivalent to this tag.
        """
        metadata = {DEFAULT: self._default, USAGE: self._usage}
        if self._name is not Unset:
            metadata[FLAG] = self._name
        return metadata


class Field(NamedTuple):
    """
    Flag descriptor derived from one attribute of an argument structure.
    """
    attribute: str
    name: str
    kind: Kind
    default: str
    usage: str


class HelpRequested(Exception):
    """
    raised by bind() when "-h"/"--help" is given and no field claims that name.
    """


def _hints(model):
    try:
        return typing.get_type_hints(model)
    except (NameError, TypeError):
        # unresolvable annotations behave like unsupported kinds
        return {}


def arguments(cls=Unset, /, **options):
    """
    Build an argument structure (a dataclass) from a class carrying Flag tags.

    Behavior
    - Each attribute whose value is a Flag gets dataclass metadata from the tag
      and a default coerced from the tag's string default.
    - bool/int/str attributes with no default get the kind's zero value, so
      the structure can always be built with no arguments.
    - Other attributes are left to dataclasses untouched (and skipped by schema()).
    - Extra keyword options are forwarded to dataclasses.dataclass.

    Usable as @arguments or @arguments(frozen=True).
    """
    def wrapper(cls, /):
        if not isinstance(cls, type):
            raise TypeError("@arguments must be applied to a class")
        hints = _hints(cls)
        for attribute in inspect.get_annotations(cls):
            kind = kindof(hints.get(attribute))
            value = cls.__dict__.get(attribute, Unset)
            if isinstance(value, Flag):
                default = coerce(value.default, kind) if kind else None
                setattr(cls, attribute, dataclasses.field(default=default, metadata=value.metadata()))
            elif value is Unset and kind:
                setattr(cls, attribute, kind.zero)
        return dataclasses.dataclass(cls, **options)

    return wrapper(cls) if cls is not Unset else rename(wrapper, "arguments")


def schema(model, /):
    """
    Synthesize the ordered flag schema of a dataclass.

    Resolution per field (declaration order)
    - kind: from the resolved annotation; unsupported kinds are omitted.
    - name: metadata "flag", else the lower-cased attribute name.
    - usage: metadata "usage", else "".
    - default: metadata "default", else the dataclass default (or the value its
      default_factory builds) rendered as a string.

    Errors
    - TypeError when model is not a dataclass type.
    """
    if not (isinstance(model, type) and dataclasses.is_dataclass(model)):
        raise TypeError("schema() argument must be a dataclass type")

    hints = _hints(model)
    fields = []
    for field in dataclasses.fields(model):
        if not field.init or not (kind := kindof(hints.get(field.name))):
            continue
        if DEFAULT in field.metadata:
            default = str(field.metadata[DEFAULT])
        elif field.default is not dataclasses.MISSING:
            default = render(field.default, kind)
        elif field.default_factory is not dataclasses.MISSING:
            default = render(field.default_factory(), kind)
        else:
            default = ""
        fields.append(Field(
            attribute=field.name,
            name=str(field.metadata.get(FLAG) or field.name.lower()),
            kind=kind,
            default=default,
            usage=str(field.metadata.get(USAGE, "")),
        ))
    return tuple(fields)


def _split(token):
    """
    split a flag token into (name, value); value is None without "=".

    raises MalformedFlagError for "---x", "-=x" and similar spellings.
    """
    name = token[2:] if token.startswith("--") else token[1:]
    if not name or name[0] in "-=":
        raise MalformedFlagError(
            "bad flag syntax: %s" % token,
            title="malformed flag",
            code=FaultCode.MALFORMED_FLAG,
            hint="flags are spelled -name, --name or --name=value",
            token=token,
            docs=getdoc(FaultCode.MALFORMED_FLAG),
        )
    name, equals, value = name.partition("=")
    return name, value if equals else None


def bind(model, fields, tokens, /):
    """
    Parse tokens against a flag schema and build the model.

    Parameters
    - model: the dataclass type receiving the values.
    - fields: the schema (see schema()).
    - tokens: Iterable[str], the tokens following the command name.

    Returns
    - (instance, rest): the populated model and the unparsed trailing tokens.

    Guarantees
    - fields not mentioned keep their default, coerced from the tag string.
    - dataclass fields outside the schema get their own default, or None.
    - nothing is built when a token fails (ParseError propagates).

    Errors
    - MalformedFlagError, UnknownFlagError, MissingValueError, MalformedValueError.
    - HelpRequested for an undeclared -h/--help.
    """
    values = {field.attribute: coerce(field.default, field.kind) for field in fields}
    index = {field.name: field for field in fields}
    tokens = deque(tokens)

    while tokens:
        token = tokens[0]
        if len(token) < 2 or not token.startswith("-"):
            break
        tokens.popleft()
        if token == "--":
            break

        name, value = _split(token)
        try:
            field = index[name]
        except KeyError:
            if name in ("h", "help"):
                raise HelpRequested(name) from None
            raise UnknownFlagError(
                "flag provided but not defined: -%s" % name,
                title="unknown flag",
                code=FaultCode.UNKNOWN_FLAG,
                hint="known flags: %s" % (", ".join("--" + name for name in index) or "none"),
                token=token,
                input=name,
                docs=getdoc(FaultCode.UNKNOWN_FLAG),
            ) from None

        if field.kind is Kind.BOOL and value is None:
            values[field.attribute] = True
            continue

        if value is None:
            if not tokens:
                raise MissingValueError(
                    "flag needs an argument: -%s" % name,
                    title="missing value",
                    code=FaultCode.MISSING_VALUE,
                    hint="pass a value after a space or an '=' (for example: --%s=<%s>)" % (name, field.kind.typename),
                    token=token,
                    input=name,
                    docs=getdoc(FaultCode.MISSING_VALUE),
                )
            value = tokens.popleft()

        try:
            values[field.attribute] = parse(value, field.kind)
        except ValueError as exception:
            raise MalformedValueError(
                "invalid %s value %r for flag -%s: %s" % (
                    "boolean" if field.kind is Kind.BOOL else field.kind.typename, value, name, exception
                ),
                title="malformed value",
                code=FaultCode.MALFORMED_VALUE,
                hint="flag --%s expects a value of type %s" % (name, field.kind.typename),
                token=token,
                input=name,
                value=value,
                docs=getdoc(FaultCode.MALFORMED_VALUE),
            ) from None

    for field in dataclasses.fields(model):
        if field.init and field.name not in values and (
            field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING
        ):
            values[field.name] = None

    return model(**values), tuple(tokens)


__all__ = (
    "Flag",
    "Field",
    "HelpRequested",
    "arguments",
    "schema",
    "bind",
)
