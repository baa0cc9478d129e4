"""
Handler shapes: the calling conventions a command handler may follow.

A handler is classified once, when its Command is built, into one of three
closed variants:

- Niladic(handler): handler(context)
- Structured(handler, model, fields): handler(context, arguments) where model is a
  dataclass and fields is its flag schema (see commander.binder.schema)
- Textual(handler): handler(context, text) where text is a plain string; this is
  the convention of the built-in help command

resolve() performs the classification and raises InvalidHandlerError for
anything else, so a command that exists can always be dispatched.
"""
import dataclasses
import inspect
from inspect import Parameter
from typing import NamedTuple

from .binder import schema
from .context import Context
from .faults import *


class Niladic(NamedTuple):
    handler: object


class Structured(NamedTuple):
    handler: object
    model: type
    fields: tuple


class Textual(NamedTuple):
    handler: object


def _invalid(handler, reason):
    name = getattr(handler, "__qualname__", repr(handler))
    return InvalidHandlerError(
        "handler %s must be a function accepting a context: %s" % (name, reason),
        title="invalid handler",
        code=FaultCode.INVALID_HANDLER,
        hint="use handler(context), handler(context, arguments) or handler(context, text)",
        handler=handler,
        docs=getdoc(FaultCode.INVALID_HANDLER),
    )


def _accepts_context(annotation):
    if annotation is Parameter.empty:
        return True
    return isinstance(annotation, type) and issubclass(annotation, Context)


def resolve(handler, /):
    """
    classify a handler into Niladic, Structured or Textual.

    rules
    - the handler must be callable with an inspectable signature.
    - it takes one or two positional parameters (no *args, **kwargs or keyword-only ones).
    - the first parameter is unannotated or annotated with Context (or a subclass).
    - a second parameter must be annotated with a dataclass type or with str.
    """
    if not callable(handler):
        raise _invalid(handler, "not callable")
    try:
        signature = inspect.signature(handler, eval_str=True)
    except (NameError, SyntaxError):
        raise _invalid(handler, "annotations cannot be resolved") from None
    except (TypeError, ValueError):
        raise _invalid(handler, "signature cannot be inspected") from None

    parameters = list(signature.parameters.values())
    if not 1 <= len(parameters) <= 2:
        raise _invalid(handler, "expected 1 or 2 parameters, got %d" % len(parameters))
    for parameter in parameters:
        if parameter.kind not in (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD):
            raise _invalid(handler, "parameter %r must be positional" % parameter.name)

    if not _accepts_context(parameters[0].annotation):
        raise _invalid(handler, "first parameter %r is not a context" % parameters[0].name)

    if len(parameters) == 1:
        return Niladic(handler)

    annotation = parameters[1].annotation
    if annotation is str:
        return Textual(handler)
    if isinstance(annotation, type) and dataclasses.is_dataclass(annotation):
        return Structured(handler, annotation, schema(annotation))
    raise _invalid(handler, "unsupported argument type: %s" % (
        "missing annotation" if annotation is Parameter.empty else getattr(annotation, "__qualname__", repr(annotation))
    ))


__all__ = (
    "Niladic",
    "Structured",
    "Textual",
    "resolve",
)
