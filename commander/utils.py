"""
Small helpers shared by the registry, binder and dispatcher.

- Unset: the "no value given" marker, kept apart from None because None is a
  meaningful value for descriptions and registries. It is falsy, prints as
  "Unset" and joins isinstance unions (isinstance(x, str | Unset)).
- coalesce(value, default): swap Unset for a default; None, 0 and "" pass through.
- rename(callable, name) or @rename(name): give generated callables a readable
  __name__/__qualname__ for tracebacks and reprs.
- mirror(name): a read-only property over self._name that hands out tuples,
  mapping proxies and frozensets instead of the mutable containers behind them.

    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
"""
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker; one instance per process, no subclasses.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __or__(self, other, /):
        # lets `Unset | str` build a union of UnsetType and str
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("UnsetType cannot be subclassed")


def coalesce(value, default=None, /):
    """
    return default when value is Unset, value otherwise.
    """
    return default if value is Unset else value


def _retitle(target, name):
    if not callable(target):
        raise TypeError("rename() target must be callable")
    if not isinstance(name, str):
        raise TypeError("rename() name must be a string")
    try:
        target.__name__ = target.__qualname__ = name
    except (AttributeError, TypeError):
        raise TypeError("rename() target does not accept a new name") from None
    return target


def rename(*parameters):
    """
    rename(target, name) renames target in place and returns it;
    rename(name) returns a decorator doing the same.
    """
    if len(parameters) == 2:
        return _retitle(*parameters)
    if len(parameters) != 1:
        raise TypeError("rename() expects 1 or 2 arguments, got %d" % len(parameters))

    name, = parameters
    if not isinstance(name, str):
        raise TypeError("rename() name must be a string")
    return _renamer(name)


def _renamer(name):
    def decorator(target):
        return _retitle(target, name)

    return _retitle(decorator, "rename")


def _frozen(value):
    if isinstance(value, Mapping):
        return MappingProxyType(value)
    if isinstance(value, Set):
        return frozenset(value)
    if isinstance(value, Sequence) and not isinstance(value, str):
        return tuple(value)
    return value


def mirror(name, /):
    """
    read-only property exposing self._<name> through an immutable view.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() expects an attribute name")
    attribute = "_" + name

    def getter(self):
        return _frozen(getattr(self, attribute))

    return property(_retitle(getter, name))


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "UnsetType",
    "Unset",
)
