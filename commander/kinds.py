"""
Commander value kinds: the single place where bool/int/string semantics live.

Scope
- Kind: the closed set of primitive kinds a flag can carry (BOOL, INT, STRING).
- coerce(raw, kind): lenient conversion of a tag default; never fails.
- parse(raw, kind): strict conversion of a command-line value; raises ValueError.
- render(value, kind): string form of a Python default, suitable as a tag default.
- kindof(annotation): map a resolved annotation to its Kind (or None).

Lenient vs strict
- Defaults come from the program author and degrade silently: "true" is the only
  truthy boolean spelling, and integers keep their leading ASCII decimal
  digits (" 12abc" → 12) or fall back to zero.
- Values come from the user and are checked: booleans accept 1/t/T/TRUE/true/True
  and 0/f/F/FALSE/false/False; integers follow integer-literal rules with an
  optional sign: 0x/0o/0b prefixes, a bare leading 0 for octal ("010" → 8) and
  underscores between digits ("1_000"). Both reject anything else, including
  non-ASCII digits.

Adding a kind means adding a member plus its zero value, typename, and one branch
in coerce/parse/render.
"""
import re
from enum import Enum

# 64-bit signed range, matching the width of the values accepted on the command line.
_MINIMUM = -(1 << 63)
_MAXIMUM = (1 << 63) - 1

_TRUTHY = frozenset(("1", "t", "T", "TRUE", "true", "True"))
_FALSY = frozenset(("0", "f", "F", "FALSE", "false", "False"))

# integer literals accepted on the command line: (pattern, prefix length, base).
# an underscore may only sit between digits or right after a base prefix.
_LITERALS = (
    (r"0[xX](_?[0-9a-fA-F])+", 2, 16),
    (r"0[oO](_?[0-7])+", 2, 8),
    (r"0[bB](_?[01])+", 2, 2),
    (r"0(_?[0-7])+", 1, 8),
    (r"[1-9](_?[0-9])*|0", 0, 10),
)


class Kind(Enum):
    """
    primitive kinds accepted in an argument structure.

    each member knows its zero value (used when a default is missing) and the
    type hint shown in help output (booleans do not show one).
    """
    BOOL = "bool"
    INT = "int"
    STRING = "string"

    @property
    def zero(self):
        return {Kind.BOOL: False, Kind.INT: 0, Kind.STRING: ""}[self]

    @property
    def typename(self):
        return self.value


def kindof(annotation, /):
    """
    return the Kind for a resolved annotation, or None when unsupported.

    identity checks are used on purpose: bool is a subclass of int, and
    subclasses of str/int are not accepted as flag kinds.
    """
    if annotation is bool:
        return Kind.BOOL
    if annotation is int:
        return Kind.INT
    if annotation is str:
        return Kind.STRING
    return None


def coerce(raw, kind, /):
    """
    convert a tag default string into a typed value, without ever failing.

    - BOOL: "true" → True; anything else (including "") → False.
    - INT: leading decimal integer after optional blanks; otherwise 0.
      values outside the 64-bit range also become 0.
    - STRING: returned unchanged.
    """
    if not isinstance(raw, str):
        raise TypeError("coerce() first argument must be a string")
    match kind:
        case Kind.BOOL:
            return raw == "true"
        case Kind.INT:
            match = re.match(r"[ \t\n\r\v\f]*([+-]?[0-9]+)", raw)
            if not match:
                return 0
            value = int(match[1])
            return value if _MINIMUM <= value <= _MAXIMUM else 0
        case Kind.STRING:
            return raw
    raise TypeError("coerce() second argument must be a kind")


def parse(raw, kind, /):
    """
    convert a command-line value into a typed value.

    errors
    - ValueError with a short reason ("parse error", "value out of range").
    """
    if not isinstance(raw, str):
        raise TypeError("parse() first argument must be a string")
    match kind:
        case Kind.BOOL:
            if raw in _TRUTHY:
                return True
            if raw in _FALSY:
                return False
            raise ValueError("parse error")
        case Kind.INT:
            sign, body = (raw[0], raw[1:]) if raw[:1] in ("+", "-") else ("", raw)
            for pattern, prefix, base in _LITERALS:
                if re.fullmatch(pattern, body):
                    value = int(body[prefix:].replace("_", ""), base)
                    break
            else:
                raise ValueError("parse error")
            value = -value if sign == "-" else value
            if not _MINIMUM <= value <= _MAXIMUM:
                raise ValueError("value out of range")
            return value
        case Kind.STRING:
            return raw
    raise TypeError("parse() second argument must be a kind")


def render(value, kind, /):
    """
    render a python default as a tag default string.

    values that do not belong to the kind render as "" (the zero default).
    """
    match kind:
        case Kind.BOOL:
            return "true" if value is True else ""
        case Kind.INT:
            return str(value) if isinstance(value, int) and not isinstance(value, bool) else ""
        case Kind.STRING:
            return value if isinstance(value, str) else ""
    raise TypeError("render() second argument must be a kind")


__all__ = (
    "Kind",
    "kindof",
    "coerce",
    "parse",
    "render",
)
