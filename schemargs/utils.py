"""
schemargs utilities (small helpers shared by every layer)

Overview
- UnsetType / Unset
  • Sentinel for "not provided", distinct from None (which can be a real value).
- coalesce(value, default=None)
  • Replace Unset with a concrete default, keep every other value as-is.
- rename(callable, name) / @rename("name")
  • Give generated parsers and accessors a readable __name__/__qualname__.
- mirror("attr")
  • Read-only property over a private backing field (self._attr).
- ordinal(number)
  • "first", "second", ..., "11th": used to phrase position-first diagnostics.
- prog()
  • Program name shown in diagnostics (honors __main__.__prog__).
"""
import builtins
import functools
import os.path
import sys
from collections.abc import Mapping, Sequence, Set
from typing import final


@final
class UnsetType:
    """
    Sentinel type for a value that was not provided.

    Falsey, printable as "Unset", a per-process singleton, and sealed against
    subclassing. Use coalesce() to turn it into a real value.
    """

    def __or__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()
"""
The only UnsetType instance: "no value provided". Falsey, distinct from None.
"""


def coalesce(object, default=None, /):
    """
    Return object unless it is Unset, in which case return default.

    None, 0, "" and other falsey values are preserved.

    Examples
    - coalesce("rate", "x")  -> "rate"
    - coalesce(Unset, "x")   -> "x"
    - coalesce(None, "x")    -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set __name__/__qualname__ on a callable, or build a decorator that does.

    Forms
    - rename(callable, name) -> callable (renamed in place)
    - @rename(name)          -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    # Fresh copies of containers so callers cannot mutate backing state.
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return frozenset(map(_immortalize, object))
    return object


def mirror(name, /):
    """
    Define a read-only property reading the backing field "_{name}".

    Container values are returned as fresh immutable copies (tuple/frozenset)
    or plain dict copies, so the owner's state cannot be changed through it.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    1..10 are spelled out ("first".."tenth"); the rest use numeric suffixes
    (11th, 12th, 13th, 21st, 102nd, ...).
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    if 10 < number % 100 < 20:
        return f"{number}th"
    return f"{number}%s" % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def prog(alias=Unset, /):
    """
    Program name used in diagnostics.

    Resolution order: __main__.__prog__, then the basename of alias (usually
    argv[0]), then the basename of sys.argv[0], then "schemargs".
    """
    if name := getattr(sys.modules.get("__main__"), "__prog__", None):
        return name
    for candidate in (alias, getattr(sys, "argv", None) and sys.argv[0]):
        if isinstance(candidate, str) and (name := os.path.basename(candidate)):
            return name
    return "schemargs"


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "ordinal",
    "prog",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
