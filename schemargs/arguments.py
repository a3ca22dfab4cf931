r"""
schemargs argument descriptors.

Overview
- Positional: required, value-bearing argument identified by its position.
- Option: named, value-bearing argument with a flag token and a default.
- Switch: named, presence-only argument; False unless its flag appears.

Every descriptor is immutable once built: metadata is sanitized on
construction and exposed through read-only properties (see
__introspectable__). The schema (schemas.Schema) consumes them uniformly.

Metadata
- Shared
  • name: record field name; a Python identifier that is not a keyword and
    does not start with an underscore.
  • descr: Unset | str | Text (help text), non-empty when provided.
- Value-bearing (Positional/Option)
  • type: ValueType or its name ("int", "double", ...).
  • label: Unset | str (shown as <label> in help), defaults to the name.
- Named (Option/Switch)
  • flag: exact token matched on the command line; must match
    r"--?[^\W\d_](-?[^\W_]+)*".
- Option only
  • default: checked against the type (and its range); Unset means the type
    zero.
  • format: Python format spec used to show the default in help.
  • precision: shortcut for floating types, equivalent to format=".{n}g".

Quick example:
    >>> from schemargs.arguments import Positional, Option, Switch
    >>> count = Positional("count", "int", descr="Number of items")
    >>> rate = Option("rate", "--rate", "float", 1.0, precision=3)
    >>> verbose = Switch("verbose", "--verbose")
"""
import builtins
import functools
import keyword
import operator
import math
import re
import struct
from enum import StrEnum

from rich.text import Text

from .scalars import ValueType
from .utils import *


class Kind(StrEnum):
    """
    How an argument is identified on the command line.
    """
    REQUIRED = "required"
    OPTIONAL = "optional"
    BOOLEAN = "boolean"


class ArgumentType(type):
    """
    Metaclass giving descriptors read-only properties and stable reprs.

    - __typename__ is derived from the class name (camel-case split with
      hyphens) and used in construction errors.
    - every name in __introspectable__ becomes a property over "_" + name.
    - __repr__/__rich_repr__ list those properties.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate 'name' and 'descr', shared by every descriptor.

    Raises
    - TypeError: when name/descr have the wrong type.
    - ValueError: when name is not a usable field name, or descr is blank.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name.isidentifier() or keyword.iskeyword(name):
        raise ValueError(f"{cls.__typename__} 'name' must be a valid identifier")
    elif name.startswith("_"):
        raise ValueError(f"{cls.__typename__} 'name' cannot start with an underscore")

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


def _sanitize_named_metadata(cls, metadata, /):
    """
    Internal: validate the 'flag' token of options and switches.

    Accepted forms: "-x", "-long", "-long-name", "--long", "--long-name".
    Unicode letters are allowed; underscores and leading digits are not.
    """
    if not isinstance(flag := metadata["flag"], str):
        raise TypeError(f"{cls.__typename__} 'flag' must be a string")
    elif not (flag := flag.strip()):
        raise ValueError(f"{cls.__typename__} 'flag' cannot be empty")
    elif not re.fullmatch(r"--?[^\W\d_](-?[^\W_]+)*", flag):
        raise ValueError(f"{cls.__typename__} 'flag' must be a valid shell-style option name (unicodes are allowed)")
    metadata["flag"] = flag


def _sanitize_parametric_metadata(cls, metadata, /):
    """
    Internal: validate 'type' and 'label' of value-bearing descriptors.

    The label defaults to the descriptor name.
    """
    if not isinstance(type := metadata["type"], str):
        raise TypeError(f"{cls.__typename__} 'type' must be a value type")
    try:
        metadata["type"] = ValueType(type)
    except ValueError:
        raise ValueError(f"{cls.__typename__} 'type' must be one of {", ".join(map(str, ValueType))}") from None

    if not isinstance(label := metadata["label"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'label' must be a string")
    elif isinstance(label, str) and not (label := label.strip()):
        raise ValueError(f"{cls.__typename__} 'label' cannot be empty")
    metadata["label"] = coalesce(label, metadata["name"])


def _sanitize_default_metadata(cls, metadata, /):
    """
    Internal: check an option default against its type and build its format.

    - STRING: any str. CHAR: a single character (or "" for the zero value).
    - integers: int (not bool) within the type bounds.
    - floating: int or float (not bool), stored as float; FLOAT defaults are
      rounded to single precision and must fit it.
    - format: a format spec accepted by format(default, spec).
    - precision: non-negative int, floating types only, and not together with
      an explicit format.
    """
    type = metadata["type"]
    default = coalesce(metadata["default"], type.zero)

    numbers = (int, float) if type.pytype is float else (int,)

    if type.pytype is str:
        if not isinstance(default, str):
            raise TypeError(f"{cls.__typename__} 'default' must be a string for {type}")
        if type is ValueType.CHAR and len(default) > 1:
            raise ValueError(f"{cls.__typename__} 'default' must be a single character")
    elif isinstance(default, bool) or not isinstance(default, numbers):
        raise TypeError(f"{cls.__typename__} 'default' must be a number for {type}")
    elif type.integral and not type.bounds[0] <= default <= type.bounds[1]:
        raise ValueError(f"{cls.__typename__} 'default' is out of range for {type}")
    if type.pytype is float:
        try:
            default = float(default)
            if type is ValueType.FLOAT and math.isfinite(default):
                single, = struct.unpack("f", struct.pack("f", default))
                if default and not single:
                    raise ValueError(f"{cls.__typename__} 'default' is out of range for {type}")
                default = single
        except OverflowError:
            raise ValueError(f"{cls.__typename__} 'default' is out of range for {type}") from None
    metadata["default"] = default

    if not isinstance(format := metadata["format"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'format' must be a string")
    if not isinstance(precision := metadata.pop("precision"), int | Unset) or isinstance(precision, bool):
        raise TypeError(f"{cls.__typename__} 'precision' must be an integer")
    if precision is not Unset:
        if type.pytype is not float:
            raise TypeError(f"{cls.__typename__} 'precision' is only allowed for floating types")
        if format is not Unset:
            raise TypeError(f"{cls.__typename__} cannot have both 'format' and 'precision'")
        if precision < 0:
            raise ValueError(f"{cls.__typename__} 'precision' must be a non-negative integer")
        format = f".{precision}g"
    format = coalesce(format, type.format)

    try:
        builtins.format(metadata["default"], format)
    except (TypeError, ValueError):
        raise ValueError(f"{cls.__typename__} 'format' {format!r} cannot render the default") from None
    metadata["format"] = format


class Positional(metaclass=ArgumentType):
    """
    Required, value-bearing argument bound by position.

    Positionals have no flag and no declared default; until bound they hold
    the zero value of their type.
    """

    kind = Kind.REQUIRED

    __introspectable__ = (
        "name",
        "type",
        "label",
        "descr",
    )

    def __new__(cls, name, /, type=ValueType.STRING, label=Unset, descr=Unset):
        metadata = {
            "name": name,
            "type": type,
            "label": label,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_parametric_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def default(self):
        return self.type.zero


class Option(metaclass=ArgumentType):
    """
    Named, value-bearing argument.

    The flag token must be followed by exactly one value token, which is
    converted by the parser of the option type. When absent from the command
    line the option keeps its default.
    """

    kind = Kind.OPTIONAL

    __introspectable__ = (
        "name",
        "flag",
        "type",
        "default",
        "label",
        "descr",
        "format",
    )

    def __new__(
            cls,
            name,
            flag,
            /,
            type=ValueType.STRING,
            default=Unset,
            label=Unset,
            descr=Unset,
            *,
            format=Unset,
            precision=Unset
    ):
        metadata = {
            "name": name,
            "flag": flag,
            "type": type,
            "default": default,
            "label": label,
            "descr": descr,
            "format": format,
            "precision": precision,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_named_metadata(cls, metadata)
        _sanitize_parametric_metadata(cls, metadata)
        _sanitize_default_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def render_default(self):
        """
        Format the default with this option's format spec.
        """
        return builtins.format(self.default, self.format)


class Switch(metaclass=ArgumentType):
    """
    Named, presence-only argument: False by default, True once its flag is
    seen. Never consumes a value token.
    """

    kind = Kind.BOOLEAN

    __introspectable__ = (
        "name",
        "flag",
        "descr",
    )

    def __new__(cls, name, flag, /, descr=Unset):
        metadata = {
            "name": name,
            "flag": flag,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_named_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def default(self):
        return False


__all__ = (
    "Kind",
    "Positional",
    "Option",
    "Switch",
)

del ArgumentType
