r"""
schemargs scalar parsers: raw text to typed values.

Overview
- ValueType: the supported scalar types and their metadata (Python payload
  type, zero value, inclusive integer bounds, default help format).
- One parser per type (parse_string, parse_char, parse_int, ..., parse_double).
  Each takes the raw text and returns the converted value or raises a
  ValueFault subclass naming the offending text and the target type.
- parse(type, text): dispatch through PARSERS.
- try_parse(type, text): (value, ok) form; prints the diagnostic on failure.

Numerals
- Integers autodetect their base: "0x"/"0X" hexadecimal, a leading "0" octal,
  otherwise decimal. An optional sign is accepted ('-' only for signed types).
  The longest valid prefix is taken; anything left over makes the text invalid
  ("08" is "0" followed by garbage).
- Floating values are locale-independent: decimal with optional exponent,
  hexadecimal ("0x1.8p3"), "inf"/"infinity" and "nan" in any case. The range
  check runs before the trailing-garbage check.
- Leading C whitespace (" \t\n\v\f\r") is skipped for numbers; trailing
  whitespace is garbage.
"""
import math
import re
import struct
import sys
from enum import StrEnum

from .faults import (
    EmptyValueError,
    InvalidValueError,
    NegativeValueError,
    NullValueError,
    OutOfRangeError,
    ValueFault,
    trigger,
)
from .utils import rename


class ValueType(StrEnum):
    """
    Scalar value types a positional or option can carry.

    Widths follow an LP64 platform: INT/UINT are 32-bit, LONG/ULONG and
    LONGLONG/ULONGLONG 64-bit, SIZE is pointer-sized.
    """
    STRING = "string"
    CHAR = "char"
    INT = "int"
    UINT = "uint"
    LONG = "long"
    ULONG = "ulong"
    LONGLONG = "longlong"
    ULONGLONG = "ulonglong"
    SIZE = "size"
    FLOAT = "float"
    DOUBLE = "double"

    @property
    def pytype(self):
        """Python type of parsed values."""
        if self in (ValueType.STRING, ValueType.CHAR):
            return str
        if self in (ValueType.FLOAT, ValueType.DOUBLE):
            return float
        return int

    @property
    def zero(self):
        """Value a positional holds before it is bound."""
        return self.pytype()

    @property
    def integral(self):
        return self.pytype is int

    @property
    def signed(self):
        return self.integral and self.bounds[0] < 0

    @property
    def bounds(self):
        """Inclusive (minimum, maximum) for integer types, None otherwise."""
        return _BOUNDS.get(self)

    @property
    def format(self):
        """Default format spec used to show defaults in help."""
        if self.pytype is str:
            return "s"
        return "d" if self.integral else "g"


_BOUNDS = {
    ValueType.INT: (-2 ** 31, 2 ** 31 - 1),
    ValueType.UINT: (0, 2 ** 32 - 1),
    ValueType.LONG: (-2 ** 63, 2 ** 63 - 1),
    ValueType.ULONG: (0, 2 ** 64 - 1),
    ValueType.LONGLONG: (-2 ** 63, 2 ** 63 - 1),
    ValueType.ULONGLONG: (0, 2 ** 64 - 1),
    ValueType.SIZE: (0, 2 * sys.maxsize + 1),
}

_WHITESPACE = " \t\n\v\f\r"

_INTEGER = re.compile(r"([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")

_FLOATING = re.compile(r"""
    [+-]?
    (?:
        (?P<hex>0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?[0-9]+)?)
      | (?P<dec>(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)
      | (?P<inf>inf(?:inity)?)
      | (?P<nan>nan(?:\([0-9a-z_]*\))?)
    )
""", re.VERBOSE | re.IGNORECASE)

_FLT_PACK = struct.Struct("f")


def _skip_leading(text):
    return text.lstrip(_WHITESPACE)


def parse_string(text, /):
    """
    Accept any non-empty text and return it unchanged (the same object).
    """
    if text is None:
        raise NullValueError("null input for string", text=text, type=ValueType.STRING)
    if not text:
        raise EmptyValueError("empty string value not allowed", text=text, type=ValueType.STRING)
    return text


def parse_char(text, /):
    """
    Accept exactly one character.
    """
    if text is None:
        raise NullValueError("null input for character argument", text=text, type=ValueType.CHAR)
    if len(text) != 1:
        raise InvalidValueError("%r is not a valid character" % text, text=text, type=ValueType.CHAR)
    return text


def _integer_parser(type, /):
    minimum, maximum = type.bounds
    # Decimal numerals longer than this are out of range; int() refuses huge ones.
    widest = len(str(max(-minimum, maximum)))

    @rename("parse_" + type.value)
    def parser(text, /):
        if text is None:
            raise NullValueError("null input for %s" % type, text=text, type=type)
        text = _skip_leading(text)
        if not text:
            raise EmptyValueError("empty input for %s" % type, text=text, type=type)
        if not type.signed and text[0] == "-":
            raise NegativeValueError("%r negative value not allowed for %s" % (text, type), text=text, type=type)

        match = _INTEGER.match(text)
        if match is None or match.end() != len(text):
            raise InvalidValueError("%r is not a valid %s" % (text, type), text=text, type=type)

        sign, digits = match.groups()
        if digits[:2] in ("0x", "0X"):
            value = int(digits[2:], 16)
        elif digits.startswith("0"):
            value = int(digits, 8)
        elif len(digits) > widest:
            raise OutOfRangeError("%r is out of range for %s" % (text, type), text=text, type=type)
        else:
            value = int(digits, 10)
        if sign == "-":
            value = -value

        if not minimum <= value <= maximum:
            raise OutOfRangeError("%r is out of range for %s" % (text, type), text=text, type=type)
        return value

    parser.__doc__ = "Parse a base-autodetected %s in [%d, %d]." % (type, minimum, maximum)
    return parser


def _floating_parser(type, /):
    single = type is ValueType.FLOAT

    @rename("parse_" + type.value)
    def parser(text, /):
        if text is None:
            raise NullValueError("null input for %s" % type, text=text, type=type)
        text = _skip_leading(text)
        if not text:
            raise EmptyValueError("empty input for %s" % type, text=text, type=type)

        if (match := _FLOATING.match(text)) is None:
            raise InvalidValueError("%r is not a valid %s" % (text, type), text=text, type=type)

        numeral = match.group()
        try:
            if match["hex"]:
                value = float.fromhex(numeral)
                mantissa = re.split(r"[pP]", match["hex"][2:])[0]
            else:
                value = float(numeral.split("(")[0])
                mantissa = re.split(r"[eE]", match["dec"] or "")[0]
            if single and math.isfinite(value):
                value, = _FLT_PACK.unpack(_FLT_PACK.pack(value))
        except OverflowError:
            raise OutOfRangeError("%r is out of range for type %s" % (text, type), text=text, type=type) from None

        if (
            (math.isinf(value) and not match["inf"]) or
            (value == 0.0 and re.search(r"[1-9a-fA-F]", mantissa))
        ):
            raise OutOfRangeError("%r is out of range for type %s" % (text, type), text=text, type=type)

        if match.end() != len(text):
            raise InvalidValueError("%r is not a valid %s" % (text, type), text=text, type=type)
        return value

    parser.__doc__ = "Parse a locale-independent %s; %s precision." % (type, "single" if single else "double")
    return parser


parse_int = _integer_parser(ValueType.INT)
parse_uint = _integer_parser(ValueType.UINT)
parse_long = _integer_parser(ValueType.LONG)
parse_ulong = _integer_parser(ValueType.ULONG)
parse_longlong = _integer_parser(ValueType.LONGLONG)
parse_ulonglong = _integer_parser(ValueType.ULONGLONG)
parse_size = _integer_parser(ValueType.SIZE)
parse_float = _floating_parser(ValueType.FLOAT)
parse_double = _floating_parser(ValueType.DOUBLE)

PARSERS = {
    ValueType.STRING: parse_string,
    ValueType.CHAR: parse_char,
    ValueType.INT: parse_int,
    ValueType.UINT: parse_uint,
    ValueType.LONG: parse_long,
    ValueType.ULONG: parse_ulong,
    ValueType.LONGLONG: parse_longlong,
    ValueType.ULONGLONG: parse_ulonglong,
    ValueType.SIZE: parse_size,
    ValueType.FLOAT: parse_float,
    ValueType.DOUBLE: parse_double,
}


def parse(type, text, /):
    """
    Convert text to the given ValueType (or its name), raising a ValueFault.
    """
    return PARSERS[ValueType(type)](text)


def try_parse(type, text, /, **options):
    """
    Convert text, reporting failure instead of raising.

    Returns (value, True) on success. On failure the diagnostic is printed to
    stderr and (zero, False) is returned. Extra options (colorful, fancy,
    prog, index, ...) are forwarded to the fault renderer.
    """
    type = ValueType(type)
    try:
        return PARSERS[type](text), True
    except ValueFault as fault:
        trigger(fault, **options | {"shell": True, "deferred": True})
        return type.zero, False


__all__ = (
    "ValueType",
    "PARSERS",
    "parse",
    "try_parse",
    "parse_string",
    "parse_char",
    "parse_int",
    "parse_uint",
    "parse_long",
    "parse_ulong",
    "parse_longlong",
    "parse_ulonglong",
    "parse_size",
    "parse_float",
    "parse_double",
)
