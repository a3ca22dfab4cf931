"""
schemargs faults (errors and warnings) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue, grouped by
  domain so logs and searches stay predictable.
- ArgumentException / ArgumentWarning: base types carrying a message plus
  read-only options; they render themselves with rich and know how to surface
  themselves (raise, warn, or print).
- trigger(): central entry point to surface any fault with runtime options.

Surfacing rules
- shell=False: errors are raised, warnings go through warnings.warn().
- shell=True: both are printed to stderr as a single line (or a panel when
  fancy=True, titled with the fault title); errors then call sys.exit(1)
  unless deferred=True.

Host hooks (read from __main__)
- __prog__: program name in headers.
- __styles__: palette overrides.
- __codes__: code relabeling used by FaultCode.normalize().
"""
import copy
import inspect
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, ordinal, prog

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - arity and switches (111xx)
      • OPTION_VALUE_REQUIRED, MISSING_POSITIONALS
    - values (112xx)
      • NULL_VALUE, EMPTY_VALUE, INVALID_VALUE, NEGATIVE_VALUE, OUT_OF_RANGE
    - warnings (121xx)
      • UNKNOWN_ARGUMENT
    - internal misuse (131xx)
      • NULL_ARGUMENTS
    """
    # --- arity/switch errors (11xxx) ---
    OPTION_VALUE_REQUIRED       = 11117
    MISSING_POSITIONALS         = 11125

    # --- value errors (11xxx) ---
    NULL_VALUE                  = 11201
    EMPTY_VALUE                 = 11202
    INVALID_VALUE               = 11203
    NEGATIVE_VALUE              = 11204
    OUT_OF_RANGE                = 11205

    # --- warnings (12xxx) ---
    UNKNOWN_ARGUMENT            = 12111

    # --- internal errors (13xxx) ---
    NULL_ARGUMENTS              = 13101

    def normalize(self):
        """
        return a host-normalized string for this code.

        a __codes__ mapping in __main__ may relabel codes; otherwise the
        numeric value is returned as a string.
        """
        return str(getattr(sys.modules.get("__main__"), "__codes__", {}).get(self, self.value))


def _styler(options, palette):
    styles = defaultdict(str, palette | getattr(sys.modules.get("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if options.get("colorful", False) else ""
    return styler


def _render(fault, kind, palette):
    options = fault.options
    styler = _styler(options, palette)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment if options.get("colorful", False) else Text(fragment.plain)
        return Text(str(fragment), style)

    message = fault.message or ""
    if (index := options.get("index")) is not None:
        message = "%s at %s position" % (message, ordinal(index))

    header = Text.assemble(
        text(options.get("prog") or prog(), styler("prog-name")),
        ": ",
        text(kind, styler(kind + "-title")),
        "[",
        text(fault.code.normalize() if isinstance(fault.code, FaultCode) else "-", styler("code")),
        "]",
    )

    if options.get("fancy", False):
        body = [text(message, styler(kind + "-message"))]
        if hint := options.get("hint"):
            body.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
        title = Text.assemble(header, " | ", text(fault.title.title(), styler(kind + "-title")))
        return Panel(Group(*body), title=title, title_align="left")

    return Text.assemble(header, ": ", text(message, styler(kind + "-message")))


class ArgumentException(Exception):
    """
    Base class for every hard failure raised while scanning arguments.

    The code/title class attributes provide defaults; a "code" option passed
    through trigger() or copy.replace() takes precedence.
    """
    code = Unset
    title = "argument error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)
        if "code" in options:
            self.code = options["code"]

    def __rich__(self):
        return _render(self, "error", {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self, soft_wrap=True)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class InternalError(ArgumentException):
    code = FaultCode.NULL_ARGUMENTS
    title = "internal error"


class MissingPositionalsError(ArgumentException):
    code = FaultCode.MISSING_POSITIONALS
    title = "missing arguments"


class OptionValueRequiredError(ArgumentException):
    code = FaultCode.OPTION_VALUE_REQUIRED
    title = "option value required"


class ValueFault(ArgumentException):
    """
    A raw argument could not be converted to its declared value type.

    Options "text" and "type" hold the offending input and target ValueType.
    """
    title = "invalid value"

    @property
    def text(self):
        return self.options.get("text")

    @property
    def type(self):
        return self.options.get("type")


class NullValueError(ValueFault):
    code = FaultCode.NULL_VALUE


class EmptyValueError(ValueFault):
    code = FaultCode.EMPTY_VALUE


class InvalidValueError(ValueFault):
    code = FaultCode.INVALID_VALUE


class NegativeValueError(ValueFault):
    code = FaultCode.NEGATIVE_VALUE


class OutOfRangeError(ValueFault):
    code = FaultCode.OUT_OF_RANGE


class ArgumentWarning(Warning):
    """
    Base class for recoverable issues; scanning continues after one.
    """
    code = Unset
    title = "argument warning"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)
        if "code" in options:
            self.code = options["code"]

    def __rich__(self):
        return _render(self, "warning", {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "warning-title": "bold #FFC2E0",
            "warning-message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self, soft_wrap=True)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownArgumentWarning(ArgumentWarning):
    code = FaultCode.UNKNOWN_ARGUMENT
    title = "unknown argument"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ (see the base classes).
    - options are merged in through copy.replace() before triggering.

    typical options
    - shell, deferred, fancy, colorful, prog, index, hint, text, type.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ArgumentException",
    "InternalError",
    "MissingPositionalsError",
    "OptionValueRequiredError",
    "ValueFault",
    "NullValueError",
    "EmptyValueError",
    "InvalidValueError",
    "NegativeValueError",
    "OutOfRangeError",
    "ArgumentWarning",
    "UnknownArgumentWarning",
    "trigger",
)
