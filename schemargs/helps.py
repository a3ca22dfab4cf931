"""
schemargs help renderer.

render_help(exec_name, schema) builds the whole help screen as a rich Text:

    USAGE:
        prog <count> [--rate <rate>] [--verbose]

    ARGUMENTS:
        <count>          Number of items

    OPTIONS:
        --rate <rate>    Work rate (default: 1)
        --verbose        Print more

Layout rules
- usage: up to 3 positionals inline as <label>, otherwise <ARGUMENTS>; up to 3
  options/switches inline as [flag <label>] / [flag], otherwise [OPTIONS].
- the entry column is as wide as the widest of "<label>", "flag <label>" and
  "flag"; descriptions start 4 spaces after it.
- ARGUMENTS is only shown with positionals, OPTIONS only with options or
  switches. Options list their formatted default.

Palette keys (override through __main__.__styles__; used when colorful=True)
- usage-label, program-name, section-label, metavar, option-name, flag-name,
  argument-description, default
"""
import itertools
import sys
from collections import defaultdict

from rich.console import Console
from rich.text import Text


def render_help(exec_name, schema, /, *, colorful=False):
    """
    Return the help text for schema, headed by exec_name (usually argv[0]).

    The result is a rich Text; its .plain attribute is the uncolored string.
    """
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",
        "program-name": "bold #FF4D94",
        "section-label": "bold #FFFFFF",
        "metavar": "bold #FFD600",
        "option-name": "bold #00E6FF",
        "flag-name": "bold #22C55E",
        "argument-description": "#9CA3AF",
        "default": "italic #A3A3A3",
    } | getattr(sys.modules.get("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def describe(argument):
        if argument.descr is None:
            return Text("")
        if isinstance(argument.descr, Text):
            return argument.descr.copy() if colorful else Text(argument.descr.plain)
        return Text(argument.descr, styler("argument-description"))

    positionals, options, switches = schema.positionals, schema.options, schema.switches

    # Usage section
    help = Text()
    help.append("USAGE:", styler("usage-label")).append("\n")
    help.append("    ").append(str(exec_name), styler("program-name"))

    if 0 < len(positionals) <= 3:
        for argument in positionals:
            help.append(" ").append(f"<{argument.label}>", styler("metavar"))
    elif positionals:
        help.append(" ").append("<ARGUMENTS>", styler("metavar"))

    if len(options) + len(switches) <= 3:
        for argument in options:
            help.append(" [").append(argument.flag, styler("option-name"))
            help.append(" ").append(f"<{argument.label}>", styler("metavar")).append("]")
        for argument in switches:
            help.append(" [").append(argument.flag, styler("flag-name")).append("]")
    else:
        help.append(" [OPTIONS]")
    help.append("\n\n")

    width = max(itertools.chain(
        (len(argument.label) + 2 for argument in positionals),
        (len(argument.flag) + 1 + len(argument.label) + 2 for argument in options),
        (len(argument.flag) for argument in switches),
    ), default=0)

    # Arguments section
    if positionals:
        help.append("ARGUMENTS:", styler("section-label")).append("\n")
        for argument in positionals:
            help.append("    ").append(f"<{argument.label}>", styler("metavar"))
            help.append(" " * (width - len(argument.label) - 2) + "    ")
            help.append_text(describe(argument)).append("\n")
        help.append("\n")

    # Options section
    if options or switches:
        help.append("OPTIONS:", styler("section-label")).append("\n")
        for argument in options:
            help.append("    ").append(argument.flag, styler("option-name"))
            help.append(" ").append(f"<{argument.label}>", styler("metavar"))
            help.append(" " * (width - len(argument.label) - len(argument.flag) - 3) + "    ")
            help.append_text(describe(argument))
            help.append(" (default: ").append(argument.render_default(), styler("default")).append(")\n")
        for argument in switches:
            help.append("    ").append(argument.flag, styler("flag-name"))
            help.append(" " * (width - len(argument.flag)) + "    ")
            help.append_text(describe(argument)).append("\n")

    return help


def print_help(exec_name, schema, /, *, colorful=False, stderr=False):
    """
    Print render_help(exec_name, schema) to stdout, or stderr when asked.
    """
    console = Console(stderr=stderr)
    console.print(render_help(exec_name, schema, colorful=colorful), soft_wrap=True, end="")


__all__ = (
    "render_help",
    "print_help",
)
