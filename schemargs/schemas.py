"""
schemargs schema: descriptors in, typed records out.

What this module provides
- Schema: an ordered collection of Positional, Option and Switch descriptors
  with a record class generated from them.
  • defaults(): the default-initialized record.
  • parse(argv): scan argv, raise the first hard fault.
  • scan(argv): scan argv, print diagnostics, return (record, ok).
  • render_help(exec_name) / print_help(exec_name): see schemargs.helps.

Scanning
1. argv must hold at least the program-name slot, otherwise InternalError.
2. argv[1:] must be at least as long as the positional list, otherwise
   MissingPositionalsError; nothing is bound.
3. positionals consume argv[1:1 + n] in declaration order.
4. every remaining token is matched exactly against the flag table:
   • option: the next token is its value (OptionValueRequiredError when
     there is none); both tokens are consumed.
   • switch: set to True; one token consumed.
   • anything else: UnknownArgumentWarning, then the token is skipped.
The first hard fault aborts the scan. Diagnostics lead with the position of
the offending token ("at third position").

Quick start
    from schemargs import Schema, Positional, Option, Switch

    schema = Schema(
        Positional("count", "int", descr="Number of items"),
        Option("rate", "--rate", "float", 1.0, descr="Work rate"),
        Switch("verbose", "--verbose", descr="Print more"),
    )
    record, ok = schema.scan()
    if not ok:
        schema.print_help(sys.argv[0], stderr=True)
"""
import copy
import sys

from .arguments import Kind, Option, Positional, Switch
from .faults import *
from .helps import print_help, render_help
from .records import make_record
from .scalars import parse
from .utils import *


class Schema:
    """
    Ordered argument schema.

    Construction checks
    - every argument is a Positional, Option or Switch (TypeError).
    - argument names are unique (ValueError).
    - flags are unique across options and switches (ValueError), so a token
      can never match more than one descriptor.

    Positionals keep their relative order; options and switches keep theirs
    for help listing. Counts are derived from these tuples.
    """

    arguments = mirror("arguments")
    positionals = mirror("positionals")
    options = mirror("options")
    switches = mirror("switches")
    flags = mirror("flags")
    record = mirror("record")

    def __init__(self, *arguments, name="Arguments"):
        if not isinstance(name, str):
            raise TypeError("schema 'name' must be a string")
        elif not name.isidentifier():
            raise ValueError("schema 'name' must be a valid identifier")

        names = set()
        flags = {}
        for argument in arguments:
            if not isinstance(argument, Positional | Option | Switch):
                raise TypeError("schema arguments must be positionals, options, or switches")
            if argument.name in names:
                raise ValueError(f"schema argument names cannot contain duplicates: {argument.name!r}")
            names.add(argument.name)
            if argument.kind is not Kind.REQUIRED:
                if argument.flag in flags:
                    raise ValueError(f"schema flags cannot contain duplicates: {argument.flag!r}")
                flags[argument.flag] = argument

        self._arguments = arguments
        self._positionals = tuple(x for x in arguments if x.kind is Kind.REQUIRED)
        self._options = tuple(x for x in arguments if x.kind is Kind.OPTIONAL)
        self._switches = tuple(x for x in arguments if x.kind is Kind.BOOLEAN)
        self._flags = flags
        self._record = make_record(name, arguments)

    def __repr__(self):
        return f"{type(self).__name__}({", ".join(map(repr, self._arguments))})"

    def __rich_repr__(self):
        yield from self._arguments

    def __len__(self):
        return len(self._arguments)

    def defaults(self):
        """
        Return the default-initialized record.

        Positionals hold their type zero, options their declared default,
        switches False.
        """
        return self._record()

    def _values(self, record):
        if record is Unset:
            return self.defaults()._asdict()
        if type(record) is not self._record:
            raise TypeError(f"record must be an instance of {self._record.__name__}")
        return record._asdict()

    def _scan(self, argv, values, /, **options):
        """
        Walk argv and store converted values into the values dict.

        Hard faults are raised; unknown tokens are surfaced through trigger()
        with the given options (printed in shell mode, warned otherwise).
        """
        if argv is None or isinstance(argv, str) or len(argv) == 0:
            raise InternalError("internal error: null args or argv")

        if (given := len(argv) - 1) < (required := len(self._positionals)):
            raise MissingPositionalsError(
                "not all required arguments included",
                hint="expected %d positional argument%s, got %d" % (required, "s" * (required != 1), given),
            )

        index = 1
        for argument in self._positionals:
            try:
                values[argument.name] = parse(argument.type, argv[index])
            except ValueFault as fault:
                raise copy.replace(fault, index=index, hint="check the <%s> argument" % argument.label) from None
            index += 1

        while index < len(argv):
            token = argv[index]
            argument = self._flags.get(token) if isinstance(token, str) else None

            if argument is None:
                trigger(UnknownArgumentWarning(
                    "ignoring invalid argument %r" % token,
                    index=index,
                    hint="it matches no declared option or switch",
                ), **options)
                index += 1
            elif argument.kind is Kind.BOOLEAN:
                values[argument.name] = True
                index += 1
            else:
                if index + 1 >= len(argv):
                    raise OptionValueRequiredError(
                        "option %r requires a value" % argument.flag,
                        index=index,
                        hint="pass a value after %s, e.g. %s <%s>" % (argument.flag, argument.flag, argument.label),
                    )
                try:
                    values[argument.name] = parse(argument.type, argv[index + 1])
                except ValueFault as fault:
                    raise copy.replace(fault, index=index + 1, hint="check the value of %s" % argument.flag) from None
                index += 2

        return values

    def parse(self, argv=Unset, /, record=Unset):
        """
        Scan argv (sys.argv by default) and return the populated record.

        Parameters
        - argv: sequence of strings including the program name at index 0.
        - record: optional starting record (defaults() when omitted).

        Raises
        - InternalError, MissingPositionalsError, OptionValueRequiredError,
          or a ValueFault subclass for the first hard failure.

        Warns
        - UnknownArgumentWarning for every unrecognized token.
        """
        values = self._values(record)
        self._scan(coalesce(argv, sys.argv), values, shell=False)
        return self._record(**values)

    def scan(self, argv=Unset, /, record=Unset, *, colorful=False, fancy=False):
        """
        Scan argv (sys.argv by default) and report the outcome as a boolean.

        Returns (record, True) on success. On the first hard failure the
        diagnostic is printed to stderr and (record, False) is returned; that
        record mixes defaults and the fields bound before the failure and must
        not be relied upon. Unknown tokens are printed as warnings and skipped.
        """
        argv = coalesce(argv, sys.argv)
        options = {
            "shell": True,
            "colorful": colorful,
            "fancy": fancy,
            "prog": prog(argv[0] if argv and not isinstance(argv, str) else Unset),
        }
        values = self._values(record)
        try:
            self._scan(argv, values, **options)
        except ArgumentException as fault:
            trigger(fault, **options, deferred=True)
            return self._record(**values), False
        return self._record(**values), True

    def render_help(self, exec_name, /, *, colorful=False):
        """
        Return the help text (a rich Text) for this schema.
        """
        return render_help(exec_name, self, colorful=colorful)

    def print_help(self, exec_name, /, *, colorful=False, stderr=False):
        """
        Print the help text to stdout (or stderr).
        """
        print_help(exec_name, self, colorful=colorful, stderr=stderr)


__all__ = (
    "Schema",
)
