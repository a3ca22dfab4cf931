"""
schemargs records: the typed value container generated per schema.

A record class has one read-only property per declared argument. Instances
are immutable; copy.replace(record, field=value) returns an updated copy.
Missing fields take the class defaults, so calling the class with no
arguments yields the default-initialized container.

    >>> Record = make_record("Arguments", [Positional("count", "int")])
    >>> Record()
    Arguments(count=0)
    >>> copy.replace(Record(), count=5).count
    5
"""
from types import MappingProxyType

from .utils import mirror


class RecordType(type):
    """
    Metaclass publishing every name in __fields__ as a read-only property.
    """
    __fields__ = ()

    def __new__(cls, name, bases, namespace, **options):
        return super().__new__(
            cls,
            name,
            bases,
            namespace | {name: mirror(name) for name in namespace.get("__fields__", ())},
        )


class Record(metaclass=RecordType):
    """
    Base class of generated records; not meant to be instantiated directly.

    Class attributes set by make_record()
    - __fields__: field names in declaration order.
    - __defaults__: read-only mapping of field name to default value.
    """
    __fields__ = ()
    __defaults__ = MappingProxyType({})

    def __init__(self, **values):
        fields = type(self).__fields__
        if unknown := [name for name in values if name not in fields]:
            raise TypeError(f"{type(self).__name__}() got unexpected fields: {", ".join(map(repr, unknown))}")
        for name in fields:
            object.__setattr__(self, "_" + name, values.get(name, type(self).__defaults__[name]))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__!r} object is read-only")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__!r} object is read-only")

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._asdict() == other._asdict()

    def __hash__(self):
        return hash((type(self), tuple(self._asdict().items())))

    def __repr__(self):
        return f"{type(self).__name__}({", ".join("%s=%r" % item for item in self.__rich_repr__())})"

    def __rich_repr__(self):
        for name in type(self).__fields__:
            yield name, getattr(self, name)

    def __replace__(self, /, **changes):
        return type(self)(**self._asdict() | changes)

    def _asdict(self):
        """
        Return a new dict of field name to value, in declaration order.
        """
        return {name: getattr(self, "_" + name) for name in type(self).__fields__}


def make_record(name, arguments, /):
    """
    Build a Record subclass with one field per argument descriptor.

    Each field defaults to the descriptor default: the type zero for
    positionals, the declared default for options, False for switches.
    """
    arguments = tuple(arguments)
    return RecordType(name, (Record,), {
        "__fields__": tuple(argument.name for argument in arguments),
        "__defaults__": MappingProxyType({argument.name: argument.default for argument in arguments}),
        "__module__": __name__,
    })


__all__ = (
    "Record",
    "RecordType",
    "make_record",
)
