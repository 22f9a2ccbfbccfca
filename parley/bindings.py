"""
Parley bindings: option keys → setters owned by one verb instance.

BindingTable
- a read-only Mapping from option key to a setter callable(value) where value is
  the option's string, or None when the option was given without one.
- bind(key, setter, *aliases) registers with insert-if-absent semantics: the first
  registration of a key wins, later ones are silent no-ops. Aliases let the same
  setter answer a short key and a long name ('n' and 'num').
- keys of length 1 can be grouped behind one dash (-abc); longer keys are reached
  with a double dash only (--num).

Converters
- convert(value, type) turns an option string into a typed value and reports any
  failure as ConversionError, the only fatal fault of a dispatch.
- integer(value) / decimal(value) are the common cases.

Quick example
    >>> table = BindingTable().bind("n", print, "num")
    >>> sorted(table)
    ['n', 'num']
"""
import re
from collections.abc import Mapping

from .faults import ConversionError, FaultCode, getdoc


class BindingTable(Mapping):
    """
    read-only view over the setters of a single verb.

    the table never calls its setters by itself; the dispatcher does, once per
    resolved key. there is no way to replace or remove a binding.
    """

    def __init__(self, bindings=(), /):
        self._setters = {}
        for key, setter in bindings.items() if isinstance(bindings, Mapping) else bindings:
            self.bind(key, setter)

    def bind(self, key, setter, /, *aliases):
        """
        register a setter under a key and optional aliases (first registration wins).

        returns
        - the same table, so registrations can be chained.

        raises
        - TypeError when the setter is not callable or a key is not a string.
        - ValueError when a key is empty, contains whitespace or starts with '-'.
        """
        if not callable(setter):
            raise TypeError("bind() setter must be callable")
        for name in (key, *aliases):
            if not isinstance(name, str):
                raise TypeError("bind() keys must be strings")
            if not re.fullmatch(r"[^\s-]\S*", name):
                raise ValueError("bind() key %r must be non-empty, without spaces and not start with '-'" % name)
        for name in (key, *aliases):
            self._setters.setdefault(name, setter)
        return self

    def __getitem__(self, key, /):
        return self._setters[key]

    def __iter__(self):
        return iter(self._setters)

    def __len__(self):
        return len(self._setters)

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, ", ".join(map(repr, self._setters)))

    def __rich_repr__(self):
        yield from self._setters


def convert(value, type, /):
    """
    convert an option value with 'type' (any callable taking a string).

    raises
    - ConversionError when the value is absent (None) or the converter rejects it
      with ValueError, TypeError or ArithmeticError; the original error is kept
      under the 'exception' option.
    """
    if not callable(type):
        raise TypeError("convert() second argument must be callable")
    name = getattr(type, "__name__", repr(type))

    if value is None:
        raise ConversionError(
            "a value is required to build %s" % name,
            title="missing value",
            code=FaultCode.CONVERSION_FAILURE,
            hint="pass a value right after the option (for example: --option <value>)",
            docs=getdoc(FaultCode.CONVERSION_FAILURE),
            value=value,
            type=type,
        )
    try:
        return type(value)
    except (ValueError, TypeError, ArithmeticError) as exception:
        raise ConversionError(
            "cannot convert %r to %s" % (value, name),
            title="conversion failure",
            code=FaultCode.CONVERSION_FAILURE,
            hint="check the value given to the option",
            docs=getdoc(FaultCode.CONVERSION_FAILURE),
            value=value,
            type=type,
            exception=exception,
        ) from exception


def integer(value, /):
    return convert(value, int)


def decimal(value, /):
    return convert(value, float)


__all__ = (
    "BindingTable",
    "convert",
    "integer",
    "decimal",
)
