"""
Parley verbs: the command contract and the dispatcher.

Verb
- abstract base for user commands. A verb exposes three capabilities:
  • help: a short help text (explicit, else the class docstring, else a default).
  • bindings: its own BindingTable, filled once while the verb is being built.
  • __call__(): the action, run once per dispatch, returning a result string.
- a verb instance is built fresh for every line so no option value can leak
  from one invocation into the next.

dispatch(options, verb, notify=Unset)
- applies a resolved option mapping to the verb's bindings, then runs its action.
- unknown keys are collected (and announced through notify) but never stop the run.
- a failing setter stops the dispatch with ConversionError; whatever was applied
  before it stays applied and the action does not run.

Quick example
    >>> class Echo(Verb):
    ...     '''repeat a text'''
    ...     def __init__(self):
    ...         super().__init__()
    ...         self.text = ""
    ...         self.bind("t", self.say, "text")
    ...     def say(self, value):
    ...         self.text = value
    ...     def __call__(self):
    ...         return self.text
    >>> dispatch({"t": "hi", "x": None}, Echo())
    Outcome(result='hi', unknowns=('x',))
"""
import copy
import inspect
from abc import ABC, abstractmethod
from collections import namedtuple
from collections.abc import Mapping

from .bindings import BindingTable
from .faults import ConversionError, FaultCode, UnknownOptionWarning, getdoc
from .utils import Unset, coalesce

Outcome = namedtuple("Outcome", ("result", "unknowns"))
Outcome.__doc__ = """
result of one dispatch: the action's result string and the unknown keys, in order.
"""


class Verb(ABC):
    """
    base type of every user command; subclasses bind their setters in __init__
    and implement __call__. the subclass docstring doubles as its help text.
    """
    __fallback__ = "This action does not include any help documentation."

    def __init__(self, help=Unset, /):
        if not isinstance(help, str | Unset):
            raise TypeError("%s help must be a string" % type(self).__name__)
        # __doc__ is never inherited, so a subclass without docstring gets None here
        document = type(self).__doc__
        self.help = coalesce(help, inspect.cleandoc(document) if document else self.__fallback__)
        self._bindings = BindingTable()

    @property
    def bindings(self):
        """
        the verb's BindingTable (read-only mapping; extend it with bind()).
        """
        return self._bindings

    def bind(self, key, setter, /, *aliases):
        """
        register a setter on this verb's table (first registration wins) and return the verb.
        """
        self._bindings.bind(key, setter, *aliases)
        return self

    @abstractmethod
    def __call__(self):
        """
        run the action with the values set so far and return the result string.
        """

    def __repr__(self):
        return "<%s verb bindings=%s>" % (type(self).__name__, list(self._bindings))


def _spelling(key):
    return ("-" if len(key) == 1 else "--") + key


def dispatch(options, verb, /, notify=Unset):
    """
    apply resolved options to a verb's bindings and run its action exactly once.

    parameters
    - options: Mapping[str, str | None], as returned by parley.options.resolve().
    - verb: Verb, freshly built for this line.
    - notify: callable(UnknownOptionWarning) | Unset
      called once per unknown key, before the action runs.

    returns
    - Outcome(result, unknowns)

    raises
    - ConversionError when a setter fails (the failing key is attached as 'key';
      errors that are not ConversionError are wrapped and kept as 'exception').
    - TypeError on bad arguments or when the action does not return a string.
    """
    if not isinstance(options, Mapping):
        raise TypeError("dispatch() first argument must be a mapping")
    if not isinstance(verb, Verb):
        raise TypeError("dispatch() second argument must be a verb")
    if notify is not Unset and not callable(notify):
        raise TypeError("dispatch() notify must be callable")

    unknowns = []
    for key, value in options.items():
        try:
            setter = verb.bindings[key]
        except KeyError:
            unknowns.append(key)
            if notify is not Unset:
                notify(UnknownOptionWarning(
                    "no %r option found" % _spelling(key),
                    title="unknown option",
                    code=FaultCode.UNKNOWN_OPTION,
                    hint="the option was skipped; see the verb's help for the options it accepts",
                    docs=getdoc(FaultCode.UNKNOWN_OPTION),
                    key=key,
                    verb=verb,
                ))
            continue

        try:
            setter(value)
        except ConversionError as fault:
            raise copy.replace(fault, key=key, verb=verb) from fault
        except Exception as exception:
            raise ConversionError(
                "option %r rejected value %r" % (_spelling(key), value),
                title="conversion failure",
                code=FaultCode.CONVERSION_FAILURE,
                hint="check the value given to %s" % _spelling(key),
                docs=getdoc(FaultCode.CONVERSION_FAILURE),
                key=key,
                verb=verb,
                value=value,
                exception=exception,
            ) from exception

    result = verb()
    if not isinstance(result, str):
        raise TypeError("%s action must return a string, not %s" % (type(verb).__name__, type(result).__name__))
    return Outcome(result, tuple(unknowns))


__all__ = (
    "Verb",
    "Outcome",
    "dispatch",
)
