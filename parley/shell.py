"""
Parley shell: the read-evaluate-print loop around the interpreter core.

What this module provides
- Shell: owns the verb registry (name → factory), the reserved 'help' and 'exit'
  built-ins, the prompt, and the printing of results and faults.

Line flow
- the first word of a line picks the verb; the rest is tokenized and resolved
  into options (see parley.tokens, parley.options).
- a fresh verb is built from its factory for every line, its options are
  dispatched (see parley.verbs.dispatch) and the result string is printed.
- unknown options are announced as warnings and the verb still runs; a conversion
  failure or an unknown verb is rendered and the prompt comes back.

Built-ins
- 'help'          → the shell's help text.
- 'help <verb>'   → that verb's help text ('<verb> not recognized.' when unknown).
- 'exit'          → leaves run().
Both names are reserved: registering them (in any case) raises ValueError.

Quick start
    from parley import Shell, Verb, integer

    shell = Shell("demo", "A small demo shell.")

    @shell.verb
    class Count(Verb):
        '''count up to --to (or -t)'''
        def __init__(self):
            super().__init__()
            self.to = 3
            self.bind("t", self.limit, "to")

        def limit(self, value):
            self.to = integer(value)

        def __call__(self):
            return " ".join(map(str, range(1, self.to + 1)))

    shell.run()  # demo#: count -t 5  →  1 2 3 4 5
"""
import difflib
import re
from collections.abc import Mapping
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

from .faults import FaultCode, ParleyException, UnknownVerbError, getdoc, trigger
from .options import resolve
from .tokens import link
from .utils import Unset, coalesce, rename
from .verbs import Verb, dispatch


class Shell:
    """
    interactive host for a set of verbs.

    parameters
    - name: str, shown before the prompt marker ('<name>#: ').
    - help: str | Unset, text answered by a bare 'help'.
    - verbs: Mapping[str, factory] | Iterable[(str, factory)], registered through add().
    - console: rich Console used for the prompt, results and rendered faults.
    - reader: callable(prompt) -> str used to read a line (defaults to the console).
    - fancy / colorful: runtime flags forwarded to fault rendering.
    """
    __reserved__ = ("help", "exit")
    __fallback__ = "There is no help documentation available for this shell interface."

    def __init__(
            self,
            name="",
            help=Unset,
            /,
            verbs=(),
            *,
            console=Unset,
            reader=Unset,
            fancy=False,
            colorful=False
    ):
        if not isinstance(name, str):
            raise TypeError("Shell name must be a string")
        if not isinstance(help, str | Unset):
            raise TypeError("Shell help must be a string")
        if reader is not Unset and not callable(reader):
            raise TypeError("Shell reader must be callable")

        self.name = name
        self.help = coalesce(help, self.__fallback__)
        self.console = coalesce(console, Console(highlight=False))
        self.reader = coalesce(reader, self._read)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)
        self._verbs = {}

        for key, factory in verbs.items() if isinstance(verbs, Mapping) else verbs:
            self.add(key, factory)

    @property
    def verbs(self):
        """
        read-only view of the registry (name → factory).
        """
        return MappingProxyType(self._verbs)

    def add(self, name, factory, /):
        """
        register a verb factory under a name if the name is still free.

        returns
        - the same shell, so registrations can be chained.

        raises
        - TypeError when name is not a string or factory is not callable.
        - ValueError when name is empty, has whitespace, or is reserved ('help'/'exit', any case).
        """
        if not isinstance(name, str):
            raise TypeError("verb name must be a string")
        if not re.fullmatch(r"\S+", name):
            raise ValueError("verb name %r must be a single non-empty word" % name)
        if name.lower() in self.__reserved__:
            raise ValueError("help and exit are reserved verbs!")
        if not callable(factory):
            raise TypeError("verb factory for %r must be callable" % name)
        self._verbs.setdefault(name, factory)
        return self

    def verb(self, name=Unset, /):
        """
        decorator form of add(): @shell.verb or @shell.verb("name").

        the default name is the lowercased __name__ of the decorated factory.
        the decorated object is returned unchanged.
        """
        @rename("verb")
        def wrapper(factory, /):
            if not callable(factory):
                raise TypeError("@verb() must be applied to a callable")
            self.add(coalesce(name, getattr(factory, "__name__", "").lower()), factory)
            return factory

        if callable(name):
            factory, name = name, Unset
            return wrapper(factory)
        return wrapper

    def describe(self, name=Unset, /):
        """
        answer the 'help' built-in: the shell's help, a verb's help, or a not-recognized note.
        """
        if name is Unset:
            return self.help
        try:
            factory = self._verbs[name]
        except KeyError:
            return "%s not recognized." % name
        return factory().help

    def evaluate(self, line, /):
        """
        run one line and return its result string.

        raises
        - UnknownVerbError when the first word is not a registered verb.
        - ConversionError when one of the verb's setters fails.
        - TypeError when a factory does not build a Verb.
        """
        if not isinstance(line, str):
            raise TypeError("evaluate() argument must be a string")
        words = line.split()
        if not words:
            return ""

        name, *words = words
        if name == "help":
            return self.describe(*words[:1])
        if name == "exit":
            # leaving the loop is step()'s job
            return ""

        try:
            factory = self._verbs[name]
        except KeyError:
            suggestions = difflib.get_close_matches(name, self._verbs.keys(), 5)
            try:
                hint = "did you mean %r? you can also run 'help' to see the shell help" % suggestions[0]
            except IndexError:
                hint = "run 'help' to see the shell help"
            raise UnknownVerbError(
                "%s is not a known command." % name,
                title="unknown verb",
                code=FaultCode.UNKNOWN_VERB,
                hint=hint,
                docs=getdoc(FaultCode.UNKNOWN_VERB),
                verb=name,
                suggestions=suggestions,
            ) from None

        verb = factory()
        if not isinstance(verb, Verb):
            raise TypeError("verb factory for %r must build a verb" % name)
        return dispatch(resolve(link(words)), verb, notify=self.trigger).result

    def step(self, line, /):
        """
        one prompt cycle; returns False when the loop should stop ('exit').
        """
        words = line.split()
        if not words:
            return True
        if words[0] == "exit":
            return False
        try:
            output = self.evaluate(line)
        except ParleyException as fault:
            self.trigger(fault)
            return True
        self.console.print(output, markup=False, highlight=False)
        return True

    def run(self):
        """
        prompt, read and evaluate lines until 'exit' or the end of input.
        """
        while True:
            try:
                line = self.reader("%s#: " % self.name)
            except EOFError:
                break
            if not self.step(line):
                break

    def trigger(self, fault, /, **options):
        """
        render a fault on this shell's console with the shell's runtime flags.
        """
        trigger(
            fault,
            **options,
            tool=self,
            shell=True,
            fancy=self.fancy,
            colorful=self.colorful,
            console=self.console
        )

    def _read(self, prompt):
        return self.console.input(Text(prompt))

    def __repr__(self):
        return "<Shell %r verbs=%s>" % (self.name, list(self._verbs))


__all__ = (
    "Shell",
)
