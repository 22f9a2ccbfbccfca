"""
Parley option resolver: tokens → {key: value | None}.

Forms
- long:  '--name value' or '--name' (exact key, any length).
- short: '-x value', '-x', or a group '-abc value' where every character but the
  last is a bare flag and only the last one may take the following token.
- a value is the next token when it does not start with '-'; otherwise the
  option resolves to None (a boolean/no-argument toggle).

Leniency (never raises on content)
- tokens that are neither options nor consumed values are dropped.
- a value-eligible option at the end of input resolves to None.
- when a key repeats, the first occurrence wins; later ones are discarded
  along with any value they consumed.
- a bare '-' names nothing and consumes nothing; a bare '--' names the empty key.

Quick examples
    >>> dict(resolve(("-sn", "20", "--text", "words")))
    {'s': None, 'n': '20', 'text': 'words'}
    >>> dict(resolve(("-abc",)))
    {'a': None, 'b': None, 'c': None}
"""
from collections.abc import Iterable
from types import MappingProxyType

from .tokens import tokenize


def _takes(tokens, index):
    """
    tell whether the token after 'index' can be consumed as a value.
    """
    return index + 1 < len(tokens) and not tokens[index + 1].startswith("-")


def resolve(tokens, /):
    """
    classify tokens (verb already removed) into a read-only option mapping.

    parameters
    - tokens: Iterable[str]
      logical tokens as produced by parley.tokens.link().

    returns
    - MappingProxyType[str, str | None] in resolution order.

    raises
    - TypeError when tokens is not an iterable of strings (a bare string included).
    """
    if isinstance(tokens, str) or not isinstance(tokens, Iterable):
        raise TypeError("resolve() argument must be an iterable of strings")
    tokens = tuple(tokens)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("resolve() argument must be an iterable of strings")

    options = {}
    index = 0
    while index < len(tokens):
        token = tokens[index]

        if token.startswith("--"):
            key = token[2:]
        elif token.startswith("-") and (body := token[1:]):
            for key in body[:-1]:
                options.setdefault(key, None)
            key = body[-1]
        else:
            # stray value or bare '-'
            index += 1
            continue

        if _takes(tokens, index):
            options.setdefault(key, tokens[index + 1])
            index += 1
        else:
            options.setdefault(key, None)
        index += 1

    return MappingProxyType(options)


def parse(line, /):
    """
    tokenize a raw line (verb already stripped) and resolve its options.
    """
    return resolve(tokenize(line))


__all__ = (
    "resolve",
    "parse",
)
