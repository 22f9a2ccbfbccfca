r"""
Parley tokenizer: whitespace words → logical tokens.

Grammar
- a line is split on whitespace into words (never empty).
- a word starting with a quote (" or ') opens a quoted span; the span keeps
  absorbing the following words, joined by single spaces, until a word ends
  with the same quote character that is not escaped (\" or \').
- escaped quotes are unescaped in every token, whatever delimiter opened it.

Leniency
- an unterminated span silently extends to the last word of the line (every
  absorbed word keeps its trailing separator); it is never reported.
- spans that end up empty (e.g. "" or '') are dropped.
- runs of whitespace inside a span collapse to one space, since the span is
  rebuilt from words.

Quick examples
    >>> tokenize('-t "two words" -n 5')
    ('-t', 'two words', '-n', '5')
    >>> tokenize(r'--say "a \"quoted\" word"')
    ('--say', 'a "quoted" word')
    >>> quote('a "quoted" word')
    '"a \\"quoted\\" word"'
"""
from collections.abc import Iterable

QUOTES = ('"', "'")


def _closes(word, delimiter):
    """
    tell whether a word ends a span opened by 'delimiter' (unescaped trailing quote).
    """
    return word.endswith(delimiter) and not word.endswith("\\" + delimiter)


def _unescape(token):
    return token.replace('\\"', '"').replace("\\'", "'")


def link(words, /):
    """
    join quoted spans of whitespace-split words into logical tokens.

    behavior
    - a word that does not start with a quote becomes a token verbatim.
    - a word starting with a quote opens a span: the quote is stripped and
      following words are appended (space separated) until one closes the span;
      that word is appended without its closing quote.
    - the opening word closes its own span when, with its leading quote
      stripped, it still ends with the same unescaped quote ("word" → word).
    - empty tokens are dropped, then \" and \' are replaced with bare quotes.

    returns
    - tuple[str, ...] of non-empty tokens, in input order.

    raises
    - TypeError when words is not an iterable of strings (a bare string included).
    """
    if isinstance(words, str) or not isinstance(words, Iterable):
        raise TypeError("link() argument must be an iterable of strings")
    words = list(words)
    if not all(isinstance(word, str) for word in words):
        raise TypeError("link() argument must be an iterable of strings")

    tokens = []
    index = 0
    while index < len(words):
        word = words[index]
        index += 1

        if word[:1] not in QUOTES:
            tokens.append(word)
            continue

        delimiter, head = word[0], word[1:]
        if _closes(head, delimiter):
            tokens.append(head[:-1])
            continue

        buffer = [head, " "]
        while index < len(words):
            word = words[index]
            index += 1
            if _closes(word, delimiter):
                buffer.append(word[:-1])
                break
            buffer.extend((word, " "))
        tokens.append("".join(buffer))

    return tuple(_unescape(token) for token in tokens if token)


def tokenize(line, /):
    """
    split a raw line on whitespace and link its quoted spans (see link()).
    """
    if not isinstance(line, str):
        raise TypeError("tokenize() argument must be a string")
    return link(line.split())


def quote(token, /, delimiter='"'):
    """
    render a token back as a quoted literal, escaping the delimiter inside it.

    for a span written with single spaces and only escaped occurrences of its
    own delimiter, quote(token) reproduces the literal that was tokenized.
    """
    if not isinstance(token, str):
        raise TypeError("quote() argument must be a string")
    if delimiter not in QUOTES:
        raise ValueError("quote() delimiter must be one of %s" % ", ".join(map(repr, QUOTES)))
    return delimiter + token.replace(delimiter, "\\" + delimiter) + delimiter


__all__ = (
    "QUOTES",
    "link",
    "tokenize",
    "quote",
)
