"""Split a raw Received value into its routing info and date clause.

The value is classified with a small tokenizer that knows four token classes:
atoms, quoted strings, bracketed domain literals and parenthetical comments
(nested at most one level). The structural separator is the last top-level
``;``. Anything the tokenizer cannot classify makes the whole split
untrustworthy, so the caller gets an ``Unstructured`` outcome instead.
"""
import re
from dataclasses import dataclass
from typing import List, Optional, Union

QUOTES = '"\''
# a quote only opens a quoted string at the start of a token; inside a word
# the apostrophe is plain atext, as in <o'brien@example.com>
ATOM_CHARS = set(
    'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789'
    "!#$%&'*+-/=?^_`{|}~"
    '.,@<>'  # specials that show up unquoted in trace lines
)
TIME_RE = re.compile(r'\d{1,2}:\d{2}(?::\d{2})?')
# a comment may hold one nested comment, nothing deeper
MAX_COMMENT_DEPTH = 2


def _is_atom_char(ch: str) -> bool:
    # non-ASCII is let through as in RFC 6532 internationalized headers
    # backslash is not here: escapes are only meaningful inside quotes and comments
    return ch in ATOM_CHARS or ch == ':' or (ord(ch) > 127 and not ch.isspace())


class GrammarError(ValueError):
    """Raised when a substring fits none of the token classes."""


@dataclass(frozen=True)
class Structured:
    info: str
    date_clause: str


@dataclass(frozen=True)
class Unstructured:
    raw: str


SplitOutcome = Union[Structured, Unstructured]


@dataclass(frozen=True)
class Token:
    kind: str  # 'atom', 'time', 'quoted', 'literal', 'comment', 'semicolon'
    start: int
    end: int


def _scan_quoted(text: str, i: int) -> int:
    quote = text[i]
    i += 1
    while i < len(text):
        ch = text[i]
        if ch == '\\':
            i += 2
            continue
        if ch == quote:
            return i + 1
        i += 1
    raise GrammarError(f'unterminated quoted string at {i}')


def _scan_literal(text: str, i: int) -> int:
    end = text.find(']', i + 1)
    if end == -1:
        raise GrammarError(f'unterminated domain literal at {i}')
    body = text[i + 1:end]
    if '[' in body or '\\' in body:
        raise GrammarError(f'malformed domain literal at {i}')
    return end + 1


def _scan_comment(text: str, i: int) -> int:
    depth = 0
    while i < len(text):
        ch = text[i]
        if ch == '\\':
            i += 2
            continue
        if ch == '(':
            depth += 1
            if depth > MAX_COMMENT_DEPTH:
                raise GrammarError(f'comment nested too deeply at {i}')
        elif ch == ')':
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    raise GrammarError('unterminated comment')


def _scan_atom(text: str, i: int) -> Token:
    start = i
    while i < len(text) and _is_atom_char(text[i]):
        i += 1
    word = text[start:i]
    if ':' not in word:
        return Token('atom', start, i)
    # colons are only meaningful inside a time of day
    if TIME_RE.fullmatch(word):
        return Token('time', start, i)
    raise GrammarError(f'unexpected colon in {word!r}')


def tokenize(text: str) -> List[Token]:
    """Classify ``text`` into tokens, raising GrammarError on anything else."""
    tokens = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch.isspace():
            i += 1
            continue
        if ch in QUOTES:
            end = _scan_quoted(text, i)
            tokens.append(Token('quoted', i, end))
        elif ch == '[':
            end = _scan_literal(text, i)
            tokens.append(Token('literal', i, end))
        elif ch == '(':
            end = _scan_comment(text, i)
            tokens.append(Token('comment', i, end))
        elif ch == ';':
            end = i + 1
            tokens.append(Token('semicolon', i, end))
        elif _is_atom_char(ch):
            tok = _scan_atom(text, i)
            tokens.append(tok)
            end = tok.end
        else:
            raise GrammarError(f'unexpected character {ch!r} at {i}')
        i = end
    return tokens


def split_value(raw: str) -> SplitOutcome:
    """Return ``Structured(info, date_clause)`` or ``Unstructured(raw)``."""
    text = raw.strip()
    if not text:
        return Structured('', '')
    try:
        tokens = tokenize(text)
    except GrammarError:
        return Unstructured(raw)

    separators = [t for t in tokens if t.kind == 'semicolon']
    if not separators:
        return Structured(text, '')
    last = separators[-1]
    return Structured(text[:last.start].strip(), text[last.end:].strip())


def _trailing_comment_start(text: str) -> Optional[int]:
    """Index of a top-level comment that ends ``text``, if there is one.

    Unlike tokenize() this scan does not reject unclassifiable atoms, so it
    also works on values that fell through to the fallback path.
    """
    i = 0
    start = None
    while i < len(text):
        ch = text[i]
        opened_at = i
        try:
            if ch == '"' or (ch == "'" and (i == 0 or not _is_atom_char(text[i - 1]))):
                i = _scan_quoted(text, i)
            elif ch == '[':
                i = text.index(']', i + 1) + 1
            elif ch == '(':
                i = _scan_comment(text, i)
            else:
                i += 1
        except ValueError:
            # GrammarError included: nothing can be trusted to be trailing
            return None
        start = opened_at if ch == '(' else None
    return start


def strip_trailing_comment(raw: str) -> str:
    """Remove one trailing top-level comment, e.g. the ``(GMT)`` after a date."""
    text = raw.strip()
    start = _trailing_comment_start(text)
    if start is None:
        return raw
    return text[:start].rstrip()
