"""Low-level scanning primitives for JSX markup and surrounding code.

The converter does not build a syntax tree. Instead it walks text spans with
two kinds of scanners:

- Code context: string literals, comments, bracket pairs and embedded markup
  are skipped as opaque units (``match_bracket``, ``top_level_matches``).
- Markup context: the text between tags is split into tokens (opening,
  self-closing and closing tags, brace expressions, literal text) by
  ``iter_markup_tokens``. Tag depth is counted explicitly; brace depth is
  tracked by jumping over each balanced ``{...}`` expression, so a ``<`` or
  ``>`` inside an expression is never mistaken for a tag boundary.

``split_children`` and ``element_end`` are built on the markup tokenizer and
are the primitives the lowering engine relies on.
"""

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Pattern, Tuple

from .errors import MarkupSyntaxError

QUOTES = "'\"`"
BRACKET_PAIRS = {'{': '}', '(': ')', '[': ']'}

TAG_NAME_RE = re.compile(r'[A-Za-z_$][\w$.:-]*')

# Characters after which a '<' in code starts markup rather than a comparison
_MARKUP_PRECEDERS = "([=,{:?;!&|%^+-*/~<>"

TOKEN_TEXT = "text"
TOKEN_EXPR = "expr"
TOKEN_OPEN = "open"
TOKEN_SELF_CLOSING = "self_closing"
TOKEN_CLOSE = "close"


@dataclass
class MarkupToken:
    """One token of markup-context text.

    Attributes:
        kind: One of the TOKEN_* constants
        start: Offset of the first character
        end: Offset one past the last character
        name: Tag name for tag tokens ("" for fragments)
    """
    kind: str
    start: int
    end: int
    name: str = ""


def skip_string(text: str, pos: int) -> int:
    """Return the offset just past the string literal starting at ``pos``.

    Template literals may contain ``${...}`` substitutions with nested
    strings. An unterminated literal runs to the end of the text.
    """
    quote = text[pos]
    i = pos + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '\\':
            i += 2
            continue
        if ch == quote:
            return i + 1
        if quote == '`' and ch == '$' and i + 1 < n and text[i + 1] == '{':
            end = match_bracket(text, i + 1)
            if end is None:
                return n
            i = end
            continue
        i += 1
    return n


def skip_comment(text: str, pos: int) -> Optional[int]:
    """Return the offset past a comment starting at ``pos``, or None."""
    if text.startswith('//', pos):
        newline = text.find('\n', pos)
        return len(text) if newline == -1 else newline
    if text.startswith('/*', pos):
        end = text.find('*/', pos + 2)
        return len(text) if end == -1 else end + 2
    return None


def is_markup_start(text: str, pos: int) -> bool:
    """Decide whether the ``<`` at ``pos`` in code context opens markup.

    A comparison (``a < b``) or a type argument (``useState<string>``)
    follows an identifier or has whitespace after it; markup follows an
    operator, an opening bracket, ``return`` or the start of the text.
    """
    if pos + 1 >= len(text) or text[pos] != '<':
        return False
    next_char = text[pos + 1]
    if not (next_char.isalpha() or next_char in '_$>'):
        return False
    j = pos - 1
    while j >= 0 and text[j] in ' \t\r\n':
        j -= 1
    if j < 0:
        return True
    prev_char = text[j]
    if prev_char in _MARKUP_PRECEDERS:
        return True
    if prev_char.isalnum() or prev_char in '_$':
        k = j
        while k >= 0 and (text[k].isalnum() or text[k] in '_$'):
            k -= 1
        return text[k + 1:j + 1] == 'return'
    return False


def match_bracket(text: str, pos: int) -> Optional[int]:
    """Return the offset just past the bracket matching the one at ``pos``.

    Works in code context: strings, comments and embedded markup are
    skipped. Returns None when the bracket is never closed.
    """
    opener = text[pos]
    closer = BRACKET_PAIRS[opener]
    depth = 0
    i = pos
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in QUOTES:
            i = skip_string(text, i)
            continue
        if ch == '/':
            comment_end = skip_comment(text, i)
            if comment_end is not None:
                i = comment_end
                continue
        if ch == '<' and is_markup_start(text, i):
            try:
                end = element_end(text, i)
            except MarkupSyntaxError:
                end = None
            if end is not None:
                i = end
                continue
        if ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return None


def match_opening_bracket(text: str, pos: int) -> Optional[int]:
    """Return the offset of the bracket opening the one that closes at ``pos``.

    Counts brackets only; callers pass code whose literals are already
    skipped or blanked.
    """
    depth = 0
    for i in range(pos, -1, -1):
        ch = text[i]
        if ch in ')]}':
            depth += 1
        elif ch in '([{':
            depth -= 1
            if depth == 0:
                return i
    return None


def contains_markup(text: str) -> bool:
    """True when code ``text`` embeds an element outside strings and comments."""
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in QUOTES:
            i = skip_string(text, i)
            continue
        if ch == '/':
            comment_end = skip_comment(text, i)
            if comment_end is not None:
                i = comment_end
                continue
        if ch == '<' and is_markup_start(text, i):
            return True
        i += 1
    return False


def top_level_matches(text: str, pattern: Pattern, start: int = 0) -> Iterator[re.Match]:
    """Yield matches of ``pattern`` that start outside any bracket, string or markup."""
    i = start
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in QUOTES:
            i = skip_string(text, i)
            continue
        if ch == '/':
            comment_end = skip_comment(text, i)
            if comment_end is not None:
                i = comment_end
                continue
        if ch in BRACKET_PAIRS:
            end = match_bracket(text, i)
            i = n if end is None else end
            continue
        if ch == '<' and is_markup_start(text, i):
            try:
                end = element_end(text, i)
            except MarkupSyntaxError:
                end = None
            if end is not None:
                i = end
                continue
        match = pattern.match(text, i)
        if match:
            yield match
            i = max(match.end(), i + 1)
            continue
        i += 1


def split_top_level(text: str, separators: str = ',') -> List[str]:
    """Split code on separators that sit outside brackets and strings.

    Empty pieces are dropped; pieces are stripped.
    """
    pieces = []
    start = 0
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in QUOTES:
            i = skip_string(text, i)
            continue
        if ch in BRACKET_PAIRS:
            end = match_bracket(text, i)
            i = n if end is None else end
            continue
        if ch in separators:
            pieces.append(text[start:i])
            start = i + 1
        i += 1
    pieces.append(text[start:])
    return [piece.strip() for piece in pieces if piece.strip()]


def read_tag_name(text: str, pos: int) -> str:
    """Return the tag name of the tag opening at ``pos`` ("" for fragments)."""
    match = TAG_NAME_RE.match(text, pos + 1)
    return match.group(0) if match else ""


def scan_tag_end(text: str, pos: int) -> Tuple[int, bool]:
    """Find the end of the opening tag at ``pos``.

    Attribute strings and brace-delimited attribute values may contain
    ``>``; they are skipped.

    Returns:
        (offset just past ``>``, whether the tag is self-closing)

    Raises:
        MarkupSyntaxError: If the tag never reaches its ``>``
    """
    name = read_tag_name(text, pos)
    i = pos + 1 + len(name)
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in '"\'':
            i = skip_string(text, i)
            continue
        if ch == '{':
            end = match_bracket(text, i)
            if end is None:
                raise MarkupSyntaxError(f"Unclosed attribute expression in <{name}>", i)
            i = end
            continue
        if ch == '>':
            return i + 1, text[i - 1] == '/'
        i += 1
    raise MarkupSyntaxError(f"Unterminated tag <{name}", pos)


def iter_markup_tokens(text: str, start: int = 0) -> Iterator[MarkupToken]:
    """Tokenize markup-context text starting at ``start``.

    Raises:
        MarkupSyntaxError: On an unterminated tag or an unclosed expression
    """
    i = start
    n = len(text)
    text_start = i
    while i < n:
        ch = text[i]
        if ch == '{':
            if i > text_start:
                yield MarkupToken(TOKEN_TEXT, text_start, i)
            end = match_bracket(text, i)
            if end is None:
                raise MarkupSyntaxError("Unclosed expression in markup", i)
            yield MarkupToken(TOKEN_EXPR, i, end)
            i = text_start = end
            continue
        if ch == '<' and i + 1 < n and (text[i + 1].isalpha() or text[i + 1] in '/>_$'):
            if i > text_start:
                yield MarkupToken(TOKEN_TEXT, text_start, i)
            if text[i + 1] == '/':
                close = text.find('>', i)
                if close == -1:
                    raise MarkupSyntaxError("Unterminated closing tag", i)
                yield MarkupToken(TOKEN_CLOSE, i, close + 1, text[i + 2:close].strip())
                i = text_start = close + 1
                continue
            name = read_tag_name(text, i)
            end, self_closing = scan_tag_end(text, i)
            kind = TOKEN_SELF_CLOSING if self_closing else TOKEN_OPEN
            yield MarkupToken(kind, i, end, name)
            i = text_start = end
            continue
        i += 1
    if n > text_start:
        yield MarkupToken(TOKEN_TEXT, text_start, n)


def element_end(text: str, pos: int) -> Optional[int]:
    """Return the offset just past the element whose opening tag is at ``pos``.

    Nested tags of any name are counted, so ``<div><div></div></div>``
    matches the outer closing tag. Returns None when the element is never
    closed or is closed by a tag with a different name.

    Raises:
        MarkupSyntaxError: If a tag inside the element is unterminated
    """
    depth = 0
    opening_name = None
    for token in iter_markup_tokens(text, pos):
        if opening_name is None:
            if token.kind == TOKEN_SELF_CLOSING:
                return token.end
            if token.kind != TOKEN_OPEN:
                return None
            opening_name = token.name
            depth = 1
            continue
        if token.kind == TOKEN_OPEN:
            depth += 1
        elif token.kind == TOKEN_CLOSE:
            depth -= 1
            if depth == 0:
                return token.end if token.name == opening_name else None
    return None


def split_children(text: str) -> List[str]:
    """Split a children span into top-level sibling units.

    A unit is a complete element (matched at tag depth zero), a brace
    expression, or a run of non-blank literal text. An element left open at
    the end of the span becomes one unit with everything after it.

    Example:
        >>> split_children('<p>a</p>{items.map(x => <span>{x}</span>)}<br/>')
        ['<p>a</p>', '{items.map(x => <span>{x}</span>)}', '<br/>']
    """
    units: List[str] = []
    depth = 0
    unit_start = 0
    for token in iter_markup_tokens(text):
        if depth == 0:
            if token.kind == TOKEN_OPEN:
                unit_start = token.start
                depth = 1
                continue
            chunk = text[token.start:token.end].strip()
            if chunk:
                units.append(chunk)
            continue
        if token.kind == TOKEN_OPEN:
            depth += 1
        elif token.kind == TOKEN_CLOSE:
            depth -= 1
            if depth == 0:
                units.append(text[unit_start:token.end].strip())
    if depth > 0:
        units.append(text[unit_start:].strip())
    return units
