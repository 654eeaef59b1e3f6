"""Reference rewriter.

Qualifies identifiers that name props, state or state accessors as member
accesses on the enclosing instance (``count`` -> ``this.count``).

Only code is rewritten: string literals and comments pass through as
written, while the ``${...}`` substitutions of template literals are
treated as code. Names rebound locally (arrow and function parameters,
``const``/``let``/``var`` declarations, destructuring patterns included)
are left alone inside the binding's scope. Every pass skips text that is
already qualified, so ``qualify(qualify(x)) == qualify(x)``.

The passes never edit text directly. They run over a masked copy of the
input, the same length as the original, in which string contents and
comments are blanked, and return (start, end, replacement) edits that are
applied to the original in one sweep.
"""

import re
from typing import FrozenSet, Iterable, List, Mapping, Optional, Set, Tuple, Union

from .mappings import NON_SETTER_GLOBALS
from .markup_scanner import (
    match_bracket,
    match_opening_bracket,
    skip_comment,
    skip_string,
    split_top_level,
)

PROPS_ACCESS_RE = re.compile(r'(?<![\w$])props\.')
SETTER_CALL_RE = re.compile(r'(?<![\w$])(set[A-Z][\w$]*)(?=\s*\()')
DECLARATION_RE = re.compile(r'\b(?:const|let|var|function|class)\s+$')
ARROW_TOKEN_RE = re.compile(r'=>')
VARIABLE_DECLARATION_RE = re.compile(r'(?<![\w$.])(?:const|let|var)\s+')
LOOP_HEADER_RE = re.compile(r'(?<![\w$.])for\s*\(\s*$')
FUNCTION_PARAMS_RE = re.compile(r'(?<![\w$.])function\b\s*\*?\s*[\w$]*\s*(?=\()')
IDENTIFIER_RE = re.compile(r'[A-Za-z_$][\w$]*')

PropNames = Union[Mapping[str, str], Iterable[str]]
Edit = Tuple[int, int, str]
Scope = Tuple[int, int, FrozenSet[str]]


def _blank(chars: List[str], start: int, end: int) -> None:
    for k in range(start, end):
        if chars[k] != '\n':
            chars[k] = ' '


def _mask_literals(text: str) -> str:
    """Return ``text`` with string contents and comments blanked.

    Quotes are kept. Template substitutions stay visible as code, with
    ``${`` and ``}`` shown as parentheses so they never read as object braces.
    """
    chars = list(text)
    _mask_range(text, chars, 0, len(text))
    return ''.join(chars)


def _mask_range(text: str, chars: List[str], start: int, end: int) -> None:
    i = start
    while i < end:
        ch = text[i]
        if ch in '"\'':
            close = min(skip_string(text, i), end)
            closed = close - 1 > i and text[close - 1] == ch
            _blank(chars, i + 1, close - 1 if closed else close)
            i = close
            continue
        if ch == '`':
            i = _mask_template(text, chars, i, end)
            continue
        if ch == '/':
            comment_end = skip_comment(text, i)
            if comment_end is not None:
                _blank(chars, i, min(comment_end, end))
                i = comment_end
                continue
        i += 1


def _mask_template(text: str, chars: List[str], pos: int, end: int) -> int:
    i = pos + 1
    literal_start = i
    while i < end:
        ch = text[i]
        if ch == '\\':
            i += 2
            continue
        if ch == '`':
            _blank(chars, literal_start, i)
            return i + 1
        if ch == '$' and i + 1 < end and text[i + 1] == '{':
            close = match_bracket(text, i + 1)
            if close is None or close > end:
                break
            _blank(chars, literal_start, i)
            chars[i] = ' '
            chars[i + 1] = '('
            chars[close - 1] = ')'
            _mask_range(text, chars, i + 2, close - 1)
            literal_start = i = close
            continue
        i += 1
    _blank(chars, literal_start, end)
    return end


def _expression_end(code: str, pos: int, stop: str = ',;') -> int:
    """Offset of the first unmatched closer (or top-level ``stop`` char) from ``pos``."""
    depth = 0
    for i in range(pos, len(code)):
        ch = code[i]
        if ch in '([{':
            depth += 1
        elif ch in ')]}':
            if depth == 0:
                return i
            depth -= 1
        elif ch in stop and depth == 0:
            return i
    return len(code)


def _strip_default(element: str) -> str:
    depth = 0
    for i, ch in enumerate(element):
        if ch in '([{':
            depth += 1
        elif ch in ')]}':
            depth -= 1
        elif (ch == '=' and depth == 0
              and element[i + 1:i + 2] not in ('=', '>')
              and element[i - 1:i] not in ('=', '!', '<', '>')):
            return element[:i]
    return element


def _pattern_names(pattern: str) -> Set[str]:
    """Names bound by a parameter list or destructuring pattern.

    Example:
        >>> sorted(_pattern_names("{ id, title: heading = 'x' }, [a, ...rest]"))
        ['a', 'heading', 'id', 'rest']
    """
    names: Set[str] = set()
    for element in split_top_level(pattern):
        element = _strip_default(element).strip()
        if element.startswith('...'):
            element = element[3:].lstrip()
        if element[:1] in ('{', '['):
            end = match_bracket(element, 0)
            if end is None:
                continue
            inner = element[1:end - 1]
            if element[0] == '[':
                names |= _pattern_names(inner)
                continue
            for entry in split_top_level(inner):
                entry = _strip_default(entry).strip()
                colon = _expression_end(entry, 0, stop=':')
                if entry.startswith('...') or colon == len(entry):
                    names |= _pattern_names(entry)
                else:
                    names |= _pattern_names(entry[colon + 1:])
            continue
        identifier = IDENTIFIER_RE.match(element)
        if identifier:
            names.add(identifier.group(0))
    return names


def _arrow_params(code: str, arrow_start: int) -> Optional[Tuple[int, str]]:
    """Return (offset, pattern text) of the parameters of the arrow at ``arrow_start``."""
    j = arrow_start - 1
    while j >= 0 and code[j].isspace():
        j -= 1
    if j < 0:
        return None
    if code[j] == ')':
        opening = match_opening_bracket(code, j)
        if opening is None:
            return None
        return opening, code[opening + 1:j]

    end = j + 1
    while j >= 0 and (code[j].isalnum() or code[j] in '_$'):
        j -= 1
    if j + 1 == end:
        return None
    # (a): T => ...
    k = j
    while k >= 0 and code[k].isspace():
        k -= 1
    if k > 0 and code[k] == ':':
        k -= 1
        while k >= 0 and code[k].isspace():
            k -= 1
        if k >= 0 and code[k] == ')':
            opening = match_opening_bracket(code, k)
            if opening is not None:
                return opening, code[opening + 1:k]
    return j + 1, code[j + 1:end]


def _arrow_body_end(code: str, pos: int) -> int:
    while pos < len(code) and code[pos].isspace():
        pos += 1
    if code.startswith('{', pos):
        end = match_bracket(code, pos)
        return len(code) if end is None else end
    return _expression_end(code, pos)


def _binding_scopes(code: str) -> List[Scope]:
    """Collect (start, end, names) for every local binding in masked ``code``."""
    scopes: List[Scope] = []
    for arrow in ARROW_TOKEN_RE.finditer(code):
        params = _arrow_params(code, arrow.start())
        if params is None:
            continue
        start, pattern = params
        scopes.append((start, _arrow_body_end(code, arrow.end()), frozenset(_pattern_names(pattern))))

    for declaration in VARIABLE_DECLARATION_RE.finditer(code):
        target = declaration.end()
        if code[target:target + 1] in ('{', '['):
            target_end = match_bracket(code, target)
            if target_end is None:
                continue
            pattern = code[target:target_end]
        else:
            identifier = IDENTIFIER_RE.match(code, target)
            if not identifier:
                continue
            pattern = identifier.group(0)
        block_end = _expression_end(code, declaration.start(), stop='')
        if LOOP_HEADER_RE.search(code, 0, declaration.start()) and block_end < len(code):
            block_end = _arrow_body_end(code, block_end + 1)
        scopes.append((declaration.start(), block_end, frozenset(_pattern_names(pattern))))

    for function in FUNCTION_PARAMS_RE.finditer(code):
        params_start = function.end()
        params_end = match_bracket(code, params_start)
        if params_end is None:
            continue
        brace = code.find('{', params_end)
        body_end = match_bracket(code, brace) if brace != -1 else None
        if body_end is None:
            continue
        names = _pattern_names(code[params_start + 1:params_end - 1])
        scopes.append((params_start, body_end, frozenset(names)))
    return scopes


def _is_bound(scopes: List[Scope], name: str, pos: int) -> bool:
    return any(start <= pos < end and name in names for start, end, names in scopes)


def _apply_edits(text: str, edits: List[Edit]) -> str:
    pieces = []
    last = 0
    for start, end, replacement in sorted(edits):
        if start < last:
            continue
        pieces.append(text[last:start])
        pieces.append(replacement)
        last = end
    pieces.append(text[last:])
    return ''.join(pieces)


def _is_member(code: str, start: int) -> bool:
    """True when the identifier at ``start`` follows a member dot (not a spread)."""
    return start > 0 and code[start - 1] == '.' and not code.endswith('...', 0, start)


def _is_declaration(code: str, start: int) -> bool:
    return DECLARATION_RE.search(code, 0, start) is not None


def _is_object_key(code: str, start: int, end: int) -> bool:
    before = code[:start].rstrip()
    after = code[end:].lstrip()
    return bool(before) and before[-1] in '{,' and after.startswith(':')


def _enclosing_bracket(code: str, start: int) -> Optional[str]:
    depth = 0
    for ch in reversed(code[:start]):
        if ch in ')]}':
            depth += 1
        elif ch in '([{':
            if depth == 0:
                return ch
            depth -= 1
    return None


def _is_shorthand_property(code: str, start: int, end: int) -> bool:
    """True for ``name`` in ``{ id, name }``."""
    before = code[:start].rstrip()
    after = code[end:].lstrip()
    return (
        bool(before) and before[-1] in '{,'
        and bool(after) and after[0] in '},'
        and _enclosing_bracket(code, start) == '{'
    )


def _name_edits(code: str, replacements: Mapping[str, str], scopes: List[Scope]) -> List[Edit]:
    if not replacements:
        return []
    names = sorted(replacements, key=len, reverse=True)
    pattern = re.compile(r'(?<![\w$])(' + '|'.join(map(re.escape, names)) + r')(?![\w$])')

    edits = []
    for match in pattern.finditer(code):
        name = match.group(1)
        start, end = match.span(1)
        if (_is_member(code, start)
                or _is_declaration(code, start)
                or _is_object_key(code, start, end)
                or _is_bound(scopes, name, start)):
            continue
        if _is_shorthand_property(code, start, end):
            edits.append((start, end, f"{name}: {replacements[name]}"))
        else:
            edits.append((start, end, replacements[name]))
    return edits


def _props_access_edits(code: str, scopes: List[Scope]) -> List[Edit]:
    return [
        (match.start(), match.end(), 'this.props.')
        for match in PROPS_ACCESS_RE.finditer(code)
        if not _is_member(code, match.start()) and not _is_bound(scopes, 'props', match.start())
    ]


def _setter_edits(code: str, scopes: List[Scope]) -> List[Edit]:
    edits = []
    for match in SETTER_CALL_RE.finditer(code):
        name = match.group(1)
        if (name in NON_SETTER_GLOBALS
                or _is_member(code, match.start())
                or _is_declaration(code, match.start())
                or _is_bound(scopes, name, match.start())):
            continue
        edits.append((match.start(), match.end(), f"this.{name}"))
    return edits


def qualify(body: str, state_names: Iterable[str], props: Optional[PropNames] = None) -> str:
    """Qualify prop, state and accessor references in ``body``.

    Args:
        body: Code text (a method body or an expression)
        state_names: Names of the component's state variables
        props: Destructured prop bindings, either a mapping of local name
               to prop key or an iterable of names bound under their own key

    Returns:
        The rewritten text. Already-qualified references and names rebound
        by a local parameter or declaration are left alone.

    Example:
        >>> qualify("setCount(count + props.step)", ["count"])
        'this.setCount(this.count + this.props.step)'
        >>> qualify("setCount(count => count + 1)", ["count"])
        'this.setCount(count => count + 1)'
    """
    if props is None:
        prop_map = {}
    elif isinstance(props, Mapping):
        prop_map = dict(props)
    else:
        prop_map = {name: name for name in props}
    replacements = {local: f"this.props.{key}" for local, key in prop_map.items()}
    # State wins over a destructured prop of the same name
    replacements.update({name: f"this.{name}" for name in state_names})

    code = _mask_literals(body)
    scopes = _binding_scopes(code)
    edits = _props_access_edits(code, scopes)
    edits += _name_edits(code, replacements, scopes)
    edits += _setter_edits(code, scopes)
    return _apply_edits(body, edits)


def rename_parameter(body: str, old: str, new: str) -> str:
    """Rename member accesses rooted at ``old`` (``p.title`` -> ``props.title``)."""
    if old == new:
        return body
    pattern = re.compile(r'(?<![\w$])' + re.escape(old) + r'(?=\s*\??\.)')
    code = _mask_literals(body)
    scopes = _binding_scopes(code)
    edits = [
        (match.start(), match.end(), new)
        for match in pattern.finditer(code)
        if not _is_member(code, match.start()) and not _is_bound(scopes, old, match.start())
    ]
    return _apply_edits(body, edits)
