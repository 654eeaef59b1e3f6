"""Helpers for reading component signatures and literals.

Type inference, prop extraction and props-interface generation shared by
the component converter and the hook/state extractor.
"""

import re
from typing import Dict, List, Optional, Tuple

from .markup_scanner import match_bracket, split_top_level

NUMBER_RE = re.compile(r'-?\d+(?:\.\d+)?')
IDENTIFIER_RE = re.compile(r'[A-Za-z_$][\w$]*')


def infer_type_from_value(value: Optional[str]) -> str:
    """Infer a TypeScript type from the literal form of an initializer.

    Example:
        >>> infer_type_from_value("0")
        'number'
        >>> infer_type_from_value("'hello'")
        'string'
        >>> infer_type_from_value("fetchItems()")
        'any'
    """
    if value is None:
        return 'any'
    value = value.strip()
    if not value or value in ('null', 'undefined'):
        return 'any'
    if value[0] in '\'"`':
        return 'string'
    if NUMBER_RE.fullmatch(value):
        return 'number'
    if value in ('true', 'false'):
        return 'boolean'
    if value.startswith('['):
        return 'any[]'
    if value.startswith('{'):
        return 'object'
    return 'any'


def _destructure_span(params: str) -> Optional[Tuple[int, int]]:
    stripped = params.lstrip()
    if not stripped.startswith('{'):
        return None
    start = len(params) - len(stripped)
    end = match_bracket(params, start)
    if end is None:
        return None
    return start, end


def props_type_annotation(params: str) -> Optional[str]:
    """Return the type annotation on the props parameter, if any.

    Example:
        >>> props_type_annotation("{ name, age = 0 }: WelcomeProps")
        'WelcomeProps'
        >>> props_type_annotation("props")
    """
    span = _destructure_span(params)
    rest = params[span[1]:] if span else params
    if ':' not in rest:
        return None
    annotation = rest.split(':', 1)[1].strip()
    return annotation or None


def extract_prop_bindings(params: str) -> List[Tuple[str, str, Optional[str]]]:
    """Read the destructured props parameter of a functional component.

    Returns:
        (local name, prop name, default value) triples in declaration order;
        rest elements are skipped
    """
    span = _destructure_span(params)
    if span is None:
        return []
    inner = params[span[0] + 1:span[1] - 1]
    bindings = []
    for entry in split_top_level(inner):
        if entry.startswith('...'):
            continue
        default = None
        if '=' in entry:
            entry, default = (part.strip() for part in entry.split('=', 1))
        if ':' in entry:
            prop, local = (part.strip() for part in entry.split(':', 1))
        else:
            prop = local = entry
        if IDENTIFIER_RE.fullmatch(prop) and IDENTIFIER_RE.fullmatch(local):
            bindings.append((local, prop, default))
    return bindings


def props_parameter_name(params: str) -> Optional[str]:
    """Return the name of a non-destructured props parameter (e.g. "props")."""
    name = params.split(':', 1)[0].strip()
    if IDENTIFIER_RE.fullmatch(name):
        return name
    return None


def extract_props(params: str) -> List[str]:
    """List the prop names a functional component declares.

    A destructured parameter yields its keys; a plain parameter yields its
    own name. Duplicates are dropped, order kept.
    """
    if not params.strip():
        return []
    bindings = extract_prop_bindings(params)
    if bindings:
        names = [prop for _, prop, _ in bindings]
    elif _destructure_span(params) is None and props_parameter_name(params):
        names = [props_parameter_name(params)]
    else:
        names = []
    return list(dict.fromkeys(names))


def generate_props_interface(params: str, component_name: str) -> str:
    """Generate a ``<Name>Props`` interface from the props parameter."""
    interface_name = f"{component_name}Props"
    if not params.strip():
        return f"interface {interface_name} {{}}"

    bindings = extract_prop_bindings(params)
    if bindings:
        lines = []
        for _, prop, default in bindings:
            optional = '?' if default is not None else ''
            lines.append(f"  {prop}{optional}: {infer_type_from_value(default)};")
        return f"interface {interface_name} {{\n" + '\n'.join(lines) + "\n}"

    return f"interface {interface_name} {{\n  [key: string]: any;\n}}"


def extract_class_props(props_type: Optional[str]) -> List[str]:
    """List prop names from a class component's props type argument.

    An inline object type yields its keys; a named type yields a single
    "Props (TypeName)" entry.
    """
    if not props_type or not props_type.strip():
        return []
    props_type = props_type.strip()
    if props_type.startswith('{'):
        end = match_bracket(props_type, 0)
        inner = props_type[1:end - 1] if end else props_type[1:]
        names = []
        for entry in split_top_level(inner, ',;'):
            name = entry.split(':', 1)[0].strip().rstrip('?')
            if name:
                names.append(name)
        return list(dict.fromkeys(names))
    return [f"Props ({props_type})"]


STATE_INIT_RE = re.compile(r'(?<![\w$.])(?:this\.)?state\s*=\s*(?=\{)')


def extract_class_state(body: str) -> List[str]:
    """List "name (type)" entries from ``this.state = {...}`` or a ``state = {...}`` field."""
    entries = []
    for match in STATE_INIT_RE.finditer(body):
        start = match.end()
        end = match_bracket(body, start)
        if end is None:
            continue
        for entry in split_top_level(body[start + 1:end - 1]):
            if ':' in entry:
                name, value = (part.strip() for part in entry.split(':', 1))
                entries.append(f"{name} ({infer_type_from_value(value)})")
            else:
                entries.append(f"{entry} (any)")
    return entries


def first_type_argument(type_arguments: Optional[str]) -> Optional[str]:
    """Return the first argument of a generic argument list such as ``Props, State``."""
    if not type_arguments:
        return None
    depth = 0
    for i, ch in enumerate(type_arguments):
        if ch in '<{([':
            depth += 1
        elif ch in '>})]':
            depth -= 1
        elif ch == ',' and depth == 0:
            return type_arguments[:i].strip()
    return type_arguments.strip()


def prop_aliases(params: str) -> Dict[str, str]:
    """Map each local prop binding name to the prop key it reads."""
    return {local: prop for local, prop, _ in extract_prop_bindings(params)}
