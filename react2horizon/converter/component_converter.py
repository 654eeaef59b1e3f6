"""Component converter.

Locates component definitions in a source text and rewrites them:

- Functional components (arrow or ``function`` form, top-level, name starting
  with an uppercase letter) become complete ``UIComponent`` classes with
  state fields, accessor methods, lifecycle stubs and an ``initializeUI``
  method holding the lowered markup.
- Class components only get their base class and render method renamed.
  Their bodies are not lowered; a warning says so.

One ComponentInfo is recorded per component, functional components first.
"""

import logging
import re
import textwrap
from dataclasses import dataclass
from typing import List, Optional, Tuple

from react2horizon.models.conversion_result import ComponentInfo

from .hook_extractor import HookExtractor
from .mappings import BASE_CLASS, LIFECYCLE_METHODS, RENDER_METHOD, RENDER_RETURN_TYPE
from .markup_lowering import RETURN_RE, MarkupLowering
from .markup_scanner import element_end, match_bracket, top_level_matches
from .models import ConversionContext, HookExtraction
from .reference_rewriter import qualify, rename_parameter
from .source_utils import (
    extract_class_props,
    extract_class_state,
    extract_prop_bindings,
    extract_props,
    first_type_argument,
    generate_props_interface,
    prop_aliases,
    props_parameter_name,
    props_type_annotation,
)

logger = logging.getLogger(__name__)

ARROW_COMPONENT_RE = re.compile(
    r'^(?P<export>export\s+(?:default\s+)?)?(?:const|let|var)\s+(?P<name>[A-Z][\w$]*)'
    r'\s*(?::\s*(?P<annotation>[^=]+?))?\s*=\s*(?:async\s+)?(?=\(|[A-Za-z_$][\w$]*\s*=>)',
    re.M,
)
FUNCTION_COMPONENT_RE = re.compile(
    r'^(?P<export>export\s+(?:default\s+)?)?function\s+(?P<name>[A-Z][\w$]*)\s*(?=\()',
    re.M,
)
ARROW_TAIL_RE = re.compile(r'\s*(?::[^=]*?)?\s*=>\s*')
BARE_PARAM_RE = re.compile(r'(?P<param>[A-Za-z_$][\w$]*)\s*=>\s*')
FUNCTION_TAIL_RE = re.compile(r'\s*(?::[^{]*?)?\s*(?=\{)')
FC_TYPE_RE = re.compile(r'(?:React\.)?(?:FC|FunctionComponent|VFC)\s*<(?P<args>.*)>\s*$', re.S)
SEMICOLON_RE = re.compile(';')

CLASS_COMPONENT_RE = re.compile(
    r'^(?P<export>export\s+(?:default\s+)?)?class\s+(?P<name>[A-Z][\w$]*)\s+extends\s+'
    r'(?P<base>(?:React\.)?(?:Pure)?Component)\b',
    re.M,
)
RENDER_RE = re.compile(r'^(?P<indent>[ \t]*)render\s*\(\s*\)\s*(?::[^{]*?)?\s*\{', re.M)
LIFECYCLE_RE = re.compile(
    r'^[ \t]*(?:async\s+)?(?P<method>' + '|'.join(LIFECYCLE_METHODS) + r')\s*\(',
    re.M,
)


@dataclass
class FunctionalDefinition:
    """A functional component located in the source.

    Attributes:
        name: Component name
        exported: Export prefix as written ("", "export ", "export default ")
        params: Parameter list text without the parentheses
        annotation: Variable type annotation (e.g. "React.FC<Props>"), if any
        body: Block body text, or the returned expression for concise arrows
        concise: True for ``=> (...)`` bodies
        start: Offset of the definition in the source
        end: Offset just past the definition (and its semicolon)
    """
    name: str
    exported: str
    params: str
    annotation: Optional[str]
    body: str
    concise: bool
    start: int
    end: int


def _skip_spaces(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _skip_semicolon(text: str, pos: int) -> int:
    i = pos
    while i < len(text) and text[i] in ' \t':
        i += 1
    return i + 1 if text[i:i + 1] == ';' else pos


def _angle_end(text: str, pos: int) -> Optional[int]:
    """Return the offset past the ``>`` closing the type arguments at ``pos``."""
    depth = 0
    i = pos
    while i < len(text):
        ch = text[i]
        if ch in '{([':
            end = match_bracket(text, i)
            if end is None:
                return None
            i = end
            continue
        if ch == '<':
            depth += 1
        elif ch == '>':
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return None


def _indent(text: str, width: int) -> List[str]:
    prefix = ' ' * width
    return [prefix + line if line.strip() else '' for line in text.split('\n')]


def _code_block(text: str) -> str:
    """Dedent a code fragment and strip surrounding blank lines."""
    return textwrap.dedent(text.strip('\n')).strip()


class ComponentConverter:
    """Rewrites every component definition in a source text."""

    def __init__(self, hook_extractor: Optional[HookExtractor] = None,
                 lowering: Optional[MarkupLowering] = None):
        self.hook_extractor = hook_extractor or HookExtractor()
        self.lowering = lowering or MarkupLowering()

    def convert(self, source: str, context: ConversionContext) -> str:
        """Convert all functional and class components in ``source``.

        Args:
            source: Source text with imports already stripped
            context: Conversion context receiving warnings and ComponentInfo

        Returns:
            The source text with every recognised component rewritten

        Raises:
            MarkupSyntaxError: If returned markup contains an unterminated tag
        """
        converted = self._convert_functional_components(source, context)
        return self._convert_class_components(converted, context)

    # Functional components

    def find_functional_components(self, source: str) -> List[FunctionalDefinition]:
        """Locate top-level functional component definitions in source order."""
        definitions = []
        for match in ARROW_COMPONENT_RE.finditer(source):
            definition = self._read_arrow(source, match)
            if definition is not None:
                definitions.append(definition)
        for match in FUNCTION_COMPONENT_RE.finditer(source):
            definition = self._read_function(source, match)
            if definition is not None:
                definitions.append(definition)
        definitions.sort(key=lambda d: d.start)

        # Definitions nested in an earlier one are not supported
        result = []
        for definition in definitions:
            if result and definition.start < result[-1].end:
                continue
            result.append(definition)
        return result

    def _read_arrow(self, source: str, match: re.Match) -> Optional[FunctionalDefinition]:
        params_start = match.end()
        if source.startswith('(', params_start):
            params_end = match_bracket(source, params_start)
            if params_end is None:
                return None
            tail = ARROW_TAIL_RE.match(source, params_end)
            if not tail:
                return None
            params = source[params_start + 1:params_end - 1].strip()
        else:
            tail = BARE_PARAM_RE.match(source, params_start)
            if not tail:
                return None
            params = tail.group('param')
        body_start = tail.end()
        opener = source[body_start:body_start + 1]
        if opener == '{':
            body_end = match_bracket(source, body_start)
            concise = False
            if body_end is None:
                return None
            body = source[body_start + 1:body_end - 1]
        elif opener == '(':
            body_end = match_bracket(source, body_start)
            concise = True
            if body_end is None:
                return None
            body = source[body_start + 1:body_end - 1].strip()
            if not body.startswith('<'):
                return None
        elif opener == '<':
            body_end = element_end(source, body_start)
            concise = True
            if body_end is None:
                return None
            body = source[body_start:body_end]
        else:
            return None
        return FunctionalDefinition(
            name=match.group('name'),
            exported=match.group('export') or '',
            params=params,
            annotation=match.group('annotation'),
            body=body,
            concise=concise,
            start=match.start(),
            end=_skip_semicolon(source, body_end),
        )

    def _read_function(self, source: str, match: re.Match) -> Optional[FunctionalDefinition]:
        params_start = match.end()
        params_end = match_bracket(source, params_start)
        if params_end is None:
            return None
        tail = FUNCTION_TAIL_RE.match(source, params_end)
        if not tail:
            return None
        body_end = match_bracket(source, tail.end())
        if body_end is None:
            return None
        return FunctionalDefinition(
            name=match.group('name'),
            exported=match.group('export') or '',
            params=source[params_start + 1:params_end - 1].strip(),
            annotation=None,
            body=source[tail.end() + 1:body_end - 1],
            concise=False,
            start=match.start(),
            end=body_end,
        )

    def _convert_functional_components(self, source: str, context: ConversionContext) -> str:
        pieces = []
        last = 0
        for definition in self.find_functional_components(source):
            pieces.append(source[last:definition.start])
            pieces.append(self.convert_functional(definition, context))
            last = definition.end
        pieces.append(source[last:])
        return ''.join(pieces)

    def convert_functional(self, definition: FunctionalDefinition, context: ConversionContext) -> str:
        """Rewrite one functional component into a UIComponent class."""
        name = definition.name
        logger.debug(f"Converting functional component {name}")
        context.warn(f"Converting functional component: {name}")

        params = definition.params
        body = definition.body
        parameter = props_parameter_name(params)
        if parameter and parameter != 'props':
            body = rename_parameter(body, parameter, 'props')

        props_type, interface = self._props_type(definition)
        props = self._prop_names(params, parameter, body)

        if definition.concise:
            extraction = HookExtraction(body='')
            preamble, returned = '', body
            effects: List[str] = []
        else:
            effects = self.hook_extractor.describe_effects(body, context.config)
            extraction = self.hook_extractor.extract(body, context)
            preamble, returned = self._split_return(extraction.body)

        render_expression = self._lower_return(name, returned, context)
        aliases = prop_aliases(params)
        preamble = qualify(
            self.lowering.lower_embedded(_code_block(preamble), context),
            extraction.state_names,
            aliases,
        )
        render_expression = qualify(render_expression, extraction.state_names, aliases)

        context.components.append(ComponentInfo(
            name=name,
            props=props,
            state=[state.describe() for state in extraction.state_variables],
            effects=effects,
            is_class=False,
        ))

        return self._render_class(
            definition=definition,
            props_type=props_type,
            interface=interface,
            extraction=extraction,
            preamble=preamble,
            render_expression=render_expression,
        )

    @staticmethod
    def _props_type(definition: FunctionalDefinition) -> Tuple[str, Optional[str]]:
        """Return (props type name, generated interface or None)."""
        explicit = props_type_annotation(definition.params)
        if explicit is None and definition.annotation:
            fc_type = FC_TYPE_RE.match(definition.annotation.strip())
            if fc_type:
                explicit = first_type_argument(fc_type.group('args'))
        if explicit:
            return explicit, None
        return f"{definition.name}Props", generate_props_interface(definition.params, definition.name)

    @staticmethod
    def _prop_names(params: str, parameter: Optional[str], body: str) -> List[str]:
        if parameter and not extract_prop_bindings(params):
            accessed = re.findall(r'(?<![\w$.])props\s*\??\.\s*([\w$]+)', body)
            if accessed:
                return list(dict.fromkeys(accessed))
        return extract_props(params)

    @staticmethod
    def _split_return(body: str) -> Tuple[str, Optional[str]]:
        """Split a body into (code before the last top-level return, returned expression)."""
        returns = list(top_level_matches(body, RETURN_RE))
        if not returns:
            return body, None
        statement = returns[-1]
        start = _skip_spaces(body, statement.end())
        if body[start:start + 1] == '(':
            end = match_bracket(body, start)
            if end is not None:
                return body[:statement.start()], body[start + 1:end - 1].strip()
        if body[start:start + 1] == '<':
            end = element_end(body, start)
            if end is not None:
                return body[:statement.start()], body[start:end]
        semicolon = next(top_level_matches(body, SEMICOLON_RE, start), None)
        end = semicolon.start() if semicolon else len(body)
        return body[:statement.start()], body[start:end].strip()

    def _lower_return(self, name: str, returned: Optional[str], context: ConversionContext) -> str:
        if returned is None:
            context.warn(f"No return statement found in {name} - generated an empty View")
            return "View({})"
        if returned.startswith('<'):
            return self.lowering.lower(returned, context)
        lowered = self.lowering.lower_expression(returned, context)
        if lowered == returned:
            context.warn(f"Return value of {name} is not markup - kept as written")
        return lowered

    @staticmethod
    def _render_class(definition: FunctionalDefinition, props_type: str, interface: Optional[str],
                      extraction: HookExtraction, preamble: str, render_expression: str) -> str:
        export = 'export default ' if 'default' in definition.exported else 'export '
        lines: List[str] = []
        if interface:
            lines.extend([interface, ''])
        lines.append(f"{export}class {definition.name} extends {BASE_CLASS} {{")
        lines.append(f"  private props: {props_type};")
        lines.extend(f"  {field}" for field in extraction.fields)
        lines.append('')
        lines.append(f"  constructor(props: {props_type}) {{")
        lines.append("    super();")
        lines.append("    this.props = props;")
        lines.append("  }")
        for accessor in extraction.accessor_methods:
            lines.append('')
            lines.extend(_indent(accessor, 2))
        lines.append('')
        lines.append(f"  {RENDER_METHOD}(): {RENDER_RETURN_TYPE} {{")
        if preamble:
            lines.extend(_indent(preamble, 4))
            lines.append('')
        lines.append(f"    return {render_expression};")
        lines.append("  }")
        lines.append('')
        lines.append("  prestart(): void {")
        lines.append("    // TODO: Setup logic before component starts")
        lines.append("  }")
        lines.append('')
        lines.append("  start(): void {")
        lines.append("    // TODO: Move useEffect logic here")
        for block in extraction.lifecycle_blocks:
            lines.extend(_indent(block, 4))
        lines.append("  }")
        lines.append("}")
        return '\n'.join(lines)

    # Class components

    def _convert_class_components(self, source: str, context: ConversionContext) -> str:
        pieces = []
        last = 0
        for match in CLASS_COMPONENT_RE.finditer(source):
            if match.start() < last:
                continue
            converted = self._convert_class(source, match, context)
            if converted is None:
                continue
            text, end = converted
            pieces.append(source[last:match.start()])
            pieces.append(text)
            last = end
        pieces.append(source[last:])
        return ''.join(pieces)

    def _convert_class(self, source: str, match: re.Match,
                       context: ConversionContext) -> Optional[Tuple[str, int]]:
        name = match.group('name')
        position = _skip_spaces(source, match.end())
        type_arguments = None
        if source[position:position + 1] == '<':
            arguments_end = _angle_end(source, position)
            if arguments_end is None:
                return None
            type_arguments = source[position + 1:arguments_end - 1]
            position = _skip_spaces(source, arguments_end)
        if source[position:position + 1] != '{':
            return None
        body_end = match_bracket(source, position)
        if body_end is None:
            return None

        logger.debug(f"Converting class component {name}")
        context.warn(f"Converting class component: {name}")
        body = source[position + 1:body_end - 1]

        effects = []
        for lifecycle in LIFECYCLE_RE.finditer(body):
            method = lifecycle.group('method')
            target = LIFECYCLE_METHODS[method]
            effects.append(f"{method} (move to {target})")
            context.warn(f"Lifecycle method {method} in {name} - move its logic to {target}()")
        effects.extend(self.hook_extractor.describe_effects(body, context.config))

        context.components.append(ComponentInfo(
            name=name,
            props=extract_class_props(first_type_argument(type_arguments)),
            state=extract_class_state(body),
            effects=effects,
            is_class=True,
        ))
        context.warn(
            f"Class component {name} converted partially - "
            f"render() body was not lowered, convert its markup manually"
        )

        body = RENDER_RE.sub(
            lambda m: f"{m.group('indent')}{RENDER_METHOD}(): {RENDER_RETURN_TYPE} {{",
            body,
            count=1,
        )
        header = f"{match.group('export') or ''}class {name} extends {BASE_CLASS} "
        return header + '{' + body + '}', body_end
