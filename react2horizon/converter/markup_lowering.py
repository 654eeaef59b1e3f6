"""Markup lowering engine.

Converts JSX markup into nested Horizon constructor calls
(``View({ ... children: [...] })``). The engine walks text spans rather than
a materialised tree, but its output is what serialising the element tree
would produce: every element is lowered exactly once, children in order.
"""

import logging
import re
from typing import List, Optional

from .attribute_parser import AttributeParser, quote
from .mappings import (
    DYNAMIC_LIST,
    KIND_IMAGE,
    KIND_PRESSABLE,
    KIND_TEXT,
    TAG_MAPPINGS,
    TEXT,
    TagMapping,
)
from .markup_scanner import (
    QUOTES,
    TOKEN_EXPR,
    contains_markup,
    element_end,
    is_markup_start,
    iter_markup_tokens,
    match_bracket,
    match_opening_bracket,
    read_tag_name,
    scan_tag_end,
    skip_comment,
    skip_string,
    split_children,
    top_level_matches,
)
from .models import ConversionContext

logger = logging.getLogger(__name__)

MAP_CALL_RE = re.compile(r'\.\s*map\s*\(')
ARROW_RE = re.compile(r'\s*(?:\(\s*(?P<params>[^)]*?)\s*\)|(?P<param>[\w$]+))\s*=>\s*')
RETURN_RE = re.compile(r'(?<![\w$])return\b')


def _collapse_whitespace(text: str) -> str:
    return re.sub(r'\s+', ' ', text)


def _escape_template(text: str) -> str:
    return text.replace('\\', '\\\\').replace('`', '\\`').replace('${', '\\${')


def _is_comment_expression(inner: str) -> bool:
    return inner.startswith('/*') and inner.endswith('*/')


def _operand_start(expression: str, end: int) -> int:
    """Return where the member chain ending just before ``end`` begins.

    Walks back over identifiers, ``.``/``?.`` accessors and balanced call or
    index brackets, so ``ready && rows.filter(f).map`` yields ``rows.filter(f)``.
    """
    i = end
    while i > 0 and expression[i - 1] in ' \t\r\n':
        i -= 1
    while i > 0:
        ch = expression[i - 1]
        if ch.isalnum() or ch in '_$.':
            i -= 1
        elif ch == '?' and expression[i:i + 1] == '.':
            i -= 1
        elif ch in ')]':
            opening = match_opening_bracket(expression, i - 1)
            if opening is None:
                break
            i = opening
        else:
            break
    return i


def _is_markup_unit(unit: str) -> bool:
    """True for an element unit or a brace expression that renders markup."""
    if unit.startswith('<'):
        return True
    return unit.startswith('{') and contains_markup(unit[1:-1])


class MarkupLowering:
    """Lowers JSX markup to Horizon UI constructor calls.

    Unknown tags and tags whose closing tag cannot be matched are left as
    written and reported as warnings. An opening tag that never reaches its
    ``>`` raises MarkupSyntaxError.
    """

    def __init__(self, attribute_parser: Optional[AttributeParser] = None):
        self.attribute_parser = attribute_parser or AttributeParser()

    def lower(self, markup: str, context: ConversionContext) -> str:
        """Lower a markup span to a Horizon expression.

        Args:
            markup: JSX text (a single element, several siblings, or a leaf)
            context: Conversion context receiving warnings

        Returns:
            Horizon expression text; several siblings become a list literal
        """
        text = markup.strip()
        if not text:
            return '""'
        if '<' not in text:
            return self._text_value(text)
        lowered = self._lower_children(text, context)
        return lowered or '""'

    def lower_expression(self, expression: str, context: ConversionContext) -> str:
        """Lower the markup embedded in a brace expression.

        ``collection.map((item) => (<markup/>))`` becomes a DynamicList whose
        render callback keeps the original parameters. Any other markup in
        the expression (``cond && <p/>``, ternary branches) is lowered in
        place; expressions without markup are returned unchanged.
        """
        dynamic_list = self._lower_map_call(expression, context)
        if dynamic_list is not None:
            return dynamic_list
        return self.lower_embedded(expression, context)

    def _lower_children(self, children: str, context: ConversionContext) -> str:
        if not children.strip():
            return ''
        lowered: List[str] = []
        for unit in split_children(children):
            converted = self._lower_unit(unit, context)
            if converted is not None:
                lowered.append(converted)
        if not lowered:
            return ''
        if len(lowered) == 1:
            return lowered[0]
        return '[' + ', '.join(lowered) + ']'

    def _lower_unit(self, unit: str, context: ConversionContext) -> Optional[str]:
        if unit.startswith('<'):
            return self._lower_element(unit, context)
        if unit.startswith('{') and unit.endswith('}'):
            inner = unit[1:-1].strip()
            if not inner or _is_comment_expression(inner):
                return None
            return self.lower_expression(inner, context)
        return quote(_collapse_whitespace(unit).strip())

    def _lower_element(self, element: str, context: ConversionContext) -> str:
        name = read_tag_name(element, 0)
        tag_end, self_closing = scan_tag_end(element, 0)
        attributes = element[1 + len(name):tag_end - (2 if self_closing else 1)]

        children = ''
        if not self_closing:
            end = element_end(element, 0)
            if end is None:
                context.warn(f"Unmatched tag <{name}> left unconverted - check for a missing closing tag")
                return element
            children = element[tag_end:element.rfind('</', 0, end)]

        mapping = TAG_MAPPINGS.get(name)
        if mapping is None:
            context.warn(f"Unsupported element <{name}> left unconverted - manual conversion needed")
            return element
        if mapping.warning:
            context.warn(mapping.warning)

        props = self.attribute_parser.parse(attributes, context)
        logger.debug(f"Lowering <{name}> to {mapping.constructor}")

        if mapping.kind == KIND_TEXT:
            call = self._lower_text(name, mapping, props, children, context)
        elif mapping.kind == KIND_PRESSABLE:
            call = self._lower_pressable(mapping, props, children, context)
        elif mapping.kind == KIND_IMAGE:
            call = self._call(mapping.constructor, [props])
        else:
            call = self._lower_container(mapping, props, children, context)

        if mapping.annotation:
            return f"{mapping.annotation} {call}"
        return call

    def _lower_container(self, mapping: TagMapping, props: str, children: str,
                         context: ConversionContext) -> str:
        lowered = self._lower_children(children, context)
        parts = [props]
        if lowered:
            parts.append(f"children: {lowered}")
        return self._call(mapping.constructor, parts)

    def _lower_text(self, name: str, mapping: TagMapping, props: str, children: str,
                    context: ConversionContext) -> str:
        if any(_is_markup_unit(unit) for unit in split_children(children)):
            context.warn(f"Nested markup inside <{name}> converted to View children - verify text layout")
            return self._lower_container(TAG_MAPPINGS['div'], props, children, context)
        return self._call(mapping.constructor, [f"text: {self._text_value(children)}", props])

    def _lower_pressable(self, mapping: TagMapping, props: str, children: str,
                         context: ConversionContext) -> str:
        parts = [props]
        units = split_children(children)
        if any(_is_markup_unit(unit) for unit in units):
            lowered = self._lower_children(children, context)
            if lowered:
                parts.append(f"children: {lowered}")
        elif units:
            parts.append(f"children: {self._call(TEXT, [f'text: {self._text_value(children)}'])}")
        return self._call(mapping.constructor, parts)

    def _text_value(self, content: str) -> str:
        """Render text content as a string literal, expression or template literal."""
        pieces = []
        expressions = 0
        literal_text = False
        for token in iter_markup_tokens(content):
            chunk = content[token.start:token.end]
            if token.kind == TOKEN_EXPR:
                inner = chunk[1:-1].strip()
                if not inner or _is_comment_expression(inner):
                    continue
                pieces.append((True, inner))
                expressions += 1
            else:
                pieces.append((False, chunk))
                if chunk.strip():
                    literal_text = True

        if expressions == 0:
            literal = ''.join(value for _, value in pieces)
            return quote(_collapse_whitespace(literal).strip())
        if expressions == 1 and not literal_text:
            return next(value for is_expr, value in pieces if is_expr)

        rendered = ''.join(
            '${' + value + '}' if is_expr else _escape_template(_collapse_whitespace(value))
            for is_expr, value in pieces
        )
        return '`' + rendered.strip() + '`'

    def _lower_map_call(self, expression: str, context: ConversionContext) -> Optional[str]:
        call = next(top_level_matches(expression, MAP_CALL_RE), None)
        if call is None:
            return None
        collection_start = _operand_start(expression, call.start())
        collection = expression[collection_start:call.start()].strip()
        paren_start = call.end() - 1
        paren_end = match_bracket(expression, paren_start)
        if not collection or paren_end is None:
            return None
        suffix = expression[paren_end:]
        # A chained call on the mapped array is not a list render
        if suffix.lstrip()[:1] in ('.', '[', '('):
            return None

        arguments = expression[paren_start + 1:paren_end - 1]
        arrow = ARROW_RE.match(arguments)
        if not arrow:
            return None
        params = arrow.group('params') if arrow.group('params') is not None else arrow.group('param')
        item_markup = self._callback_markup(arguments[arrow.end():].strip())
        if item_markup is None:
            return None

        context.warn("Converting array.map to DynamicList")
        rendered = self.lower(item_markup, context)
        dynamic_list = f"{DYNAMIC_LIST}({{ data: {collection}, renderItem: ({params}) => {rendered} }})"
        prefix = self.lower_embedded(expression[:collection_start], context)
        return prefix + dynamic_list + self.lower_embedded(suffix, context)

    def _callback_markup(self, body: str) -> Optional[str]:
        """Return the markup a map callback renders, or None if it renders none."""
        if body.startswith('('):
            end = match_bracket(body, 0)
            if end is None:
                return None
            inner = body[1:end - 1].strip()
            return inner if inner.startswith('<') else None
        if body.startswith('<'):
            end = element_end(body, 0)
            return body[:end] if end is not None else None
        if body.startswith('{'):
            end = match_bracket(body, 0)
            if end is None:
                return None
            block = body[1:end - 1]
            returns = list(top_level_matches(block, RETURN_RE))
            if not returns:
                return None
            return self._callback_markup(block[returns[-1].end():].strip())
        return None

    def lower_embedded(self, expression: str, context: ConversionContext) -> str:
        """Lower every complete element embedded in code, leaving the rest as written."""
        pieces = []
        last = 0
        i = 0
        n = len(expression)
        while i < n:
            ch = expression[i]
            if ch in QUOTES:
                i = skip_string(expression, i)
                continue
            if ch == '/':
                comment_end = skip_comment(expression, i)
                if comment_end is not None:
                    i = comment_end
                    continue
            if ch == '<' and is_markup_start(expression, i):
                end = element_end(expression, i)
                if end is not None:
                    pieces.append(expression[last:i])
                    pieces.append(self._lower_element(expression[i:end], context))
                    i = last = end
                    continue
            i += 1
        pieces.append(expression[last:])
        return ''.join(pieces)

    @staticmethod
    def _call(constructor: str, parts: List[str]) -> str:
        parts = [part for part in parts if part]
        if not parts:
            return f"{constructor}({{}})"
        return f"{constructor}({{ {', '.join(parts)} }})"
