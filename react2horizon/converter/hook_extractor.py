"""Hook and state extraction for functional component bodies.

Finds useState/useEffect declarations, removes them from the body and
produces the class fields, accessor methods and lifecycle placeholders that
replace them. Effects are never executed or scheduled: they are commented
out and left for a reviewer to place.
"""

import logging
import re
import textwrap
from typing import List, Optional, Tuple

from react2horizon.config.models import ConverterConfig

from .mappings import HOOK_WARNINGS
from .markup_scanner import match_bracket, split_top_level
from .models import ConversionContext, EffectBlock, HookExtraction, StateVariable
from .source_utils import infer_type_from_value

logger = logging.getLogger(__name__)

USE_STATE_RE = re.compile(
    r'(?:const|let|var)\s+\[\s*(?P<name>[\w$]+)\s*,\s*(?P<setter>[\w$]+)\s*\]\s*=\s*'
    r'(?:React\.)?useState\s*(?:<(?P<generic>[^()=]*?)>)?\s*\('
)
USE_EFFECT_RE = re.compile(r'(?<![\w$.])(?:React\.)?use(?:Layout)?Effect\s*\(')
EFFECT_CALLBACK_RE = re.compile(r'(?:async\s*)?\(\s*\)\s*=>\s*')
OTHER_HOOK_RE = re.compile(
    r'(?<![\w$.])(?:React\.)?(?P<hook>useCallback|useMemo|useRef)\s*(?:<[^()=]*?>)?\s*\('
)
REF_DECLARATION_RE = re.compile(r'(?:const|let|var)\s+(?P<name>[\w$]+)\s*(?::[^=]+)?=\s*$')

Span = Tuple[int, int]


def _statement_end(text: str, end: int) -> int:
    """Extend a call's end offset over a trailing semicolon and the rest of its line."""
    i = end
    while i < len(text) and text[i] in ' \t':
        i += 1
    if i < len(text) and text[i] == ';':
        i += 1
    while i < len(text) and text[i] in ' \t':
        i += 1
    if i < len(text) and text[i] == '\n':
        i += 1
    return i


def _line_start(text: str, start: int) -> int:
    """Move a statement start back over its indentation."""
    i = start
    while i > 0 and text[i - 1] in ' \t':
        i -= 1
    return i


def _remove_spans(text: str, spans: List[Span]) -> str:
    pieces = []
    last = 0
    for start, end in sorted(spans):
        pieces.append(text[last:start])
        last = end
    pieces.append(text[last:])
    return ''.join(pieces)


class HookExtractor:
    """Converts hook-style state and effects into class members."""

    def extract(self, body: str, context: ConversionContext) -> HookExtraction:
        """Extract state and effects from a functional component body.

        Args:
            body: Component body text (between the outer braces)
            context: Conversion context receiving warnings

        Returns:
            HookExtraction with fields, accessors, lifecycle blocks and the
            body with the hook declarations removed
        """
        config = context.config
        extraction = HookExtraction()
        spans: List[Span] = []

        for state, span in self._find_state(body):
            extraction.state_variables.append(state)
            spans.append(span)
            extraction.fields.append(self._render_field(state, config))
            extraction.accessor_methods.append(self._render_accessor(state, config))
            context.warn(self._state_warning(state, config))
            logger.debug(f"Extracted state {state.describe()}")

        for effect, span in self._find_effects(body):
            extraction.effects.append(effect)
            spans.append(span)
            extraction.lifecycle_blocks.append(self._render_lifecycle_block(effect))
            context.warn("Converting useEffect - place logic in start lifecycle method")

        extraction.body = self._rewrite_other_hooks(_remove_spans(body, spans), context)
        return extraction

    def describe_effects(self, body: str, config: ConverterConfig) -> List[str]:
        """Summarise each effect as "Effect [deps]: first line of body..."."""
        summaries = []
        for effect, _ in self._find_effects(body):
            first_line = effect.body.strip().split('\n')[0]
            summary = first_line[:config.effect_summary_length] + '...'
            summaries.append(f"Effect [{effect.dependency_label}]: {summary}")
        return summaries

    def _find_state(self, body: str) -> List[Tuple[StateVariable, Span]]:
        found = []
        for match in USE_STATE_RE.finditer(body):
            paren_start = match.end() - 1
            paren_end = match_bracket(body, paren_start)
            if paren_end is None:
                continue
            initial = body[paren_start + 1:paren_end - 1].strip() or 'null'
            generic = match.group('generic')
            inferred = generic.strip() if generic else infer_type_from_value(initial)
            state = StateVariable(
                name=match.group('name'),
                setter=match.group('setter'),
                inferred_type=inferred,
                initial_value=initial,
            )
            found.append((state, (_line_start(body, match.start()), _statement_end(body, paren_end))))
        return found

    def _find_effects(self, body: str) -> List[Tuple[EffectBlock, Span]]:
        found = []
        for match in USE_EFFECT_RE.finditer(body):
            paren_start = match.end() - 1
            paren_end = match_bracket(body, paren_start)
            if paren_end is None:
                continue
            arguments = split_top_level(body[paren_start + 1:paren_end - 1])
            if not arguments:
                continue
            effect_body = self._callback_body(arguments[0])
            if effect_body is None:
                continue
            dependencies: Optional[str] = None
            if len(arguments) > 1 and arguments[1].startswith('['):
                dependencies = arguments[1][1:-1].strip()
            found.append((
                EffectBlock(body=effect_body, dependencies=dependencies),
                (_line_start(body, match.start()), _statement_end(body, paren_end)),
            ))
        return found

    @staticmethod
    def _callback_body(callback: str) -> Optional[str]:
        arrow = EFFECT_CALLBACK_RE.match(callback)
        if not arrow:
            return None
        rest = callback[arrow.end():].strip()
        if rest.startswith('{'):
            end = match_bracket(rest, 0)
            if end is None:
                return None
            return textwrap.dedent(rest[1:end - 1].strip('\n')).strip()
        return rest

    @staticmethod
    def _render_field(state: StateVariable, config: ConverterConfig) -> str:
        if config.uses_bindings:
            return (
                f"private {state.name}: Binding<{state.inferred_type}> = "
                f"new Binding({state.initial_value});"
            )
        return f"private {state.name}: {state.inferred_type} = {state.initial_value};"

    @staticmethod
    def _render_accessor(state: StateVariable, config: ConverterConfig) -> str:
        if config.uses_bindings:
            mutation = f"this.{state.name}.set(newValue);"
        else:
            mutation = f"this.{state.name} = newValue;"
        return (
            f"private {state.setter} = (newValue: {state.inferred_type}) => {{\n"
            f"  {mutation}\n"
            f"}};"
        )

    @staticmethod
    def _state_warning(state: StateVariable, config: ConverterConfig) -> str:
        if config.uses_bindings:
            shape = f"Binding<{state.inferred_type}> field"
        else:
            shape = f"{state.inferred_type} field"
        return (
            f"Converting useState for {state.name} - implemented as {shape} "
            f"with accessor {state.setter}()"
        )

    @staticmethod
    def _render_lifecycle_block(effect: EffectBlock) -> str:
        if effect.dependencies is None:
            dependencies = "none (ran after every render)"
        else:
            dependencies = f"[{effect.dependencies}]"
        lines = [
            "// TODO: Move this useEffect logic into the appropriate lifecycle method",
            f"// Original useEffect dependencies: {dependencies}",
        ]
        for line in effect.body.split('\n'):
            lines.append(f"// {line}".rstrip())
        return '\n'.join(lines)

    def _rewrite_other_hooks(self, body: str, context: ConversionContext) -> str:
        """Rewrite useRef, useCallback and useMemo calls in place."""
        # Right to left so earlier offsets stay valid
        for match in reversed(list(OTHER_HOOK_RE.finditer(body))):
            paren_start = match.end() - 1
            paren_end = match_bracket(body, paren_start)
            if paren_end is None:
                continue
            arguments = split_top_level(body[paren_start + 1:paren_end - 1])
            hook = match.group('hook')
            replacement = self._rewrite_hook(hook, arguments, body[:match.start()], context)
            if replacement is None:
                continue
            body = body[:match.start()] + replacement + body[paren_end:]
        return body

    @staticmethod
    def _rewrite_hook(hook: str, arguments: List[str], preceding: str,
                      context: ConversionContext) -> Optional[str]:
        if hook == 'useRef':
            declaration = REF_DECLARATION_RE.search(preceding)
            name = declaration.group('name') if declaration else 'ref'
            context.warn(HOOK_WARNINGS['useRef'].format(name=name))
            initial = arguments[0] if arguments else 'null'
            return f"{{ current: {initial} }} /* TODO: Convert useRef to a Horizon class field */"

        if not arguments:
            return None
        deps = ''
        if len(arguments) > 1 and arguments[1].startswith('['):
            deps = arguments[1][1:-1].strip()
        context.warn(HOOK_WARNINGS[hook].format(deps=deps))

        if hook == 'useCallback':
            return f"({arguments[0]}) /* Dependencies: [{deps}] */"

        # useMemo: inline a concise factory, call a block-bodied one
        factory = arguments[0]
        arrow = EFFECT_CALLBACK_RE.match(factory)
        if arrow and not factory[arrow.end():].lstrip().startswith('{'):
            return f"({factory[arrow.end():].strip()}) /* Memoized, deps: [{deps}] */"
        return f"({factory})() /* Memoized, deps: [{deps}] */"
