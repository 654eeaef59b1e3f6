"""Attribute parser for markup tags.

Turns the raw attribute text of a JSX tag into a Horizon property list,
consulting ATTRIBUTE_MAPPINGS for every attribute it recognises.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import List

from .mappings import (
    ATTRIBUTE_MAPPINGS,
    PRESS_HANDLER,
    STYLE,
    TRANSFORM_DROP,
    TRANSFORM_PLACEHOLDER,
    TRANSFORM_STYLE,
)
from .markup_scanner import match_bracket, skip_string
from .models import ConversionContext

logger = logging.getLogger(__name__)

ATTR_NAME_RE = re.compile(r'[A-Za-z_$][\w$:.-]*')

VALUE_STRING = "string"
VALUE_EXPRESSION = "expression"
VALUE_BOOLEAN = "boolean"
VALUE_SPREAD = "spread"


@dataclass
class ParsedAttribute:
    """A single attribute as written in the source tag.

    Attributes:
        name: Attribute name ("..." for spread attributes)
        value: String contents, expression text, or "true" for boolean attributes
        kind: One of the VALUE_* constants
    """
    name: str
    value: str
    kind: str

    def render_value(self) -> str:
        if self.kind == VALUE_STRING:
            return quote(self.value)
        return self.value


def quote(value: str) -> str:
    """Render a Python string as a double-quoted target string literal."""
    return json.dumps(value, ensure_ascii=False)


def _camel_case(css_property: str) -> str:
    head, *rest = css_property.strip().split('-')
    return head + ''.join(part.capitalize() for part in rest)


def css_to_style_object(css: str) -> str:
    """Convert an inline CSS string to a style object literal.

    Example:
        >>> css_to_style_object("background-color: red; padding: 4px")
        '{ backgroundColor: "red", padding: "4px" }'
    """
    entries = []
    for declaration in css.split(';'):
        if ':' not in declaration:
            continue
        prop, value = declaration.split(':', 1)
        if not prop.strip():
            continue
        entries.append(f"{_camel_case(prop)}: {quote(value.strip())}")
    if not entries:
        return "{}"
    return "{ " + ", ".join(entries) + " }"


class AttributeParser:
    """Maps JSX attributes onto Horizon properties.

    Output order is fixed: class placeholders first, then the style object,
    then the press handler, then every remaining attribute in source order.
    Warnings go to the context; the parser never raises.
    """

    @staticmethod
    def tokenize(attributes_text: str) -> List[ParsedAttribute]:
        """Split raw attribute text into ParsedAttribute entries."""
        attributes: List[ParsedAttribute] = []
        text = attributes_text
        i = 0
        n = len(text)
        while i < n:
            ch = text[i]
            if ch.isspace() or ch == '/':
                i += 1
                continue
            if ch == '{':
                end = match_bracket(text, i)
                if end is None:
                    break
                inner = text[i + 1:end - 1].strip()
                if inner.startswith('...'):
                    attributes.append(ParsedAttribute('...', inner[3:].strip(), VALUE_SPREAD))
                i = end
                continue
            match = ATTR_NAME_RE.match(text, i)
            if not match:
                i += 1
                continue
            name = match.group(0)
            i = match.end()
            while i < n and text[i].isspace():
                i += 1
            if i >= n or text[i] != '=':
                attributes.append(ParsedAttribute(name, 'true', VALUE_BOOLEAN))
                continue
            i += 1
            while i < n and text[i].isspace():
                i += 1
            if i >= n:
                attributes.append(ParsedAttribute(name, '', VALUE_STRING))
                break
            if text[i] in '"\'':
                end = skip_string(text, i)
                attributes.append(ParsedAttribute(name, text[i + 1:end - 1], VALUE_STRING))
                i = end
            elif text[i] == '{':
                end = match_bracket(text, i)
                if end is None:
                    attributes.append(ParsedAttribute(name, text[i + 1:].strip(), VALUE_EXPRESSION))
                    break
                attributes.append(ParsedAttribute(name, text[i + 1:end - 1].strip(), VALUE_EXPRESSION))
                i = end
            else:
                start = i
                while i < n and not text[i].isspace() and text[i] not in '/>':
                    i += 1
                attributes.append(ParsedAttribute(name, text[start:i], VALUE_STRING))
        return attributes

    def parse(self, attributes_text: str, context: ConversionContext) -> str:
        """Convert raw attribute text to a Horizon property list.

        Args:
            attributes_text: Text between the tag name and its closing > or />
            context: Conversion context receiving warnings

        Returns:
            Properties joined with ", " (empty string when there are none)
        """
        if not attributes_text.strip():
            return ""

        placeholders: List[str] = []
        styles: List[str] = []
        press_handlers: List[str] = []
        rest: List[str] = []

        for attribute in self.tokenize(attributes_text):
            if attribute.kind == VALUE_SPREAD:
                rest.append(f"...{attribute.value}")
                continue

            mapping = ATTRIBUTE_MAPPINGS.get(attribute.name)
            if mapping is None:
                rest.append(f"{attribute.name}: {attribute.render_value()}")
                continue

            if mapping.warning:
                context.warn(mapping.warning.format(value=attribute.value))

            if mapping.transform == TRANSFORM_PLACEHOLDER:
                placeholders.append(mapping.placeholder.format(value=attribute.value))
            elif mapping.transform == TRANSFORM_DROP:
                logger.debug(f"Dropped attribute {attribute.name}")
            elif mapping.transform == TRANSFORM_STYLE:
                if attribute.kind == VALUE_STRING:
                    value = css_to_style_object(attribute.value)
                else:
                    value = attribute.render_value()
                styles.append(f"{STYLE}: {value}")
            elif mapping.target == PRESS_HANDLER:
                press_handlers.append(f"{PRESS_HANDLER}: {attribute.render_value()}")
            else:
                rest.append(f"{mapping.target}: {attribute.render_value()}")

        return ", ".join(placeholders + styles + press_handlers + rest)
