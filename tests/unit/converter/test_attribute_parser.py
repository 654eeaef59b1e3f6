"""Unit tests for converter.attribute_parser module."""

import pytest

from react2horizon.converter.attribute_parser import (
    VALUE_BOOLEAN,
    VALUE_EXPRESSION,
    VALUE_SPREAD,
    VALUE_STRING,
    AttributeParser,
    css_to_style_object,
)
from react2horizon.converter.mappings import (
    ATTRIBUTE_MAPPINGS,
    TRANSFORM_DROP,
    TRANSFORM_PLACEHOLDER,
)
from react2horizon.converter.models import ConversionContext


@pytest.fixture
def parser():
    return AttributeParser()


@pytest.fixture
def context():
    return ConversionContext()


class TestAttributeMappingTable:
    """Every entry of the attribute mapping table is exercised."""

    @pytest.mark.parametrize("source_name", sorted(ATTRIBUTE_MAPPINGS))
    def test_mapping_entry_is_applied(self, parser, context, source_name):
        """Each mapped attribute produces its target key, placeholder or drop."""
        mapping = ATTRIBUTE_MAPPINGS[source_name]

        result = parser.parse(f'{source_name}="value"', context)

        if mapping.transform == TRANSFORM_PLACEHOLDER:
            assert result == mapping.placeholder.format(value="value")
        elif mapping.transform == TRANSFORM_DROP:
            assert result == ""
        else:
            assert result.startswith(f"{mapping.target}: ")
            assert source_name not in result or source_name == mapping.target

        if mapping.warning:
            assert context.warnings == [mapping.warning.format(value="value")]
        else:
            assert context.warnings == []

    @pytest.mark.parametrize("source_name,target", [
        ("onClick", "onPress"),
        ("onMouseEnter", "onEnter"),
        ("onMouseLeave", "onExit"),
        ("src", "source"),
        ("alt", "accessibilityLabel"),
    ])
    def test_identity_renames(self, parser, context, source_name, target):
        result = parser.parse(f'{source_name}={{handler}}', context)

        assert result == f"{target}: handler"

    def test_unmapped_attribute_passes_through(self, parser, context):
        assert parser.parse('id="main" data-test={value}', context) == 'id: "main", data-test: value'
        assert context.warnings == []


class TestAttributeParserParse:
    """Test cases for AttributeParser.parse()."""

    def test_output_order_is_placeholder_style_press_then_rest(self, parser, context):
        """Class placeholders come first, then style, then onPress, then the rest."""
        result = parser.parse(
            'id="x" onClick={go} className="card" style={{ color: \'red\' }}',
            context,
        )

        assert result == (
            '/* TODO: Convert className "card" to Horizon style */, '
            "style: { color: 'red' }, onPress: go, id: \"x\""
        )

    def test_class_name_warning_includes_value(self, parser, context):
        parser.parse('className="btn primary"', context)

        assert context.warnings == [
            'Converting className "btn primary" to style object - manual conversion needed'
        ]

    def test_string_style_becomes_style_object(self, parser, context):
        result = parser.parse('style="background-color: red; padding: 4px"', context)

        assert result == 'style: { backgroundColor: "red", padding: "4px" }'

    def test_key_is_dropped_with_warning(self, parser, context):
        result = parser.parse('key={item.id} title="x"', context)

        assert result == 'title: "x"'
        assert context.warnings == [
            "Dropping key attribute (item.id) - DynamicList manages item identity"
        ]

    def test_boolean_and_spread_attributes(self, parser, context):
        result = parser.parse('disabled {...rest}', context)

        assert result == "disabled: true, ...rest"

    def test_empty_attribute_text(self, parser, context):
        assert parser.parse("   ", context) == ""

    def test_arrow_handler_with_nested_braces(self, parser, context):
        result = parser.parse("onClick={() => { setOpen(!open); }}", context)

        assert result == "onPress: () => { setOpen(!open); }"


class TestAttributeParserTokenize:
    """Test cases for AttributeParser.tokenize()."""

    def test_value_kinds(self):
        attributes = AttributeParser.tokenize('a="1" b={two} c {...d} e=bare')

        assert [(a.name, a.value, a.kind) for a in attributes] == [
            ("a", "1", VALUE_STRING),
            ("b", "two", VALUE_EXPRESSION),
            ("c", "true", VALUE_BOOLEAN),
            ("...", "d", VALUE_SPREAD),
            ("e", "bare", VALUE_STRING),
        ]

    def test_string_value_containing_greater_than(self):
        attributes = AttributeParser.tokenize('title="a > b"')

        assert attributes[0].value == "a > b"


class TestCssToStyleObject:
    """Test cases for css_to_style_object()."""

    def test_converts_properties_to_camel_case(self):
        assert css_to_style_object("font-size: 12px; color: blue;") == '{ fontSize: "12px", color: "blue" }'

    def test_empty_css(self):
        assert css_to_style_object("  ") == "{}"
