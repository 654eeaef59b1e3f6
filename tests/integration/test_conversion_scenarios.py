"""Integration tests for whole-file conversions.

Each test converts a complete React source and checks the generated
Horizon code together with the warnings and component metadata.
"""

from react2horizon.converter.pipeline import PREAMBLE_HEADER
from tests.fixtures.sample_components import (
    CLOCK_CLASS_COMPONENT,
    COUNTER_COMPONENT,
    MIXED_COMPONENTS,
    TODO_LIST_COMPONENT,
    WELCOME_COMPONENT,
)


class TestWelcomeConversion:
    """A stateless component with one destructured prop."""

    def test_prop_is_interpolated_in_template(self, converter):
        result = converter.convert(WELCOME_COMPONENT)

        assert result.success is True
        assert result.errors == []
        assert "return View({ children: Text({ text: `Hello, ${this.props.name}!` }) });" in result.code

    def test_generated_class(self, converter):
        result = converter.convert(WELCOME_COMPONENT)

        assert result.code.startswith(PREAMBLE_HEADER)
        assert "interface WelcomeProps {\n  name: any;\n}" in result.code
        assert "export class Welcome extends UIComponent {" in result.code
        assert "import React" not in result.code

    def test_metadata(self, converter):
        result = converter.convert(WELCOME_COMPONENT)

        assert len(result.components) == 1
        assert result.components[0].name == "Welcome"
        assert result.components[0].props == ["name"]
        assert result.components[0].state == []
        assert result.components[0].is_class is False


class TestCounterConversion:
    """Hooks state, an effect and a press handler."""

    def test_state_becomes_bindings_with_accessors(self, converter):
        result = converter.convert(COUNTER_COMPONENT)

        assert "  private count: Binding<number> = new Binding(0);" in result.code
        assert "  private label: Binding<string> = new Binding('Clicks');" in result.code
        assert "  private setCount = (newValue: number) => {" in result.code
        assert "    this.count.set(newValue);" in result.code

    def test_handlers_and_references_are_qualified(self, converter):
        result = converter.convert(COUNTER_COMPONENT)

        assert "const increment = () => this.setCount(this.count + this.props.step);" in result.code
        assert "Text({ text: `${this.label}: ${this.count}` })" in result.code
        assert "onPress: increment" in result.code
        assert "onClick" not in result.code

    def test_class_name_becomes_placeholder(self, converter):
        result = converter.convert(COUNTER_COMPONENT)

        assert '/* TODO: Convert className "counter" to Horizon style */' in result.code
        assert 'Converting className "counter" to style object - manual conversion needed' in result.warnings

    def test_effect_is_commented_into_start(self, converter):
        result = converter.convert(COUNTER_COMPONENT)

        assert "    // Original useEffect dependencies: [count, label]" in result.code
        assert "    // document.title = `${label}: ${count}`;" in result.code
        assert "Converting useEffect - place logic in start lifecycle method" in result.warnings

    def test_warnings(self, converter):
        result = converter.convert(COUNTER_COMPONENT)

        assert result.success is True
        assert result.warnings[0] == "Converting functional component: Counter"
        assert (
            "Converting useState for count - implemented as Binding<number> field with accessor setCount()"
            in result.warnings
        )

    def test_metadata_is_deterministic(self, converter):
        results = [converter.convert(COUNTER_COMPONENT) for _ in range(3)]

        info = results[0].components[0]
        assert info.props == ["step"]
        assert info.state == ["count (number)", "label (string)"]
        assert len(info.effects) == 1
        assert info.effects[0].startswith("Effect [count, label]: document.title")
        assert all(r.components == results[0].components for r in results)
        assert all(r.warnings == results[0].warnings for r in results)


class TestTodoListConversion:
    """List rendering with .map and a function-keyword component."""

    def test_map_becomes_dynamic_list(self, converter):
        result = converter.convert(TODO_LIST_COMPONENT)

        assert "DynamicList({ data: this.todos, renderItem: (todo) => View({ children: todo.text }) })" in result.code
        assert "Converting array.map to DynamicList" in result.warnings

    def test_state_updates_use_accessor(self, converter):
        result = converter.convert(TODO_LIST_COMPONENT)

        assert "this.setTodos([...this.todos, { id: Date.now(), text }]);" in result.code
        assert "private todos: Binding<any[]> = new Binding([]);" in result.code

    def test_aliased_import_is_removed(self, converter):
        result = converter.convert(TODO_LIST_COMPONENT)

        assert "@/components" not in result.code
        assert "class TodoList extends UIComponent {" in result.code
        assert "Text({ text: this.props.title })" in result.code


class TestClassConversion:
    """Class components are rewritten partially."""

    def test_class_component_is_flagged(self, converter):
        result = converter.convert(CLOCK_CLASS_COMPONENT)

        assert result.success is True
        assert result.components[0].is_class is True
        assert any("converted partially" in w for w in result.warnings)
        assert "initializeUI(): UINode {" in result.code

    def test_mixed_file_reports_both_components(self, converter):
        result = converter.convert(MIXED_COMPONENTS)

        assert [(c.name, c.is_class) for c in result.components] == [("Badge", False), ("Legacy", True)]
        assert "Converting span to Text - verify if appropriate" in result.warnings

    def test_json_report_uses_is_class_key(self, converter):
        data = converter.convert(MIXED_COMPONENTS).to_dict()

        assert data["components"][1]["isClass"] is True
        assert "is_class" not in data["components"][1]


class TestLocalBindingsConversion:
    """Callback parameters and guarded lists inside a component."""

    SOURCE = (
        "const Tags = ({ tags }) => {\n"
        "  const [count, setCount] = useState(0);\n"
        "  const bump = () => setCount(count => count + 1);\n"
        "  return <div>{tags.length > 0 && tags.map((tag) => <span>{tag}</span>)}</div>;\n"
        "};\n"
    )

    def test_functional_update_keeps_callback_parameter(self, converter):
        result = converter.convert(self.SOURCE)

        assert "const bump = () => this.setCount(count => count + 1);" in result.code

    def test_guarded_map_keeps_guard(self, converter):
        result = converter.convert(self.SOURCE)

        assert (
            "this.props.tags.length > 0 && DynamicList({ data: this.props.tags, "
            "renderItem: (tag) => Text({ text: tag }) })"
        ) in result.code
        assert "Converting array.map to DynamicList" in result.warnings
