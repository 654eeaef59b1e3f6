"""Unit tests for converter.reference_rewriter module."""

import pytest

from react2horizon.converter.reference_rewriter import qualify, rename_parameter


class TestQualify:
    """Test cases for qualify()."""

    def test_props_access(self):
        assert qualify("props.title.toUpperCase()", []) == "this.props.title.toUpperCase()"

    def test_state_reads(self):
        assert qualify("const total = count * 2;", ["count"]) == "const total = this.count * 2;"

    def test_setter_calls(self):
        assert qualify("setCount(0);", ["count"]) == "this.setCount(0);"

    def test_setter_calls_are_qualified_without_known_state(self):
        assert qualify("onPress: () => setOpen(true)", []) == "onPress: () => this.setOpen(true)"

    def test_timer_globals_are_not_setters(self):
        body = "setTimeout(tick, 100); setInterval(tick, 5);"

        assert qualify(body, []) == body

    def test_destructured_props(self):
        result = qualify("Text({ text: `Hello, ${name}!` })", [], {"name": "name"})

        assert result == "Text({ text: `Hello, ${this.props.name}!` })"

    def test_renamed_destructured_prop_uses_prop_key(self):
        assert qualify("label.length", [], {"label": "title"}) == "this.props.title.length"

    def test_iterable_props_are_bound_under_their_own_key(self):
        assert qualify("size + 1", [], ["size"]) == "this.props.size + 1"

    def test_declarations_are_not_qualified(self):
        body = "const count = 1; let setCount = null; function setCount(v) {}"

        assert qualify(body, ["count"]) == body

    def test_member_names_are_not_qualified(self):
        assert qualify("item.count + other?.count", ["count"]) == "item.count + other?.count"

    def test_object_keys_are_not_qualified(self):
        assert qualify("({ count: count })", ["count"]) == "({ count: this.count })"

    def test_shorthand_property_is_expanded(self):
        assert qualify("save({ id, count })", ["count"]) == "save({ id, count: this.count })"

    def test_array_element_is_not_treated_as_shorthand(self):
        assert qualify("[first, count]", ["count"]) == "[first, this.count]"

    def test_spread_is_qualified(self):
        result = qualify("setTodos([...todos, todo])", ["todos"])

        assert result == "this.setTodos([...this.todos, todo])"

    def test_string_literals_are_untouched(self):
        result = qualify("log('count', \"props.x\", count)", ["count"])

        assert result == "log('count', \"props.x\", this.count)"

    def test_comments_are_untouched(self):
        assert qualify("// count\ncount", ["count"]) == "// count\nthis.count"

    def test_longer_names_win(self):
        assert qualify("countMax - count", ["count", "countMax"]) == "this.countMax - this.count"

    def test_arrow_parameter_shadows_state(self):
        assert qualify("setCount(count => count + 1)", ["count"]) == "this.setCount(count => count + 1)"

    def test_parenthesized_parameter_shadows_only_inside_callback(self):
        result = qualify("items.filter((count) => count > 0).length + count", ["count"])

        assert result == "items.filter((count) => count > 0).length + this.count"

    def test_destructured_parameter_shadows_prop(self):
        body = "DynamicList({ data: rows, renderItem: ({ name }) => Text({ text: name }) })"

        assert qualify(body, [], {"name": "name"}) == body

    def test_renamed_and_defaulted_pattern_bindings(self):
        body = "rows.map(({ id: key, label = 'none' }, [first]) => key + label + first)"

        assert qualify(body, ["key", "first"], ["label"]) == body

    def test_local_declaration_shadows_prop(self):
        body = "const { name } = user;\nlog(name);"

        assert qualify(body, [], {"name": "name"}) == body

    def test_declaration_inside_block_does_not_leak(self):
        result = qualify("if (ok) { const count = 1; use(count); }\nuse(count);", ["count"])

        assert result == "if (ok) { const count = 1; use(count); }\nuse(this.count);"

    def test_loop_variable_shadows_state(self):
        body = "for (const item of list) { total += item; }"

        assert qualify(body, ["item", "total"]) == "for (const item of list) { this.total += item; }"

    def test_function_parameter_shadows_state(self):
        body = "function format(count) { return count + 1; }"

        assert qualify(body, ["count"]) == body

    def test_template_substitution_inside_shadowing_callback(self):
        result = qualify("names.map(name => `${name} of ${total}`)", ["total", "name"])

        assert result == "names.map(name => `${name} of ${this.total}`)"

    @pytest.mark.parametrize("body,state,props", [
        ("setCount(count + props.step)", ["count"], None),
        ("Text({ text: `${label}: ${count}` })", ["count", "label"], None),
        ("DynamicList({ data: todos, renderItem: (todo) => View({ children: todo.text }) })", ["todos"], None),
        ("const x = [...items, { id, name }]; setItems(x);", ["items"], {"name": "name"}),
        ("onPress: () => setOpen(!open)", ["open"], {"title": "heading"}),
        ("setCount(count => count + step)", ["count"], ["step"]),
    ])
    def test_qualification_is_idempotent(self, body, state, props):
        """Qualifying already-qualified text changes nothing."""
        once = qualify(body, state, props)

        assert qualify(once, state, props) == once


class TestRenameParameter:
    """Test cases for rename_parameter()."""

    def test_renames_member_accesses(self):
        assert rename_parameter("p.title + p?.subtitle", "p", "props") == "props.title + props?.subtitle"

    def test_leaves_other_identifiers(self):
        body = "const p2 = map.p.x; p(1);"

        assert rename_parameter(body, "p", "props") == body

    def test_inner_parameter_with_same_name_is_kept(self):
        body = "p.items.map(p => p.label)"

        assert rename_parameter(body, "p", "props") == "props.items.map(p => p.label)"

    def test_same_name_is_noop(self):
        assert rename_parameter("props.a", "props", "props") == "props.a"
