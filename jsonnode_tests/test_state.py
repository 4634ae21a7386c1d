import pytest

from jsonnode.rows import Row
from jsonnode.state import (
    EditableField,
    EditState,
    cancel_editing,
    node_changed,
    seed_state,
    set_field,
    set_single,
    start_editing,
)


class TestSeedState:
    """Tests for creating the edit state from rows."""

    def test_record(self, customer_rows):
        state = seed_state(customer_rows)
        assert not state.editing
        assert state.single is None
        assert state.fields == {
            "name": EditableField("Alice", "string"),
            "age": EditableField("30", "number"),
            "vip": EditableField("false", "boolean"),
            "note": EditableField("", "null"),
        }

    def test_bare_scalar(self):
        state = seed_state([Row(value=12.0, type="number")])
        assert state.is_single
        assert state.single == EditableField("12", "number")
        assert state.fields == {}

    def test_bare_scalar_without_type(self):
        state = seed_state([{"value": "x"}])
        assert state.single == EditableField("x", "string")

    def test_bare_scalar_without_value(self):
        state = seed_state([{}])
        assert state.single == EditableField("", "string")

    def test_no_rows(self):
        state = seed_state([])
        assert state.single is None
        assert state.fields == {}

    def test_rows_without_key_are_skipped(self):
        state = seed_state([Row(value=1), Row(key="a", value=2)])
        assert list(state.fields) == ["a"]


class TestTransitions:
    """Tests for the state transition functions."""

    def test_start_editing_keeps_fields(self, customer_rows):
        state = seed_state(customer_rows)
        editing = start_editing(state)
        assert editing.editing
        assert editing.fields == state.fields
        assert not state.editing

    def test_set_field(self, customer_rows):
        state = start_editing(seed_state(customer_rows))
        changed = set_field(state, "name", "Bob")
        assert changed.fields["name"] == EditableField("Bob", "string")
        assert state.fields["name"].value == "Alice"
        assert changed.editing

    def test_set_field_unknown(self, customer_rows):
        with pytest.raises(KeyError):
            set_field(seed_state(customer_rows), "orders", "x")

    def test_set_single(self):
        state = seed_state([Row(value="a", type="string")])
        assert set_single(state, "b").single == EditableField("b", "string")

    def test_set_single_on_record(self, customer_rows):
        with pytest.raises(ValueError):
            set_single(seed_state(customer_rows), "b")

    def test_cancel_reseeds(self, customer_rows):
        state = set_field(
            start_editing(seed_state(customer_rows)), "name", "Bob"
        )
        assert state.fields["name"].value == "Bob"
        cancelled = cancel_editing(customer_rows)
        assert not cancelled.editing
        assert cancelled.fields["name"].value == "Alice"

    def test_node_changed_lands_in_viewing(self):
        state = node_changed([Row(key="x", value=1, type="number")])
        assert state == EditState(
            editing=False, fields={"x": EditableField("1", "number")}
        )


class TestBuildValue:
    """Tests for turning the fields back into a value."""

    def test_record_keeps_types(self, customer_rows):
        state = set_field(seed_state(customer_rows), "age", "31")
        assert state.build_value() == {
            "name": "Alice",
            "age": 31,
            "vip": False,
            "note": None,
        }

    def test_record_number_fallback(self, customer_rows):
        state = set_field(seed_state(customer_rows), "age", "old")
        assert state.build_value()["age"] == "old"

    def test_single(self):
        state = seed_state([Row(value=True, type="boolean")])
        assert state.build_value() is True
        assert set_single(state, "no").build_value() is False

    def test_empty_record(self):
        assert seed_state([]).build_value() == {}
