from jsonnode.rows import (
    MISSING,
    Row,
    RowType,
    as_rows,
    is_bare_scalar,
    rows_from_value,
    type_of_value,
)


def test_row_defaults():
    row = Row()
    assert row.key is None
    assert row.value is MISSING
    assert row.type is None
    assert not row.has_value
    assert not row.is_container


def test_row_from_dict_partial():
    row = Row.from_dict({"key": 1, "extra": True})
    assert row.key == "1"
    assert row.value is MISSING
    assert row.type is None


def test_row_container():
    assert Row(type="array").is_container
    assert Row(type=RowType.OBJECT).is_container
    assert not Row(type="string").is_container


def test_missing_is_a_singleton():
    assert repr(MISSING) == "MISSING"
    assert not MISSING
    assert type(MISSING)() is MISSING


def test_as_rows_mixed_input():
    rows = as_rows([Row(key="a"), {"key": "b"}, 3, None])
    assert [r.key for r in rows] == ["a", "b"]


def test_is_bare_scalar():
    assert is_bare_scalar([Row(value=1)])
    assert is_bare_scalar([Row(key="", value=1)])
    assert not is_bare_scalar([Row(key="a", value=1)])
    assert not is_bare_scalar([Row(value=1), Row(value=2)])
    assert not is_bare_scalar([])


def test_type_of_value():
    assert type_of_value(None) == "null"
    assert type_of_value(True) == "boolean"
    assert type_of_value(1) == "number"
    assert type_of_value(1.5) == "number"
    assert type_of_value("x") == "string"
    assert type_of_value([]) == "array"
    assert type_of_value({}) == "object"


def test_rows_from_scalar():
    assert rows_from_value("hi") == [Row(value="hi", type="string")]


def test_rows_from_object(customer_document, customer_rows):
    assert rows_from_value(customer_document["customer"]) == customer_rows


def test_rows_from_array():
    assert rows_from_value([1, 2]) == []
