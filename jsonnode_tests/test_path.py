import pytest

from jsonnode.exceptions import PathSyntaxError
from jsonnode.path import format_path, format_step, parse_path


def test_format_path_root():
    assert format_path([]) == "$"
    assert format_path(None) == "$"
    assert format_path() == "$"


def test_format_path_mixed_steps():
    assert format_path(["customer", 0, "name"]) == '$["customer"][0]["name"]'


def test_format_path_only_indexes():
    assert format_path([0, 12]) == "$[0][12]"


def test_format_step_quotes_keys():
    assert format_step("a") == '["a"]'
    assert format_step("0") == '["0"]'
    assert format_step(3) == "[3]"


def test_format_step_escapes_quotes():
    assert format_step('say "hi"') == '["say \\"hi\\""]'


def test_format_step_keeps_unicode():
    assert format_step("café") == '["café"]'


def test_parse_path_root():
    assert parse_path("$") == []
    assert parse_path("  $  ") == []


def test_parse_path_mixed():
    assert parse_path('$["customer"][0]["name"]') == ["customer", 0, "name"]


def test_parse_path_single_quotes_and_spaces():
    assert parse_path("$[ 'a b' ][ 3 ]") == ["a b", 3]


def test_parse_path_inverts_format_path():
    steps = ["x", 1, 'quo"te', "0", 42]
    assert parse_path(format_path(steps)) == steps


@pytest.mark.parametrize(
    "text",
    [
        "customer",
        "$customer",
        "$[",
        "$[0",
        '$["a"',
        "$[-1]",
        "$[a]",
        "$['a]",
        '$["a\\q"]',
    ],
)
def test_parse_path_rejects_invalid(text):
    with pytest.raises(PathSyntaxError):
        parse_path(text)


def test_parse_path_error_offset():
    with pytest.raises(PathSyntaxError) as exc_info:
        parse_path("$[0]x")
    assert exc_info.value.offset == 4
    assert exc_info.value.text == "$[0]x"
