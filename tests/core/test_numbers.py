from __future__ import annotations

import pytest

from json_log_reader.core.numbers import JsonNumber, loads, parse, transform_numbers


def test_parse_keeps_number_literals_as_tokens() -> None:
    value = parse('{"a": 42, "b": 4.20, "c": [1e3]}')
    assert value["a"] == JsonNumber("42")
    assert isinstance(value["a"], JsonNumber)
    assert value["b"] == "4.20"
    assert isinstance(value["c"][0], JsonNumber)


def test_integers_stay_integers() -> None:
    value = loads('{"id": 42, "neg": -7, "zero": -0}')
    assert value == {"id": 42, "neg": -7, "zero": 0}
    assert all(type(v) is int for v in value.values())


def test_large_integer_is_not_rounded() -> None:
    value = loads('{"id": 12345678901234567890123}')
    assert value["id"] == 12345678901234567890123
    assert type(value["id"]) is int


def test_fraction_and_exponent_become_floats() -> None:
    value = loads('{"x": 42.5, "y": 1e3, "z": 2E-2, "w": 42.0}')
    assert value == {"x": 42.5, "y": 1000.0, "z": 0.02, "w": 42.0}
    assert all(type(v) is float for v in value.values())


def test_nested_values_are_transformed() -> None:
    value = loads('{"a": {"b": [1, 2.5, {"c": 3}]}, "s": "4"}')
    assert value == {"a": {"b": [1, 2.5, {"c": 3}]}, "s": "4"}
    assert type(value["a"]["b"][0]) is int
    assert type(value["a"]["b"][1]) is float
    assert type(value["a"]["b"][2]["c"]) is int
    assert type(value["s"]) is str


def test_float_overflow_keeps_literal() -> None:
    assert transform_numbers(JsonNumber("1e400")) == "1e400"


def test_parse_ignores_leading_whitespace_and_trailing_data() -> None:
    assert loads('  \t{"a": 1} trailing') == {"a": 1}


@pytest.mark.parametrize("text", ["", "{", "not json", '{"a": NaN}', '{"a": Infinity}'])
def test_parse_rejects_invalid_json(text: str) -> None:
    with pytest.raises(ValueError):
        loads(text)
