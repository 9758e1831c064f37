import math

import pytest
from block_toolkit.coercion import (
    DEFAULT_COLOR,
    DEFAULT_MATRIX,
    coerce_argument,
    is_numeric,
    to_boolean,
    to_color,
    to_matrix,
    to_number,
    to_string,
)
from block_toolkit.types import ArgumentType


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("3", 3),
        (" 2.5 ", 2.5),
        ("1e3", 1000),
        ("0x10", 16),
        ("", 0),
        ("abc", 0),
        ("1_000", 0),
        ("nan", 0),
        (None, 0),
        (True, 1),
        (False, 0),
        (7, 7),
        (float("nan"), 0),
    ],
)
def test_to_number(value, expected) -> None:
    assert to_number(value) == expected


def test_to_number_infinity() -> None:
    assert to_number("Infinity") == math.inf
    assert to_number("-Infinity") == -math.inf


def test_is_numeric() -> None:
    assert is_numeric("42")
    assert is_numeric("")
    assert not is_numeric("forty-two")
    assert not is_numeric(None)


def test_to_string() -> None:
    assert to_string(3.0) == "3"
    assert to_string(0.5) == "0.5"
    assert to_string(True) == "true"
    assert to_string(None) == ""
    assert to_string(math.inf) == "Infinity"
    assert to_string("text") == "text"


@pytest.mark.parametrize(
    ("value", "expected"),
    [("", False), ("0", False), ("false", False), ("FALSE", False), ("hello", True), (0, False), (2, True)],
)
def test_to_boolean(value, expected) -> None:
    assert to_boolean(value) is expected


def test_to_color() -> None:
    assert to_color("#ABC") == "#aabbcc"
    assert to_color("#ff8c1a") == "#ff8c1a"
    assert to_color(0xFF0000) == "#ff0000"
    assert to_color("red") is None
    assert to_color(True) is None


def test_to_matrix() -> None:
    pattern = "0101010101010101010101010"
    assert to_matrix(pattern) == pattern
    assert to_matrix("012") is None


def test_coerce_number_falls_back_to_default() -> None:
    assert coerce_argument(ArgumentType.NUMBER, "abc", "7") == 7
    assert coerce_argument(ArgumentType.NUMBER, "abc") == 0
    assert coerce_argument(ArgumentType.ANGLE, "90", 0) == 90


def test_coerce_missing_value_uses_default() -> None:
    assert coerce_argument(ArgumentType.STRING, None, "text") == "text"
    assert coerce_argument(ArgumentType.STRING, None) == ""
    assert coerce_argument(ArgumentType.BOOLEAN, None, "true") is True


def test_coerce_string_casts_values() -> None:
    assert coerce_argument(ArgumentType.STRING, 3.0, "1") == "3"


def test_coerce_color_and_matrix_defaults() -> None:
    assert coerce_argument(ArgumentType.COLOR, "nope") == DEFAULT_COLOR
    assert coerce_argument(ArgumentType.COLOR, "nope", "#123456") == "#123456"
    assert coerce_argument(ArgumentType.MATRIX, "nope") == DEFAULT_MATRIX


def test_coerce_image_ignores_value() -> None:
    assert coerce_argument(ArgumentType.IMAGE, "data", "icon.png") == "icon.png"
