"""Tests for formatting record values"""

import pytest

from jlv.models.record import get_value, value_to_string


@pytest.mark.parametrize(
    "value,expected",
    [
        ("text", "text"),
        (None, "null"),
        (True, "true"),
        (False, "false"),
        (12, "12"),
        (1.5, "1.5"),
        ({"k": "é"}, '{"k": "é"}'),
        ([1, 2], "[1, 2]"),
    ],
)
def test_value_to_string(value, expected):
    """Test the text form of JSON values"""
    # Act & Assert
    assert value_to_string(value) == expected


def test_get_value_of_missing_field_is_empty():
    """Test that a missing field formats as an empty string"""
    # Act & Assert
    assert get_value({"a": 1}, "b") == ""
    assert get_value({"a": 1}, "a") == "1"
