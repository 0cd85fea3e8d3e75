"""Tests for built-in cast and custom hooks."""

import pytest

from ontoschema.errors import ValueCheckError
from ontoschema.rules.hooks import (
    HookRegistry,
    cast_boolean,
    cast_hexadecimal,
    cast_number,
    cast_string,
    local_name,
)


def test_local_name():
    assert local_name(":rule:castNumber") == "castNumber"
    assert local_name("castNumber") == "castNumber"


class TestCasts:
    """Test cast functions."""

    def test_cast_string(self):
        assert cast_string(3, "") == "3"
        assert cast_string(True, "") == "true"

    def test_cast_number(self):
        assert cast_number("42", "") == 42
        assert cast_number(" -1.5 ", "") == -1.5
        assert cast_number(7, "") == 7

    def test_cast_number_rejects(self):
        with pytest.raises(ValueCheckError):
            cast_number("four", "field")
        with pytest.raises(ValueCheckError):
            cast_number(True, "field")

    def test_cast_boolean(self):
        assert cast_boolean("no", "") is False
        assert cast_boolean("yes", "") is True
        assert cast_boolean(0, "") is False

    def test_cast_hexadecimal(self):
        assert cast_hexadecimal("FF00", "") == "ff00"


class TestRegistry:
    """Test hook registration."""

    def test_default_names(self):
        registry = HookRegistry.default()
        assert set(registry.casts) == {"castString", "castNumber", "castBoolean", "castHexadecimal"}
        assert "customEmail" in registry.customs

    def test_lookup_by_term_key(self):
        registry = HookRegistry.default()
        assert registry.cast(":rule:castNumber") is cast_number
