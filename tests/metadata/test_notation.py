# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the compact type notation parser."""

import pytest

from apishape.metadata import NotationError, TypeShape, parse_type

# ###############
# Test Helpers
# ###############


def _shape(name: str, *arguments: TypeShape) -> TypeShape:
    return TypeShape(name=name, arguments=tuple(arguments))


# ###############
# Tests
# ###############


class TestParseType:
    def test_simple_name(self) -> None:
        assert parse_type("int") == _shape("int")

    def test_qualified_and_nested_names(self) -> None:
        assert parse_type("com.example.Outer$Inner") == _shape("com.example.Outer$Inner")

    def test_type_arguments(self) -> None:
        assert parse_type("Map<String, List<com.example.User>>") == _shape(
            "Map",
            _shape("String"),
            _shape("List", _shape("com.example.User")),
        )

    def test_whitespace_is_ignored(self) -> None:
        assert parse_type("  List < String >  ") == parse_type("List<String>")

    def test_array_suffix(self) -> None:
        assert parse_type("int[]") == _shape("Array", _shape("int"))

    def test_nested_array_suffix(self) -> None:
        assert parse_type("String[][]") == _shape("Array", _shape("Array", _shape("String")))

    def test_str_round_trips_arguments(self) -> None:
        assert str(parse_type("Page<com.example.User>")) == "Page<com.example.User>"


class TestNotationErrors:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            "List<",
            "List<String",
            "List<String,>",
            "Map<String String>",
            "int[",
            "com.example.",
            "com..Example",
            "1abc",
            "List<String>>",
        ],
    )
    def test_malformed_expressions(self, text: str) -> None:
        with pytest.raises(NotationError):
            parse_type(text)

    def test_error_reports_column(self) -> None:
        with pytest.raises(NotationError) as exc_info:
            parse_type("List<String;>")
        assert exc_info.value.column == 12
        assert "Column 12" in str(exc_info.value)
