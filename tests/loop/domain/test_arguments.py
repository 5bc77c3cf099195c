"""Tests for tool-call argument parsing."""

from assistant_core.loop.domain.arguments import (
    ArgumentParseError,
    ParsedArguments,
    parse_arguments,
)


class TestParseArguments:
    def test_object_is_parsed(self) -> None:
        result = parse_arguments('{"city": "Paris", "days": 3}')

        assert isinstance(result, ParsedArguments)
        assert result.value == {"city": "Paris", "days": 3}

    def test_empty_string_means_no_arguments(self) -> None:
        result = parse_arguments("")

        assert isinstance(result, ParsedArguments)
        assert result.value == {}

    def test_whitespace_only_means_no_arguments(self) -> None:
        result = parse_arguments("   \n")

        assert isinstance(result, ParsedArguments)
        assert result.value == {}

    def test_malformed_json_is_a_parse_error(self) -> None:
        result = parse_arguments('{"city": ')

        assert isinstance(result, ArgumentParseError)
        assert result.reason.startswith("Invalid tool arguments")

    def test_json_array_is_a_parse_error(self) -> None:
        result = parse_arguments("[1, 2]")

        assert isinstance(result, ArgumentParseError)
        assert "list" in result.reason

    def test_json_scalar_is_a_parse_error(self) -> None:
        assert isinstance(parse_arguments('"hello"'), ArgumentParseError)

    def test_nested_objects_are_preserved(self) -> None:
        result = parse_arguments('{"filter": {"tags": ["a", "b"]}}')

        assert isinstance(result, ParsedArguments)
        assert result.value == {"filter": {"tags": ["a", "b"]}}
