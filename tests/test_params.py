"""Tests for src.core.params — command line and parameter decoding."""
import pytest

from src.core.params import coerce_param, parse_command_line, parse_params, to_int


class TestCoerceParam:
    def test_bools(self):
        assert coerce_param("true") is True
        assert coerce_param("false") is False

    def test_bool_is_case_sensitive(self):
        assert coerce_param("True") == "True"

    def test_int(self):
        assert coerce_param("42") == 42
        assert isinstance(coerce_param("42"), int)

    def test_float(self):
        assert coerce_param("1.5") == pytest.approx(1.5)

    def test_string(self):
        assert coerce_param("Intro") == "Intro"

    def test_quotes_removed(self):
        assert coerce_param('"Intro"') == "Intro"
        assert coerce_param("it's") == "its"

    def test_empty(self):
        assert coerce_param("") == ""


class TestParseParams:
    def test_pairs(self):
        assert parse_params(["number=2", "text=Hi"]) == {"number": 2, "text": "Hi"}

    def test_tokens_without_equals_skipped(self):
        assert parse_params(["text=Test", "Title"]) == {"text": "Test"}

    def test_empty_key_skipped(self):
        assert parse_params(["=5"]) == {}

    def test_first_equals_splits(self):
        assert parse_params(["text=a=b"]) == {"text": "a=b"}

    def test_later_value_wins(self):
        assert parse_params(["n=1", "n=2"]) == {"n": 2}


class TestParseCommandLine:
    def test_command_and_params(self):
        assert parse_command_line("goto-slide number=2") == ("goto-slide", {"number": 2})

    def test_extra_whitespace(self):
        assert parse_command_line("  list-slides   ") == ("list-slides", {})

    def test_empty(self):
        assert parse_command_line("") == ("", {})


class TestToInt:
    @pytest.mark.parametrize("value, expected", [
        (3, 3), (3.9, 3), ("7", 7), ("3rd", 3), ("-2", -2),
    ])
    def test_numbers(self, value, expected):
        assert to_int(value) == expected

    @pytest.mark.parametrize("value", [None, True, "abc", ""])
    def test_not_numbers(self, value):
        assert to_int(value) is None
