#!/usr/bin/env python3
"""
Unit tests for input normalization
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from cache_save.config import input_env_name
from cache_save.inputs import (
    InputError, get_input, get_input_as_array, get_input_as_bool, get_input_as_int,
)


def _inputs(**values):
    return {input_env_name(name): value for name, value in values.items()}


class TestGetInput:

    def test_env_name_uppercases_and_replaces_spaces(self):
        assert input_env_name("upload-chunk-size") == "INPUT_UPLOAD-CHUNK-SIZE"
        assert input_env_name("my input") == "INPUT_MY_INPUT"

    def test_value_is_trimmed(self):
        assert get_input(_inputs(foo="  bar \n"), "foo") == "bar"

    def test_missing_optional_is_empty(self):
        assert get_input({}, "foo") == ""

    def test_missing_required_raises(self):
        with pytest.raises(InputError, match="Input required and not supplied: foo"):
            get_input({}, "foo", required=True)


class TestGetInputAsArray:

    def test_empty_if_not_required_and_missing(self):
        assert get_input_as_array({}, "foo") == []

    def test_raises_if_required_and_missing(self):
        with pytest.raises(InputError):
            get_input_as_array({}, "foo", required=True)

    def test_single_line(self):
        assert get_input_as_array(_inputs(foo="bar"), "foo") == ["bar"]

    def test_multiple_lines(self):
        assert get_input_as_array(_inputs(foo="bar\nbaz"), "foo") == ["bar", "baz"]

    def test_windows_line_endings(self):
        assert get_input_as_array(_inputs(foo="bar\r\nbaz"), "foo") == ["bar", "baz"]

    def test_empty_lines_dropped(self):
        assert get_input_as_array(_inputs(foo="\n\nbar\n\nbaz\n\n"), "foo") == ["bar", "baz"]

    def test_spaces_after_exclusion_removed(self):
        raw = "!   bar\n!  baz\n! qux\n!quux\ncorge\ngrault! garply\n!\r\t waldo"
        assert get_input_as_array(_inputs(foo=raw), "foo") == [
            "!bar",
            "!baz",
            "!qux",
            "!quux",
            "corge",
            "grault! garply",
            "!waldo",
        ]


class TestGetInputAsInt:

    def test_none_if_not_set(self):
        assert get_input_as_int({}, "undefined") is None

    def test_valid_value(self):
        assert get_input_as_int(_inputs(foo="8"), "foo") == 8

    def test_leading_digits_parsed(self):
        assert get_input_as_int(_inputs(foo="32MB"), "foo") == 32

    def test_non_numeric_is_none(self):
        assert get_input_as_int(_inputs(foo="bar"), "foo") is None

    def test_negative_is_none(self):
        assert get_input_as_int(_inputs(foo="-5"), "foo") is None

    def test_raises_if_required_and_missing(self):
        with pytest.raises(InputError):
            get_input_as_int({}, "undefined", required=True)


class TestGetInputAsBool:

    def test_false_if_not_set(self):
        assert get_input_as_bool({}, "foo", required=False) is False

    @pytest.mark.parametrize("value", ["true", "1"])
    def test_true_values(self, value):
        assert get_input_as_bool(_inputs(foo=value), "foo") is True

    @pytest.mark.parametrize("value", ["0", "false", "bar", "True", "yes"])
    def test_everything_else_is_false(self, value):
        assert get_input_as_bool(_inputs(foo=value), "foo") is False

    def test_required_with_value_does_not_raise(self):
        assert get_input_as_bool(_inputs(foo="true"), "foo", required=True) is True

    def test_raises_if_required_and_missing(self):
        with pytest.raises(InputError):
            get_input_as_bool({}, "missing", required=True)

    def test_raises_if_required_and_empty(self):
        with pytest.raises(InputError):
            get_input_as_bool(_inputs(badvalue=""), "badvalue", required=True)
