"""Unit tests for template parsing helpers."""

from datetime import UTC, datetime

import pytest

from quire_core.template.dates import format_rfc2822, format_rfc3339
from quire_core.template.parser import (
    byte_length,
    find_brace,
    parse_date_format_specifier,
    parse_function_notation,
)


class TestFindBrace:
    """Tests for find_brace()."""

    def test_first_of_either(self):
        assert find_brace("ab}c{") == 2
        assert find_brace("ab{c}") == 2

    def test_none(self):
        assert find_brace("plain") == -1

    def test_start(self):
        assert find_brace("{a}", 1) == 2

    def test_long_run_of_openers(self):
        text = "{{" * 5000 + "}"
        assert find_brace(text, 1) == 1
        assert find_brace(text, 10000) == 10000


class TestParseFunctionNotation:
    """Tests for parse_function_notation()."""

    @pytest.mark.parametrize(
        "spec,expected",
        [
            ("date(post, rfc2822)", ("date", ["post", "rfc2822"])),
            ('date( now_utc ,  "%Y %B %d" )', ("date", ["now_utc", '"%Y %B %d"'])),
            ("tags()", ("tags", [])),
            ("tags(hashtag)", ("tags", ["hashtag"])),
            ("tags(hashtag", ("tags", [])),
            ("  f  (a)", ("f", ["a"])),
        ],
    )
    def test_parses(self, spec, expected):
        assert parse_function_notation(spec) == expected

    @pytest.mark.parametrize("spec", ["title", "(post)", "   (a, b)"])
    def test_not_a_function(self, spec):
        assert parse_function_notation(spec) is None

    def test_naive_comma_split(self):
        """Commas inside quotes still separate arguments."""
        assert parse_function_notation('date(post, "%d, %m")') == ("date", ["post", '"%d', '%m"'])


class TestParseDateFormatSpecifier:
    """Tests for parse_date_format_specifier()."""

    WHEN = datetime(2018, 9, 6, 16, 32, 22, tzinfo=UTC)

    @pytest.mark.parametrize("spec", ["rfc2822", "rfc_2822", "RFC2822", "RFC_2822"])
    def test_rfc2822(self, spec):
        assert parse_date_format_specifier(spec) is format_rfc2822

    @pytest.mark.parametrize("spec", ["rfc3339", "rfc_3339", "RFC3339", "RFC_3339"])
    def test_rfc3339(self, spec):
        assert parse_date_format_specifier(spec) is format_rfc3339

    def test_strftime(self):
        formatter = parse_date_format_specifier('"%Y-%m-%d"')
        assert formatter(self.WHEN) == "2018-09-06"

    def test_strftime_english_names(self):
        formatter = parse_date_format_specifier('"%A %a, %B %b %h"')
        assert formatter(self.WHEN) == "Thursday Thu, September Sep Sep"

    def test_strftime_escapes_and_flags(self):
        formatter = parse_date_format_specifier('"%%a %%%d %-m"')
        assert formatter(self.WHEN) == "%a %06 9"

    @pytest.mark.parametrize(
        "spec",
        ["iso8601", '"%Y', '%Y"', '"', "Rfc2822", "RFC-2822", "", '"%Q %"', '"%Y %"', '"%Ey"'],
    )
    def test_rejected(self, spec):
        assert parse_date_format_specifier(spec) is None


class TestByteLength:
    """Tests for byte_length()."""

    def test_multibyte(self):
        assert byte_length("zażółć") == 10
        assert byte_length("abc") == 3
