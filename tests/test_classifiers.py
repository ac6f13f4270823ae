"""Tests for token classifiers and relative-time shortening."""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jj_saver.classifiers import (
    continuation_content,
    is_change_id,
    is_clock_time,
    is_continuation,
    is_email_like,
    is_file_change_line,
    is_integer,
    is_iso_date,
    is_noise_token,
    is_short_hex,
    leading_glyph,
    truncate_message,
)
from jj_saver.reltime import normalize_relative_time


class TestTokenPredicates:
    def test_email_like(self):
        assert is_email_like("user@email.com")
        assert not is_email_like("user@host")
        assert not is_email_like("example.com")

    def test_iso_date(self):
        assert is_iso_date("2023-02-12")
        assert not is_iso_date("2023/02/12x")
        assert not is_iso_date("20230212")

    def test_clock_time(self):
        assert is_clock_time("15:00:22")
        assert not is_clock_time("150022")
        assert not is_clock_time("1:00:220")

    def test_noise_token(self):
        assert is_noise_token("user@email.com")
        assert is_noise_token("2023-02-12")
        assert is_noise_token("15:00:22")
        assert not is_noise_token("mpqrykyp")

    def test_short_hex(self):
        assert is_short_hex("aef4df99")
        assert not is_short_hex("AEF4DF99")
        assert not is_short_hex("mpqrykyp")
        assert not is_short_hex("aef4df9")

    def test_change_id(self):
        assert is_change_id("mpqrykyp")
        assert is_change_id("abc12345")
        assert not is_change_id("Mpqrykyp")
        assert not is_change_id("mpqryky")
        assert not is_change_id("mpqr-kyp")

    def test_integer(self):
        assert is_integer("42")
        assert not is_integer("-3")
        assert not is_integer("")
        assert not is_integer("٣")

    def test_predicates_accept_empty_string(self):
        for predicate in (
            is_email_like,
            is_iso_date,
            is_clock_time,
            is_noise_token,
            is_short_hex,
            is_change_id,
            is_integer,
        ):
            assert predicate("") is False


class TestGraphLines:
    def test_glyph_at_line_start(self):
        assert leading_glyph("@  mpqrykyp aef4df99") == "@"
        assert leading_glyph("○  kntqzsqt 5d39e19d") == "○"
        assert leading_glyph("◆  zzzzzzzz 00000000") == "◆"

    def test_glyph_behind_edges(self):
        assert leading_glyph("│ ○  kntqzsqt 5d39e19d") == "○"
        assert leading_glyph("├─╮ ● abc") == "●"

    def test_no_glyph(self):
        assert leading_glyph("│  Say goodbye") is None
        assert leading_glyph("@origin: abc") is None
        assert leading_glyph("") is None

    def test_glyph_inside_description_is_not_a_node(self):
        assert leading_glyph("│  ● bullet point") is None
        assert leading_glyph("│  @ mention") is None
        assert leading_glyph("│ │  ○ nested item") is None

    def test_continuation(self):
        assert is_continuation("│  Say goodbye")
        assert is_continuation("  |  ascii graph")
        assert not is_continuation("○  kntqzsqt")

    def test_continuation_content(self):
        assert continuation_content("│  Say goodbye  ") == "Say goodbye"
        assert continuation_content("│ │  nested") == "nested"

    def test_file_change_line(self):
        assert is_file_change_line("M src/main.rs")
        assert is_file_change_line("  A new.txt")
        assert not is_file_change_line("Modified src/main.rs")
        assert not is_file_change_line("M")


class TestTruncateMessage:
    def test_short_message_unchanged(self):
        assert truncate_message("hello", 10) == "hello"

    def test_long_message_ends_with_ellipsis(self):
        result = truncate_message("a" * 60, 50)
        assert len(result) == 50
        assert result.endswith("...")

    def test_tiny_width_plain_cut(self):
        assert truncate_message("abcdef", 2) == "ab"
        assert truncate_message("abcdef", 0) == ""


class TestRelativeTime:
    def test_minutes(self):
        assert normalize_relative_time("3 minutes ago, lasted 3 milliseconds") == "3m ago"

    def test_singular_units(self):
        assert normalize_relative_time("1 second ago") == "1s ago"
        assert normalize_relative_time("1 hour ago") == "1h ago"
        assert normalize_relative_time("1 day ago") == "1d ago"
        assert normalize_relative_time("1 week ago") == "1w ago"

    def test_plural_units(self):
        assert normalize_relative_time("45 seconds ago") == "45s ago"
        assert normalize_relative_time("5 hours ago") == "5h ago"
        assert normalize_relative_time("12 days ago") == "12d ago"
        assert normalize_relative_time("2 weeks ago") == "2w ago"

    def test_embedded_in_op_line(self):
        line = "@  d3b77addea49 user@host 3 minutes ago, lasted 3 milliseconds"
        assert normalize_relative_time(line) == "3m ago"

    def test_non_numeric_count_is_now(self):
        assert normalize_relative_time("a few minutes ago") == "now"

    def test_no_phrase_is_now(self):
        assert normalize_relative_time("") == "now"
        assert normalize_relative_time("lasted 3 milliseconds") == "now"
