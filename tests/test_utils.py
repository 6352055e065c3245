"""Tests for pi.table.utils -- width measurement and control sequences."""

from __future__ import annotations

from pi.table.utils import (
    SgrTracker,
    codepoint_widths,
    extract_control_sequence,
    grapheme_boundaries,
    strip_control_sequences,
    visible_width,
)


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------


class TestVisibleWidth:
    """Measure the visible terminal width of text."""

    def test_plain_ascii(self) -> None:
        assert visible_width("hello") == 5

    def test_empty_string(self) -> None:
        assert visible_width("") == 0

    def test_sgr_codes_do_not_count(self) -> None:
        assert visible_width("\x1b[1m\x1b[31mabc\x1b[0m") == 3

    def test_wide_cjk_characters_count_as_two(self) -> None:
        assert visible_width("A\u4e16B") == 4

    def test_combining_mark_is_zero_width(self) -> None:
        # "e" + COMBINING ACUTE ACCENT forms one cluster.
        assert visible_width("e\u0301") == 1

    def test_zwj_emoji_sequence_is_two_wide(self) -> None:
        family = "\U0001f468\u200d\U0001f469\u200d\U0001f467"
        assert visible_width(family) == 2

    def test_osc8_hyperlink_does_not_count(self) -> None:
        text = "\x1b]8;;https://example.com\x07link\x1b]8;;\x07"
        assert visible_width(text) == 4

    def test_apc_sequence_does_not_count(self) -> None:
        assert visible_width("\x1b_payload\x07visible") == 7


# ---------------------------------------------------------------------------
# Control sequences
# ---------------------------------------------------------------------------


class TestControlSequences:
    """Find and remove escape sequences."""

    def test_strip_sgr(self) -> None:
        assert strip_control_sequences("\x1b[31mred\x1b[0m") == "red"

    def test_strip_leaves_plain_text_alone(self) -> None:
        assert strip_control_sequences("plain") == "plain"

    def test_extract_at_escape(self) -> None:
        assert extract_control_sequence("a\x1b[31mb", 1) == "\x1b[31m"

    def test_extract_at_plain_char(self) -> None:
        assert extract_control_sequence("a\x1b[31mb", 0) is None

    def test_extract_osc_terminated_by_st(self) -> None:
        text = "\x1b]8;;x\x1b\\"
        assert extract_control_sequence(text, 0) == text


# ---------------------------------------------------------------------------
# Per-code-point widths
# ---------------------------------------------------------------------------


class TestCodepointWidths:
    """Charge each grapheme cluster's width to its first code point."""

    def test_ascii(self) -> None:
        assert codepoint_widths("ab") == [1, 1]

    def test_cluster_width_on_first_code_point(self) -> None:
        assert codepoint_widths("e\u0301x") == [1, 0, 1]

    def test_wide(self) -> None:
        assert codepoint_widths("\u4f60\u597d") == [2, 2]

    def test_grapheme_boundaries(self) -> None:
        assert grapheme_boundaries("ae\u0301b") == [0, 1, 3]


# ---------------------------------------------------------------------------
# SgrTracker
# ---------------------------------------------------------------------------


class TestSgrTracker:
    """Track SGR state across lines."""

    def test_starts_empty(self) -> None:
        tracker = SgrTracker()
        assert not tracker.has_active_codes()
        assert tracker.get_active_codes() == ""

    def test_combined_params(self) -> None:
        tracker = SgrTracker()
        tracker.process("\x1b[1;31m")
        assert tracker.get_active_codes() == "\x1b[1m\x1b[31m"

    def test_reset_clears(self) -> None:
        tracker = SgrTracker()
        tracker.process("\x1b[31m")
        tracker.process("\x1b[0m")
        assert not tracker.has_active_codes()

    def test_256_colour(self) -> None:
        tracker = SgrTracker()
        tracker.process("\x1b[38;5;196m")
        assert tracker.get_active_codes() == "\x1b[38;5;196m"

    def test_default_foreground_removes_colour(self) -> None:
        tracker = SgrTracker()
        tracker.process("\x1b[1m")
        tracker.process("\x1b[31m")
        tracker.process("\x1b[39m")
        assert tracker.get_active_codes() == "\x1b[1m"

    def test_non_sgr_ignored(self) -> None:
        tracker = SgrTracker()
        tracker.process("\x1b[2K")
        assert not tracker.has_active_codes()
