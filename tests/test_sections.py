"""Tests for quickchoice_core.sections: heading parsing and section ends."""

import pytest

from quickchoice_core.errors import InvalidArgumentError
from quickchoice_core.sections import heading_level, parse_headings, resolve_section_end

TWO_LEVEL_DOC = [
    "# Title",
    "",
    "## Section 1",
    "Content 1",
    "",
    "## Section 2",
    "Content 2",
    "",
    "# Title 2",
]

NOTES_DOC = [
    "# Notes",
    "",
    "## Topic A",
    "content a1",
    "content a2",
    "content a3",
    "",
    "---",
    "Thematic break",
    "1",
    "2",
    "3",
    "",
    "## Topic B",
    "content b1",
    "",
    "",
]

MEETING_DOC = [
    "# Meeting Notes",
    "",
    "### Topic A",
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit.",
    "",
    "### Topic B",
    "Aliquam erat volutpat. Nullam fringilla, enim eu volutpat congue.",
]


# ── Heading parsing ─────────────────────────────────────────────────


class TestHeadings:
    @pytest.mark.parametrize(
        "line, level",
        [("# Title", 1), ("## Section", 2), ("#### deep", 4), ("#tag", None), ("---", None), ("", None)],
    )
    def test_heading_level(self, line, level):
        assert heading_level(line) == level

    def test_parse_headings(self):
        headings = parse_headings(TWO_LEVEL_DOC)
        assert [(h.line, h.level, h.text) for h in headings] == [
            (0, 1, "Title"),
            (2, 2, "Section 1"),
            (5, 2, "Section 2"),
            (8, 1, "Title 2"),
        ]

    def test_marker_without_text_is_not_heading(self):
        assert heading_level("#   ") is None


# ── resolve_section_end ─────────────────────────────────────────────


class TestResolveSectionEnd:
    def test_end_of_section(self):
        assert resolve_section_end(TWO_LEVEL_DOC, 2, True) == 3

    def test_last_section_keeps_trailing_blank(self):
        lines = TWO_LEVEL_DOC + [""]
        assert resolve_section_end(lines, 8, True) == 9

    def test_multiple_empty_lines_do_not_extend_section(self):
        lines = ["# Title", "", "## Section 1", "Content 1", "", "", "## Section 2", "Content 2", "", "# Title 2"]
        assert resolve_section_end(lines, 2, True) == 3

    def test_without_higher_level_section(self):
        lines = [
            "# Title", "", "## Section 1", "Content 1", "", "## Section 2", "Content 2", "", "## Section 3", "Content 3",
        ]
        assert resolve_section_end(lines, 2, True) == 3

    def test_last_sibling_runs_to_end_of_document(self):
        lines = [
            "# Title", "", "## Section 1", "Content 1", "", "## Section 2", "Content 2", "", "## Section 3", "Content 3",
        ]
        assert resolve_section_end(lines, 8, True) == len(lines) - 1

    def test_with_higher_level_section(self):
        lines = TWO_LEVEL_DOC + ["Content 3"]
        assert resolve_section_end(lines, 0, True) == 6

    def test_no_headings(self):
        lines = ["Content 1", "", "Content 2", "Content 3", "", "Content 4"]
        assert resolve_section_end(lines, 2) == 3

    def test_top_level_heading_with_only_sub_headings(self):
        assert resolve_section_end(NOTES_DOC, 0, True) == 14

    def test_target_is_not_heading(self):
        assert resolve_section_end(NOTES_DOC, 3, False) == 5

    def test_non_heading_target_ignores_subsection_flag(self):
        assert resolve_section_end(NOTES_DOC, 3, True) == resolve_section_end(NOTES_DOC, 3, False)

    def test_heading_without_subsections(self):
        lines = ["# Notes", "", "## Topic A", "content a1", "content a2", "content a3", "## Topic B", "content b1", "", ""]
        assert resolve_section_end(lines, 2, False) == 5

    def test_heading_with_nested_subsections(self):
        lines = [
            "# Notes", "", "## Topic A", "content a1", "## Topic B", "content b1",
            "### contentA", "content", "#### contentB", "content", "content",
        ]
        assert resolve_section_end(lines, 0, True) == 10

    def test_first_line_with_subsections(self):
        assert resolve_section_end(MEETING_DOC, 0, True) == 6

    def test_first_line_without_subsections(self):
        assert resolve_section_end(MEETING_DOC, 0, False) == 1

    def test_heading_directly_followed_by_heading(self):
        lines = ["# A", "## B", "text"]
        assert resolve_section_end(lines, 0, False) == 0

    def test_blank_only_body_keeps_one_line(self):
        lines = ["## A", "", "", "", "## B"]
        assert resolve_section_end(lines, 0, False) == 1

    def test_single_line_document(self):
        assert resolve_section_end(["# Only"], 0, True) == 0

    @pytest.mark.parametrize("target", [-1, 9, 100])
    def test_out_of_bounds_target_raises(self, target):
        with pytest.raises(InvalidArgumentError):
            resolve_section_end(TWO_LEVEL_DOC, target, True)


# ── Properties ──────────────────────────────────────────────────────


DOCUMENTS = [TWO_LEVEL_DOC, NOTES_DOC, MEETING_DOC, ["plain"], ["", "", ""], ["# a", "# b", "## c", ""]]


class TestSectionProperties:
    @pytest.mark.parametrize("lines", DOCUMENTS)
    @pytest.mark.parametrize("consider", [True, False])
    def test_result_within_bounds_and_after_target(self, lines, consider):
        for target in range(len(lines)):
            end = resolve_section_end(lines, target, consider)
            assert target <= end < len(lines)

    @pytest.mark.parametrize("lines", DOCUMENTS)
    def test_repeatable(self, lines):
        for target in range(len(lines)):
            assert resolve_section_end(lines, target, True) == resolve_section_end(lines, target, True)

    def test_without_subsections_stops_at_any_heading(self):
        lines = ["# Top", "intro", "### Deep", "deep text", "# Next"]
        assert resolve_section_end(lines, 0, False) == 1

    def test_with_subsections_stops_at_same_or_higher_level(self):
        lines = ["## Mid", "intro", "### Deep", "deep text", "# Top", "top text"]
        assert resolve_section_end(lines, 0, True) == 3

    def test_input_not_mutated(self):
        lines = list(NOTES_DOC)
        resolve_section_end(lines, 0, True)
        assert lines == NOTES_DOC
