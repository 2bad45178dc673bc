"""
Tests for generation.line_classifier

Test Coverage:
- classify_line(): every role, rule order, question-paper context flag
- display_text: marker stripping per role
- iter_classified_lines(): blank line handling
"""

import pytest

from generation.line_classifier import (
    ClassifiedLine,
    LineRole,
    classify_line,
    classify_text,
)


@pytest.mark.parametrize("line,expected", [
    ("**Heading**", LineRole.BOLD_HEADING),
    ("### Sub", LineRole.SUB_HEADING),
    ("## Main", LineRole.MAIN_HEADING),
    ("* item", LineRole.BULLET),
    ("- item", LineRole.BULLET),
    ("3. item", LineRole.NUMBERED_ITEM),
    ("[5 marks]", LineRole.MARK_ALLOCATION),
    ("plain text", LineRole.PLAIN),
])
def test_basic_roles(line, expected):
    assert classify_line(line) == expected


def test_bold_heading_wins_over_bullet():
    """A bold line starts with an asterisk but is a heading, not a bullet."""
    assert classify_line("**Key Definitions**") == LineRole.BOLD_HEADING


def test_sub_heading_checked_before_main_heading():
    assert classify_line("### Second Law") == LineRole.SUB_HEADING


def test_bold_text_with_trailing_words_is_not_heading():
    assert classify_line("**Force:** a push or pull") == LineRole.PLAIN


def test_numbered_item_checked_before_question_header():
    assert classify_line("2. Question 2 asks about friction", is_question_paper=True) == LineRole.NUMBERED_ITEM


def test_question_header_needs_question_paper_context():
    assert classify_line("Question 4: Define inertia.", is_question_paper=True) == LineRole.QUESTION_HEADER
    assert classify_line("Question 4: Define inertia.") == LineRole.PLAIN


def test_question_without_digit_is_not_header():
    assert classify_line("Question: what is mass?", is_question_paper=True) == LineRole.PLAIN


@pytest.mark.parametrize("line", [
    "Marks: 4",
    "Total MARKS: 20",
    "(3 marks)",
    "Answer in full sentences [10 marks]",
])
def test_mark_allocation_variants(line):
    assert classify_line(line) == LineRole.MARK_ALLOCATION


def test_marks_word_without_bracket_or_colon_is_plain():
    assert classify_line("Full marks require working") == LineRole.PLAIN


def test_question_header_beats_mark_allocation_in_paper():
    line = "Question 1 (5 marks)"
    assert classify_line(line, is_question_paper=True) == LineRole.QUESTION_HEADER
    assert classify_line(line) == LineRole.MARK_ALLOCATION


def test_hyphenated_number_is_not_bullet():
    assert classify_line("-5 is negative") == LineRole.PLAIN


@pytest.mark.parametrize("line,role,shown", [
    ("## Main", LineRole.MAIN_HEADING, "Main"),
    ("### Sub", LineRole.SUB_HEADING, "Sub"),
    ("**Heading**", LineRole.BOLD_HEADING, "Heading"),
    ("* item", LineRole.BULLET, "item"),
    ("- **bold** item", LineRole.BULLET, "bold item"),
    ("3. item", LineRole.NUMBERED_ITEM, "3. item"),
    ("[5 marks]", LineRole.MARK_ALLOCATION, "[5 marks]"),
])
def test_display_text_strips_markers(line, role, shown):
    classified = ClassifiedLine(text=line, role=classify_line(line))
    assert classified.role == role
    assert classified.display_text == shown


def test_classify_text_yields_none_for_blank_lines():
    lines = classify_text("## Title\n\n   \nbody text\n")
    assert lines[0].role == LineRole.MAIN_HEADING
    assert lines[1] is None
    assert lines[2] is None
    assert lines[3] == ClassifiedLine(text="body text", role=LineRole.PLAIN)
    assert len(lines) == 4


def test_classify_text_trims_lines():
    lines = classify_text("    * indented bullet   ")
    assert lines == [ClassifiedLine(text="* indented bullet", role=LineRole.BULLET)]


def test_classify_text_passes_question_context():
    lines = classify_text("Question 1\nQuestion 2", is_question_paper=True)
    assert [l.role for l in lines] == [LineRole.QUESTION_HEADER, LineRole.QUESTION_HEADER]


def test_classify_text_empty():
    assert classify_text("") == []
    assert classify_text(None) == []
