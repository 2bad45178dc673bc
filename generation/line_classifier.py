"""
Line Classifier
Assigns a semantic role to each line of model-generated study text
Uses rule-based heuristics on the line's leading tokens (no AI/LLM)
"""

import enum
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional


class LineRole(str, enum.Enum):
    """Line role constants"""
    MAIN_HEADING = "MainHeading"
    SUB_HEADING = "SubHeading"
    BOLD_HEADING = "BoldHeading"
    BULLET = "Bullet"
    NUMBERED_ITEM = "NumberedItem"
    QUESTION_HEADER = "QuestionHeader"
    MARK_ALLOCATION = "MarkAllocation"
    PLAIN = "Plain"


_BULLET_PATTERN = re.compile(r'^[*\-]\s+')
_NUMBERED_PATTERN = re.compile(r'^\d+\.')
_DIGIT_PATTERN = re.compile(r'\d')
_HEADING_PREFIX = re.compile(r'^#+\s*')
_BRACKETS = "[]()"


@dataclass(frozen=True)
class ClassifiedLine:
    """One trimmed, non-blank line and its role."""
    text: str
    role: LineRole

    @property
    def display_text(self) -> str:
        """Text as it should be drawn, without markdown markers."""
        return display_text(self.text, self.role)


class LineClassifier:
    """
    Classifies single lines of generated text.

    Rules are checked in a fixed order and the first match wins, so e.g.
    "### Key Terms" is a sub-heading even though it also starts with "##".
    """

    @staticmethod
    def classify(line: str, is_question_paper: bool = False) -> LineRole:
        """
        Classify one trimmed, non-empty line.

        Args:
            line: Line text with surrounding whitespace removed
            is_question_paper: True when the line comes from a question paper;
                only then can a line become a QuestionHeader

        Returns:
            LineRole for the line
        """
        if LineClassifier._is_bold_heading(line):
            return LineRole.BOLD_HEADING
        if line.startswith("###"):
            return LineRole.SUB_HEADING
        if line.startswith("##"):
            return LineRole.MAIN_HEADING
        if _BULLET_PATTERN.match(line):
            return LineRole.BULLET
        if _NUMBERED_PATTERN.match(line):
            return LineRole.NUMBERED_ITEM
        if is_question_paper and LineClassifier._is_question_header(line):
            return LineRole.QUESTION_HEADER
        if LineClassifier._is_mark_allocation(line):
            return LineRole.MARK_ALLOCATION
        return LineRole.PLAIN

    @staticmethod
    def _is_bold_heading(line: str) -> bool:
        # "****" alone is a stray marker pair, not a heading
        return len(line) > 4 and line.startswith("**") and line.endswith("**")

    @staticmethod
    def _is_question_header(line: str) -> bool:
        return "Question" in line and bool(_DIGIT_PATTERN.search(line))

    @staticmethod
    def _is_mark_allocation(line: str) -> bool:
        lowered = line.lower()
        if "marks:" in lowered:
            return True
        has_bracket = any(ch in line for ch in _BRACKETS)
        return has_bracket and "marks" in lowered


def display_text(text: str, role: LineRole) -> str:
    """Strip the markdown markers that the role's styling replaces."""
    if role in (LineRole.MAIN_HEADING, LineRole.SUB_HEADING):
        text = _HEADING_PREFIX.sub("", text)
    elif role == LineRole.BULLET:
        text = _BULLET_PATTERN.sub("", text)
    # Inline bold markers are never drawn literally
    return text.replace("**", "").strip()


def classify_line(line: str, is_question_paper: bool = False) -> LineRole:
    """Classify a single line into a LineRole"""
    return LineClassifier.classify(line, is_question_paper)


def iter_classified_lines(text: str, is_question_paper: bool = False) -> Iterator[Optional[ClassifiedLine]]:
    """
    Classify every line of a block of generated text.

    Blank lines yield None: they carry no content but the renderer still
    advances its cursor for them.
    """
    for raw in (text or "").splitlines():
        line = raw.strip()
        if not line:
            yield None
            continue
        yield ClassifiedLine(text=line, role=classify_line(line, is_question_paper))


def classify_text(text: str, is_question_paper: bool = False) -> List[Optional[ClassifiedLine]]:
    return list(iter_classified_lines(text, is_question_paper))
