"""
Section Splitter

Separates model output into the study notes and the practice question paper.

Strategy:
1. Marker split: the prompt asks for bold "**Section N: ...**" headings, so
   the text is cut at those markers and segments are picked by keyword
   ("notes" / "question", "paper"), falling back to their position.
2. Line scan: if there are no markers, everything from the first line that
   mentions "question paper", "practice questions" or "section 2" onwards is
   the question paper.

The outcome is either SplitContent (both parts found) or AmbiguousSplit, so
callers decide what to do when the model ignored the conventions.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Union

log = logging.getLogger(__name__)


SECTION_MARKER = re.compile(r'\*\*\s*Section\s+\d+\s*:\s*(?:\*\*)?', re.IGNORECASE)

NOTES_KEYWORDS = ("notes",)
QUESTION_KEYWORDS = ("question", "paper")
FALLBACK_QUESTION_MARKERS = ("question paper", "practice questions", "section 2")


@dataclass(frozen=True)
class SplitContent:
    """Both portions found; each is trimmed and non-empty."""
    notes: str
    questions: str


@dataclass(frozen=True)
class AmbiguousSplit:
    """
    Partial-split condition: at least one portion came out empty.

    The raw text is kept so a caller can fall back to it; the partial
    portions are included for logging only.
    """
    raw_text: str
    notes: str = ""
    questions: str = ""
    strategy: str = ""


SplitResult = Union[SplitContent, AmbiguousSplit]


def _clean_segment(segment: Optional[str]) -> str:
    # Portions stay verbatim substrings of the raw text; only whitespace is trimmed
    return segment.strip() if segment else ""


def _find_segment(segments: List[str], keywords, exclude: Optional[int] = None) -> Optional[int]:
    for idx, segment in enumerate(segments):
        if idx == exclude:
            continue
        lowered = segment.lower()
        if any(kw in lowered for kw in keywords):
            return idx
    return None


def _split_by_markers(text: str) -> Optional[SplitResult]:
    parts = SECTION_MARKER.split(text)
    if len(parts) < 2:
        return None

    # parts[0] is whatever preceded the first marker (usually a preamble)
    candidates = parts[1:]

    notes_idx = _find_segment(candidates, NOTES_KEYWORDS)
    if notes_idx is None:
        notes_idx = 0

    questions_idx = _find_segment(candidates, QUESTION_KEYWORDS, exclude=notes_idx)
    if questions_idx is None:
        questions_idx = 1 if notes_idx != 1 else 0
        if questions_idx >= len(candidates):
            questions_idx = None

    used = {notes_idx, questions_idx} - {None}
    discarded = [seg for idx, seg in enumerate(candidates) if idx not in used and seg.strip()]
    if parts[0].strip():
        discarded.append(parts[0])
    if discarded:
        log.warning(
            f"[SPLIT] discarded {len(discarded)} segment(s) outside notes and questions "
            f"({sum(len(seg.strip()) for seg in discarded)} chars)"
        )

    notes = _clean_segment(candidates[notes_idx])
    questions = _clean_segment(candidates[questions_idx]) if questions_idx is not None else ""
    return _result(text, notes, questions, "markers")


def _split_by_lines(text: str) -> SplitResult:
    lines = text.splitlines()
    boundary = None
    for idx, line in enumerate(lines):
        lowered = line.lower()
        if any(marker in lowered for marker in FALLBACK_QUESTION_MARKERS):
            boundary = idx
            break

    if boundary is None:
        return _result(text, text.strip(), "", "lines")

    notes = "\n".join(lines[:boundary]).strip()
    questions = "\n".join(lines[boundary:]).strip()
    return _result(text, notes, questions, "lines")


def _result(text: str, notes: str, questions: str, strategy: str) -> SplitResult:
    if notes and questions:
        return SplitContent(notes=notes, questions=questions)
    return AmbiguousSplit(raw_text=text, notes=notes, questions=questions, strategy=strategy)


def split_sections(text: str) -> SplitResult:
    """
    Split generated text into notes and question paper.

    Args:
        text: Raw model output

    Returns:
        SplitContent when both portions are non-empty, AmbiguousSplit otherwise
    """
    text = text or ""
    result = _split_by_markers(text)
    if result is None:
        result = _split_by_lines(text)

    if isinstance(result, SplitContent):
        log.info(
            f"[SPLIT] notes={len(result.notes)} chars, questions={len(result.questions)} chars"
        )
    else:
        log.warning(
            f"[SPLIT] ambiguous ({result.strategy}): notes={len(result.notes)} chars, "
            f"questions={len(result.questions)} chars"
        )
    return result
