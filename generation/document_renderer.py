"""
Document Renderer - PDF generation for study notes and question papers

Lays classified lines out on US-letter pages with ReportLab's canvas:
- Centred title with a separator rule
- Role-specific fonts and spacing (headings, bullets, mark allocations, ...)
- Automatic page breaks when the cursor reaches the bottom of the page
- "Page i of N" footer on every page

Pages are buffered in memory until the document is finalised, because the
footer needs the total page count.
"""

import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Dict, Iterable, List, Optional

from reportlab.lib.pagesizes import letter
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from generation.line_classifier import ClassifiedLine, LineRole, iter_classified_lines

log = logging.getLogger(__name__)


# ─── Configuration ──────────────────────────────────────────────────────────────

PAGE_WIDTH, PAGE_HEIGHT = letter   # 612 x 792 pt

LEFT_MARGIN = 50
RIGHT_MARGIN = 50
TOP_MARGIN = 50
PAGE_BREAK_Y = 700                 # top-down cursor position that forces a new page
FOOTER_Y = 30                      # footer baseline, measured from the bottom edge

TITLE_FONT = ("Helvetica-Bold", 20)
TITLE_GAP = 15
SEPARATOR_GAP = 25
BLANK_LINE_GAP = 8
BULLET_INDENT = 15
BULLET_TEXT_OFFSET = 12
BULLET_GLYPH = "•"
LEADING_FACTOR = 1.25

FOOTER_FONT = ("Helvetica", 9)


@dataclass(frozen=True)
class RoleStyle:
    font_name: str
    font_size: int
    gap_after: int
    align: str = "left"            # "left" | "right"
    indent: int = 0


ROLE_STYLES: Dict[LineRole, RoleStyle] = {
    LineRole.MAIN_HEADING:    RoleStyle("Helvetica-Bold", 16, 26),
    LineRole.SUB_HEADING:     RoleStyle("Helvetica-Bold", 14, 22),
    LineRole.BOLD_HEADING:    RoleStyle("Helvetica-Bold", 12, 20),
    LineRole.BULLET:          RoleStyle("Helvetica", 11, 16, indent=BULLET_INDENT),
    LineRole.NUMBERED_ITEM:   RoleStyle("Helvetica", 11, 16),
    LineRole.QUESTION_HEADER: RoleStyle("Helvetica-Bold", 12, 20),
    LineRole.MARK_ALLOCATION: RoleStyle("Helvetica-Oblique", 9, 14, align="right"),
    LineRole.PLAIN:           RoleStyle("Helvetica", 11, 16),
}


@dataclass(frozen=True)
class RenderedDocument:
    """Finished PDF bytes plus the number of pages it holds."""
    data: bytes
    page_count: int


# ─── Custom Canvas ──────────────────────────────────────────────────────────────

class NumberedCanvas(canvas.Canvas):
    """
    Canvas that keeps every page's state until save() so that each page can
    be stamped with "Page i of N" once N is known.
    """

    def __init__(self, *args, **kwargs):
        canvas.Canvas.__init__(self, *args, **kwargs)
        self._saved_page_states: List[dict] = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self.draw_page_footer(total)
            canvas.Canvas.showPage(self)
        canvas.Canvas.save(self)

    def draw_page_footer(self, total: int):
        self.saveState()
        self.setFont(*FOOTER_FONT)
        self.drawCentredString(
            PAGE_WIDTH / 2, FOOTER_Y, f"Page {self._pageNumber} of {total}"
        )
        self.restoreState()

    @property
    def page_count(self) -> int:
        return len(self._saved_page_states)


# ─── Document Builder ───────────────────────────────────────────────────────────

class DocumentBuilder:
    """
    In-memory PDF builder.

    Draw lines with add_line(); call finalize() exactly once to stamp the
    footers and get the RenderedDocument. The cursor runs top-down from the
    top margin and is converted to ReportLab's bottom-up coordinates on draw.
    """

    def __init__(self, title: str, is_question_paper: bool = False):
        self._buffer = BytesIO()
        self._canvas = NumberedCanvas(self._buffer, pagesize=letter, invariant=1)
        self._canvas.setTitle(title)
        self._canvas.setSubject("Practice Question Paper" if is_question_paper else "Study Notes")
        self._cursor = TOP_MARGIN
        self._finalized = False
        self._draw_title(title)

    @property
    def content_width(self) -> float:
        return PAGE_WIDTH - LEFT_MARGIN - RIGHT_MARGIN

    def _y(self) -> float:
        return PAGE_HEIGHT - self._cursor

    def _break_page_if_needed(self):
        if self._cursor > PAGE_BREAK_Y:
            self._canvas.showPage()
            self._cursor = TOP_MARGIN

    def _draw_title(self, title: str):
        font_name, font_size = TITLE_FONT
        rows = simpleSplit(title, font_name, font_size, self.content_width) or [""]
        self._canvas.setFont(font_name, font_size)
        for i, row in enumerate(rows):
            if i:
                self._cursor += font_size * LEADING_FACTOR
            self._canvas.drawCentredString(PAGE_WIDTH / 2, self._y(), row)
        self._cursor += TITLE_GAP
        self._canvas.setLineWidth(1)
        self._canvas.line(LEFT_MARGIN, self._y(), PAGE_WIDTH - RIGHT_MARGIN, self._y())
        self._cursor += SEPARATOR_GAP

    def add_blank(self):
        self._cursor += BLANK_LINE_GAP

    def add_line(self, line: Optional[ClassifiedLine]):
        """Draw one classified line; None stands for a blank line."""
        if self._finalized:
            raise RuntimeError("document already finalised")
        if line is None:
            self.add_blank()
            return

        style = ROLE_STYLES[line.role]
        text = line.display_text
        x = LEFT_MARGIN + style.indent
        width = self.content_width - style.indent
        if line.role == LineRole.BULLET:
            width -= BULLET_TEXT_OFFSET

        rows = simpleSplit(text, style.font_name, style.font_size, width) or [""]
        for i, row in enumerate(rows):
            if i:
                self._cursor += style.font_size * LEADING_FACTOR
            self._break_page_if_needed()
            self._canvas.setFont(style.font_name, style.font_size)
            y = self._y()
            if style.align == "right":
                self._canvas.drawRightString(PAGE_WIDTH - RIGHT_MARGIN, y, row)
            elif line.role == LineRole.BULLET:
                if i == 0:
                    self._canvas.drawString(x, y, BULLET_GLYPH)
                self._canvas.drawString(x + BULLET_TEXT_OFFSET, y, row)
            else:
                self._canvas.drawString(x, y, row)
        self._cursor += style.gap_after

    def finalize(self) -> RenderedDocument:
        if self._finalized:
            raise RuntimeError("document already finalised")
        self._finalized = True
        self._canvas.showPage()
        page_count = self._canvas.page_count
        self._canvas.save()
        return RenderedDocument(data=self._buffer.getvalue(), page_count=page_count)


# ─── Public API ─────────────────────────────────────────────────────────────────

def render_document(
    title: str,
    lines: Iterable[Optional[ClassifiedLine]],
    is_question_paper: bool = False,
) -> RenderedDocument:
    """
    Render classified lines into a paginated PDF.

    Args:
        title: Document title, drawn centred on the first page
        lines: Classified lines in order; None entries are blank lines
        is_question_paper: Marks the document as a question paper

    Returns:
        RenderedDocument with at least one page
    """
    builder = DocumentBuilder(title, is_question_paper=is_question_paper)
    count = 0
    for line in lines:
        builder.add_line(line)
        count += 1
    document = builder.finalize()
    log.info(f"[RENDER] '{title}': {count} lines → {document.page_count} page(s)")
    return document


def render_text(title: str, text: str, is_question_paper: bool = False) -> RenderedDocument:
    """Classify raw generated text and render it."""
    lines = iter_classified_lines(text, is_question_paper=is_question_paper)
    return render_document(title, lines, is_question_paper=is_question_paper)
