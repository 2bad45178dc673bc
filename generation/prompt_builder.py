"""
Prompt template for study notes + practice question paper generation.

The layout conventions requested here (bold section markers, ## / ### headings,
bullets, "Question N" numbering, [N marks] tags) are the ones the section
splitter and line classifier look for.
"""

from generation.schemas import GenerationRequest


STUDY_PACK_PROMPT = """You are a helpful assistant for students.
Based on the following request, generate comprehensive notes and a practice question paper.

Student Request Details:
School: {school}
Grade: {grade}
Subject: {subject}
Topic: {topic}
Desired Notes Length: Approximately {notes_pages} pages
Desired Question Paper Length: Approximately {papers_pages} pages
Question Paper Formats (if specified): {format}
Contact Email: {email}

---
Please provide the content in two distinct sections:

**Section 1: Notes**
Generate comprehensive study notes for the specified topic, suitable for the given grade level. Structure the notes logically with clear headings and subheadings. Ensure the content covers key concepts, definitions, formulas (if applicable), and important examples.

**Section 2: Question Paper**
Create a practice question paper based on the notes and topic. Include a variety of question types if specified ({format}). Ensure the difficulty is appropriate for the grade level. Provide clear instructions and allocate marks for each question. Include an answer key at the very end of this section.
---

FORMATTING RULES:
1. Start the notes with the exact line "**Section 1: Notes**" and the question paper with the exact line "**Section 2: Question Paper**"
2. Use "## " for main headings and "### " for subheadings
3. Use "* " or "- " at the start of a line for bullet points
4. Label each question "Question N" (e.g. "Question 1") and number sub-parts "1.", "2.", ...
5. Put the mark allocation for each question on its own line in square brackets, e.g. "[5 marks]"
6. Do not use tables, images or code blocks
"""


def _value(value) -> str:
    if value is None:
        return ""
    return str(value)


def build_prompt(request: GenerationRequest) -> str:
    """Fill the template with the request's field values, verbatim."""
    return STUDY_PACK_PROMPT.format(
        school=_value(request.school),
        grade=_value(request.grade),
        subject=_value(request.subject),
        topic=_value(request.topic),
        notes_pages=_value(request.notes_pages),
        papers_pages=_value(request.papers_pages),
        format=_value(request.format).strip() or "Not specified",
        email=_value(request.email),
    )
