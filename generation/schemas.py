"""
Pydantic schemas for the study pack generation endpoint.

The request model is deliberately permissive: every field is optional at the
parsing layer so that missing values are reported by the orchestrator with the
endpoint's own 400 payload instead of a framework validation error.
"""

from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


PageCount = Union[int, float, str]

# `format` is free-form and may be left blank by the student.
REQUIRED_FIELDS = (
    "school", "grade", "subject", "topic",
    "notes_pages", "papers_pages", "email",
)


# ─── Request ───────────────────────────────────────────────────────────────────

class GenerationRequest(BaseModel):
    """A student's request for notes and a practice question paper."""
    school: Optional[str] = Field(None, description="School name")
    grade: Optional[str] = Field(None, description="Grade or year level")
    subject: Optional[str] = Field(None, description="Subject, e.g. Physics")
    topic: Optional[str] = Field(None, description="Topic within the subject")
    format: Optional[str] = Field(
        None, description="Free-form question formats, e.g. 'MCQ, short answer'"
    )
    notes_pages: Optional[PageCount] = Field(None, description="Target length of the notes in pages")
    papers_pages: Optional[PageCount] = Field(None, description="Target length of the question paper in pages")
    email: Optional[str] = Field(None, description="Student contact email")

    model_config = ConfigDict(
        coerce_numbers_to_str=True,
        json_schema_extra={
            "example": {
                "school": "Greenwood High",
                "grade": "10",
                "subject": "Physics",
                "topic": "Newton's Laws of Motion",
                "format": "MCQ, short answer, long answer",
                "notes_pages": 3,
                "papers_pages": 2,
                "email": "student@example.com",
            }
        },
    )

    def missing_fields(self) -> List[str]:
        """Names of required fields that are absent, blank or zero."""
        missing = []
        for name in REQUIRED_FIELDS:
            value = getattr(self, name)
            if value is None:
                missing.append(name)
            elif isinstance(value, str) and not value.strip():
                missing.append(name)
            elif isinstance(value, (int, float)) and value == 0:
                missing.append(name)
        return missing


# ─── Response ──────────────────────────────────────────────────────────────────

class EncodedDocument(BaseModel):
    """A rendered PDF, base64-encoded for the JSON response."""
    data: str
    filename: str


class GenerationResponse(BaseModel):
    """
    Successful generation payload.

    Which document fields are present depends on the document mode:
      text      → generatedText only
      combined  → pdfData + filename
      split     → notesPdf + questionsPdf
    """
    message: str = "Content generated successfully!"
    generated_text: str = Field(..., alias="generatedText")
    pdf_data: Optional[str] = Field(None, alias="pdfData")
    filename: Optional[str] = None
    notes_pdf: Optional[EncodedDocument] = Field(None, alias="notesPdf")
    questions_pdf: Optional[EncodedDocument] = Field(None, alias="questionsPdf")

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
