"""
Error types raised by the generation pipeline.

Each carries the HTTP status and the short message shown to the client;
full details go to the server log only.
"""

from typing import Optional


GENERIC_GENERATION_MESSAGE = "Error generating content. Please try again."
MISSING_FIELDS_MESSAGE = "All form fields are required."
SPLIT_FAILED_MESSAGE = "Failed to separate notes and questions from the generated content."
RENDER_FAILED_MESSAGE = "Error creating PDF documents."


class StudyHelperError(Exception):
    """Base class for failures converted to a JSON error response."""

    status_code = 500
    default_message = GENERIC_GENERATION_MESSAGE

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StudyHelperError):
    """A required request field is missing or empty."""

    status_code = 400
    default_message = MISSING_FIELDS_MESSAGE

    def __init__(self, missing: Optional[list] = None, message: Optional[str] = None):
        self.missing = list(missing or [])
        super().__init__(message)


class GenerationError(StudyHelperError):
    """The language-model call failed or returned nothing."""

    default_message = GENERIC_GENERATION_MESSAGE


class SplitError(StudyHelperError):
    """Notes and question paper could not both be found in the generated text."""

    default_message = SPLIT_FAILED_MESSAGE


class RenderError(StudyHelperError):
    default_message = RENDER_FAILED_MESSAGE
