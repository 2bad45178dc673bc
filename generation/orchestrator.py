"""
Study Pack Orchestrator

Runs one generation request end to end:
1. Validate    - every required request field present
2. Prompt      - fill the study pack template
3. Generate    - one call to the language model
4. Split       - notes / question paper (split mode only)
5. Render      - PDF(s) via the document renderer (combined / split modes)
6. Encode      - base64 documents into the response payload

The generation client and settings are passed in at construction; nothing
here is shared between requests.
"""

import base64
import logging
import re
from typing import Protocol

from fastapi.concurrency import run_in_threadpool

from generation.config import MODE_COMBINED, MODE_SPLIT, Settings
from generation.document_renderer import RenderedDocument, render_text
from generation.errors import GenerationError, RenderError, SplitError, ValidationError
from generation.gpt_client import provider_error_message
from generation.prompt_builder import build_prompt
from generation.schemas import EncodedDocument, GenerationRequest, GenerationResponse
from generation.section_splitter import SplitContent, split_sections

log = logging.getLogger(__name__)


class CompletionClient(Protocol):
    async def complete(self, prompt: str, max_tokens: int) -> str: ...


def _slug(value: str) -> str:
    slug = re.sub(r'[^a-z0-9]+', '_', (value or "").lower()).strip("_")
    return slug or "study"


def _encode(document: RenderedDocument, filename: str) -> EncodedDocument:
    return EncodedDocument(
        data=base64.b64encode(document.data).decode("ascii"),
        filename=filename,
    )


class StudyPackOrchestrator:
    """Turns a GenerationRequest into a GenerationResponse."""

    def __init__(self, client: CompletionClient, settings: Settings):
        self.client = client
        self.settings = settings

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        missing = request.missing_fields()
        if missing:
            log.info(f"[VALIDATE] rejected request, missing: {', '.join(missing)}")
            raise ValidationError(missing)

        log.info(
            f"[GENERATE START] subject='{request.subject}', topic='{request.topic}', "
            f"grade='{request.grade}', mode={self.settings.document_mode}"
        )
        prompt = build_prompt(request)
        text = await self._call_model(prompt)

        response = GenerationResponse(generated_text=text)
        mode = self.settings.document_mode
        if mode == MODE_COMBINED:
            document = await self._render(
                f"{self._title_stem(request)} - Study Pack", text, is_question_paper=True
            )
            encoded = _encode(document, f"{self._file_stem(request)}_study_pack.pdf")
            response.pdf_data = encoded.data
            response.filename = encoded.filename
        elif mode == MODE_SPLIT:
            split = split_sections(text)
            if not isinstance(split, SplitContent):
                log.error(
                    f"[SPLIT] could not separate notes and questions "
                    f"(notes={bool(split.notes)}, questions={bool(split.questions)})"
                )
                raise SplitError()
            stem = self._file_stem(request)
            title = self._title_stem(request)
            notes_doc = await self._render(f"{title} - Study Notes", split.notes)
            questions_doc = await self._render(
                f"{title} - Practice Question Paper", split.questions, is_question_paper=True
            )
            response.notes_pdf = _encode(notes_doc, f"{stem}_notes.pdf")
            response.questions_pdf = _encode(questions_doc, f"{stem}_questions.pdf")

        log.info(f"[GENERATE DONE] {len(text)} chars, mode={mode}")
        return response

    async def _call_model(self, prompt: str) -> str:
        try:
            text = await self.client.complete(prompt, max_tokens=self.settings.max_tokens)
        except Exception as e:
            log.exception(f"[GENERATE] model call failed: {e}")
            raise GenerationError(provider_error_message(e)) from e
        if not text or not text.strip():
            log.error("[GENERATE] model returned an empty response")
            raise GenerationError()
        return text

    async def _render(self, title: str, text: str, is_question_paper: bool = False) -> RenderedDocument:
        try:
            return await run_in_threadpool(render_text, title, text, is_question_paper)
        except Exception as e:
            log.exception(f"[RENDER] failed for '{title}': {e}")
            raise RenderError() from e

    @staticmethod
    def _file_stem(request: GenerationRequest) -> str:
        return f"{_slug(request.subject)}_{_slug(request.topic)}"

    @staticmethod
    def _title_stem(request: GenerationRequest) -> str:
        return f"{request.subject.strip()}: {request.topic.strip()}"
