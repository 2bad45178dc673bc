"""
Student Helper API — Main Application
FastAPI application that turns a student's study request into generated
notes and a practice question paper (raw text and/or PDF documents).
"""

from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from generation.config import Settings, load_settings
from generation.errors import MISSING_FIELDS_MESSAGE, StudyHelperError
from generation.gpt_client import GPTClient
from generation.orchestrator import CompletionClient, StudyPackOrchestrator
from routers import study

log = logging.getLogger(__name__)

HEALTH_MESSAGE = "Student Helper Backend is running!"
UNEXPECTED_ERROR_MESSAGE = "Internal server error. Please try again."


def _register_error_handlers(app: FastAPI):
    """Every failure leaves the API as {"error": "<short message>"}."""

    @app.exception_handler(StudyHelperError)
    async def study_helper_error_handler(request: Request, exc: StudyHelperError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Malformed body (not a JSON object, wrong field types) counts as missing fields
        log.info(f"[VALIDATE] malformed request body: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": MISSING_FIELDS_MESSAGE})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        log.exception(f"[ERROR] unhandled error on {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": UNEXPECTED_ERROR_MESSAGE})


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[CompletionClient] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; read from the environment when omitted
        client:   Generation client; a GPTClient for settings is built when omitted
    """
    settings = settings or load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s  %(levelname)s  %(message)s",
    )
    if client is None:
        client = GPTClient(
            api_key=settings.openai_api_key,
            model=settings.gpt_model,
            temperature=settings.temperature,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info(
            f"Student Helper Backend starting: model={settings.gpt_model}, "
            f"mode={settings.document_mode}, origin={settings.allowed_origin}"
        )
        yield
        close = getattr(client, "close", None)
        if close is not None:
            await close()

    app = FastAPI(
        title="Student Helper API",
        description="Generates study notes and practice question papers with an LLM",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.orchestrator = StudyPackOrchestrator(client=client, settings=settings)

    # CORS: a single frontend origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.allowed_origin],
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    _register_error_handlers(app)
    app.include_router(study.router)

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return HEALTH_MESSAGE

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
