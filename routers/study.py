"""
Study Router — /api

Endpoints:
  POST /api/generate — generate study notes + practice question paper
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from generation.orchestrator import StudyPackOrchestrator
from generation.schemas import GenerationRequest

router = APIRouter(prefix="/api", tags=["study"])


def get_orchestrator(request: Request) -> StudyPackOrchestrator:
    """Orchestrator built once at start-up and held on app.state."""
    return request.app.state.orchestrator


@router.post("/generate")
async def generate_study_pack(
    payload: GenerationRequest,
    orchestrator: StudyPackOrchestrator = Depends(get_orchestrator),
):
    """
    **Generate study notes and a practice question paper.**

    Depending on the deployment's document mode the response carries:
    - `text`: `generatedText` only
    - `combined`: `pdfData` (base64) + `filename`
    - `split`: `notesPdf` + `questionsPdf`, each `{data, filename}`

    Errors are returned as `{"error": "<message>"}` with status 400 (missing
    field) or 500 (generation, separation or PDF failure).
    """
    result = await orchestrator.generate(payload)
    return JSONResponse(status_code=200, content=result.to_payload())
