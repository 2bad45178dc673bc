import pytest
from fastapi.testclient import TestClient

from generation.config import MODE_COMBINED, MODE_SPLIT, MODE_TEXT, Settings
from generation.schemas import GenerationRequest


SAMPLE_GENERATED_TEXT = """Here is your study pack.

**Section 1: Notes**
## Newton's Laws of Motion
### First Law
**Inertia**
* An object stays at rest unless a net force acts on it.
- Mass is a measure of inertia.
1. Force equals mass times acceleration.

Newton published the laws in 1687.

**Section 2: Question Paper**
## Instructions
Answer all questions.
Question 1: State Newton's first law.
[2 marks]
Question 2: Calculate the force on a 2 kg mass accelerating at 3 m/s.
Marks: 3
## Answer Key
1. An object remains at rest or in uniform motion unless acted on by a net force.
2. F = ma = 6 N
"""


class FakeCompletionClient:
    """Records every prompt; returns canned text or raises a canned error."""

    def __init__(self, text=SAMPLE_GENERATED_TEXT, error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def complete(self, prompt, max_tokens):
        self.calls.append({"prompt": prompt, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def sample_text():
    """Model output that follows the requested layout conventions."""
    return SAMPLE_GENERATED_TEXT


@pytest.fixture
def request_payload():
    """A complete, valid request body."""
    return {
        "school": "Greenwood High",
        "grade": "10",
        "subject": "Physics",
        "topic": "Newton's Laws of Motion",
        "format": "MCQ, short answer",
        "notes_pages": 3,
        "papers_pages": 2,
        "email": "student@example.com",
    }


@pytest.fixture
def generation_request(request_payload):
    return GenerationRequest(**request_payload)


@pytest.fixture
def fake_client():
    return FakeCompletionClient()


@pytest.fixture
def make_fake_client():
    """Factory for fakes with custom text or error."""
    return FakeCompletionClient


@pytest.fixture
def make_orchestrator():
    from generation.orchestrator import StudyPackOrchestrator

    def _make(client, mode=MODE_SPLIT, **overrides):
        return StudyPackOrchestrator(client=client, settings=make_settings(mode, **overrides))

    return _make


def make_settings(mode=MODE_SPLIT, **overrides):
    return Settings(
        openai_api_key="test-key",
        document_mode=mode,
        allowed_origin="https://frontend.example.com",
        **overrides,
    )


@pytest.fixture(params=[MODE_TEXT, MODE_COMBINED, MODE_SPLIT])
def any_mode(request):
    return request.param


@pytest.fixture
def make_test_client():
    """Factory: TestClient for an app wired to the given fake client and mode."""
    from study_api import create_app

    clients = []

    def _make(client, mode=MODE_SPLIT):
        app = create_app(settings=make_settings(mode), client=client)
        test_client = TestClient(app)
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        test_client.__exit__(None, None, None)
