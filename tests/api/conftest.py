"""API test fixtures — FastAPI test client with resolver and assembler overrides.

Invariants:
    - Every test resolves templates only from its own tmp_path root
    - dependency_overrides are cleared after each test
    - Unhandled exceptions become 500 responses instead of propagating into tests
"""

import pytest
from httpx import ASGITransport, AsyncClient

from resume_docgen.api.dependencies import get_document_assembler, get_template_resolver
from resume_docgen.main import app
from resume_docgen.services.document_assembler import DocumentAssembler
from resume_docgen.services.template_resolver import CandidateRoot, TemplateResolver


@pytest.fixture
def roots(template_root):
    """Mutable list of candidate roots used by the overridden resolver."""
    return [CandidateRoot("test", template_root)]


@pytest.fixture
async def client(roots):
    app.dependency_overrides[get_template_resolver] = lambda: TemplateResolver(roots)

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def fake_engine():
    """Install a controllable merge engine behind the real assembler.

    Set fake_engine["error"] to an exception to make merge() raise it.
    """
    state: dict = {"error": None, "calls": []}

    class _FakeEngine:
        def merge(self, template, data, options):
            state["calls"].append(data)
            if state["error"] is not None:
                raise state["error"]
            return template

    app.dependency_overrides[get_document_assembler] = (
        lambda: DocumentAssembler(_FakeEngine())
    )
    return state
