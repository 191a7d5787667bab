"""Generate — POST / merges userData into the requested template and returns a .docx.

Invariants:
    - Missing userData is a 400, raised before any template is touched
    - Inputs are logged only through the redacted projection
    - The unredacted userData is what reaches the assembler
    - Errors propagate to the global handlers; this route never builds error bodies
    - OPTIONS on any path is an empty 200, with or without CORS request headers
"""

import json
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from resume_docgen.api.dependencies import get_document_assembler, get_template_resolver
from resume_docgen.config import Settings, get_settings
from resume_docgen.core.errors import MissingUserDataError
from resume_docgen.core.payload import redact_for_logging
from resume_docgen.schemas.generate import GenerateRequest
from resume_docgen.services.document_assembler import DocumentAssembler
from resume_docgen.services.response_composer import compose
from resume_docgen.services.template_resolver import TemplateResolver

logger = logging.getLogger(__name__)
router = APIRouter(tags=["generate"])


@router.post("/", response_class=Response)
def generate_document(
    body: GenerateRequest,
    resolver: TemplateResolver = Depends(get_template_resolver),
    assembler: DocumentAssembler = Depends(get_document_assembler),
    settings: Settings = Depends(get_settings),
):
    """Generate a resume document from a registered template."""
    logger.info("Received POST request for resume generation")
    if body.user_data is None:
        raise MissingUserDataError()

    template_id = body.template_id or settings.default_template_id
    template = resolver.resolve(template_id)

    logger.info(
        "Template data: "
        + json.dumps(redact_for_logging(body.user_data), ensure_ascii=False, default=str),
        extra={"template_id": template_id},
    )
    document = assembler.assemble(template, body.user_data)
    return compose(document, body.user_data)


@router.options("/{path:path}", include_in_schema=False)
def preflight(path: str):
    """Answer OPTIONS on any path with an empty 200.

    Browser preflights carrying Origin are answered earlier by CORSMiddleware.
    """
    return Response(status_code=200)
