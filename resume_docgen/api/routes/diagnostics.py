"""Diagnostics — template root inspection and canned sample download.

Invariants:
    - GET /debug/templates is read-only: it lists, never creates, directories
    - GET /test-doc serves the sample archive byte-for-byte, with the generation headers
    - Neither route merges data or touches the registry's default fallback
"""

import logging
import os

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from resume_docgen.api.dependencies import get_template_resolver
from resume_docgen.core.errors import TemplateNotFoundError
from resume_docgen.core.template_registry import SAMPLE_TEMPLATE_FILE
from resume_docgen.services.response_composer import attachment_response
from resume_docgen.services.template_resolver import PACKAGE_DIR, TemplateResolver

logger = logging.getLogger(__name__)
router = APIRouter(tags=["diagnostics"])


@router.get("/debug/templates")
def debug_templates(resolver: TemplateResolver = Depends(get_template_resolver)):
    """Report every candidate template root, whether it exists, and its files."""
    return {
        "currentWorkingDirectory": os.getcwd(),
        "functionDirectory": str(PACKAGE_DIR),
        "templatePaths": resolver.describe_roots(),
    }


@router.get("/test-doc")
@router.get("/test-docx", include_in_schema=False)
def test_document(resolver: TemplateResolver = Depends(get_template_resolver)):
    """Return the canned sample archive to check binary transport end to end."""
    try:
        content = resolver.resolve_file(SAMPLE_TEMPLATE_FILE)
    except TemplateNotFoundError as e:
        logger.error(f"Error sending {SAMPLE_TEMPLATE_FILE}: {e.message}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Failed to load sample document",
                "message": e.message,
            },
        )
    return attachment_response(content, SAMPLE_TEMPLATE_FILE)
