"""Route Dependencies — per-request construction of resolver and assembler.

Invariants:
    - A fresh TemplateResolver and DocumentAssembler per request (no shared mutable state)
    - Candidate roots are computed per request, so a changed cwd is honored
    - Tests swap these through app.dependency_overrides
"""

from fastapi import Depends

from resume_docgen.config import Settings, get_settings
from resume_docgen.services.document_assembler import DocumentAssembler
from resume_docgen.services.template_resolver import (
    TemplateResolver, default_candidate_roots,
)


def get_template_resolver(
    settings: Settings = Depends(get_settings),
) -> TemplateResolver:
    return TemplateResolver(default_candidate_roots(settings.templates_dir))


def get_document_assembler() -> DocumentAssembler:
    return DocumentAssembler()
