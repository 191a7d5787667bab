"""Template Registry — closed, read-only map from template id to template file name.

Invariants:
    - Built once at import time; MappingProxyType makes runtime mutation impossible
    - Unknown ids resolve to the default entry (never an error at this stage)
    - Only a missing *file* is an error, and that is the resolver's concern
"""

from types import MappingProxyType
from typing import Mapping

from resume_docgen.core.domain_types import TemplateFileName, TemplateId

DEFAULT_TEMPLATE_ID = TemplateId("default")

# Canned archive served by the transport test route; never merged.
SAMPLE_TEMPLATE_FILE = TemplateFileName("test-resume.docx")

TEMPLATE_FILES: Mapping[str, TemplateFileName] = MappingProxyType({
    "professional": TemplateFileName("professional-resume.docx"),
    "creative": TemplateFileName("creative-resume.docx"),
    "academic": TemplateFileName("academic-resume.docx"),
    "minimalistic": TemplateFileName("minimalistic-resume.docx"),
    DEFAULT_TEMPLATE_ID: TemplateFileName("default-resume.docx"),
})


def template_file_for(template_id: str | None) -> TemplateFileName:
    """Map a template id to its file name, falling back to the default entry."""
    if template_id is not None and template_id in TEMPLATE_FILES:
        return TEMPLATE_FILES[template_id]
    return TEMPLATE_FILES[DEFAULT_TEMPLATE_ID]
