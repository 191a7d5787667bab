"""Document Assembler — merges user data into template bytes and repackages the archive.

Invariants:
    - The engine receives the full, unredacted data (only XML-illegal characters removed)
    - The caller's data object is never mutated
    - Output is repacked deterministically: same template + same data -> same bytes
    - Assembly failures propagate as AssemblyError; nothing is retried or recovered here
"""

import logging

from resume_docgen.core.domain_types import GeneratedDocument, TemplateBytes, UserData
from resume_docgen.core.engine_protocols import (
    DEFAULT_MERGE_OPTIONS, MergeEngine, MergeOptions,
)
from resume_docgen.core.errors import AssemblyError
from resume_docgen.core.payload import prepare_merge_data
from resume_docgen.infrastructure.archive import repack_deterministic
from resume_docgen.infrastructure.docx_engine import DocxTemplateEngine

logger = logging.getLogger(__name__)


class DocumentAssembler:
    """Template bytes + user data -> generated .docx bytes."""

    def __init__(
        self,
        engine: MergeEngine | None = None,
        options: MergeOptions = DEFAULT_MERGE_OPTIONS,
    ):
        self.engine = engine or DocxTemplateEngine()
        self.options = options

    def assemble(self, template: TemplateBytes, data: UserData) -> GeneratedDocument:
        merge_data = prepare_merge_data(data)
        try:
            merged = self.engine.merge(template, merge_data, self.options)
        except AssemblyError as exc:
            logger.error(
                f"Document generation error: {exc.message}",
                extra={"error_code": exc.code, "failure_count": len(exc.failures)},
            )
            raise
        logger.info("Document rendered successfully")

        document = repack_deterministic(merged)
        logger.info(
            f"Generated buffer size: {len(document)} bytes",
            extra={"size_bytes": len(document)},
        )
        return GeneratedDocument(document)
