"""Response Composer — wraps generated bytes in a binary download response.

Invariants:
    - Content-Type is always the WordprocessingML media type
    - Content-Length equals len(body) exactly
    - Responses are marked non-cacheable (Cache-Control: no-cache)
    - The filename is built only from allow-listed characters
"""

from datetime import datetime, timezone

from fastapi.responses import Response

from resume_docgen.core.domain_types import UserData
from resume_docgen.core.filenames import build_download_filename

DOCX_MEDIA_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)


def attachment_headers(filename: str, length: int) -> dict[str, str]:
    return {
        "Content-Disposition": f'attachment; filename="{filename}"',
        "Content-Length": str(length),
        "Cache-Control": "no-cache",
    }


def attachment_response(body: bytes, filename: str) -> Response:
    """Binary .docx download with the standard transfer headers."""
    return Response(
        content=body,
        media_type=DOCX_MEDIA_TYPE,
        headers=attachment_headers(filename, len(body)),
    )


def compose(
    document: bytes, data: UserData, now: datetime | None = None,
) -> Response:
    """Download response for a generated document, named after data['name']."""
    filename = build_download_filename(data, now or datetime.now(timezone.utc))
    return attachment_response(document, filename)
