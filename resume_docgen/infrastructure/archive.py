"""Archive Repacking — deterministic, maximally compressed re-serialization of .docx archives.

Invariants:
    - Entry order and entry bytes are preserved exactly
    - Every entry gets the same fixed timestamp and permissions
    - DEFLATE level 9 for every entry; identical input always yields identical output
"""

import io
import zipfile

from resume_docgen.core.errors import ArchiveError

FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)
COMPRESS_LEVEL = 9

_FILE_MODE = 0o644 << 16
_DIR_MODE = (0o40755 << 16) | 0x10


def is_archive(data: bytes) -> bool:
    return zipfile.is_zipfile(io.BytesIO(data))


def repack_deterministic(data: bytes) -> bytes:
    """Rewrite a ZIP archive with fixed metadata and maximal compression."""
    try:
        source = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as e:
        raise ArchiveError(str(e)) from e

    out = io.BytesIO()
    with source, zipfile.ZipFile(out, "w") as target:
        for info in source.infolist():
            entry = zipfile.ZipInfo(info.filename, date_time=FIXED_DATE_TIME)
            entry.compress_type = zipfile.ZIP_DEFLATED
            entry.external_attr = _DIR_MODE if info.is_dir() else _FILE_MODE
            target.writestr(entry, source.read(info), compresslevel=COMPRESS_LEVEL)
    return out.getvalue()
