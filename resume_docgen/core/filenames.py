"""Download Filenames — header-safe, collision-resistant names for generated documents.

Invariants:
    - safe_name output only contains [A-Za-z0-9_-] and is never empty
    - file_timestamp is the UTC ISO-8601 instant with ':' and '.' replaced by '-'
"""

import re
from datetime import datetime, timezone
from typing import Any

FALLBACK_NAME = "document"
FILENAME_PREFIX = "resume"
DOCX_EXTENSION = ".docx"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def safe_name(raw: Any) -> str:
    """Strip everything outside the allow-list; fall back when nothing is left."""
    if not isinstance(raw, str):
        return FALLBACK_NAME
    cleaned = _UNSAFE_CHARS.sub("", raw)
    return cleaned or FALLBACK_NAME


def iso_utc(now: datetime) -> str:
    """Millisecond ISO-8601 in UTC with a Z suffix: 2026-10-19T08:15:02.123Z"""
    utc = now.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def file_timestamp(now: datetime) -> str:
    return iso_utc(now).replace(":", "-").replace(".", "-")


def build_download_filename(user_data: dict[str, Any], now: datetime) -> str:
    name = safe_name(user_data.get("name"))
    return f"{FILENAME_PREFIX}-{name}-{file_timestamp(now)}{DOCX_EXTENSION}"
