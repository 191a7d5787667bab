"""Payload Preparation — redacted log projection and XML-safe merge copy of user data.

Invariants:
    - Neither function mutates its input; both return fresh containers at every depth
    - redact_for_logging output is for logs only and never reaches the merge engine
    - prepare_merge_data keeps full string content, minus XML 1.0 illegal characters
"""

import re
from typing import Any, Callable

REDACTION_LIMIT = 100
TRUNCATION_MARKER = "..."

# Characters outside the XML 1.0 Char production.
_XML_ILLEGAL = re.compile(
    "[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]",
)


def _map_strings(value: Any, fn: Callable[[str], str]) -> Any:
    """Rebuild nested dicts/lists, applying fn to every string leaf."""
    if isinstance(value, str):
        return fn(value)
    if isinstance(value, dict):
        return {key: _map_strings(item, fn) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_map_strings(item, fn) for item in value]
    return value


def truncate_text(text: str, limit: int = REDACTION_LIMIT) -> str:
    if len(text) > limit:
        return text[:limit] + TRUNCATION_MARKER
    return text


def redact_for_logging(data: Any, limit: int = REDACTION_LIMIT) -> Any:
    """Return a log-safe deep copy with every long string truncated."""
    return _map_strings(data, lambda text: truncate_text(text, limit))


def strip_xml_illegal(text: str) -> str:
    return _XML_ILLEGAL.sub("", text)


def prepare_merge_data(data: Any) -> Any:
    """Return a deep copy safe to embed in WordprocessingML text nodes."""
    return _map_strings(data, strip_xml_illegal)
