"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - TemplateId is an opaque caller-supplied key; only the registry interprets it
    - TemplateBytes and GeneratedDocument are immutable bytes, never text
    - TagFailure is the only shape in which merge failures leave the engine adapter
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NewType


# ─── Identity Types ──────────────────────────────────────────────

TemplateId = NewType("TemplateId", str)
TemplateFileName = NewType("TemplateFileName", str)


# ─── Value Types ─────────────────────────────────────────────────

TemplateBytes = NewType("TemplateBytes", bytes)
GeneratedDocument = NewType("GeneratedDocument", bytes)

# Caller-supplied record; shape is defined by the template's tags only.
UserData = dict[str, Any]


@dataclass(frozen=True)
class TagFailure:
    """One tag-level failure reported by the merge engine."""
    tag: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"tag": self.tag, "message": self.message}


# ─── Enums ───────────────────────────────────────────────────────

class LogFormat(str, Enum):
    """Log output formats accepted by setup_logging."""
    JSON = "json"
    TEXT = "text"
