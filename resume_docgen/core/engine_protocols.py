"""Boundary Protocols — contract between the assembler and the merge engine.

Invariants:
    - The assembler only sees MergeEngine; no engine-native type crosses this boundary
    - Implementations raise MergeError / ArchiveError, never their own exception types
    - merge() is synchronous and side-effect free apart from CPU and memory
"""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class MergeOptions:
    """Merge policy handed to the engine.

    Paragraph-level repeats ({%p for %}) are always expanded by the engine's
    tag grammar, so they carry no switch here.
    """
    linebreaks: bool = True
    missing_as_empty: bool = True


DEFAULT_MERGE_OPTIONS = MergeOptions()


class MergeEngine(Protocol):
    """Contract for placeholder substitution inside a document archive."""
    def merge(
        self, template: bytes, data: dict[str, Any], options: MergeOptions,
    ) -> bytes: ...
