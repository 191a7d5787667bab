"""Template Resolver — maps a template id to template bytes across candidate deployment roots.

Invariants:
    - Candidate roots are an ordered list; the first root holding the file wins
    - Existence is tested before reading so every miss is logged per path
    - Files are read in binary mode only; bytes reach the assembler unmodified
    - Logging is observational and never changes the result
    - Nothing is cached: every call reads the file fresh

Design Decisions:
    - The active deployment layout is never configured, only probed. A new hosting
      target is supported by appending one CandidateRoot in default_candidate_roots.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from resume_docgen.core.domain_types import TemplateBytes, TemplateFileName
from resume_docgen.core.errors import ErrorContext, TemplateNotFoundError
from resume_docgen.core.template_registry import template_file_for

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent.parent
TEMPLATES_DIRNAME = "templates"


@dataclass(frozen=True)
class CandidateRoot:
    """One directory that may hold template files."""
    label: str
    path: Path


def default_candidate_roots(
    templates_dir: str | None = None,
    cwd: Path | None = None,
    package_dir: Path = PACKAGE_DIR,
) -> list[CandidateRoot]:
    """Ordered template roots covering every known deployment layout."""
    cwd = cwd or Path(os.getcwd())
    roots = [
        CandidateRoot("cwd", cwd / TEMPLATES_DIRNAME),
        CandidateRoot("project", package_dir.parent / TEMPLATES_DIRNAME),
        CandidateRoot("package", package_dir / TEMPLATES_DIRNAME),
        CandidateRoot("cwd-api", cwd / "api" / TEMPLATES_DIRNAME),
        CandidateRoot("functions-bundle", package_dir.parent.parent / TEMPLATES_DIRNAME),
    ]
    if templates_dir:
        roots.insert(0, CandidateRoot("configured", Path(templates_dir)))
    return roots


class TemplateResolver:
    """Loads template archives from the first candidate root that has them."""

    def __init__(self, roots: list[CandidateRoot]):
        self.roots = list(roots)

    def resolve(self, template_id: str | None) -> TemplateBytes:
        """Load the template registered under template_id (default on unknown ids)."""
        template_name = template_file_for(template_id)
        try:
            return self.resolve_file(template_name)
        except TemplateNotFoundError as exc:
            exc.context.template_id = template_id
            raise

    def resolve_file(self, template_name: TemplateFileName) -> TemplateBytes:
        logger.info(
            f"Looking for template: {template_name}",
            extra={"template_name": template_name},
        )
        tried: list[str] = []
        for root in self.roots:
            candidate = root.path / template_name
            tried.append(str(candidate))
            if not candidate.is_file():
                logger.debug(
                    f"Template not at {root.label} root",
                    extra={"candidate_path": str(candidate)},
                )
                continue
            try:
                content = candidate.read_bytes()
            except OSError as e:
                logger.warning(
                    f"Template at {root.label} root is unreadable: {e}",
                    extra={"candidate_path": str(candidate)},
                )
                continue
            logger.info(
                f"Template loaded from {root.label} root",
                extra={
                    "template_name": template_name,
                    "candidate_path": str(candidate),
                    "size_bytes": len(content),
                },
            )
            return TemplateBytes(content)

        logger.error(
            f"Template not found at any path: {template_name}",
            extra={"template_name": template_name, "error_code": "TEMPLATE_NOT_FOUND"},
        )
        raise TemplateNotFoundError(
            template_name, tried, ErrorContext(debug_info={"tried_paths": tried}),
        )

    def describe_roots(self) -> list[dict]:
        """Existence and directory listing per root, for diagnostics.

        An unreadable root is reported with an empty listing and the OS error.
        """
        report = []
        for root in self.roots:
            entry = {"label": root.label, "path": str(root.path), "exists": False, "files": []}
            try:
                entry["exists"] = root.path.is_dir()
                if entry["exists"]:
                    entry["files"] = sorted(p.name for p in root.path.iterdir())
            except OSError as e:
                logger.warning(
                    f"Cannot list {root.label} root: {e}",
                    extra={"candidate_path": str(root.path)},
                )
                entry["error"] = str(e)
            report.append(entry)
        return report
