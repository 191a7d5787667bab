"""Root conftest — shared test configuration and template fixtures."""

import os

import pytest

from tests.docx_helpers import build_docx

# Ensure tests never pick up a developer's .env template root
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("TEMPLATES_DIR", "")


@pytest.fixture
def resume_template() -> bytes:
    return build_docx(
        "{{ name }}",
        "{{ email }} | {{ phone }}",
        "{{ summary }}",
        "{%p for exp in experience %}",
        "{{ exp.title }} at {{ exp.company }}",
        "{{ exp.description }}",
        "{%p endfor %}",
    )


@pytest.fixture
def template_root(tmp_path, resume_template):
    """A candidate root holding the default template and the canned sample."""
    root = tmp_path / "templates"
    root.mkdir()
    (root / "default-resume.docx").write_bytes(resume_template)
    (root / "professional-resume.docx").write_bytes(
        build_docx("Professional: {{ name }}"),
    )
    (root / "test-resume.docx").write_bytes(build_docx("Sample Resume"))
    return root
