"""Docx Merge Engine — docxtpl adapter behavior against real .docx archives.

Tests:
    - Placeholders, nested fields, and paragraph loops are expanded
    - Missing, nested-missing, and None values render as empty text
    - A null loop source renders no rows; dict-method names resolve to data keys
    - Embedded newlines become line breaks; XML special characters survive
    - Every syntax error across body and header is reported, one per tag
    - Non-archives and archives without a document part raise ArchiveError
"""

import io
import zipfile

import pytest

from resume_docgen.core.engine_protocols import DEFAULT_MERGE_OPTIONS, MergeOptions
from resume_docgen.core.errors import ArchiveError, MergeError
from resume_docgen.infrastructure.docx_engine import DocxTemplateEngine, normalize_linebreaks
from tests.docx_helpers import build_docx, docx_paragraphs


def _merge(template: bytes, data: dict, options: MergeOptions = DEFAULT_MERGE_OPTIONS) -> list[str]:
    return docx_paragraphs(DocxTemplateEngine().merge(template, data, options))


# ─── substitution ────────────────────────────────────────────────

def test_placeholders_are_substituted():
    template = build_docx("Hello {{ name }}!", "{{ contact.email }}")
    assert _merge(template, {"name": "Ada", "contact": {"email": "ada@example.com"}}) == [
        "Hello Ada!", "ada@example.com",
    ]


def test_paragraph_loop_repeats_paragraphs(resume_template):
    paragraphs = _merge(resume_template, {
        "name": "Ada",
        "experience": [
            {"title": "Analyst", "company": "Engines Ltd", "description": "Notes"},
            {"title": "Writer", "company": "Press", "description": "Essays"},
        ],
    })
    assert "Analyst at Engines Ltd" in paragraphs
    assert "Writer at Press" in paragraphs
    assert "Essays" in paragraphs
    assert not any("{%" in p for p in paragraphs)


def test_missing_fields_render_empty():
    template = build_docx("Hello {{ name }}!", "[{{ contact.email }}]", "[{{ phone }}]")
    assert _merge(template, {}) == ["Hello !", "[]", "[]"]


def test_none_values_render_empty():
    template = build_docx("Hello {{ name }}!")
    assert _merge(template, {"name": None}) == ["Hello !"]


def test_missing_loop_source_renders_no_rows(resume_template):
    paragraphs = _merge(resume_template, {"name": "Ada"})
    assert paragraphs[0] == "Ada"
    assert not any(" at " in p for p in paragraphs)


def test_null_loop_source_renders_no_rows(resume_template):
    paragraphs = _merge(resume_template, {"name": "Ada", "experience": None})
    assert paragraphs[0] == "Ada"
    assert not any(" at " in p for p in paragraphs)


def test_null_nested_fields_render_empty():
    template = build_docx(
        "[{{ contact.email }}]",
        "{%p for s in skills %}",
        "[{{ s.name }}]",
        "{%p endfor %}",
    )
    data = {"contact": None, "skills": [{"name": None}, None]}
    assert _merge(template, data) == ["[]", "[]", "[]"]


def test_null_replacement_does_not_mutate_input(resume_template):
    data = {"name": "Ada", "experience": None}
    _merge(resume_template, data)
    assert data == {"name": "Ada", "experience": None}


@pytest.mark.parametrize("key", ["items", "values", "keys", "get", "copy", "update"])
def test_field_named_like_dict_method_renders_value(key):
    template = build_docx(
        "{%p for s in skills %}",
        "{{ s." + key + " }}",
        "{%p endfor %}",
    )
    assert _merge(template, {"skills": [{key: "Python"}]}) == ["Python"]


def test_strict_policy_raises_on_missing_field():
    template = build_docx("Hello {{ name }}!")
    with pytest.raises(MergeError) as excinfo:
        _merge(template, {}, MergeOptions(missing_as_empty=False))
    assert excinfo.value.failures[0].tag == "name"


def test_newlines_become_line_breaks():
    template = build_docx("{{ summary }}")
    assert _merge(template, {"summary": "line one\nline two\r\nline three"}) == [
        "line one\nline two\nline three",
    ]


def test_newlines_flattened_when_linebreaks_disabled():
    template = build_docx("[{{ summary }}]")
    paragraphs = _merge(template, {"summary": "a\nb\r\nc"}, MergeOptions(linebreaks=False))
    assert paragraphs == ["[a b c]"]


def test_xml_special_characters_are_escaped():
    template = build_docx("{{ name }}")
    assert _merge(template, {"name": "R&D <Lead> \"Q\""}) == ['R&D <Lead> "Q"']


def test_normalize_linebreaks_does_not_mutate_input():
    data = {"a": ["x\r\ny"], "b": "plain"}
    normalized = normalize_linebreaks(data)
    assert data == {"a": ["x\r\ny"], "b": "plain"}
    assert normalized == {"a": ["x\ny"], "b": "plain"}
    assert normalized["a"] is not data["a"]


# ─── tag errors ──────────────────────────────────────────────────

def test_two_tag_errors_are_both_reported():
    template = build_docx("{{ name | }}", "ok {{ fine }}", "{{ email + }}")
    with pytest.raises(MergeError) as excinfo:
        _merge(template, {"name": "Ada"})
    tags = [f.tag for f in excinfo.value.failures]
    assert tags == ["name |", "email +"]
    assert "name |" in excinfo.value.message
    assert "email +" in excinfo.value.message


def test_errors_in_body_and_header_are_both_reported():
    template = build_docx("{{ name | }}", header="{{ title + }}")
    with pytest.raises(MergeError) as excinfo:
        _merge(template, {})
    tags = {f.tag for f in excinfo.value.failures}
    assert tags == {"name |", "title +"}


def test_unclosed_block_reports_part_and_line():
    template = build_docx("{%p for s in skills %}", "{{ s }}")
    with pytest.raises(MergeError) as excinfo:
        _merge(template, {"skills": ["a"]})
    failures = excinfo.value.failures
    assert len(failures) == 1
    assert failures[0].tag.startswith("word/document.xml:")


# ─── archive errors ──────────────────────────────────────────────

def test_non_zip_bytes_raise_archive_error():
    with pytest.raises(ArchiveError):
        DocxTemplateEngine().merge(b"this is not a docx", {}, DEFAULT_MERGE_OPTIONS)


def test_zip_without_document_raises_archive_error():
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("hello.txt", "hi")
    with pytest.raises(ArchiveError):
        DocxTemplateEngine().merge(buf.getvalue(), {}, DEFAULT_MERGE_OPTIONS)
