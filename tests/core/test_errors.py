"""Error Hierarchy — status codes, categories, and the public error body.

Tests:
    - Each error maps to its documented HTTP status
    - to_response() always carries 'error' and 'message'
    - MergeError keeps every tag failure and names each tag in its message
"""

from resume_docgen.core.domain_types import TagFailure
from resume_docgen.core.errors import (
    ArchiveError,
    AssemblyError,
    ErrorCategory,
    MergeError,
    MissingUserDataError,
    NotFoundError,
    PayloadValidationError,
    RouteNotFoundError,
    TemplateNotFoundError,
)


def test_missing_user_data_is_a_400_validation_error():
    err = MissingUserDataError()
    assert isinstance(err, PayloadValidationError)
    assert err.http_status == 400
    body = err.to_response()
    assert body["error"] == "Missing userData"
    assert body["message"] == "Missing userData in request body"


def test_template_not_found_is_a_404():
    err = TemplateNotFoundError("x-resume.docx", ["/a/x-resume.docx"])
    assert isinstance(err, NotFoundError)
    assert err.http_status == 404
    assert err.category == ErrorCategory.RESOURCE_NOT_FOUND
    assert err.message == "Template not found: x-resume.docx"
    assert err.tried_paths == ["/a/x-resume.docx"]
    assert err.context.template_name == "x-resume.docx"


def test_route_not_found_body():
    body = RouteNotFoundError("/nope").to_response()
    assert body["error"] == "Not Found"
    assert body["message"] == "The requested endpoint does not exist"


def test_merge_error_aggregates_all_tags():
    err = MergeError([
        TagFailure("name |", "expected token 'name'"),
        TagFailure("email +", "unexpected '}'"),
    ])
    assert isinstance(err, AssemblyError)
    assert err.http_status == 500
    assert "name |" in err.message and "email +" in err.message
    body = err.to_response()
    assert body["error"] == "Error generating resume"
    assert body["details"] == [
        {"tag": "name |", "message": "expected token 'name'"},
        {"tag": "email +", "message": "unexpected '}'"},
    ]


def test_archive_error_is_an_assembly_error_without_details():
    err = ArchiveError("not a ZIP archive")
    assert isinstance(err, AssemblyError)
    assert err.http_status == 500
    assert err.to_response()["details"] == []
    assert "not a ZIP archive" in err.message
