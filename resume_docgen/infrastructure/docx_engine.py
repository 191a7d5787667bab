"""Docx Merge Engine — docxtpl/Jinja2 adapter implementing the MergeEngine protocol.

Invariants:
    - Template bytes are opened from memory; nothing is written to disk
    - Missing and None values render as empty text when missing_as_empty is set;
      a None loop source renders zero rows
    - obj.name resolves a mapping key before any dict method of the same name
    - Embedded newlines become <w:br/> when linebreaks is set
    - User data is autoescaped; '&' and '<' can never break the document XML
    - Every syntax error in every XML part is reported, not just the first one
    - Native errors (jinja2, python-docx, lxml) are converted to MergeError / ArchiveError here
"""

import io
import logging
import re
import zipfile
from collections.abc import Iterator, Mapping
from typing import Any

from docx.opc.exceptions import PackageNotFoundError
from docxtpl import DocxTemplate
from jinja2 import ChainableUndefined, Environment, StrictUndefined
from jinja2.exceptions import TemplateError, TemplateSyntaxError, UndefinedError
from lxml import etree

from resume_docgen.core.domain_types import TagFailure
from resume_docgen.core.engine_protocols import MergeOptions
from resume_docgen.core.errors import ArchiveError, MergeError
from resume_docgen.infrastructure.archive import is_archive

logger = logging.getLogger(__name__)

BODY_PART = "word/document.xml"
UNKNOWN_TAG = "unknown"

_EXPRESSION_TAG = re.compile(r"\{\{(.*?)\}\}", re.DOTALL)
_UNDEFINED_NAME = re.compile(r"'([^']+)' is undefined")


def _none_as_empty(value: Any) -> Any:
    return "" if value is None else value


class DataFirstEnvironment(Environment):
    """Resolves ``obj.name`` against a mapping's keys before its methods.

    A user field called ``items`` or ``values`` renders its value, not the
    bound dict method.
    """

    def getattr(self, obj: Any, attribute: str) -> Any:
        if isinstance(obj, Mapping):
            try:
                return obj[attribute]
            except (KeyError, TypeError):
                pass
        return super().getattr(obj, attribute)


def build_environment(options: MergeOptions) -> Environment:
    if options.missing_as_empty:
        return DataFirstEnvironment(undefined=ChainableUndefined, finalize=_none_as_empty)
    return DataFirstEnvironment(undefined=StrictUndefined)


def nulls_as_undefined(value: Any, env: Environment, name: str | None = None) -> Any:
    """Copy of value with every None replaced by the environment's Undefined.

    An undefined loop source iterates zero times, so a null list renders no rows.
    """
    if value is None:
        return env.undefined(name=name)
    if isinstance(value, dict):
        return {key: nulls_as_undefined(item, env, key) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [nulls_as_undefined(item, env, name) for item in value]
    return value


def normalize_linebreaks(value: Any, keep: bool = True) -> Any:
    """Copy of value with CR and CRLF unified to LF, or every break flattened to a space.

    docxtpl turns each LF left in rendered text into a <w:br/>.
    """
    if isinstance(value, str):
        text = value.replace("\r\n", "\n").replace("\r", "\n")
        return text if keep else text.replace("\n", " ")
    if isinstance(value, dict):
        return {key: normalize_linebreaks(item, keep) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_linebreaks(item, keep) for item in value]
    return value


class DocxTemplateEngine:
    """Merges JSON-like data into a .docx archive's Jinja2 placeholder tags."""

    def merge(
        self, template: bytes, data: dict[str, Any], options: MergeOptions,
    ) -> bytes:
        doc = self._open(template)
        env = build_environment(options)

        failures = self._syntax_failures(doc, env)
        if failures:
            raise MergeError(failures)

        context = normalize_linebreaks(data, keep=options.linebreaks)
        if options.missing_as_empty:
            context = nulls_as_undefined(context, env)
        try:
            doc.render(context, jinja_env=env, autoescape=True)
        except TemplateError as e:
            raise MergeError([_runtime_failure(e)]) from e
        except (TypeError, ValueError, ArithmeticError) as e:
            raise MergeError([TagFailure(UNKNOWN_TAG, str(e))]) from e

        out = io.BytesIO()
        doc.save(out)
        return out.getvalue()

    def _open(self, template: bytes) -> DocxTemplate:
        if not is_archive(template):
            raise ArchiveError("not a ZIP archive")
        try:
            doc = DocxTemplate(io.BytesIO(template))
            doc.init_docx()
        except (
            PackageNotFoundError, zipfile.BadZipFile, KeyError,
            ValueError, etree.XMLSyntaxError,
        ) as e:
            raise ArchiveError(str(e) or type(e).__name__) from e
        return doc

    def _syntax_failures(
        self, doc: DocxTemplate, env: Environment,
    ) -> list[TagFailure]:
        failures: list[TagFailure] = []
        for part_name, xml in _template_parts(doc):
            try:
                env.parse(xml)
            except TemplateSyntaxError as e:
                failures.extend(_tag_failures(env, part_name, xml, e))
        if failures:
            logger.warning(
                f"Template has {len(failures)} tag error(s)",
                extra={"failure_count": len(failures)},
            )
        return failures


def _template_parts(doc: DocxTemplate) -> Iterator[tuple[str, str]]:
    """(part name, patched XML) for the body and every header and footer."""
    yield BODY_PART, doc.patch_xml(doc.get_xml())
    for uri in (doc.HEADER_URI, doc.FOOTER_URI):
        for _, part in doc.get_headers_footers(uri):
            yield str(part.partname).lstrip("/"), doc.patch_xml(doc.get_part_xml(part))


def _tag_failures(
    env: Environment, part_name: str, xml: str, error: TemplateSyntaxError,
) -> list[TagFailure]:
    """Break a part-level syntax error down to the expression tags that caused it."""
    failures = []
    for match in _EXPRESSION_TAG.finditer(xml):
        try:
            env.parse(match.group(0))
        except TemplateSyntaxError as e:
            failures.append(TagFailure(match.group(1).strip(), e.message or str(e)))
    if failures:
        return failures
    # Block-structure errors ({% for %} without {% endfor %}) have no single tag.
    return [TagFailure(f"{part_name}:{error.lineno}", error.message or str(error))]


def _runtime_failure(error: TemplateError) -> TagFailure:
    message = error.message or str(error)
    if isinstance(error, UndefinedError):
        found = _UNDEFINED_NAME.search(message)
        if found:
            return TagFailure(found.group(1), message)
    return TagFailure(UNKNOWN_TAG, message)
