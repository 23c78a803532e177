"""Annotation parser for endpoint comment blocks.

Recognised tags::

    @LRDresponse 200 {"id": 1, "name": "John"}
    @LRDexample createUser {"name": "John", "email": "john@example.com"}
    @LRDerror 422 {"message": "Validation failed"}
    @LRDenum status pending|approved|rejected Current review state
    @LRDdeprecated Use /api/v2/users instead

Malformed occurrences are skipped one by one; the parser never raises on
any input string.
"""

import logging
import re
from collections.abc import Iterable, Iterator

from .base import (
    DEFAULT_DEPRECATION_MESSAGE,
    DeprecationInfo,
    EndpointDocument,
    EnumValueEntry,
    ErrorSchemaEntry,
    RequestExampleEntry,
    ResponseSchemaEntry,
)
from .json_scan import load_json_object, scan_json_object

logger = logging.getLogger(__name__)

STATUS_DESCRIPTIONS = {
    200: "OK",
    201: "Created",
    202: "Accepted",
    204: "No Content",
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    422: "Unprocessable Entity",
    429: "Too Many Requests",
    500: "Internal Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
}

# The object itself is located by scan_json_object, starting at the brace.
_RESPONSE_RE = re.compile(r"@LRDresponse\s+(\d+)\s+(?:\*(?!/)\s*)*(?=\{)", re.ASCII)
_ERROR_RE = re.compile(r"@LRDerror\s+(\d+)\s+(?:\*(?!/)\s*)*(?=\{)", re.ASCII)
_EXAMPLE_RE = re.compile(r"@LRDexample\s+(\w+)\s+(?:\*(?!/)\s*)*(?=\{)", re.ASCII)
# Either pipe-separated segments, which may be empty, or a single value.
_ENUM_RE = re.compile(
    r"@LRDenum[ \t]+(\w+)[ \t]+([^\s|]*(?:[ \t]*\|[ \t]*[^\s|]*)+|[^\s|]+)(?:[ \t]+(.*?))?[ \t\r]*$",
    re.MULTILINE | re.ASCII,
)
_DEPRECATED_RE = re.compile(r"@LRDdeprecated(?:[ \t]+(.*?))?[ \t\r]*$", re.MULTILINE)
_OBJECT_TAG_RE = re.compile(
    r"@LRD(?:response|error)\s+\d+\s+(?:\*(?!/)\s*)*(?=\{)|@LRDexample\s+\w+\s+(?:\*(?!/)\s*)*(?=\{)",
    re.ASCII,
)


def status_description(status_code: int) -> str:
    """Map an HTTP status code to its reason phrase, or 'Response' if unknown."""
    return STATUS_DESCRIPTIONS.get(status_code, "Response")


def parse_response_schemas(doc_block: str) -> list[ResponseSchemaEntry]:
    """Parse every @LRDresponse tag, in order of appearance."""
    return [
        ResponseSchemaEntry(status_code=code, description=status_description(code), schema=schema)
        for code, schema in _iter_status_objects(_RESPONSE_RE, doc_block, "@LRDresponse")
    ]


def parse_error_schemas(doc_block: str) -> list[ErrorSchemaEntry]:
    """Parse every @LRDerror tag, in order of appearance."""
    return [
        ErrorSchemaEntry(status_code=code, description=status_description(code), schema=schema)
        for code, schema in _iter_status_objects(_ERROR_RE, doc_block, "@LRDerror")
    ]


def parse_examples(doc_block: str) -> dict[str, RequestExampleEntry]:
    """Parse @LRDexample tags. A repeated name overwrites the earlier value."""
    examples: dict[str, RequestExampleEntry] = {}
    for match in _tag_matches(_EXAMPLE_RE, doc_block):
        name = match.group(1)
        value = _extract_object(doc_block, match.end())
        if value is None:
            logger.debug(f"Skipping @LRDexample {name}: invalid JSON object")
            continue
        examples[name] = RequestExampleEntry(name=name, value=value)
    return examples


def parse_enums(doc_block: str) -> dict[str, EnumValueEntry]:
    """Parse @LRDenum tags. A repeated field overwrites the earlier entry."""
    enums: dict[str, EnumValueEntry] = {}
    for match in _tag_matches(_ENUM_RE, doc_block):
        field = match.group(1)
        values = [v.strip() for v in match.group(2).split("|")]
        description = _strip_comment_end(match.group(3) or "")
        enums[field] = EnumValueEntry(field=field, values=values, description=description)
    return enums


def parse_deprecation(doc_block: str) -> DeprecationInfo | None:
    """Parse @LRDdeprecated. When the tag repeats, the last one wins."""
    matches = list(_tag_matches(_DEPRECATED_RE, doc_block))
    if not matches:
        return None
    message = _strip_comment_end(matches[-1].group(1) or "")
    return DeprecationInfo(is_deprecated=True, message=message or DEFAULT_DEPRECATION_MESSAGE)


def parse_docblock(doc_block: str) -> dict:
    """Parse all annotation kinds from a comment block."""
    return {
        "response_schemas": parse_response_schemas(doc_block),
        "request_examples": parse_examples(doc_block),
        "error_schemas": parse_error_schemas(doc_block),
        "enum_values": parse_enums(doc_block),
        "deprecation": parse_deprecation(doc_block),
    }


def enrich_endpoint(doc: EndpointDocument) -> EndpointDocument:
    """Return a copy of the endpoint with its parsed annotations attached."""
    return doc.model_copy(update=parse_docblock(doc.doc_block))


def enrich_endpoints(docs: Iterable[EndpointDocument]) -> list[EndpointDocument]:
    return [enrich_endpoint(doc) for doc in docs]


def _iter_status_objects(pattern: re.Pattern, doc_block: str, tag: str) -> Iterator[tuple[int, dict]]:
    for match in _tag_matches(pattern, doc_block):
        code = int(match.group(1))
        if not 100 <= code <= 599:
            logger.debug(f"Skipping {tag} {code}: status code out of range")
            continue
        schema = _extract_object(doc_block, match.end())
        if schema is None:
            logger.debug(f"Skipping {tag} {code}: invalid JSON object")
            continue
        yield code, schema


def _tag_matches(pattern: re.Pattern, doc_block: str) -> Iterator[re.Match]:
    """Matches of ``pattern``, except those quoted inside another tag's JSON object."""
    spans = _object_spans(doc_block)
    for match in pattern.finditer(doc_block):
        if not _inside(match.start(), spans):
            yield match


def _object_spans(doc_block: str) -> list[tuple[int, int]]:
    spans: list[tuple[int, int]] = []
    for match in _OBJECT_TAG_RE.finditer(doc_block):
        if _inside(match.start(), spans):
            continue
        text = scan_json_object(doc_block, match.end())
        if text is not None:
            spans.append((match.end(), match.end() + len(text)))
    return spans


def _inside(pos: int, spans: list[tuple[int, int]]) -> bool:
    return any(start <= pos < end for start, end in spans)


def _extract_object(doc_block: str, start: int) -> dict | None:
    text = scan_json_object(doc_block, start)
    if text is None:
        return None
    return load_json_object(text)


def _strip_comment_end(text: str) -> str:
    text = text.strip()
    if text.endswith("*/"):
        text = text[:-2].rstrip()
    return text
