"""Unified data models for annotated API endpoints.

Route introspection produces a partial EndpointDocument; the annotation
parser rebuilds it with the derived collections attached. Snippet generators
and renderers only read these models.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD")

DEFAULT_DEPRECATION_MESSAGE = "This endpoint is deprecated"


class ResponseSchemaEntry(BaseModel):
    """A documented success response."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(ge=100, le=599)
    description: str = "Response"
    schema_: dict[str, Any] = Field(alias="schema")
    examples: dict[str, Any] | None = None

    def to_dict(self) -> dict:
        data = {
            "status_code": self.status_code,
            "description": self.description,
            "schema": self.schema_,
        }
        if self.examples is not None:
            data["examples"] = self.examples
        return data


class ErrorSchemaEntry(ResponseSchemaEntry):
    """A documented error response. Kept apart from success responses."""


class RequestExampleEntry(BaseModel):
    """A named example request body."""

    name: str
    value: dict[str, Any]

    def to_dict(self) -> dict:
        return {"name": self.name, "value": self.value}


class EnumValueEntry(BaseModel):
    """Allowed values of a single field."""

    field: str
    values: list[str]
    description: str = ""

    def to_dict(self) -> dict:
        return {"field": self.field, "values": list(self.values), "description": self.description}


class DeprecationInfo(BaseModel):
    is_deprecated: bool = True
    message: str = DEFAULT_DEPRECATION_MESSAGE


class EndpointDocument(BaseModel):
    """A single API operation with its parsed annotations."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    uri: str  # /api/users/{id}
    http_method: str = Field(validation_alias=AliasChoices("http_method", "httpMethod"))
    requires_auth: bool = Field(default=False, validation_alias=AliasChoices("requires_auth", "requiresAuth"))
    doc_block: str = Field(
        default="",
        validation_alias=AliasChoices("doc_block", "docBlock", "rawCommentBlock", "raw_comment_block"),
    )
    response_schemas: list[ResponseSchemaEntry] = []
    request_examples: dict[str, RequestExampleEntry] = {}
    error_schemas: list[ErrorSchemaEntry] = []
    enum_values: dict[str, EnumValueEntry] = {}
    deprecation: DeprecationInfo | None = None

    @field_validator("http_method")
    @classmethod
    def _normalize_method(cls, value: str) -> str:
        method = value.strip().upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"unsupported HTTP method: {value!r}")
        return method

    @field_validator("uri")
    @classmethod
    def _normalize_uri(cls, value: str) -> str:
        uri = value.strip()
        if uri in ("", "/"):
            return "/"
        return uri.rstrip("/") or "/"

    @property
    def is_deprecated(self) -> bool:
        return self.deprecation is not None and self.deprecation.is_deprecated

    @property
    def deprecation_message(self) -> str:
        return self.deprecation.message if self.deprecation else ""

    def first_example(self) -> RequestExampleEntry | None:
        """Return the first request example in insertion order, if any."""
        return next(iter(self.request_examples.values()), None)

    def to_dict(self) -> dict:
        """Serialize to the JSON-compatible layout consumed by renderers."""
        return {
            "uri": self.uri,
            "http_method": self.http_method,
            "requires_auth": self.requires_auth,
            "doc_block": self.doc_block,
            "response_schemas": [s.to_dict() for s in self.response_schemas],
            "request_examples": {name: ex.to_dict() for name, ex in self.request_examples.items()},
            "error_schemas": [s.to_dict() for s in self.error_schemas],
            "enum_values": {name: e.to_dict() for name, e in self.enum_values.items()},
            "is_deprecated": self.is_deprecated,
            "deprecation_message": self.deprecation_message,
        }
