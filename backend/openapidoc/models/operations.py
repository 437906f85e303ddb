"""
Operation objects and the pieces they are built from.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from ..errors import InvalidValueError, MissingFieldError, StructuralViolationError
from ..options import ValidationContext
from .base import ExtensibleModel, check_child, check_each
from .security import SecurityRequirement, check_security_requirements
from .servers import Server, check_servers
from .tags import ExternalDocs


PARAMETER_LOCATIONS = ("query", "header", "path", "cookie")
RESPONSE_KEY_PATTERN = re.compile(r"^(default|[1-5](\d\d|XX))$")


class Example(ExtensibleModel):
    NULLABLE_FIELDS = frozenset({"value"})

    summary: Optional[str] = None
    description: Optional[str] = None
    value: Optional[Any] = None
    external_value: Optional[str] = Field(None, alias="externalValue")

    def check(self, ctx: Optional[ValidationContext] = None) -> None:
        if self.value is not None and self.external_value is not None:
            raise InvalidValueError(
                "value", "fields 'value' and 'externalValue' are mutually exclusive"
            )


class MediaType(ExtensibleModel):
    NULLABLE_FIELDS = frozenset({"example"})

    schema_: Optional[Any] = Field(None, alias="schema")
    example: Optional[Any] = None
    examples: Optional[Dict[str, Example]] = None
    encoding: Optional[Dict[str, Any]] = None

    def check(self, ctx: Optional[ValidationContext] = None) -> None:
        ctx = ctx or ValidationContext()
        if ctx.options.skip_examples_validation:
            return
        if self.example is not None and self.examples is not None:
            raise InvalidValueError(
                "example", "fields 'example' and 'examples' are mutually exclusive"
            )
        check_each("examples", self.examples, ctx, "example")


def check_content(content: Optional[Dict[str, MediaType]], ctx: ValidationContext) -> None:
    check_each("content", content, ctx, "media type")


class Parameter(ExtensibleModel):
    NULLABLE_FIELDS = frozenset({"example"})

    name: Optional[str] = None
    in_: Optional[str] = Field(None, alias="in")
    description: Optional[str] = None
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    allow_empty_value: Optional[bool] = Field(None, alias="allowEmptyValue")
    style: Optional[str] = None
    explode: Optional[bool] = None
    allow_reserved: Optional[bool] = Field(None, alias="allowReserved")
    schema_: Optional[Any] = Field(None, alias="schema")
    example: Optional[Any] = None
    examples: Optional[Dict[str, Example]] = None
    content: Optional[Dict[str, MediaType]] = None

    def check(self, ctx: Optional[ValidationContext] = None) -> None:
        ctx = ctx or ValidationContext()
        if self.ref:
            return

        if not self.name:
            raise MissingFieldError("name")
        if not self.in_:
            raise MissingFieldError("in")
        if self.in_ not in PARAMETER_LOCATIONS:
            raise InvalidValueError(
                "in",
                f"parameter location {self.in_!r} is not one of {', '.join(PARAMETER_LOCATIONS)}",
                self.in_,
            )
        if self.in_ == "path" and self.required is not True:
            raise InvalidValueError(
                "required", f"path parameter {self.name!r} must be required"
            )
        if (self.schema_ is None) == (self.content is None):
            raise InvalidValueError(
                "schema", "parameter must contain exactly one of 'schema' and 'content'"
            )

        if not ctx.options.skip_examples_validation:
            if self.example is not None and self.examples is not None:
                raise InvalidValueError(
                    "example", "fields 'example' and 'examples' are mutually exclusive"
                )
            check_each("examples", self.examples, ctx, "example")
        check_content(self.content, ctx)


def check_parameters(parameters: Optional[List[Parameter]], ctx: ValidationContext) -> None:
    """Validate a parameter list; ``(name, in)`` pairs must be unique."""
    seen = set()
    for index, parameter in enumerate(parameters or []):
        if not parameter.ref:
            key = (parameter.name, parameter.in_)
            if key in seen:
                raise StructuralViolationError(
                    f"parameter {parameter.name!r} in {parameter.in_!r} is declared more than once",
                    "parameters",
                )
            seen.add(key)
        check_child(f"parameters[{index}]", parameter, ctx, label=f"parameter #{index}")


class RequestBody(ExtensibleModel):
    description: Optional[str] = None
    content: Optional[Dict[str, MediaType]] = None
    required: Optional[bool] = None

    def check(self, ctx: Optional[ValidationContext] = None) -> None:
        ctx = ctx or ValidationContext()
        if self.ref:
            return
        if self.content is None:
            raise MissingFieldError("content")
        check_content(self.content, ctx)


class Response(ExtensibleModel):
    description: Optional[str] = None
    headers: Optional[Dict[str, Any]] = None
    content: Optional[Dict[str, MediaType]] = None
    links: Optional[Dict[str, Any]] = None

    def check(self, ctx: Optional[ValidationContext] = None) -> None:
        ctx = ctx or ValidationContext()
        if self.ref:
            return
        if self.description is None:
            raise MissingFieldError("description")
        check_content(self.content, ctx)


def _stringify_keys(value: Any) -> Any:
    # YAML reads unquoted status codes as integers
    if isinstance(value, dict):
        return {str(key): item for key, item in value.items()}
    return value


class Operation(ExtensibleModel):
    """A single API operation on a path."""

    tags: Optional[List[str]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    external_docs: Optional[ExternalDocs] = Field(None, alias="externalDocs")
    operation_id: Optional[str] = Field(None, alias="operationId")
    parameters: Optional[List[Parameter]] = None
    request_body: Optional[RequestBody] = Field(None, alias="requestBody")
    responses: Optional[Dict[str, Response]] = None
    callbacks: Optional[Dict[str, Any]] = None
    deprecated: Optional[bool] = None
    security: Optional[List[SecurityRequirement]] = None
    servers: Optional[List[Server]] = None

    @field_validator("responses", mode="before")
    @classmethod
    def response_codes_as_strings(cls, value: Any) -> Any:
        return _stringify_keys(value)

    def add_response(self, status: Any, response: Response) -> None:
        if self.responses is None:
            self.responses = {}
        self.responses[str(status)] = response
        response.with_minor_openapi_version(self.minor_openapi_version)

    def check(self, ctx: Optional[ValidationContext] = None) -> None:
        ctx = ctx or ValidationContext()

        if self.responses is None:
            if self.minor_openapi_version < 1:
                raise MissingFieldError("responses")
        else:
            if not self.responses:
                raise InvalidValueError("responses", "the responses object must not be empty")
            for status in self.responses:
                if not RESPONSE_KEY_PATTERN.match(status):
                    raise InvalidValueError(
                        "responses", f"response key {status!r} is not a status code or 'default'", status
                    )

        check_parameters(self.parameters, ctx)
        check_child("requestBody", self.request_body, ctx, label="request body")
        check_each("responses", self.responses, ctx, "response")
        if self.security is not None:
            check_security_requirements(self.security, ctx)
        if self.servers is not None:
            check_servers(self.servers, ctx)
        check_child("externalDocs", self.external_docs, ctx, label="external docs")
