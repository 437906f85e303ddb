"""
Component registry (the ``components`` object).

Schemas are kept as raw mappings; only their top-level shape is checked
here, the schema language itself is evaluated elsewhere.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional

from pydantic import Field

from ..errors import DocumentValidationError, FieldError, InvalidValueError
from ..options import ValidationContext
from .base import EXTENSION_PREFIX, ExtensibleModel, check_each
from .operations import Example, Parameter, RequestBody, Response
from .security import SecurityScheme


COMPONENT_KEY_PATTERN = re.compile(r"^[a-zA-Z0-9.\-_]+$")

SCHEMA_KEYWORDS = frozenset({
    # JSON Schema
    "$ref", "$id", "$schema", "$defs", "$comment", "$anchor", "$dynamicRef",
    "$dynamicAnchor", "$vocabulary",
    "title", "description", "default", "examples", "deprecated",
    "readOnly", "writeOnly", "type", "enum", "const", "format",
    "multipleOf", "maximum", "exclusiveMaximum", "minimum", "exclusiveMinimum",
    "maxLength", "minLength", "pattern",
    "items", "prefixItems", "additionalItems", "maxItems", "minItems",
    "uniqueItems", "contains", "minContains", "maxContains", "unevaluatedItems",
    "maxProperties", "minProperties", "required", "properties",
    "patternProperties", "additionalProperties", "propertyNames",
    "unevaluatedProperties", "dependentRequired", "dependentSchemas",
    "allOf", "anyOf", "oneOf", "not", "if", "then", "else",
    "contentEncoding", "contentMediaType", "contentSchema",
    # OpenAPI
    "nullable", "discriminator", "xml", "externalDocs", "example",
})


class Components(ExtensibleModel):
    """Reusable definitions referenced from the rest of the document."""

    schemas: Optional[Dict[str, Any]] = None
    responses: Optional[Dict[str, Response]] = None
    parameters: Optional[Dict[str, Parameter]] = None
    examples: Optional[Dict[str, Example]] = None
    request_bodies: Optional[Dict[str, RequestBody]] = Field(None, alias="requestBodies")
    headers: Optional[Dict[str, Any]] = None
    security_schemes: Optional[Dict[str, SecurityScheme]] = Field(None, alias="securitySchemes")
    links: Optional[Dict[str, Any]] = None
    callbacks: Optional[Dict[str, Any]] = None

    def is_empty(self) -> bool:
        return not self.model_dump()

    def check(self, ctx: Optional[ValidationContext] = None) -> None:
        ctx = ctx or ValidationContext()

        for name in type(self).model_fields:
            info = type(self).model_fields[name]
            _check_keys(info.alias or name, getattr(self, name))

        for name, schema in (self.schemas or {}).items():
            try:
                self._check_schema(schema, ctx)
            except DocumentValidationError as err:
                raise FieldError(f"schemas.{name}", err, label=f"schema {name!r}") from err

        check_each("responses", self.responses, ctx, "response")
        check_each("parameters", self.parameters, ctx, "parameter")
        if not ctx.options.skip_examples_validation:
            check_each("examples", self.examples, ctx, "example")
        check_each("requestBodies", self.request_bodies, ctx, "request body")
        check_each("securitySchemes", self.security_schemes, ctx, "security scheme")

    def _check_schema(self, schema: Any, ctx: ValidationContext) -> None:
        if isinstance(schema, bool):
            if self.minor_openapi_version < 1:
                raise InvalidValueError("schema", "boolean schemas require OpenAPI 3.1 or later", schema)
            return
        if not isinstance(schema, dict):
            raise InvalidValueError("schema", "schema must be an object", schema)
        if ctx.options.allow_extra_properties_in_schemas:
            return
        unknown = [
            key for key in schema
            if key not in SCHEMA_KEYWORDS and not key.startswith(EXTENSION_PREFIX)
        ]
        if unknown:
            raise InvalidValueError(
                "schema", f"unsupported schema keywords: {', '.join(sorted(unknown))}", unknown
            )


def _check_keys(field: str, entries: Optional[Dict[str, Any]]) -> None:
    for key in entries or {}:
        if not COMPONENT_KEY_PATTERN.match(key):
            raise InvalidValueError(
                field, f"component name {key!r} does not match {COMPONENT_KEY_PATTERN.pattern}", key
            )
