"""
OpenAPI document model and validation engine.

This package provides an in-memory model of OpenAPI 3.x documents that
round-trips unknown fields, minor-version propagation across the document
graph, and an ordered validation engine with path-qualified errors.
"""

from .errors import (
    DecodeError,
    DocumentValidationError,
    FieldError,
    InvalidValueError,
    MissingFieldError,
    OpenAPIDocError,
    StructuralViolationError,
    ValidationCancelledError,
    attribution_path,
    root_cause,
)
from .models import (
    Components,
    Contact,
    Example,
    ExternalDocs,
    Info,
    License,
    MediaType,
    OpenAPI,
    Operation,
    Parameter,
    PathItem,
    Paths,
    RequestBody,
    Response,
    SecurityScheme,
    Server,
    ServerVariable,
    Tag,
)
from .options import (
    ValidationContext,
    ValidationOption,
    ValidationOptions,
    allow_extra_properties_in_schemas,
    disable_examples_validation,
)
from .validator import ValidationEngine, ValidationResult, validate
from .codec import dump, dump_file, load, load_file

__version__ = "1.0.0"
__all__ = [
    # Document graph
    "OpenAPI",
    "Info",
    "Contact",
    "License",
    "Paths",
    "PathItem",
    "Operation",
    "Parameter",
    "RequestBody",
    "Response",
    "MediaType",
    "Example",
    "Components",
    "SecurityScheme",
    "Server",
    "ServerVariable",
    "Tag",
    "ExternalDocs",
    # Validation
    "validate",
    "ValidationEngine",
    "ValidationResult",
    "ValidationOptions",
    "ValidationContext",
    "ValidationOption",
    "disable_examples_validation",
    "allow_extra_properties_in_schemas",
    # Codec
    "load",
    "load_file",
    "dump",
    "dump_file",
    # Errors
    "OpenAPIDocError",
    "DocumentValidationError",
    "MissingFieldError",
    "InvalidValueError",
    "StructuralViolationError",
    "FieldError",
    "DecodeError",
    "ValidationCancelledError",
    "root_cause",
    "attribution_path",
]
