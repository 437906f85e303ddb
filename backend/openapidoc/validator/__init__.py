"""
OpenAPI Validation Engine.

This package provides ordered validation of OpenAPI documents:
- Step order: openapi, components, info, paths, security, servers, tags,
  externalDocs
- Failures are wrapped with the failing field's name
- Options travel in an explicit ValidationContext
"""

from ..options import (
    ValidationContext,
    ValidationOption,
    ValidationOptions,
    allow_extra_properties_in_schemas,
    disable_examples_validation,
)
from .engine import VALIDATION_STEPS, ValidationEngine, ValidationResult, validate

__all__ = [
    # Engine
    "ValidationEngine",
    "ValidationResult",
    "VALIDATION_STEPS",
    "validate",
    # Options
    "ValidationOptions",
    "ValidationContext",
    "ValidationOption",
    "disable_examples_validation",
    "allow_extra_properties_in_schemas",
]
