"""
Error types for document decoding and validation.

Every validator raises one of the DocumentValidationError subclasses below.
Callers add exactly one attribution layer (FieldError) per level, so the
rendered message reads as a path to the offending field:

    invalid paths: invalid operation GET /x: missing field 'responses'
"""

from __future__ import annotations

from typing import Any, List, Optional


class OpenAPIDocError(Exception):
    """Base class for all errors raised by this package."""

    kind: str = "Error"


class DocumentValidationError(OpenAPIDocError):
    """A document failed one of its structural or semantic rules."""


class MissingFieldError(DocumentValidationError):
    """A required field is absent."""

    kind = "MissingField"

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"missing field '{field}'")


class InvalidValueError(DocumentValidationError):
    """A field is present but its value breaks a format or value rule."""

    kind = "InvalidValue"

    def __init__(self, field: str, message: str, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(message)


class StructuralViolationError(DocumentValidationError):
    """An internal invariant of a nested object is broken."""

    kind = "StructuralViolation"

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class FieldError(DocumentValidationError):
    """
    Attribution layer naming the field whose validation failed.

    The underlying failure is kept as ``cause`` (and as ``__cause__`` when
    raised with ``raise ... from``); only the ``invalid <label>:`` prefix is
    added.
    """

    def __init__(
        self,
        field: str,
        cause: DocumentValidationError,
        label: Optional[str] = None,
    ):
        self.field = field
        self.label = label or field
        self.cause = cause
        super().__init__(f"invalid {self.label}: {cause}")

    @property
    def kind(self) -> str:  # type: ignore[override]
        return root_cause(self).kind


class DecodeError(OpenAPIDocError):
    """Input bytes could not be decoded into a document."""

    kind = "DecodeError"


class ValidationCancelledError(OpenAPIDocError):
    """Validation was aborted by the caller between two steps."""

    kind = "CancellationError"

    def __init__(self, step: str):
        self.step = step
        super().__init__(f"validation cancelled before '{step}'")


def root_cause(error: BaseException) -> BaseException:
    """Return the innermost error of an attribution chain."""
    while isinstance(error, FieldError):
        error = error.cause
    return error


def attribution_path(error: BaseException) -> List[str]:
    """Return the attributed field names, outermost first."""
    path = []
    while isinstance(error, FieldError):
        path.append(error.field)
        error = error.cause
    return path
