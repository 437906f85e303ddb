"""
Validation Engine.

Walks an OpenAPI document in a fixed order, attributing every failure to the
top-level field that produced it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..errors import (
    DocumentValidationError,
    FieldError,
    MissingFieldError,
    attribution_path,
    root_cause,
)
from ..models.document import OpenAPI
from ..models.security import check_security_requirements
from ..models.servers import check_servers
from ..models.tags import check_tags
from ..options import CancelEvent, ValidationContext, ValidationOptions
from ..version import parse_version

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """
    Outcome of one engine run.

    In the default mode ``errors`` holds at most one entry: the first failing
    step. With ``accumulate=True`` it holds one entry per failing step.
    """

    valid: bool
    errors: List[DocumentValidationError] = field(default_factory=list)
    steps_checked: List[str] = field(default_factory=list)

    @property
    def total_errors(self) -> int:
        return len(self.errors)

    @property
    def first_error(self) -> Optional[DocumentValidationError]:
        return self.errors[0] if self.errors else None

    def summary(self) -> str:
        """Generate a summary of validation results."""
        lines = []
        status = "PASSED" if self.valid else "FAILED"
        lines.append(f"Validation {status}")
        lines.append(f"  Steps checked: {len(self.steps_checked)}")
        lines.append(f"  Errors: {self.total_errors}")
        for error in self.errors:
            lines.append(f"    - {error}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "valid": self.valid,
            "total_errors": self.total_errors,
            "steps_checked": list(self.steps_checked),
            "errors": [
                {
                    "message": str(error),
                    "kind": root_cause(error).kind,
                    "path": attribution_path(error),
                }
                for error in self.errors
            ],
        }


def _check_openapi(doc: OpenAPI, ctx: ValidationContext) -> None:
    if not doc.openapi:
        raise MissingFieldError("openapi", "must be a non-empty string")
    parse_version(doc.openapi)


def _check_components(doc: OpenAPI, ctx: ValidationContext) -> None:
    if doc.components is not None:
        doc.components.check(ctx)


def _check_info(doc: OpenAPI, ctx: ValidationContext) -> None:
    if doc.info is None:
        raise MissingFieldError("info", "must be an object")
    doc.info.check(ctx)


def _check_paths(doc: OpenAPI, ctx: ValidationContext) -> None:
    if doc.paths is None:
        raise MissingFieldError("paths", "must be an object")
    doc.paths.check(ctx)


def _check_security(doc: OpenAPI, ctx: ValidationContext) -> None:
    if doc.security is not None:
        check_security_requirements(doc.security, ctx)


def _check_servers(doc: OpenAPI, ctx: ValidationContext) -> None:
    if doc.servers is not None:
        check_servers(doc.servers, ctx)


def _check_tags(doc: OpenAPI, ctx: ValidationContext) -> None:
    if doc.tags is not None:
        check_tags(doc.tags, ctx)


def _check_external_docs(doc: OpenAPI, ctx: ValidationContext) -> None:
    if doc.external_docs is not None:
        doc.external_docs.check(ctx)


Step = Tuple[str, str, Callable[[OpenAPI, ValidationContext], None]]

# (field, label, check) in the order they run.
VALIDATION_STEPS: Tuple[Step, ...] = (
    ("openapi", "openapi value", _check_openapi),
    ("components", "components", _check_components),
    ("info", "info", _check_info),
    ("paths", "paths", _check_paths),
    ("security", "security", _check_security),
    ("servers", "servers", _check_servers),
    ("tags", "tags", _check_tags),
    ("externalDocs", "external docs", _check_external_docs),
)


class ValidationEngine:
    """
    Ordered validation of an OpenAPI document.

    Steps:
    1. openapi (format version)
    2. components
    3. info
    4. paths
    5. security (if present)
    6. servers (if present)
    7. tags (if present)
    8. externalDocs (if present)

    By default the engine stops at the first failing step. ``accumulate=True``
    is an additive mode that runs every step and reports each failure.
    """

    def __init__(self, *options: Any, accumulate: bool = False):
        """
        Initialize the validation engine.

        Args:
            options: Option entries, see ValidationOptions.build.
            accumulate: If True, keep going after a failing step.
        """
        self.options = ValidationOptions.build(*options)
        self.accumulate = accumulate

    def run(
        self,
        document: OpenAPI,
        cancel_event: Optional[CancelEvent] = None,
    ) -> ValidationResult:
        """
        Run all validation steps on a document.

        Args:
            document: The document to validate.
            cancel_event: Checked between steps; when set the run raises
                ValidationCancelledError.

        Returns:
            ValidationResult with the wrapped failure(s), if any.
        """
        if document is None:
            raise TypeError("cannot validate a None document")

        ctx = ValidationContext(self.options, cancel_event)
        result = ValidationResult(valid=True)

        for field_name, label, check in VALIDATION_STEPS:
            ctx.raise_if_cancelled(field_name)
            logger.debug(f"Validating {field_name}")
            result.steps_checked.append(field_name)
            try:
                check(document, ctx)
            except DocumentValidationError as err:
                wrapped = FieldError(field_name, err, label)
                wrapped.__cause__ = err
                result.valid = False
                result.errors.append(wrapped)
                if not self.accumulate:
                    break

        if result.valid:
            logger.debug("Document is valid")
        else:
            logger.info(f"Document is invalid: {result.errors[0]}")
        return result

    def validate(
        self,
        document: OpenAPI,
        cancel_event: Optional[CancelEvent] = None,
    ) -> None:
        """
        Validate a document, raising its first failure.

        Raises:
            FieldError: Attribution chain ending in the root cause.
            ValidationCancelledError: If ``cancel_event`` was set.
        """
        result = self.run(document, cancel_event=cancel_event)
        if not result.valid:
            raise result.errors[0]


def validate(
    document: OpenAPI,
    *options: Any,
    cancel_event: Optional[CancelEvent] = None,
) -> None:
    """
    Convenience function to validate a document.

    Args:
        document: The document to validate.
        options: Option entries such as ``disable_examples_validation()``.
        cancel_event: Optional cancellation event.

    Raises:
        FieldError: On the first failing step.
    """
    ValidationEngine(*options).validate(document, cancel_event=cancel_event)
