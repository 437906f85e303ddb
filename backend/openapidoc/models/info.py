"""
Metadata block: Info, Contact and License objects.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import Field, field_validator

from ..errors import InvalidValueError, MissingFieldError
from ..options import ValidationContext
from .base import ExtensibleModel, check_child, number_as_string


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Contact(ExtensibleModel):
    name: Optional[str] = None
    url: Optional[str] = None
    email: Optional[str] = None

    def check(self, ctx: Optional[ValidationContext] = None) -> None:
        if self.email and not EMAIL_PATTERN.match(self.email):
            raise InvalidValueError(
                "email", f"value {self.email!r} is not an email address", self.email
            )


class License(ExtensibleModel):
    name: Optional[str] = None
    url: Optional[str] = None
    # 3.1 and later
    identifier: Optional[str] = None

    def check(self, ctx: Optional[ValidationContext] = None) -> None:
        if not self.name:
            raise MissingFieldError("name")
        if self.identifier is not None:
            if self.minor_openapi_version < 1:
                raise InvalidValueError(
                    "identifier",
                    "field 'identifier' requires OpenAPI 3.1 or later",
                    self.identifier,
                )
            if self.url is not None:
                raise InvalidValueError(
                    "identifier", "fields 'identifier' and 'url' are mutually exclusive"
                )


class Info(ExtensibleModel):
    """The document's metadata block (the ``info`` object)."""

    title: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    terms_of_service: Optional[str] = Field(None, alias="termsOfService")
    contact: Optional[Contact] = None
    license: Optional[License] = None
    # 3.1 and later
    summary: Optional[str] = None

    @field_validator("version", mode="before")
    @classmethod
    def version_as_string(cls, value: Any) -> Any:
        return number_as_string(value)

    def check(self, ctx: Optional[ValidationContext] = None) -> None:
        ctx = ctx or ValidationContext()

        if not self.title:
            raise MissingFieldError("title")
        if not self.version:
            raise MissingFieldError("version")
        if self.summary is not None and self.minor_openapi_version < 1:
            raise InvalidValueError(
                "summary", "field 'summary' requires OpenAPI 3.1 or later", self.summary
            )

        check_child("contact", self.contact, ctx)
        check_child("license", self.license, ctx)
