"""
Security schemes and security requirements.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field

from ..errors import DocumentValidationError, FieldError, InvalidValueError, MissingFieldError
from ..options import ValidationContext
from .base import ExtensibleModel


# Maps scheme name -> required scopes.
SecurityRequirement = Dict[str, List[str]]

SECURITY_SCHEME_TYPES = ("apiKey", "http", "oauth2", "openIdConnect")
SECURITY_SCHEME_TYPES_31 = SECURITY_SCHEME_TYPES + ("mutualTLS",)
API_KEY_LOCATIONS = ("query", "header", "cookie")


class SecurityScheme(ExtensibleModel):
    type: Optional[str] = None
    description: Optional[str] = None
    name: Optional[str] = None
    in_: Optional[str] = Field(None, alias="in")
    scheme: Optional[str] = None
    bearer_format: Optional[str] = Field(None, alias="bearerFormat")
    flows: Optional[Dict[str, Any]] = None
    open_id_connect_url: Optional[str] = Field(None, alias="openIdConnectUrl")

    def check(self, ctx: Optional[ValidationContext] = None) -> None:
        if self.ref:
            return
        if not self.type:
            raise MissingFieldError("type")

        allowed = SECURITY_SCHEME_TYPES_31 if self.minor_openapi_version >= 1 else SECURITY_SCHEME_TYPES
        if self.type not in allowed:
            raise InvalidValueError(
                "type",
                f"security scheme type {self.type!r} is not one of {', '.join(allowed)}",
                self.type,
            )

        if self.type == "apiKey":
            if not self.name:
                raise MissingFieldError("name")
            if not self.in_:
                raise MissingFieldError("in")
            if self.in_ not in API_KEY_LOCATIONS:
                raise InvalidValueError(
                    "in", f"apiKey location {self.in_!r} is not one of {', '.join(API_KEY_LOCATIONS)}", self.in_
                )
        elif self.type == "http":
            if not self.scheme:
                raise MissingFieldError("scheme")
        elif self.type == "oauth2":
            if not self.flows:
                raise MissingFieldError("flows")
        elif self.type == "openIdConnect":
            if not self.open_id_connect_url:
                raise MissingFieldError("openIdConnectUrl")


def check_security_requirement(requirement: SecurityRequirement, ctx: ValidationContext) -> None:
    for name, scopes in requirement.items():
        if not name:
            raise InvalidValueError("security", "security scheme name must not be empty")
        if not isinstance(scopes, list) or not all(isinstance(s, str) for s in scopes):
            raise InvalidValueError(
                name, f"scopes of {name!r} must be a list of strings", scopes
            )


def check_security_requirements(
    requirements: List[SecurityRequirement], ctx: ValidationContext
) -> None:
    """Validate each requirement object, attributing failures by position."""
    for index, requirement in enumerate(requirements):
        try:
            check_security_requirement(requirement, ctx)
        except DocumentValidationError as err:
            raise FieldError(
                f"security[{index}]", err, label=f"security requirement #{index}"
            ) from err
