"""
OpenAPI format-version parsing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import InvalidValueError


VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)(?:-[0-9A-Za-z.-]+)?$")

SUPPORTED_MAJOR_VERSION = 3
SUPPORTED_MINOR_VERSIONS = (0, 1)

# 3.0.z
BASE_MINOR_VERSION = 0


@dataclass(frozen=True)
class SpecVersion:
    """A parsed ``openapi`` field value."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_version(text: str) -> SpecVersion:
    """
    Parse and check an ``openapi`` version string.

    Args:
        text: Value of the document's ``openapi`` field.

    Returns:
        The parsed SpecVersion.

    Raises:
        InvalidValueError: If the string is malformed or names an
            unsupported major/minor version.
    """
    match = VERSION_PATTERN.match(text or "")
    if not match:
        raise InvalidValueError(
            "openapi",
            f"value {text!r} does not match MAJOR.MINOR.PATCH",
            value=text,
        )

    version = SpecVersion(*(int(part) for part in match.groups()))
    if version.major != SUPPORTED_MAJOR_VERSION:
        raise InvalidValueError(
            "openapi",
            f"unsupported major version {version.major} in {text!r}",
            value=text,
        )
    if version.minor not in SUPPORTED_MINOR_VERSIONS:
        raise InvalidValueError(
            "openapi",
            f"unsupported minor version {version.minor} in {text!r}",
            value=text,
        )
    return version


def minor_version(text: str) -> int:
    """Minor version of ``text``, or BASE_MINOR_VERSION if it does not parse."""
    try:
        return parse_version(text).minor
    except InvalidValueError:
        return BASE_MINOR_VERSION
