"""
Tag list and external documentation links.
"""

from __future__ import annotations

from typing import List, Optional
from urllib.parse import urlparse

from pydantic import Field

from ..errors import InvalidValueError, MissingFieldError, StructuralViolationError
from ..options import ValidationContext
from .base import ExtensibleModel, check_child


class ExternalDocs(ExtensibleModel):
    description: Optional[str] = None
    url: Optional[str] = None

    def check(self, ctx: Optional[ValidationContext] = None) -> None:
        if not self.url:
            raise MissingFieldError("url")
        try:
            urlparse(self.url)
        except ValueError as err:
            raise InvalidValueError("url", f"url {self.url!r} is malformed: {err}", self.url) from err


class Tag(ExtensibleModel):
    name: Optional[str] = None
    description: Optional[str] = None
    external_docs: Optional[ExternalDocs] = Field(None, alias="externalDocs")

    def check(self, ctx: Optional[ValidationContext] = None) -> None:
        ctx = ctx or ValidationContext()
        if not self.name:
            raise MissingFieldError("name")
        check_child("externalDocs", self.external_docs, ctx, label="external docs")


def check_tags(tags: List[Tag], ctx: ValidationContext) -> None:
    """Validate a tag list: every tag on its own, then name uniqueness."""
    seen = set()
    for index, tag in enumerate(tags):
        check_child(f"tags[{index}]", tag, ctx, label=f"tag #{index}")
        if tag.name in seen:
            raise StructuralViolationError(f"tag {tag.name!r} is declared more than once", "tags")
        seen.add(tag.name)
