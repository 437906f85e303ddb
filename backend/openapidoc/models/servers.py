"""
Server and ServerVariable objects.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from ..errors import InvalidValueError, MissingFieldError, StructuralViolationError
from ..options import ValidationContext
from .base import ExtensibleModel, check_child, check_each


URL_VARIABLE_PATTERN = re.compile(r"\{([^{}]+)\}")


class ServerVariable(ExtensibleModel):
    enum: Optional[List[str]] = None
    default: Optional[str] = None
    description: Optional[str] = None

    def check(self, ctx: Optional[ValidationContext] = None) -> None:
        if self.default is None:
            raise MissingFieldError("default")
        if self.enum is not None:
            if not self.enum:
                raise InvalidValueError("enum", "field 'enum' must not be empty")
            if self.minor_openapi_version >= 1 and self.default not in self.enum:
                raise InvalidValueError(
                    "default",
                    f"default {self.default!r} is not one of the enum values",
                    self.default,
                )


class Server(ExtensibleModel):
    url: Optional[str] = None
    description: Optional[str] = None
    variables: Optional[Dict[str, ServerVariable]] = None

    def check(self, ctx: Optional[ValidationContext] = None) -> None:
        ctx = ctx or ValidationContext()

        if not self.url:
            raise MissingFieldError("url")

        declared = set(self.variables or {})
        for name in URL_VARIABLE_PATTERN.findall(self.url):
            if name not in declared:
                raise StructuralViolationError(
                    f"url variable {name!r} is not declared in 'variables'", "variables"
                )

        check_each("variables", self.variables, ctx, "variable")


def check_servers(servers: List[Server], ctx: ValidationContext) -> None:
    for index, server in enumerate(servers):
        check_child(f"servers[{index}]", server, ctx, label=f"server #{index}")
