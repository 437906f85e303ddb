"""
Root of an OpenAPI 3.x document.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import Field, field_validator

from .base import ExtensibleModel, number_as_string
from .components import Components
from .info import Info
from .operations import Operation
from .paths import PathItem, Paths
from .security import SecurityRequirement
from .servers import Server
from .tags import ExternalDocs, Tag


class OpenAPI(ExtensibleModel):
    """
    The document root.

    ``paths`` and ``info`` are required, but may be None in memory: absence
    is reported by validation, not by construction. ``components`` defaults
    to an empty registry.
    """

    openapi: str = ""
    info: Optional[Info] = None
    paths: Optional[Paths] = None
    components: Optional[Components] = Field(default_factory=Components)
    security: Optional[List[SecurityRequirement]] = None
    servers: Optional[List[Server]] = None
    tags: Optional[List[Tag]] = None
    external_docs: Optional[ExternalDocs] = Field(None, alias="externalDocs")

    @field_validator("openapi", mode="before")
    @classmethod
    def openapi_as_string(cls, value: Any) -> Any:
        return number_as_string(value)

    def declared_minor_version(self) -> int:
        """The minor version every node of this document is stamped with."""
        return self.minor_openapi_version

    def add_operation(self, path: str, method: str, operation: Operation) -> None:
        """
        Register ``operation`` under ``method`` on ``path``.

        Creates the path collection and the path item when missing, replaces
        an operation already set for ``method``, and stamps the operation
        with this document's minor version.
        """
        if self.paths is None:
            self.paths = Paths()
        item = self.paths.get(path)
        if item is None:
            item = PathItem()
            item.with_minor_openapi_version(self.minor_openapi_version)
            self.paths[path] = item
        item.set_operation(method, operation)
        operation.with_minor_openapi_version(self.minor_openapi_version)

    def add_server(self, server: Server) -> None:
        if self.servers is None:
            self.servers = []
        self.servers.append(server)
        server.with_minor_openapi_version(self.minor_openapi_version)

    def validate_document(self, *options: Any, cancel_event: Any = None) -> None:
        """Validate this document; see ``backend.openapidoc.validator.validate``."""
        from ..validator.engine import validate

        validate(self, *options, cancel_event=cancel_event)
