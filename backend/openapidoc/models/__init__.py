"""
OpenAPI document graph.

Every node is an ExtensibleModel: a pydantic model that keeps unknown
fields for round-tripping and carries a minor-version stamp.
"""

from .base import EXTENSION_PREFIX, ExtensibleModel, stamp_version
from .info import Contact, Info, License
from .tags import ExternalDocs, Tag
from .servers import Server, ServerVariable
from .security import SecurityRequirement, SecurityScheme
from .operations import Example, MediaType, Operation, Parameter, RequestBody, Response
from .paths import HTTP_METHODS, PathItem, Paths
from .components import Components
from .document import OpenAPI

__all__ = [
    "EXTENSION_PREFIX",
    "ExtensibleModel",
    "stamp_version",
    # Metadata
    "Info",
    "Contact",
    "License",
    # Links and tags
    "ExternalDocs",
    "Tag",
    # Servers
    "Server",
    "ServerVariable",
    # Security
    "SecurityRequirement",
    "SecurityScheme",
    # Endpoints
    "HTTP_METHODS",
    "Paths",
    "PathItem",
    "Operation",
    "Parameter",
    "RequestBody",
    "Response",
    "MediaType",
    "Example",
    # Registry and root
    "Components",
    "OpenAPI",
]
