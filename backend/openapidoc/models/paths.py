"""
Endpoint collection: Paths and PathItem.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import (
    Field,
    PrivateAttr,
    RootModel,
    SerializerFunctionWrapHandler,
    ValidatorFunctionWrapHandler,
    model_serializer,
    model_validator,
)

from ..errors import (
    DocumentValidationError,
    FieldError,
    InvalidValueError,
    StructuralViolationError,
)
from ..options import ValidationContext
from .base import EXTENSION_PREFIX, ExtensibleModel, check_child, stamp_version
from .operations import Operation, Parameter, check_parameters
from .servers import Server, check_servers


# Canonical order, also used when encoding.
HTTP_METHODS = (
    "CONNECT",
    "DELETE",
    "GET",
    "HEAD",
    "OPTIONS",
    "PATCH",
    "POST",
    "PUT",
    "TRACE",
)

PATH_PARAMETER_PATTERN = re.compile(r"\{([^{}]+)\}")


class PathItem(ExtensibleModel):
    """Operations available on a single path."""

    summary: Optional[str] = None
    description: Optional[str] = None
    connect: Optional[Operation] = None
    delete: Optional[Operation] = None
    get: Optional[Operation] = None
    head: Optional[Operation] = None
    options: Optional[Operation] = None
    patch: Optional[Operation] = None
    post: Optional[Operation] = None
    put: Optional[Operation] = None
    trace: Optional[Operation] = None
    servers: Optional[List[Server]] = None
    parameters: Optional[List[Parameter]] = None

    def operations(self) -> Dict[str, Operation]:
        """Present operations keyed by upper-case method name."""
        result = {}
        for method in HTTP_METHODS:
            operation = getattr(self, method.lower())
            if operation is not None:
                result[method] = operation
        return result

    def get_operation(self, method: str) -> Optional[Operation]:
        return getattr(self, _method_field(method))

    def set_operation(self, method: str, operation: Optional[Operation]) -> None:
        """Attach ``operation`` under ``method``, replacing any existing one."""
        setattr(self, _method_field(method), operation)

    def check(self, ctx: Optional[ValidationContext] = None) -> None:
        ctx = ctx or ValidationContext()
        if self.ref:
            return
        check_parameters(self.parameters, ctx)
        if self.servers is not None:
            check_servers(self.servers, ctx)


def _method_field(method: str) -> str:
    upper = method.upper()
    if upper not in HTTP_METHODS:
        raise ValueError(f"unsupported HTTP method {method!r}")
    return upper.lower()


def normalize_template(path: str) -> str:
    """Path with every ``{param}`` replaced by ``{}``."""
    return PATH_PARAMETER_PATTERN.sub("{}", path)


class Paths(RootModel[Dict[str, PathItem]]):
    """
    Mapping of path patterns to PathItem nodes.

    Insertion order is kept so documents encode back in the order they were
    read. ``x-`` keys hold arbitrary values, so they are kept apart from the
    path items and emitted after them.
    """

    root: Dict[str, PathItem] = Field(default_factory=dict)

    _extensions: Dict[str, Any] = PrivateAttr(default_factory=dict)

    @model_validator(mode="wrap")
    @classmethod
    def split_extensions(cls, data: Any, handler: ValidatorFunctionWrapHandler) -> "Paths":
        extensions = {}
        if isinstance(data, dict):
            extensions = {
                key: value
                for key, value in data.items()
                if isinstance(key, str) and key.startswith(EXTENSION_PREFIX)
            }
            if extensions:
                data = {key: value for key, value in data.items() if key not in extensions}
        paths = handler(data)
        if extensions:
            paths._extensions.update(extensions)
        return paths

    @model_serializer(mode="wrap")
    def emit_extensions(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        data = handler(self)
        if self._extensions:
            data = {**data, **self._extensions}
        return data

    @property
    def extensions(self) -> Dict[str, Any]:
        """Specification extensions (``x-*`` keys) of the path collection."""
        return dict(self._extensions)

    def set_extension(self, name: str, value: Any) -> None:
        if not name.startswith(EXTENSION_PREFIX):
            raise ValueError(f"extension name must start with '{EXTENSION_PREFIX}': {name!r}")
        self._extensions[name] = value

    def __getitem__(self, path: str) -> PathItem:
        return self.root[path]

    def __setitem__(self, path: str, item: PathItem) -> None:
        self.root[path] = item

    def __contains__(self, path: object) -> bool:
        return path in self.root

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def items(self):
        return self.root.items()

    def get(self, path: str) -> Optional[PathItem]:
        return self.root.get(path)

    def find(self, path: str) -> Optional[PathItem]:
        """Look up ``path`` exactly, then by template shape (``/a/{x}`` == ``/a/{y}``)."""
        item = self.root.get(path)
        if item is not None:
            return item
        shape = normalize_template(path)
        for key, candidate in self.root.items():
            if normalize_template(key) == shape:
                return candidate
        return None

    def with_minor_openapi_version(self, minor_version: int) -> "Paths":
        stamp_version(self.root, minor_version)
        return self

    def check(self, ctx: Optional[ValidationContext] = None) -> None:
        """
        Validate every path item and operation.

        Also enforces the cross-path rules: no two templates that differ only
        in parameter names, path parameters declared, and unique
        operationIds.
        """
        ctx = ctx or ValidationContext()

        shapes: Dict[str, str] = {}
        operation_ids: Dict[str, Tuple[str, str]] = {}

        for path, item in self.root.items():
            if path.startswith(EXTENSION_PREFIX):
                continue
            if not path.startswith("/"):
                raise InvalidValueError("paths", f"path {path!r} does not start with a forward slash (/)", path)

            shape = normalize_template(path)
            if shape in shapes:
                raise StructuralViolationError(
                    f"conflicting paths {shapes[shape]!r} and {path!r}", "paths"
                )
            shapes[shape] = path

            check_child(path, item, ctx, label=f"path {path}")

            path_level = _path_parameter_names(item.parameters)
            for method, operation in item.operations().items():
                try:
                    _check_declared_path_parameters(path, item, path_level, operation)
                    operation.check(ctx)
                except DocumentValidationError as err:
                    raise FieldError(
                        f"{path}.{method.lower()}", err, label=f"operation {method} {path}"
                    ) from err

                if operation.operation_id:
                    if operation.operation_id in operation_ids:
                        other_method, other_path = operation_ids[operation.operation_id]
                        raise StructuralViolationError(
                            f"operations {other_method} {other_path} and {method} {path} "
                            f"have the same operation id {operation.operation_id!r}",
                            "paths",
                        )
                    operation_ids[operation.operation_id] = (method, path)


def _path_parameter_names(parameters: Optional[List[Parameter]]) -> set:
    return {p.name for p in parameters or [] if p.in_ == "path" and p.name}


def _check_declared_path_parameters(
    path: str, item: PathItem, path_level: set, operation: Operation
) -> None:
    # Referenced parameters are not resolved, so their names are unknown.
    for parameter in (item.parameters or []) + (operation.parameters or []):
        if parameter.ref:
            return
    declared = path_level | _path_parameter_names(operation.parameters)
    for name in PATH_PARAMETER_PATTERN.findall(path):
        if name not in declared:
            raise StructuralViolationError(
                f"path parameter {name!r} of {path!r} is not declared", "parameters"
            )
