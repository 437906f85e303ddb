"""
Base model shared by every document node.

ExtensibleModel keeps fields the static model does not know about in
pydantic's ``model_extra`` (insertion ordered) so they survive a
load/dump round trip, and carries the node's minor-version stamp.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, FrozenSet, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    PrivateAttr,
    SerializerFunctionWrapHandler,
    model_serializer,
)

from ..errors import DocumentValidationError, FieldError
from ..options import ValidationContext
from ..version import BASE_MINOR_VERSION


EXTENSION_PREFIX = "x-"


class ExtensibleModel(BaseModel):
    """A document node that round-trips unrecognized fields."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    # Declared fields for which an explicit null is a value, not an absence.
    NULLABLE_FIELDS: ClassVar[FrozenSet[str]] = frozenset()

    _minor_version: int = PrivateAttr(default=BASE_MINOR_VERSION)

    @model_serializer(mode="wrap")
    def omit_absent_fields(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        """
        Serialize the node without its absent declared fields.

        Only declared fields are dropped when None; unrecognized fields in
        ``model_extra`` are emitted whatever their value.
        """
        data = handler(self)
        for name, field in type(self).model_fields.items():
            if getattr(self, name) is not None:
                continue
            if name in self.NULLABLE_FIELDS and name in self.model_fields_set:
                continue
            data.pop(name, None)
            if field.alias:
                data.pop(field.alias, None)
        return data

    @property
    def extensions(self) -> Dict[str, Any]:
        """Specification extensions (``x-*`` fields) of this node."""
        return {
            key: value
            for key, value in (self.model_extra or {}).items()
            if key.startswith(EXTENSION_PREFIX)
        }

    def set_extension(self, name: str, value: Any) -> None:
        if not name.startswith(EXTENSION_PREFIX):
            raise ValueError(f"extension name must start with '{EXTENSION_PREFIX}': {name!r}")
        setattr(self, name, value)

    @property
    def ref(self) -> Optional[str]:
        """The ``$ref`` target if this node is a reference object."""
        return (self.model_extra or {}).get("$ref")

    @property
    def minor_openapi_version(self) -> int:
        return self._minor_version

    def with_minor_openapi_version(self, minor_version: int):
        """
        Stamp this node and every present descendant with ``minor_version``.

        Returns:
            The node itself.
        """
        self._minor_version = minor_version
        for name in type(self).model_fields:
            stamp_version(getattr(self, name), minor_version)
        return self

    def check(self, ctx: Optional[ValidationContext] = None) -> None:
        """Validate this node; raises DocumentValidationError on failure."""


def number_as_string(value: Any) -> Any:
    # YAML reads unquoted 1.0 or 3.1 as floats
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def stamp_version(value: Any, minor_version: int) -> None:
    """Propagate a version stamp into nodes held directly or in containers."""
    if value is None:
        return
    if isinstance(value, BaseModel) and hasattr(value, "with_minor_openapi_version"):
        value.with_minor_openapi_version(minor_version)
    elif isinstance(value, dict):
        for item in value.values():
            stamp_version(item, minor_version)
    elif isinstance(value, list):
        for item in value:
            stamp_version(item, minor_version)


def check_child(
    field: str,
    node: Optional[ExtensibleModel],
    ctx: ValidationContext,
    label: Optional[str] = None,
) -> None:
    """Run ``node.check`` and attribute any failure to ``field``."""
    if node is None:
        return
    try:
        node.check(ctx)
    except DocumentValidationError as err:
        raise FieldError(field, err, label) from err


def check_each(
    field: str,
    nodes: Optional[Dict[str, ExtensibleModel]],
    ctx: ValidationContext,
    kind: str,
) -> None:
    """Check every value of a keyed node map, labelling failures ``<kind> <key>``."""
    for key, node in (nodes or {}).items():
        check_child(f"{field}.{key}", node, ctx, label=f"{kind} {key!r}")
