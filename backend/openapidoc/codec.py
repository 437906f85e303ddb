"""
Decoding and encoding of OpenAPI documents.

YAML is parsed with ``yaml.safe_load``, which also reads JSON. Fields the
model does not know about are kept in each node's ``model_extra`` and written
back out unchanged.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import ValidationError

from .errors import DecodeError
from .models.document import OpenAPI
from .version import minor_version

logger = logging.getLogger(__name__)

FORMATS = ("yaml", "json")


def load(data: Union[bytes, str]) -> OpenAPI:
    """
    Decode a document and stamp it with its declared minor version.

    Args:
        data: YAML or JSON text.

    Returns:
        The decoded OpenAPI document.

    Raises:
        DecodeError: If the text is malformed or does not fit the model.
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"document is not valid UTF-8: {e}") from e

    try:
        raw = yaml.safe_load(data)
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse document: {e}")
        raise DecodeError(f"document is not valid YAML or JSON: {e}") from e

    if not isinstance(raw, dict):
        raise DecodeError(
            f"document must be a mapping at the top level, got {type(raw).__name__}"
        )

    return from_dict(raw)


def from_dict(raw: Dict[str, Any]) -> OpenAPI:
    """Build a document from already-parsed data."""
    try:
        document = OpenAPI.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"Document does not fit the OpenAPI model: {e.error_count()} error(s)")
        raise DecodeError(f"document does not fit the OpenAPI model: {e}") from e

    document.with_minor_openapi_version(minor_version(document.openapi))
    logger.debug(
        f"Loaded OpenAPI {document.openapi or 'unknown'} document "
        f"with {len(document.paths or [])} path(s)"
    )
    return document


def load_file(path: Path) -> OpenAPI:
    """Decode a document from a file."""
    logger.debug(f"Loading OpenAPI document from {path}")
    with open(path, "rb") as f:
        return load(f.read())


def to_dict(document: OpenAPI) -> Dict[str, Any]:
    """
    Plain-data form of a document.

    Absent fields are omitted; present-but-empty collections are kept, and
    unrecognized fields are kept whatever their value. An empty component
    registry is omitted.
    """
    data = document.model_dump(mode="json", by_alias=True)
    if data.get("components") == {}:
        del data["components"]
    return data


def dump(document: OpenAPI, fmt: str = "yaml") -> str:
    """
    Encode a document.

    Args:
        document: The document to encode.
        fmt: ``yaml`` or ``json``.

    Returns:
        The encoded text.
    """
    if fmt not in FORMATS:
        raise ValueError(f"unsupported format {fmt!r}, expected one of {', '.join(FORMATS)}")

    data = to_dict(document)
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False)
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def dump_file(document: OpenAPI, path: Path, fmt: str = None) -> None:
    """Encode a document to a file; the format defaults from the suffix."""
    if fmt is None:
        fmt = "json" if Path(path).suffix.lower() == ".json" else "yaml"
    logger.debug(f"Writing OpenAPI document to {path} as {fmt}")
    with open(path, "w", encoding="utf-8") as f:
        f.write(dump(document, fmt))
