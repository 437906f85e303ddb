"""
Validation options and the context that carries them.

Options are collected once per validation call into an immutable
ValidationOptions value and handed to every node's ``check(ctx)`` through a
ValidationContext. Nothing is read from module state.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .errors import ValidationCancelledError

logger = logging.getLogger(__name__)


class ValidationOptions(BaseModel):
    """Switches that relax or disable individual leaf rules."""

    skip_examples_validation: bool = Field(
        alias="skipExamplesValidation", default=False
    )
    allow_extra_properties_in_schemas: bool = Field(
        alias="allowExtraPropertiesInSchemas", default=False
    )

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ValidationOptions":
        """Build options from a mapping; unknown keys are ignored."""
        unknown = set(data) - _known_keys()
        if unknown:
            logger.debug(f"Ignoring unknown validation options: {sorted(unknown)}")
        return cls.model_validate(dict(data))

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "ValidationOptions":
        """
        Load options from YAML content.

        The options may sit at the top level or under a ``validation`` key.
        """
        data = yaml.safe_load(yaml_content) or {}
        if not isinstance(data, dict):
            raise ValueError("validation options must be a mapping")
        section = data.get("validation", data)
        if not isinstance(section, dict):
            raise ValueError("'validation' section must be a mapping")
        return cls.from_dict(section)

    @classmethod
    def from_file(cls, path: Path) -> "ValidationOptions":
        """Load options from a YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_yaml(f.read())

    @classmethod
    def build(cls, *entries: Any) -> "ValidationOptions":
        """
        Fold option entries into a single options value.

        Args:
            entries: ValidationOption switches (see
                ``disable_examples_validation``), ValidationOptions instances
                or plain mappings. Later entries win. Anything else, other
                callables included, is ignored.

        Returns:
            The combined ValidationOptions.
        """
        settings: Dict[str, Any] = {}
        for entry in entries:
            if entry is None:
                continue
            if isinstance(entry, ValidationOptions):
                settings.update(entry.model_dump())
            elif isinstance(entry, Mapping):
                settings.update(cls.from_dict(entry).model_dump(exclude_unset=True))
            elif isinstance(entry, ValidationOption):
                entry(settings)
            else:
                logger.debug(f"Ignoring unrecognized validation option {entry!r}")
        return cls.model_validate(settings)


class ValidationOption:
    """A single option switch, as returned by the option functions below."""

    __slots__ = ("name", "value")

    def __init__(self, name: str, value: Any):
        self.name = name
        self.value = value

    def __call__(self, settings: Dict[str, Any]) -> None:
        settings[self.name] = self.value

    def __repr__(self) -> str:
        return f"ValidationOption({self.name}={self.value!r})"


def disable_examples_validation() -> ValidationOption:
    """Option: skip example-value checks."""
    return ValidationOption("skip_examples_validation", True)


def allow_extra_properties_in_schemas() -> ValidationOption:
    """Option: accept unknown keywords at the top of component schemas."""
    return ValidationOption("allow_extra_properties_in_schemas", True)


def _known_keys() -> set:
    keys = set()
    for name, info in ValidationOptions.model_fields.items():
        keys.add(name)
        if info.alias:
            keys.add(info.alias)
    return keys


class CancelEvent(Protocol):
    def is_set(self) -> bool: ...


class ValidationContext:
    """
    Read-only state shared by all validators of one run.

    Attributes:
        options: The effective ValidationOptions.
        cancel_event: Optional event; when set, the engine stops before its
            next top-level step.
    """

    __slots__ = ("_options", "_cancel_event")

    def __init__(
        self,
        options: Optional[ValidationOptions] = None,
        cancel_event: Optional[CancelEvent] = None,
    ):
        self._options = options or ValidationOptions()
        self._cancel_event = cancel_event

    @classmethod
    def create(
        cls,
        *entries: Union[ValidationOption, ValidationOptions, Mapping[str, Any]],
        cancel_event: Optional[CancelEvent] = None,
    ) -> "ValidationContext":
        return cls(ValidationOptions.build(*entries), cancel_event)

    @property
    def options(self) -> ValidationOptions:
        return self._options

    @property
    def cancel_event(self) -> Optional[CancelEvent]:
        return self._cancel_event

    @property
    def cancelled(self) -> bool:
        return self._cancel_event is not None and self._cancel_event.is_set()

    def raise_if_cancelled(self, step: str) -> None:
        if self.cancelled:
            raise ValidationCancelledError(step)
