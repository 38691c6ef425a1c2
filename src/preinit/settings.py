"""
settings.py – Import policy
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
The record that governs how key/value pairs are projected onto an object:
what to do with invalid names, whether setters win over direct field writes,
whether existing fields may be replaced and which value a bare key receives.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Option names understood for compatibility with older callers.
LEGACY_NAMES: Final[dict[str, str]] = {
    "on_NameError": "on_invalid_name",
    "use_accessors": "use_setters",
    "overwrite_values": "allow_overwrite",
}

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class NameErrorAction(str, Enum):
    """Action taken when a key is not a valid field name."""

    RAISE = "raise"
    IGNORE = "ignore"
    CONVERT = "convert"


def canonical_name(name: Any) -> Any:
    """Map a legacy option name onto the current field name."""
    return LEGACY_NAMES.get(name, name)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    """Policy applied by one attribute import."""

    on_invalid_name: NameErrorAction = Field(
        default=NameErrorAction.RAISE,
        description="Action for keys that are not valid field names.",
    )
    use_setters: bool = Field(
        default=False,
        description="Prefer an existing setter over writing the field directly.",
    )
    allow_overwrite: bool = Field(
        default=True,
        description="Whether a field that is already set may be replaced.",
    )
    default: Any = Field(
        default=None,
        description="Value given to a key supplied without one.",
    )
    default_values: dict[str, Any] = Field(
        default_factory=dict,
        description="Per-key values for keys supplied without one.",
    )

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    # ----- validators --------------------------------------------------------
    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_names(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return {canonical_name(k): v for k, v in data.items()}
        return data

    @field_validator("on_invalid_name", mode="before")
    @classmethod
    def _normalise_action(cls, v: Any) -> Any:
        if v is None:
            return NameErrorAction.RAISE
        if isinstance(v, str):
            return v.strip().lower()
        return v

    # ----- mapping-style access ---------------------------------------------
    def __getitem__(self, name: str) -> Any:
        return getattr(self, self._field_name(name))

    def __setitem__(self, name: str, value: Any) -> None:
        setattr(self, self._field_name(name), value)

    @classmethod
    def _field_name(cls, name: str) -> str:
        field = canonical_name(name)
        if field not in cls.model_fields:
            raise KeyError(f"unrecognised setting: {name!r}")
        return field

    # ----- helpers -----------------------------------------------------------
    def merged(
        self, overrides: Mapping[str, Any] | Settings | None = None
    ) -> Settings:
        """
        Return the settings that result from applying *overrides*.

        Only the fields explicitly set on a ``Settings`` override are applied;
        omitted fields keep their current value. Values are carried over
        as-is, never serialized. Without overrides the same object is returned.
        """
        if overrides is None:
            return self
        if isinstance(overrides, Settings):
            data = {k: getattr(overrides, k) for k in overrides.model_fields_set}
        else:
            data = {canonical_name(k): v for k, v in overrides.items()}
        if not data:
            return self
        return type(self).model_validate({**dict(self), **data})

    def clone(self) -> Settings:
        """
        Copy for a new owner: ``default_values`` gets its own dict, the values
        themselves are shared.
        """
        return self.model_copy(update={"default_values": dict(self.default_values)})

    def default_for(self, key: str) -> Any:
        """Value for a bare key: its entry in ``default_values``, else ``default``."""
        return self.default_values.get(key, self.default)
