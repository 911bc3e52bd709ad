"""Device model."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class Device(BaseModel):
    """A garage door controller registered to the user's account.

    Fields are mapped from the ``deviceList`` entries of the
    ``/prod/API/{mobile}/all`` response.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    id: str = Field(validation_alias=AliasChoices("id", "device_id"))
    """Vendor-unique, stable device identifier."""
    name: str = Field(default="", validation_alias=AliasChoices("name"))
    """Display name chosen in the Gliderol app."""
    online: bool | str | None = Field(default=None, validation_alias=AliasChoices("online"))
    """Connectivity flag as reported by the vendor (informational only)."""
    outlet_type: str = Field(default="", validation_alias=AliasChoices("outletType", "outlet_type"))
    """Product/model tag (e.g. ``"GTS"``)."""

    raw: dict[str, Any] = Field(default_factory=dict)
    """Full API response dict for access to additional fields."""

    @model_validator(mode="before")
    @classmethod
    def _ensure_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        merged.setdefault("raw", values)
        return merged

    @field_validator("id", "name", "outlet_type", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("id")
    @classmethod
    def _require_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("device id must be non-empty")
        return value

    @property
    def display_name(self) -> str:
        return self.name or self.id

    def to_context(self) -> dict[str, Any]:
        """JSON-safe snapshot for storing on an accessory's context."""
        return {
            "id": self.id,
            "name": self.name,
            "online": self.online,
            "outletType": self.outlet_type,
        }
