"""Vendor response envelopes.

Both endpoints answer with a JSON object carrying a boolean ``ok``; the
list endpoint adds ``deviceList``.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from pygliderol.models.device import Device


class VendorResponse(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    ok: bool = False

    @field_validator("ok", mode="before")
    @classmethod
    def _coerce_ok(cls, value: Any) -> bool:
        # Only a real boolean true counts; "false" or 1 are not accepted.
        return value is True


class DeviceListResponse(VendorResponse):
    device_list: list[Device] = Field(
        default_factory=list,
        validation_alias=AliasChoices("deviceList", "device_list"),
    )

    @field_validator("device_list", mode="before")
    @classmethod
    def _drop_non_objects(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [item for item in value if isinstance(item, dict)]
        return value


class ControlResponse(VendorResponse):
    """Acknowledgement from the ``CONTROL`` endpoint."""
