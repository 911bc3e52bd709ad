"""Typed models for the Gliderol API and door state."""

from pygliderol.models.device import Device
from pygliderol.models.door import (
    DEFAULT_DOOR_STATE,
    DoorState,
    TargetDoorState,
    VendorDoorState,
    from_vendor_state,
    to_vendor_state,
)
from pygliderol.models.responses import ControlResponse, DeviceListResponse, VendorResponse

__all__ = [
    "DEFAULT_DOOR_STATE",
    "ControlResponse",
    "Device",
    "DeviceListResponse",
    "DoorState",
    "TargetDoorState",
    "VendorDoorState",
    "VendorResponse",
    "from_vendor_state",
    "to_vendor_state",
]
