"""pygliderol - Async Python client and door controller for Gliderol garage doors."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pygliderol")
except PackageNotFoundError:
    __version__ = "0+local"
from pygliderol.accessory import Accessory, AccessoryHandle, device_uuid
from pygliderol.client import GliderolClient
from pygliderol.config import GliderolConfig
from pygliderol.controller import AccessoryInformation, DoorController
from pygliderol.exceptions import (
    GliderolApiError,
    GliderolCommandError,
    GliderolConfigError,
    GliderolError,
    GliderolPersistenceError,
    GliderolTransportError,
)
from pygliderol.models import (
    DEFAULT_DOOR_STATE,
    Device,
    DoorState,
    TargetDoorState,
    VendorDoorState,
)
from pygliderol.platform import GliderolPlatform
from pygliderol.registry import DeviceRegistry, Reconciliation
from pygliderol.state import FileStateStore, MemoryStateStore

__all__ = [
    "__version__",
    "Accessory",
    "AccessoryHandle",
    "AccessoryInformation",
    "DEFAULT_DOOR_STATE",
    "Device",
    "DeviceRegistry",
    "DoorController",
    "DoorState",
    "FileStateStore",
    "GliderolApiError",
    "GliderolClient",
    "GliderolCommandError",
    "GliderolConfig",
    "GliderolConfigError",
    "GliderolError",
    "GliderolPersistenceError",
    "GliderolPlatform",
    "GliderolTransportError",
    "MemoryStateStore",
    "Reconciliation",
    "TargetDoorState",
    "VendorDoorState",
    "device_uuid",
]
