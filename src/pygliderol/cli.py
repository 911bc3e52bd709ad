"""Command line tool for listing and operating Gliderol doors.

Configuration comes from ``GLIDEROL_*`` environment variables (see
:meth:`GliderolConfig.from_env`)::

    pygliderol list
    pygliderol status <device-id>
    pygliderol open <device-id>
    pygliderol close <device-id>
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from pygliderol.accessory import Accessory
from pygliderol.client import GliderolClient
from pygliderol.config import GliderolConfig
from pygliderol.controller import DoorController
from pygliderol.exceptions import GliderolConfigError, GliderolError
from pygliderol.models.device import Device
from pygliderol.models.door import DoorState, TargetDoorState
from pygliderol.state.store import FileStateStore

_logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pygliderol", description="Operate Gliderol garage doors.")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for INFO, -vv for DEBUG")
    parser.add_argument("--state-file", help="override GLIDEROL_STATE_FILE")
    parser.add_argument("--settle", type=float, help="override the settle duration in seconds")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="list devices and their stored state")
    for name, help_text in (
        ("status", "print the stored state of a door"),
        ("open", "open a door and wait for it to settle"),
        ("close", "close a door and wait for it to settle"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("device_id")
    return parser


def _config_from_args(args: argparse.Namespace) -> GliderolConfig:
    overrides: dict[str, object] = {}
    if args.state_file:
        overrides["state_file"] = args.state_file
    if args.settle is not None:
        overrides["settle_duration"] = args.settle
    return GliderolConfig.from_env(**overrides).validate()


def _find_device(devices: Sequence[Device], device_id: str) -> Device:
    for device in devices:
        if device.id == device_id:
            return device
    raise GliderolError(f"No device with id {device_id!r} on this account")


async def _run(args: argparse.Namespace, config: GliderolConfig) -> int:
    store = FileStateStore(config.state_file)

    async with GliderolClient(config) as client:
        if args.command == "list":
            for device in await client.list_devices():
                accessory = Accessory.for_device(device)
                state = await store.load(accessory.uuid)
                print(f"{device.id}\t{device.display_name}\t{device.outlet_type}\t{accessory.uuid}\t{state.name}")
            return 0

        device = _find_device(await client.list_devices(), args.device_id)
        accessory = Accessory.for_device(device)

        if args.command == "status":
            print((await store.load(accessory.uuid)).name)
            return 0

        def _print_state(state: DoorState) -> None:
            print(f"{device.display_name}: {state.name}")

        controller = DoorController(
            accessory,
            device,
            client,
            store,
            settle_duration=config.settle_duration,
            on_current_state=_print_state,
        )
        target = TargetDoorState.OPEN if args.command == "open" else TargetDoorState.CLOSED
        final = await controller.set_target_state(target)
        return 0 if final is target.door_state else 1


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = _config_from_args(args)
    except GliderolConfigError as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        return 1

    try:
        return asyncio.run(_run(args, config))
    except GliderolError as exc:
        _logger.debug("Command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
