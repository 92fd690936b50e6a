"""Attribute handle constants and fixed request payloads.

The sensor exposes everything through three GATT attribute handles.
Firmware 2.6.6 and later only return live sensor data after the mode
control handle has been written with the realtime-enable payload.
"""

from __future__ import annotations

from enum import IntEnum


class Handle(IntEnum):
    """Attribute handles in the device's attribute table."""

    MODE_CONTROL = 0x33
    SENSOR_DATA = 0x35
    FIRMWARE = 0x38


REALTIME_ENABLE_PAYLOAD = bytes.fromhex("A01F")

# Compared as plain strings, the way the vendor app does it.
REALTIME_MIN_FIRMWARE = "2.6.6"


def format_handle(handle: int) -> str:
    """Format a handle the way gatttool expects it, e.g. ``0x35``."""
    if not 0 <= handle <= 0xFFFF:
        raise ValueError(f"Attribute handle must be 0x0000-0xFFFF, got {handle}")
    return f"0x{handle:02x}"


def requires_realtime_enable(version: str) -> bool:
    """Return True if *version* needs the realtime-enable write before reads.

    Lexicographic, not semantic: ``"2.10.0"`` sorts before ``"2.6.6"``
    and is treated as older firmware.
    """
    return version >= REALTIME_MIN_FIRMWARE
