"""Decoding of raw attribute values into firmware and sensor models."""

from __future__ import annotations

from .layout import FIRMWARE_LAYOUT, SENSOR_LAYOUT, VERSION_OFFSET
from ..models.firmware import FirmwareInfo
from ..models.sensors import SensorReading


def decode_firmware(data: bytes) -> FirmwareInfo:
    """Decode the firmware/battery value read from handle 0x38.

    Byte 0 is the battery level, byte 1 is a separator and the rest is
    the version string, e.g. ``64 10 32 2e 36 2e 32`` -> battery 100,
    version ``"2.6.2"``.

    Raises:
        MalformedResponse: If fewer than 3 bytes are supplied.
    """
    fields = FIRMWARE_LAYOUT.unpack(data)
    version = bytes(data[VERSION_OFFSET:]).decode("utf-8", errors="replace")
    return FirmwareInfo(version=version, battery=fields["battery"])


def decode_sensors(data: bytes) -> SensorReading:
    """Decode the 10-byte sensor value read from handle 0x35.

    Raises:
        MalformedResponse: If fewer than 10 bytes are supplied.
    """
    fields = SENSOR_LAYOUT.unpack(data)
    return SensorReading(
        temperature=fields["temperature"] / 10.0,
        moisture=fields["moisture"],
        light=fields["light"],
        conductivity=fields["conductivity"],
    )
