"""Device protocol core: firmware-gated reads of the plant sensor.

The core is a set of plain functions that take a transport, the device
identity and the caller-owned ``DeviceState``. ``read_firmware`` is the
only operation that mutates the state; ``read_sensors`` consults it to
decide whether the realtime-enable write is needed first.

State per device::

    Uninitialized --read_firmware--> FirmwareKnown --read_firmware--> ...

Both states allow ``read_sensors``; the enable write is only issued from
``FirmwareKnown`` with a version at or above ``2.6.6``.
"""

from __future__ import annotations

import logging

from .models.device import DEFAULT_ADAPTER, DeviceHandle, DeviceState
from .models.firmware import FirmwareInfo
from .models.sensors import SensorReading
from .protocol.handles import (
    Handle,
    REALTIME_ENABLE_PAYLOAD,
    requires_realtime_enable,
)
from .protocol.parser import decode_firmware, decode_sensors
from .transport.base import AttributeTransport
from .transport.gatttool import GatttoolTransport

logger = logging.getLogger(__name__)


def read_firmware(
    transport: AttributeTransport,
    device: DeviceHandle,
    state: DeviceState,
) -> FirmwareInfo:
    """Read firmware version and battery level, caching them in *state*.

    Transport and decode errors propagate unchanged and leave *state*
    untouched.
    """
    data = transport.read_attribute(device.address, device.adapter, Handle.FIRMWARE)
    firmware = decode_firmware(data)
    state.firmware = firmware
    logger.info(
        "%s firmware %s, battery %d%%",
        device.address,
        firmware.version,
        firmware.battery,
    )
    return firmware


def enable_realtime_reading(transport: AttributeTransport, device: DeviceHandle) -> None:
    """Switch the device into realtime mode so sensor reads return live data."""
    logger.info("Enabling realtime reading on %s", device.address)
    transport.write_attribute(
        device.address,
        device.adapter,
        Handle.MODE_CONTROL,
        REALTIME_ENABLE_PAYLOAD,
    )


def read_sensors(
    transport: AttributeTransport,
    device: DeviceHandle,
    state: DeviceState,
) -> SensorReading:
    """Read temperature, moisture, light and conductivity.

    If the cached firmware version is ``2.6.6`` or later (string
    comparison), realtime reading is enabled first. A failed enable
    aborts the call before the sensor read is issued.

    Firmware does not have to be read beforehand, but without it the
    enable step is always skipped.
    """
    if requires_realtime_enable(state.firmware_version):
        enable_realtime_reading(transport, device)

    data = transport.read_attribute(device.address, device.adapter, Handle.SENSOR_DATA)
    reading = decode_sensors(data)
    logger.debug("%s sensors: %s", device.address, reading)
    return reading


class Miflora:
    """One sensor bundled with its state and transport.

    Usage::

        flora = Miflora("C4:7C:8D:6A:3E:1F")
        flora.read_firmware()
        reading = flora.read_sensors()
    """

    def __init__(
        self,
        address: str,
        adapter: str = DEFAULT_ADAPTER,
        transport: AttributeTransport | None = None,
    ) -> None:
        if transport is None:
            transport = GatttoolTransport()
        self._device = DeviceHandle(address=address, adapter=adapter)
        self._state = DeviceState()
        self._transport = transport

    @property
    def device(self) -> DeviceHandle:
        return self._device

    @property
    def state(self) -> DeviceState:
        return self._state

    @property
    def firmware(self) -> FirmwareInfo | None:
        return self._state.firmware

    def read_firmware(self) -> FirmwareInfo:
        return read_firmware(self._transport, self._device, self._state)

    def read_sensors(self) -> SensorReading:
        return read_sensors(self._transport, self._device, self._state)

    def __repr__(self) -> str:
        version = self._state.firmware_version or "unknown"
        return (
            f"Miflora(address={self._device.address!r}, "
            f"adapter={self._device.adapter!r}, firmware={version!r})"
        )
