"""MCP server entry point for Mi Flora plant sensors.

Exposes the firmware and sensor reads as tools via the Model Context
Protocol using the official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .device import Miflora
from .models.device import DEFAULT_ADAPTER
from .protocol.handles import requires_realtime_enable
from .transport.gatttool import COMMAND_TIMEOUT_S, GATTTOOL, GatttoolTransport

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "miflora",
    instructions="MCP server for Xiaomi Mi Flora BLE plant sensors",
)

# Global device state
_device: Miflora | None = None


def _get_device() -> Miflora:
    """Get the active device, raising if none has been connected."""
    if _device is None:
        raise RuntimeError(
            "Not connected to a sensor. Use the 'connect' tool first."
        )
    return _device


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def connect(
    address: str,
    adapter: str = DEFAULT_ADAPTER,
    gatttool: str = GATTTOOL,
    timeout_s: float = COMMAND_TIMEOUT_S,
) -> dict[str, Any]:
    """Select a Mi Flora sensor and read its firmware version and battery.

    The firmware version decides whether later sensor reads must first
    enable realtime mode, so it is read once here.

    Args:
        address: Bluetooth address of the sensor, e.g. "C4:7C:8D:6A:3E:1F".
        adapter: Local BLE adapter to use (default "hci0").
        gatttool: Path to the gatttool executable.
        timeout_s: Per-request timeout in seconds.
    """
    global _device
    device = Miflora(
        address,
        adapter=adapter,
        transport=GatttoolTransport(executable=gatttool, timeout_s=timeout_s),
    )
    firmware = device.read_firmware()
    _device = device

    return {
        "connected": True,
        "address": address,
        "adapter": adapter,
        "firmware": firmware.version,
        "battery": firmware.battery,
    }


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Forget the selected sensor and its cached firmware."""
    global _device
    _device = None
    return {"disconnected": True}


@mcp.tool()
def get_device_info() -> dict[str, Any]:
    """Return the selected sensor's address, adapter and cached firmware.

    Does not talk to the device.
    """
    device = _get_device()
    firmware = device.firmware
    return {
        "address": device.device.address,
        "adapter": device.device.adapter,
        "firmware": firmware.to_dict() if firmware else None,
    }


# ─── READ TOOLS ──────────────────────────────────────────────────────

@mcp.tool()
def read_firmware() -> dict[str, Any]:
    """Re-read the firmware version and battery level (handle 0x38)."""
    return _get_device().read_firmware().to_dict()


@mcp.tool()
def read_sensors() -> dict[str, Any]:
    """Read temperature (°C), moisture (%), light (lux) and conductivity (µS/cm).

    On firmware 2.6.6 and later, realtime mode is enabled before the read.
    """
    device = _get_device()
    result = device.read_sensors().to_dict()
    result["realtime_enabled"] = requires_realtime_enable(
        device.state.firmware_version
    )
    return result


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
