"""Tests for the MCP server tools."""

from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch

import pytest

from miflora_mcp.device import Miflora

FIRMWARE_318 = bytes([0x5A, 0x00]) + b"3.1.8"
FIRMWARE_262 = bytes([0x64, 0x10]) + b"2.6.2"
SENSORS = bytes([0xD2, 0x00, 0x00, 0x64, 0x00, 0x00, 0x00, 0x28, 0x90, 0x01])


def _get_server_module():
    """Import server module with FastMCP mocked to avoid init issues."""
    mock_fastmcp_cls = MagicMock()
    mock_fastmcp_instance = MagicMock()
    # Make the @mcp.tool() decorator a no-op that returns the function unchanged
    mock_fastmcp_instance.tool.return_value = lambda fn: fn
    mock_fastmcp_cls.return_value = mock_fastmcp_instance

    with patch("mcp.server.fastmcp.FastMCP", mock_fastmcp_cls):
        # Remove cached server module so it re-imports with our mock
        sys.modules.pop("miflora_mcp.server", None)
        import miflora_mcp.server as server_mod

    return server_mod


def _fake_transport(firmware: bytes) -> MagicMock:
    transport = MagicMock()
    transport.read_attribute.side_effect = (
        lambda address, adapter, handle: {0x38: firmware, 0x35: SENSORS}[handle]
    )
    return transport


def _connect(server, firmware: bytes) -> MagicMock:
    transport = _fake_transport(firmware)
    with patch.object(server, "GatttoolTransport", return_value=transport):
        result = server.connect("C4:7C:8D:6A:3E:1F", adapter="hci1")
    assert result["connected"] is True
    return transport


def test_tools_require_connect():
    """Reading before connect raises a clear error."""
    server = _get_server_module()
    with pytest.raises(RuntimeError):
        server.read_sensors()
    with pytest.raises(RuntimeError):
        server.get_device_info()


def test_connect_reads_firmware():
    """connect selects the device and reports its firmware and battery."""
    server = _get_server_module()
    transport = _fake_transport(FIRMWARE_318)

    with patch.object(server, "GatttoolTransport", return_value=transport) as cls:
        result = server.connect("C4:7C:8D:6A:3E:1F", adapter="hci1", timeout_s=5.0)

    cls.assert_called_once_with(executable="gatttool", timeout_s=5.0)
    assert result == {
        "connected": True,
        "address": "C4:7C:8D:6A:3E:1F",
        "adapter": "hci1",
        "firmware": "3.1.8",
        "battery": 90,
    }
    assert isinstance(server._device, Miflora)


def test_read_sensors_new_firmware():
    """Sensor reads on new firmware report the realtime step."""
    server = _get_server_module()
    transport = _connect(server, FIRMWARE_318)

    result = server.read_sensors()

    assert result["temperature"] == 21.0
    assert result["light"] == 100
    assert result["moisture"] == 40
    assert result["conductivity"] == 400
    assert result["realtime_enabled"] is True
    transport.write_attribute.assert_called_once_with(
        "C4:7C:8D:6A:3E:1F", "hci1", 0x33, b"\xA0\x1F"
    )


def test_read_sensors_old_firmware():
    """Old firmware skips the realtime write."""
    server = _get_server_module()
    transport = _connect(server, FIRMWARE_262)

    result = server.read_sensors()

    assert result["realtime_enabled"] is False
    transport.write_attribute.assert_not_called()


def test_get_device_info_uses_cache():
    """Device info comes from the cached firmware without new reads."""
    server = _get_server_module()
    transport = _connect(server, FIRMWARE_318)
    transport.read_attribute.reset_mock()

    info = server.get_device_info()

    assert info == {
        "address": "C4:7C:8D:6A:3E:1F",
        "adapter": "hci1",
        "firmware": {"version": "3.1.8", "battery": 90},
    }
    transport.read_attribute.assert_not_called()


def test_read_firmware_tool():
    """read_firmware re-reads handle 0x38."""
    server = _get_server_module()
    transport = _connect(server, FIRMWARE_318)

    assert server.read_firmware() == {"version": "3.1.8", "battery": 90}
    assert transport.read_attribute.call_count == 2


def test_disconnect_forgets_device():
    """After disconnect the tools require connect again."""
    server = _get_server_module()
    _connect(server, FIRMWARE_318)

    assert server.disconnect() == {"disconnected": True}
    with pytest.raises(RuntimeError):
        server.read_firmware()
