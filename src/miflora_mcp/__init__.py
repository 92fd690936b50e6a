"""Read Mi Flora plant sensors over BLE and expose them as MCP tools."""

from .device import Miflora, read_firmware, read_sensors
from .exceptions import MifloraError, TransportError, MalformedResponse
from .models import DeviceHandle, DeviceState, FirmwareInfo, SensorReading

__version__ = "0.1.0"
