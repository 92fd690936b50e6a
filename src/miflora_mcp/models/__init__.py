"""Data models for device identity, firmware status and sensor readings."""

from .device import DeviceHandle, DeviceState, DEFAULT_ADAPTER
from .firmware import FirmwareInfo
from .sensors import SensorReading
