"""Device identity and per-device protocol state."""

from __future__ import annotations

from dataclasses import dataclass

from .firmware import FirmwareInfo

DEFAULT_ADAPTER = "hci0"


@dataclass(frozen=True)
class DeviceHandle:
    """Identifies one physical sensor and the local radio used to reach it."""

    address: str
    adapter: str = DEFAULT_ADAPTER


@dataclass
class DeviceState:
    """Mutable state the protocol keeps for a device.

    ``firmware`` holds the last successful firmware read. It is never
    cleared or refreshed automatically, so a firmware upgrade on the
    device goes unnoticed until firmware is read again.
    """

    firmware: FirmwareInfo | None = None

    @property
    def firmware_version(self) -> str:
        """The cached version, or an empty string if never read."""
        if self.firmware is None:
            return ""
        return self.firmware.version
