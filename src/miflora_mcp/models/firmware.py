"""Firmware and battery status model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class FirmwareInfo:
    """Firmware version and battery level read from handle 0x38."""

    version: str
    battery: int  # raw byte, nominally a percentage

    def to_dict(self) -> dict:
        return {"version": self.version, "battery": self.battery}
