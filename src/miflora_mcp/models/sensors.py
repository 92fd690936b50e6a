"""Sensor reading model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SensorReading:
    """One reading of the four environmental sensors.

    Values are passed through exactly as the device reports them; no
    range checking is applied.
    """

    temperature: float  # degrees Celsius, 0.1 resolution
    moisture: int  # percent
    light: int  # lux
    conductivity: int  # µS/cm

    def to_dict(self) -> dict:
        return {
            "temperature": self.temperature,
            "moisture": self.moisture,
            "light": self.light,
            "conductivity": self.conductivity,
        }
