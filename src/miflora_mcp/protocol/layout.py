"""Named fixed-layout records for the device's binary attribute values.

A layout lists the fields of a response by offset and width. Every
multi-byte field is little-endian. Bytes not covered by a field are
reserved and skipped, and bytes past the end of the layout are ignored.

Sensor data layout (handle 0x35)::

    +-------------+----------+-----------+----------+----------+----------------+
    | Temperature | Reserved |   Light   | Reserved | Moisture |  Conductivity  |
    | 2 B, s16    | 1 byte   | 2 B, u16  | 2 bytes  | 1 B, u8  |  2 B, u16      |
    +-------------+----------+-----------+----------+----------+----------------+
      0..1          2          3..4        5..6       7          8..9

Firmware layout (handle 0x38)::

    +---------+-----------+--------------------------+
    | Battery | Separator | Version (text, to end)   |
    | 1 B, u8 | 1 byte    | variable                 |
    +---------+-----------+--------------------------+
"""

from __future__ import annotations

from dataclasses import dataclass

from ..exceptions import MalformedResponse


@dataclass(frozen=True)
class Field:
    """A single integer field inside a layout."""

    name: str
    offset: int
    size: int
    signed: bool = False

    @property
    def end(self) -> int:
        return self.offset + self.size

    def unpack(self, data: bytes) -> int:
        return int.from_bytes(
            data[self.offset : self.end], "little", signed=self.signed
        )


@dataclass(frozen=True)
class Layout:
    """An ordered set of fields with a minimum total length."""

    name: str
    fields: tuple[Field, ...]
    size: int

    def __post_init__(self) -> None:
        for f in self.fields:
            if f.end > self.size:
                raise ValueError(
                    f"Field {f.name!r} ends at {f.end}, past layout size {self.size}"
                )

    def check(self, data: bytes) -> None:
        """Raise ``MalformedResponse`` if *data* is too short for this layout."""
        if len(data) < self.size:
            raise MalformedResponse(self.name, self.size, len(data))

    def unpack(self, data: bytes) -> dict[str, int]:
        """Decode every field of *data* into a ``{name: value}`` mapping."""
        self.check(data)
        return {f.name: f.unpack(data) for f in self.fields}


SENSOR_LAYOUT = Layout(
    name="sensor",
    fields=(
        Field("temperature", 0, 2, signed=True),
        Field("light", 3, 2),
        Field("moisture", 7, 1),
        Field("conductivity", 8, 2),
    ),
    size=10,
)

# The version text runs from VERSION_OFFSET to the end of the value.
VERSION_OFFSET = 2

FIRMWARE_LAYOUT = Layout(
    name="firmware",
    fields=(Field("battery", 0, 1),),
    size=VERSION_OFFSET + 1,
)
