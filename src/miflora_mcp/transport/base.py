"""Attribute transport interface consumed by the protocol core."""

from __future__ import annotations

from typing import Protocol


class AttributeTransport(Protocol):
    """Reads and writes BLE attribute values by handle.

    Implementations raise ``TransportError`` when the connection cannot
    be established or the device does not acknowledge the operation.
    """

    def read_attribute(self, address: str, adapter: str, handle: int) -> bytes:
        """Return the raw value stored at *handle*."""

    def write_attribute(
        self, address: str, adapter: str, handle: int, payload: bytes
    ) -> None:
        """Write *payload* to *handle* and wait for the acknowledgement."""
