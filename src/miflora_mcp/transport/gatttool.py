"""Attribute transport backed by BlueZ's ``gatttool`` command-line tool.

Each read or write spawns one ``gatttool`` process that connects,
performs a single request and exits. Successful console output looks
like::

    $ gatttool -b C4:7C:8D:6A:3E:1F --char-read -a 0x38 -i hci0
    Characteristic value/descriptor: 64 10 32 2e 36 2e 32

    $ gatttool -b C4:7C:8D:6A:3E:1F --char-write-req -a 0x33 -n A01F -i hci0
    Characteristic value was written successfully
"""

from __future__ import annotations

import logging
import subprocess

from ..exceptions import TransportError
from ..protocol.handles import format_handle

logger = logging.getLogger(__name__)

GATTTOOL = "gatttool"
COMMAND_TIMEOUT_S = 10.0
READ_PREFIX = "Characteristic value/descriptor: "
WRITE_ACK = "successfully"


def parse_char_read_output(text: str) -> bytes:
    """Extract the value bytes from ``gatttool --char-read`` output.

    Raises:
        TransportError: If the output is not a characteristic value or
            the hex digits cannot be decoded.
    """
    if not text.startswith(READ_PREFIX):
        raise TransportError(f"Unexpected response: {text.strip()!r}")

    hex_digits = "".join(text[len(READ_PREFIX) :].split())
    try:
        return bytes.fromhex(hex_digits)
    except ValueError as e:
        raise TransportError(f"Could not decode value {hex_digits!r}: {e}") from e


class GatttoolTransport:
    """Runs ``gatttool`` once per attribute request.

    Usage::

        transport = GatttoolTransport()
        data = transport.read_attribute("C4:7C:8D:6A:3E:1F", "hci0", 0x38)
    """

    def __init__(
        self,
        executable: str = GATTTOOL,
        timeout_s: float = COMMAND_TIMEOUT_S,
    ) -> None:
        self._executable = executable
        self._timeout_s = timeout_s

    def read_attribute(self, address: str, adapter: str, handle: int) -> bytes:
        """Read the value at *handle* with ``--char-read``."""
        out = self._run(
            [
                self._executable,
                "-b", address,
                "--char-read",
                "-a", format_handle(handle),
                "-i", adapter,
            ]
        )
        data = parse_char_read_output(out)
        logger.debug("Read %s from %s: %s", format_handle(handle), address, data.hex(" "))
        return data

    def write_attribute(
        self,
        address: str,
        adapter: str,
        handle: int,
        payload: bytes,
    ) -> None:
        """Write *payload* to *handle* with ``--char-write-req``."""
        if not payload:
            raise ValueError("Write payload must not be empty")

        out = self._run(
            [
                self._executable,
                "-b", address,
                "--char-write-req",
                "-a", format_handle(handle),
                "-n", payload.hex().upper(),
                "-i", adapter,
            ]
        )
        if WRITE_ACK not in out:
            raise TransportError(f"Unexpected response: {out.strip()!r}")
        logger.debug("Wrote %s to %s: %s", format_handle(handle), address, payload.hex(" "))

    def _run(self, args: list[str]) -> str:
        """Run one gatttool command and return its stdout."""
        logger.debug("Running: %s", " ".join(args))
        try:
            result = subprocess.run(
                args,
                capture_output=True,
                text=True,
                timeout=self._timeout_s,
                check=True,
            )
        except FileNotFoundError as e:
            raise TransportError(f"{self._executable} not found: {e}") from e
        except subprocess.TimeoutExpired as e:
            raise TransportError(
                f"{self._executable} timed out after {self._timeout_s}s"
            ) from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise TransportError(
                f"{self._executable} exited with status {e.returncode}: {stderr}"
            ) from e
        return result.stdout
