"""Error types raised by the protocol core and the transport shim."""

from __future__ import annotations


class MifloraError(RuntimeError):
    """Base class for all errors raised by this package."""


class TransportError(MifloraError):
    """A read or write attribute call failed or was not acknowledged."""


class MalformedResponse(MifloraError):
    """A device response is shorter than its layout requires."""

    def __init__(self, what: str, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Malformed {what} response: expected at least {expected} bytes, "
            f"got {actual}"
        )
