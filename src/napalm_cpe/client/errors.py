"""Custom exceptions for the napalm-cpe telnet client."""

from __future__ import annotations

# Sentinel message returned by CPESession.execute() before connect().
NOT_CONNECTED: str = "Not connected"


class CPEError(Exception):
    """Base exception for all napalm-cpe errors."""


class CPEConnectionError(CPEError):
    """Raised when a network-level error occurs (connection refused, reset, unreachable)."""

    def __init__(self, host: str, port: int, cause: Exception | str) -> None:
        self.host = host
        self.port = port
        self.cause = cause
        super().__init__(f"Connection to {host}:{port} failed: {cause}")


class CPEConnectionClosedError(CPEConnectionError):
    """Raised when the device closes the telnet stream mid-exchange."""

    def __init__(self, host: str, port: int, partial: str = "") -> None:
        self.partial = partial
        super().__init__(host, port, "connection closed by remote host")


class CPEAuthError(CPEError):
    """Raised when the device rejects the login credentials."""


class CPETimeoutError(CPEError):
    """Raised when a connect handshake or a command exceeds its time budget."""

    def __init__(self, host: str, operation: str, timeout_s: float) -> None:
        self.host = host
        self.operation = operation
        self.timeout_s = timeout_s
        super().__init__(f"Timed out after {timeout_s:g}s waiting for {operation} on {host}")
