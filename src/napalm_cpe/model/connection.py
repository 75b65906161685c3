"""Typed model for the device a session talks to."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

DeviceType = Literal["gpon", "epon", "mikrotik"]

DEVICE_TYPES: frozenset[str] = frozenset({"gpon", "epon", "mikrotik"})


@dataclass(frozen=True)
class ConnectionDescriptor:
    """Immutable address and credentials for one CPE device.

    Supplied by the caller per operation and never persisted.

    Args:
        host: IP address or hostname of the device.
        port: Telnet port (default 23).
        username: Login username.
        password: Login password.
        device_type: Device family tag: ``"gpon"``, ``"epon"`` or ``"mikrotik"``.

    Raises:
        ValueError: If *host* is empty, *port* is out of range, or
            *device_type* is not a known family.
    """

    host: str
    username: str
    password: str
    port: int = 23
    device_type: DeviceType = "gpon"

    def __post_init__(self) -> None:
        if not self.host or not self.host.strip():
            raise ValueError("host must be a non-empty string")
        if not 1 <= int(self.port) <= 65535:
            raise ValueError(f"port out of range: {self.port!r}")
        if self.device_type not in DEVICE_TYPES:
            raise ValueError(
                f"unknown device_type {self.device_type!r}; "
                f"expected one of {sorted(DEVICE_TYPES)}"
            )

    def __repr__(self) -> str:
        return (
            f"ConnectionDescriptor(host={self.host!r}, port={self.port}, "
            f"username={self.username!r}, device_type={self.device_type!r})"
        )
