"""Typed model for interface traffic counters."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TrafficStats:
    """Byte/packet counters of a CPE interface.

    A counter that could not be read is ``0``. Packet counters are not
    extracted by any parser yet and are always ``0``.
    """

    bytes_in: int = 0
    bytes_out: int = 0
    packets_in: int = 0
    packets_out: int = 0

    @property
    def has_data(self) -> bool:
        """True if at least one byte counter is positive."""
        return self.bytes_in > 0 or self.bytes_out > 0
