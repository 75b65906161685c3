"""Typed model for ONT optical power readings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class OpticalPower:
    """Receive/transmit optical power of a PON interface.

    ``None`` means the value could not be read; ``0.0`` is a real reading.

    Attributes:
        rx_power_dbm: Received optical power in dBm.
        tx_power_dbm: Transmitted optical power in dBm.
    """

    rx_power_dbm: float | None = None
    tx_power_dbm: float | None = None

    @property
    def has_data(self) -> bool:
        """True if at least one of the two readings is known."""
        return self.rx_power_dbm is not None or self.tx_power_dbm is not None
