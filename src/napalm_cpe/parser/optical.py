"""Parser for optical power output (``display ont optical-info`` and friends)."""

from __future__ import annotations

from napalm_cpe.model.optical import OpticalPower
from napalm_cpe.parser.text import first_match
from napalm_cpe.vendor.cli.patterns import RX_POWER_PATTERNS, TX_POWER_PATTERNS


def parse_optical_power(output: str) -> OpticalPower:
    """Extract receive/transmit optical power from raw CLI *output*.

    Receive and transmit power are looked up independently, each through
    its own ordered pattern list; either may be missing.

    Args:
        output: Raw text returned by the device.

    Returns:
        A fresh :class:`.OpticalPower`; unmatched fields are ``None``.
    """
    return OpticalPower(
        rx_power_dbm=_to_float(first_match(output, RX_POWER_PATTERNS)),
        tx_power_dbm=_to_float(first_match(output, TX_POWER_PATTERNS)),
    )


def _to_float(token: str | None) -> float | None:
    if token is None:
        return None
    try:
        return float(token)
    except ValueError:
        return None
