"""Parser for interface traffic counters output."""

from __future__ import annotations

from napalm_cpe.model.traffic import TrafficStats
from napalm_cpe.parser.text import first_match
from napalm_cpe.vendor.cli.patterns import BYTES_IN_PATTERNS, BYTES_OUT_PATTERNS


def parse_traffic_stats(output: str) -> TrafficStats:
    """Extract byte counters from raw CLI *output*.

    Thousands separators are stripped before conversion.  Packet counters
    are left at ``0``.

    Args:
        output: Raw text returned by the device.

    Returns:
        A fresh :class:`.TrafficStats`; unmatched counters are ``0``.
    """
    return TrafficStats(
        bytes_in=_to_count(first_match(output, BYTES_IN_PATTERNS)),
        bytes_out=_to_count(first_match(output, BYTES_OUT_PATTERNS)),
    )


def _to_count(token: str | None) -> int:
    """Convert ``"1,234,567"`` to ``1234567``; ``None`` or garbage to ``0``."""
    if token is None:
        return 0
    digits = token.replace(",", "")
    return int(digits) if digits.isdigit() else 0
