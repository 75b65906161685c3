"""Typed model for WLAN settings scraped from CPE output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

RadioState = Literal["enabled", "disabled", "unknown"]


@dataclass
class WiFiSettings:
    """WLAN configuration of a CPE.

    Attributes:
        ssid: Network name, ``""`` if not found.
        password: Passphrase / PSK, ``""`` if not found.
        enabled: ``False`` only when the output mentions "disabled".
        state: Tri-state radio status. ``"enabled"`` requires an explicit
            marker in the output; anything without a marker is ``"unknown"``.
    """

    ssid: str = ""
    password: str = ""
    enabled: bool = True
    state: RadioState = "unknown"

    @property
    def has_data(self) -> bool:
        """True if an SSID was found."""
        return bool(self.ssid)
