"""Parser for WLAN settings output (``show wlan``, ``display wlan ssid``, ...)."""

from __future__ import annotations

from napalm_cpe.model.wifi import RadioState, WiFiSettings
from napalm_cpe.parser.text import first_match
from napalm_cpe.vendor.cli.patterns import (
    DISABLED_MARKER,
    ENABLED_MARKER,
    PASSPHRASE_PATTERNS,
    SSID_PATTERNS,
)


def parse_wifi_settings(output: str) -> WiFiSettings:
    """Extract SSID, passphrase and radio state from raw CLI *output*.

    ``enabled`` is ``False`` only if the word "disabled" appears anywhere in
    the output (case-insensitive); otherwise it is ``True``.  ``state``
    carries the stricter tri-state reading.

    Args:
        output: Raw text returned by the device.

    Returns:
        A fresh :class:`.WiFiSettings`; unmatched strings are ``""``.
    """
    ssid = first_match(output, SSID_PATTERNS)
    password = first_match(output, PASSPHRASE_PATTERNS)
    disabled = DISABLED_MARKER in output.lower()
    return WiFiSettings(
        ssid=ssid.strip() if ssid else "",
        password=password.strip() if password else "",
        enabled=not disabled,
        state=_radio_state(output, disabled),
    )


def _radio_state(output: str, disabled: bool) -> RadioState:
    if disabled:
        return "disabled"
    if ENABLED_MARKER.search(output):
        return "enabled"
    return "unknown"
