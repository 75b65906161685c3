"""Vendor-agnostic capability probes for CPE devices.

CPE command-line dialects are not self-describing, so each capability is
read by trying an ordered list of candidate commands against a live
session and accepting the first output a parser can extract data from::

    display ont optical-info   -> Huawei
    show interface gpon-onu    -> ZTE
    pon show optic             -> various
    show optical               -> generic

A command the device does not understand simply moves the probe on to the
next candidate; only exhaustion is reported as a failure.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Protocol, TypeVar

from napalm_cpe.model.optical import OpticalPower
from napalm_cpe.model.result import CPEResult
from napalm_cpe.model.traffic import TrafficStats
from napalm_cpe.model.wifi import WiFiSettings
from napalm_cpe.parser.optical import parse_optical_power
from napalm_cpe.parser.traffic import parse_traffic_stats
from napalm_cpe.parser.wifi import parse_wifi_settings
from napalm_cpe.vendor.cli.commands import (
    OPTICAL_POWER_COMMANDS,
    TRAFFIC_STATS_COMMANDS,
    WIFI_SETTINGS_COMMANDS,
)

logger = logging.getLogger(__name__)


class _Record(Protocol):
    @property
    def has_data(self) -> bool: ...


R = TypeVar("R", bound=_Record)


class CommandRunner(Protocol):
    """Anything that can run a CLI command, e.g. :class:`.CPESession`."""

    def execute(self, command: str) -> CPEResult[str]: ...


def probe(
    session: CommandRunner,
    commands: Sequence[str],
    parser: Callable[[str], R],
    capability: str,
) -> CPEResult[R]:
    """Run *commands* in order until *parser* yields a record with data.

    Args:
        session: Connected session used to run the commands.
        commands: Ordered candidate command lines.
        parser: Maps raw output to a record exposing ``has_data``.
        capability: Human-readable name used in log and error messages.

    Returns:
        Success with the first usable record, or a
        ``"Could not read <capability>"`` failure once every candidate
        has been tried.
    """
    for command in commands:
        result = session.execute(command)
        if not result.ok:
            logger.debug("Probe %s: %r failed (%s)", capability, command, result.error)
            continue
        if not result.data:
            logger.debug("Probe %s: %r returned no output", capability, command)
            continue
        parsed = parser(result.data)
        if parsed.has_data:
            logger.debug("Probe %s: %r accepted", capability, command)
            return CPEResult.success(parsed)
        logger.debug("Probe %s: %r output not recognised", capability, command)
    return CPEResult.failure(f"Could not read {capability}")


def probe_optical_power(
    session: CommandRunner,
    commands: Sequence[str] | None = None,
) -> CPEResult[OpticalPower]:
    """Read ONT receive/transmit optical power.

    Args:
        session: Connected session.
        commands: Candidate commands; defaults to
            :data:`~napalm_cpe.vendor.cli.commands.OPTICAL_POWER_COMMANDS`.
    """
    return probe(
        session,
        OPTICAL_POWER_COMMANDS if commands is None else commands,
        parse_optical_power,
        "optical power",
    )


def probe_wifi_settings(
    session: CommandRunner,
    commands: Sequence[str] | None = None,
) -> CPEResult[WiFiSettings]:
    """Read WLAN SSID, passphrase and radio state."""
    return probe(
        session,
        WIFI_SETTINGS_COMMANDS if commands is None else commands,
        parse_wifi_settings,
        "WiFi settings",
    )


def probe_traffic_stats(
    session: CommandRunner,
    commands: Sequence[str] | None = None,
) -> CPEResult[TrafficStats]:
    """Read interface byte counters."""
    return probe(
        session,
        TRAFFIC_STATS_COMMANDS if commands is None else commands,
        parse_traffic_stats,
        "traffic stats",
    )
