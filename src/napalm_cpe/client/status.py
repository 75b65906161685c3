"""One-shot status snapshot of a CPE: connect, probe everything, disconnect."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from napalm_cpe.client.probe_ops import (
    probe_optical_power,
    probe_traffic_stats,
    probe_wifi_settings,
)
from napalm_cpe.client.session import CPESession
from napalm_cpe.model.config import ClientConfig, ProbeCommands
from napalm_cpe.model.connection import ConnectionDescriptor
from napalm_cpe.model.optical import OpticalPower
from napalm_cpe.model.result import CPEResult
from napalm_cpe.model.traffic import TrafficStats
from napalm_cpe.model.wifi import WiFiSettings

logger = logging.getLogger(__name__)


@dataclass
class CPEStatus:
    """Outcome of :func:`collect_status`.

    A probe that failed means "status unknown" for that capability; it
    does not make the other readings invalid.

    Attributes:
        host: Device address the snapshot was taken from.
        connection: Result of the connect step.
        optical_power: Optical probe result (failure if not connected).
        wifi_settings: WiFi probe result (failure if not connected).
        traffic_stats: Traffic probe result (failure if not connected).
    """

    host: str
    connection: CPEResult[None]
    optical_power: CPEResult[OpticalPower]
    wifi_settings: CPEResult[WiFiSettings]
    traffic_stats: CPEResult[TrafficStats]

    @property
    def reachable(self) -> bool:
        return self.connection.ok


def collect_status(
    descriptor: ConnectionDescriptor,
    config: ClientConfig | None = None,
    commands: ProbeCommands | None = None,
) -> CPEStatus:
    """Read optical power, WiFi settings and traffic counters in one session.

    Opens a fresh :class:`.CPESession`, runs the three probes sequentially
    and always disconnects.  Never raises for device-side problems.

    Args:
        descriptor: Address and credentials of the device.
        config: Session configuration.
        commands: Candidate command tables (defaults to :class:`.ProbeCommands`).

    Returns:
        A :class:`CPEStatus` with one result per capability.
    """
    commands = commands or ProbeCommands()
    with CPESession(descriptor, config) as session:
        connection = session.connect()
        if not connection.ok:
            error = f"Not probed: {connection.error}"
            return CPEStatus(
                host=descriptor.host,
                connection=connection,
                optical_power=CPEResult.failure(error),
                wifi_settings=CPEResult.failure(error),
                traffic_stats=CPEResult.failure(error),
            )
        status = CPEStatus(
            host=descriptor.host,
            connection=connection,
            optical_power=probe_optical_power(session, commands.optical_power),
            wifi_settings=probe_wifi_settings(session, commands.wifi_settings),
            traffic_stats=probe_traffic_stats(session, commands.traffic_stats),
        )
    logger.info(
        "Status of %s: optical=%s wifi=%s traffic=%s",
        descriptor.host,
        "ok" if status.optical_power.ok else "unknown",
        "ok" if status.wifi_settings.ok else "unknown",
        "ok" if status.traffic_stats.ok else "unknown",
    )
    return status
