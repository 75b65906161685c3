"""CPE NAPALM driver — top-level NetworkDriver implementation."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from napalm.base.base import NetworkDriver
from napalm.base.exceptions import CommandErrorException, ConnectionException

from napalm_cpe.client.errors import CPEError
from napalm_cpe.client.probe_ops import (
    probe_optical_power,
    probe_traffic_stats,
    probe_wifi_settings,
)
from napalm_cpe.client.session import CPESession
from napalm_cpe.model.config import ClientConfig, ProbeCommands
from napalm_cpe.model.connection import ConnectionDescriptor

logger = logging.getLogger(__name__)

# Interface key used in getters: CPEs expose a single uplink.
_PON_INTERFACE: str = "pon"

_UNKNOWN_POWER: float = float("nan")


class CPEDriver(NetworkDriver):  # type: ignore[misc]
    """NAPALM driver for telnet-managed ONTs and CPE routers.

    Talks to the device over an interactive telnet session and scrapes
    free-form CLI output; the command dialect is discovered per getter by
    probing vendor-specific commands in order.

    Args:
        hostname: IP address or hostname of the device.
        username: Login username.
        password: Login password.
        timeout: Per-command timeout in seconds.
        optional_args: Optional driver configuration overrides.
            Supported keys:

            - ``port`` (int): Telnet port (default 23).
            - ``device_type`` (str): ``"gpon"`` (default), ``"epon"`` or ``"mikrotik"``.
            - ``connect_timeout`` (float): Login budget in seconds (default 10).
            - ``command_timeout`` (float): Overrides *timeout*.
            - ``login_prompt`` / ``password_prompt`` / ``shell_prompt``
              (str): Prompt regular expressions.
            - ``optical_commands`` / ``wifi_commands`` / ``traffic_commands``
              (list[str]): Candidate command tables.
    """

    def __init__(
        self,
        hostname: str,
        username: str,
        password: str,
        timeout: int = 60,
        optional_args: dict[str, Any] | None = None,
    ) -> None:
        self.hostname = hostname
        self.username = username
        self.password = password
        self.timeout = timeout
        self.optional_args: dict[str, Any] = optional_args or {}
        self._session: CPESession | None = None

        self._descriptor = ConnectionDescriptor(
            host=hostname,
            port=int(self.optional_args.get("port", 23)),
            username=username,
            password=password,
            device_type=self.optional_args.get("device_type", "gpon"),
        )
        self._config = ClientConfig.from_optional_args(
            {"command_timeout": timeout, **self.optional_args}
        )
        self._commands = ProbeCommands.from_optional_args(self.optional_args)

        logger.debug(
            "CPEDriver initialised: host=%s port=%d user=%s type=%s",
            self.hostname,
            self._descriptor.port,
            self.username,
            self._descriptor.device_type,
        )

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Open the telnet session and log in.

        Raises:
            ConnectionException: If the device is unreachable or rejects
                the credentials.
        """
        logger.info("Opening connection to %s", self.hostname)
        session = CPESession(self._descriptor, self._config)
        result = session.connect()
        if not result.ok:
            raise ConnectionException(f"Cannot connect to {self.hostname}: {result.error}")
        self._session = session

    def close(self) -> None:
        """Close the telnet session (best-effort; never raises)."""
        if self._session is not None:
            logger.info("Closing connection to %s", self.hostname)
            self._session.disconnect()
            self._session = None

    def is_alive(self) -> dict[str, bool]:
        """Return liveness status of the telnet session."""
        return {"is_alive": self._session is not None and self._session.connected}

    # ------------------------------------------------------------------
    # NAPALM getters
    # ------------------------------------------------------------------

    def cli(self, commands: list[str], encoding: str = "text") -> dict[str, str]:
        """Run raw CLI *commands* and return their output keyed by command.

        Raises:
            CommandErrorException: If a command fails at transport level.
        """
        if encoding != "text":
            raise NotImplementedError(f"{encoding} is not a supported encoding")
        session = self._require_session()
        outputs: dict[str, str] = {}
        for command in commands:
            result = session.execute(command)
            if not result.ok:
                raise CommandErrorException(f"{command!r} failed: {result.error}")
            outputs[command] = result.data or ""
        return outputs

    def get_optics(self) -> dict[str, Any]:
        """Return PON optical power conforming to the NAPALM ``get_optics`` schema.

        Only ``instant`` values are read; ``avg``/``min``/``max`` are ``0.0``.
        A power level the device did not report is ``nan``.

        Raises:
            CPEError: If the session is not open or no candidate command
                produced a reading.
        """
        reading = probe_optical_power(
            self._require_session(), self._commands.optical_power
        ).unwrap()
        rx = reading.rx_power_dbm if reading.rx_power_dbm is not None else _UNKNOWN_POWER
        tx = reading.tx_power_dbm if reading.tx_power_dbm is not None else _UNKNOWN_POWER
        return {
            _PON_INTERFACE: {
                "physical_channels": {
                    "channel": [
                        {
                            "index": 0,
                            "state": {
                                "input_power": _power_state(rx),
                                "output_power": _power_state(tx),
                                "laser_bias_current": _power_state(0.0),
                            },
                        }
                    ]
                }
            }
        }

    def get_interfaces_counters(self) -> dict[str, Any]:
        """Return uplink counters conforming to the NAPALM schema.

        Only octet and unicast packet counters are read; the others are
        ``-1`` (not supported).

        Raises:
            CPEError: If the session is not open or no candidate command
                produced counters.
        """
        stats = probe_traffic_stats(
            self._require_session(), self._commands.traffic_stats
        ).unwrap()
        return {
            _PON_INTERFACE: {
                "rx_octets": stats.bytes_in,
                "tx_octets": stats.bytes_out,
                "rx_unicast_packets": stats.packets_in,
                "tx_unicast_packets": stats.packets_out,
                "rx_errors": -1,
                "tx_errors": -1,
                "rx_discards": -1,
                "tx_discards": -1,
                "rx_multicast_packets": -1,
                "tx_multicast_packets": -1,
                "rx_broadcast_packets": -1,
                "tx_broadcast_packets": -1,
            }
        }

    def get_wifi_settings(self) -> dict[str, Any]:
        """Return WLAN settings as a plain dict (not part of the NAPALM API).

        Returns:
            ``{"ssid": str, "password": str, "enabled": bool, "state": str}``

        Raises:
            CPEError: If the session is not open or no SSID could be read.
        """
        settings = probe_wifi_settings(
            self._require_session(), self._commands.wifi_settings
        ).unwrap()
        return dataclasses.asdict(settings)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_session(self) -> CPESession:
        """Return the active session or raise :exc:`.CPEError`."""
        if self._session is None:
            raise CPEError("Session not open; call open() first.")
        return self._session


def _power_state(instant: float) -> dict[str, float]:
    return {"instant": instant, "avg": 0.0, "min": 0.0, "max": 0.0}
