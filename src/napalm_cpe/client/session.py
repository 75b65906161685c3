"""Telnet session lifecycle for a single CPE device."""

from __future__ import annotations

import logging
from typing import Any

from napalm_cpe.client.errors import NOT_CONNECTED, CPEConnectionClosedError, CPEError
from napalm_cpe.client.telnet import CPETelnet
from napalm_cpe.model.config import ClientConfig
from napalm_cpe.model.connection import ConnectionDescriptor
from napalm_cpe.model.result import CPEResult

logger = logging.getLogger(__name__)

_CONNECTION_OK: str = "Connection successful"


class CPESession:
    """Manages one telnet session to one CPE device.

    Wraps :class:`.CPETelnet` and turns every outcome into a
    :class:`.CPEResult` instead of raising:

    - ``connect()`` negotiates login within the connect timeout.
    - ``execute()`` runs one command; failures keep the session connected
      unless the device closed the stream.
    - ``disconnect()`` is best-effort and never raises.

    A session is used by one caller at a time and is not pooled; create a
    new one per device interaction.

    Args:
        descriptor: Address and credentials of the device.
        config: Timeouts and prompt patterns (defaults to :class:`.ClientConfig`).
    """

    def __init__(
        self,
        descriptor: ConnectionDescriptor,
        config: ClientConfig | None = None,
    ) -> None:
        self._descriptor: ConnectionDescriptor = descriptor
        self._telnet: CPETelnet = CPETelnet(
            host=descriptor.host,
            port=descriptor.port,
            config=config,
        )
        self._connected: bool = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def connect(self) -> CPEResult[None]:
        """Open the telnet connection and log in.

        Returns:
            Success, or a failure carrying the transport error message
            (refused, timed out, or credentials rejected).
        """
        if self._connected:
            return CPEResult.success()
        try:
            self._telnet.open(self._descriptor.username, self._descriptor.password)
        except CPEError as exc:
            self._connected = False
            logger.error("Failed to connect to CPE at %s: %s", self._descriptor.host, exc)
            return CPEResult.failure(str(exc))
        self._connected = True
        logger.info(
            "Connected to CPE at %s:%d (%s)",
            self._descriptor.host,
            self._descriptor.port,
            self._descriptor.device_type,
        )
        return CPEResult.success()

    def execute(self, command: str) -> CPEResult[str]:
        """Run *command* and return its output.

        Performs no I/O and returns a ``"Not connected"`` failure if the
        session is not connected.

        Args:
            command: CLI command line, without line ending.

        Returns:
            Success carrying the text between the echoed command and the
            next shell prompt, or a failure carrying the error message.
        """
        if not self._connected:
            return CPEResult.failure(NOT_CONNECTED)
        try:
            output = self._telnet.exec(command)
        except CPEConnectionClosedError as exc:
            logger.warning("CPE at %s closed the session during %r", self._descriptor.host, command)
            self._connected = False
            self._close_transport()
            return CPEResult.failure(str(exc))
        except CPEError as exc:
            logger.warning("Command failed on CPE %s: %r (%s)", self._descriptor.host, command, exc)
            return CPEResult.failure(str(exc))
        return CPEResult.success(output)

    def disconnect(self) -> None:
        """Close the telnet connection (best-effort; never raises)."""
        self._close_transport()
        if self._connected:
            logger.info("Disconnected from CPE at %s", self._descriptor.host)
        self._connected = False

    def test_connection(self) -> CPEResult[dict[str, str]]:
        """Connect and immediately disconnect, to check the device is reachable.

        A session that is already connected is left connected.

        Returns:
            The connect failure, or success with ``{"message": ...}``.
        """
        if self._connected:
            return CPEResult.success({"message": _CONNECTION_OK})
        result = self.connect()
        if not result.ok:
            return CPEResult.failure(result.error or "connect failed")
        self.disconnect()
        return CPEResult.success({"message": _CONNECTION_OK})

    def _close_transport(self) -> None:
        try:
            self._telnet.close()
        except Exception:  # noqa: BLE001
            logger.debug("Telnet close failed (ignored)", exc_info=True)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def connected(self) -> bool:
        """True if the session is logged in to the device."""
        return self._connected

    @property
    def descriptor(self) -> ConnectionDescriptor:
        return self._descriptor

    def __enter__(self) -> CPESession:
        return self

    def __exit__(self, *args: Any) -> None:
        self.disconnect()
