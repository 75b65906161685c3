"""Low-level telnet transport for CPE command-line sessions."""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Awaitable, Sequence
from typing import Any, TypeVar

import telnetlib3

from napalm_cpe.client.errors import (
    CPEAuthError,
    CPEConnectionClosedError,
    CPEConnectionError,
    CPEError,
    CPETimeoutError,
)
from napalm_cpe.model.config import ClientConfig
from napalm_cpe.parser.text import clean_command_output, echoes_command

logger = logging.getLogger(__name__)

T = TypeVar("T")

_READ_CHUNK: int = 1024

# Indices into the pattern tuple used during login negotiation.
_FAILURE, _LOGIN, _PASSWORD, _SHELL = range(4)


class CPETelnet:
    """Blocking wrapper around a :mod:`telnetlib3` client connection.

    Each instance owns a private asyncio event loop, so independent
    instances can be driven from independent threads.  Handles the
    login/password prompt handshake, prompt-terminated command exchange,
    pager prompts, and maps transport errors to :mod:`.errors` types.

    Args:
        host: Device IP address or hostname.
        port: Telnet port.
        config: Timeouts and prompt patterns.
    """

    def __init__(
        self,
        host: str,
        port: int = 23,
        config: ClientConfig | None = None,
    ) -> None:
        self.host: str = host
        self.port: int = port
        self.config: ClientConfig = config or ClientConfig()
        self._login_re = self.config.compiled("login_prompt")
        self._password_re = self.config.compiled("password_prompt")
        self._shell_re = self.config.compiled("shell_prompt")
        self._failure_re = self.config.compiled("login_failure")
        self._pager_re = (
            self.config.compiled("pager_prompt") if self.config.pager_prompt else None
        )
        self._loop: asyncio.AbstractEventLoop | None = None
        self._reader: Any = None
        self._writer: Any = None
        # Set when a command timed out and its reply may still be in flight.
        self._stale: bool = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def open(self, username: str, password: str) -> str:
        """Connect and log in, returning the text received during login.

        The whole exchange is bounded by ``config.connect_timeout_s``.

        Raises:
            CPEConnectionError: If the TCP connection cannot be established
                or is dropped during login.
            CPEAuthError: If the device rejects the credentials.
            CPETimeoutError: If the shell prompt is not reached in time.
        """
        if self.is_open:
            self.close()
        self._loop = asyncio.new_event_loop()
        self._stale = False
        try:
            return self._run(
                self._open(username, password),
                self.config.connect_timeout_s,
                "login",
            )
        except CPEError:
            self.close()
            raise

    def exec(self, command: str) -> str:
        """Send *command* and return its output without echo or prompt.

        After a timed-out command the late reply is drained first, and any
        prompt-terminated output that does not start with the echo of
        *command* is discarded, so a reply is never handed to the wrong
        command.  This relies on the device echoing input.

        Raises:
            CPEError: If the transport is not open.
            CPETimeoutError: If the prompt does not reappear within
                ``config.command_timeout_s``.
            CPEConnectionClosedError: If the device closes the stream.
        """
        if not self.is_open:
            raise CPEError(f"Telnet transport to {self.host} is not open")
        try:
            raw = self._run(
                self._exec(command),
                self.config.command_timeout_s,
                f"output of {command!r}",
            )
        except CPETimeoutError:
            self._stale = True
            raise
        return clean_command_output(raw, command, self._shell_re)

    def close(self) -> None:
        """Close the telnet stream and the private event loop."""
        writer, loop = self._writer, self._loop
        self._reader = None
        self._writer = None
        self._loop = None
        try:
            if writer is not None:
                writer.close()
        finally:
            if loop is not None and not loop.is_closed():
                _shutdown_loop(loop)

    @property
    def is_open(self) -> bool:
        """True if a telnet stream is currently open."""
        return self._writer is not None and self._loop is not None

    def __enter__(self) -> CPETelnet:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run(self, coro: Awaitable[T], timeout_s: float, operation: str) -> T:
        """Drive *coro* on the private loop, mapping failures to CPE errors."""
        loop = self._loop
        if loop is None:
            raise CPEError(f"Telnet transport to {self.host} is not open")
        try:
            return loop.run_until_complete(asyncio.wait_for(coro, timeout_s))
        except asyncio.TimeoutError as exc:
            raise CPETimeoutError(self.host, operation, timeout_s) from exc
        except OSError as exc:
            raise CPEConnectionError(self.host, self.port, exc) from exc

    async def _open(self, username: str, password: str) -> str:
        self._reader, self._writer = await telnetlib3.open_connection(
            self.host,
            self.port,
            encoding=self.config.encoding,
            connect_minwait=self.config.negotiation_wait_s,
        )
        logger.debug("TCP connection to %s:%d established", self.host, self.port)
        return await self._login(username, password)

    async def _login(self, username: str, password: str) -> str:
        """Answer login/password prompts until the shell prompt shows up."""
        patterns = (self._failure_re, self._login_re, self._password_re, self._shell_re)
        transcript = ""
        sent_username = False
        sent_password = False
        while True:
            which, buf = await self._read_until(patterns)
            transcript += buf
            if which == _FAILURE:
                raise CPEAuthError(f"Login rejected by {self.host}")
            if which == _LOGIN:
                if sent_username or sent_password:
                    raise CPEAuthError(f"Login rejected by {self.host}: prompted again")
                self._write_line(username)
                sent_username = True
            elif which == _PASSWORD:
                if sent_password:
                    raise CPEAuthError(f"Login rejected by {self.host}: prompted again")
                self._write_line(password)
                sent_password = True
            else:
                return transcript

    async def _exec(self, command: str) -> str:
        resync = self._stale
        if resync:
            await self._drain()
        self._write_line(command)
        while True:
            _, raw = await self._read_until((self._shell_re,))
            if not resync or echoes_command(raw, command):
                self._stale = False
                return raw
            logger.debug("Discarding late output on %s before %r", self.host, command)

    async def _drain(self) -> None:
        """Consume output left over from a timed-out command.

        Stops at the shell prompt or once the reader has been quiet for
        ``config.resync_quiet_s``.
        """
        buf = ""
        while True:
            try:
                chunk = await asyncio.wait_for(
                    self._reader.read(_READ_CHUNK), self.config.resync_quiet_s
                )
            except asyncio.TimeoutError:
                break
            if not chunk:
                raise CPEConnectionClosedError(self.host, self.port, partial=buf)
            buf += chunk
            if self._shell_re.search(buf):
                break
        if buf:
            logger.debug("Drained %d stale bytes from %s", len(buf), self.host)

    async def _read_until(self, patterns: Sequence[re.Pattern[str]]) -> tuple[int, str]:
        """Read until one of *patterns* matches the buffer; return its index.

        Pager prompts are answered with a space and removed from the buffer.
        """
        buf = ""
        while True:
            chunk = await self._reader.read(_READ_CHUNK)
            if not chunk:
                raise CPEConnectionClosedError(self.host, self.port, partial=buf)
            buf += chunk
            if self._pager_re is not None and self._pager_re.search(buf):
                buf = self._pager_re.sub("", buf)
                self._writer.write(" ")
                continue
            for index, pattern in enumerate(patterns):
                if pattern.search(buf):
                    return index, buf

    def _write_line(self, line: str) -> None:
        self._writer.write(line + self.config.line_ending)


def _shutdown_loop(loop: asyncio.AbstractEventLoop) -> None:
    """Cancel whatever telnetlib3 left scheduled and close *loop*."""
    try:
        loop.run_until_complete(asyncio.sleep(0))
        pending = asyncio.all_tasks(loop)
        for task in pending:
            task.cancel()
        if pending:
            loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
    finally:
        loop.close()
