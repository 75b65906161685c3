"""Client configuration: timeouts, prompt patterns and probe command tables."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from napalm_cpe.vendor.cli.commands import (
    OPTICAL_POWER_COMMANDS,
    TRAFFIC_STATS_COMMANDS,
    WIFI_SETTINGS_COMMANDS,
)
from napalm_cpe.vendor.cli.patterns import (
    LOGIN_FAILURE,
    LOGIN_PROMPT,
    PAGER_PROMPT,
    PASSWORD_PROMPT,
    SHELL_PROMPT,
)

# Fixed connect budget covering TCP connect and the login handshake.
DEFAULT_CONNECT_TIMEOUT_S: float = 10.0
DEFAULT_COMMAND_TIMEOUT_S: float = 30.0


@dataclass(frozen=True)
class ClientConfig:
    """Transport settings for a :class:`~napalm_cpe.client.session.CPESession`.

    Prompt fields are regular-expression sources compiled case-insensitively
    and matched against the tail of the receive buffer.

    Attributes:
        connect_timeout_s: Budget for TCP connect plus login negotiation.
        command_timeout_s: Budget for one command to reach the shell prompt.
        login_prompt: Pattern of the username prompt.
        password_prompt: Pattern of the password prompt.
        shell_prompt: Pattern of the command prompt.
        login_failure: Pattern of a rejected-login message.
        pager_prompt: Pattern of a pagination prompt, answered with a space.
            ``None`` disables pager handling.
        line_ending: Appended to every line written to the device.
        encoding: Stream encoding passed to telnetlib3.
        negotiation_wait_s: How long telnetlib3 waits for option
            negotiation before handing over the streams.
        resync_quiet_s: After a command timed out, how long the reader must
            stay silent before the next command is sent.
    """

    connect_timeout_s: float = DEFAULT_CONNECT_TIMEOUT_S
    command_timeout_s: float = DEFAULT_COMMAND_TIMEOUT_S
    login_prompt: str = LOGIN_PROMPT
    password_prompt: str = PASSWORD_PROMPT
    shell_prompt: str = SHELL_PROMPT
    login_failure: str = LOGIN_FAILURE
    pager_prompt: str | None = PAGER_PROMPT
    line_ending: str = "\n"
    encoding: str = "utf8"
    negotiation_wait_s: float = 0.5
    resync_quiet_s: float = 0.5

    def compiled(self, name: str) -> re.Pattern[str]:
        """Compile the prompt pattern stored in attribute *name*."""
        return re.compile(getattr(self, name), re.IGNORECASE)

    @classmethod
    def from_optional_args(cls, optional_args: dict[str, Any]) -> ClientConfig:
        """Build a config from NAPALM-style ``optional_args``.

        Recognised keys: ``connect_timeout``, ``command_timeout``,
        ``login_prompt``, ``password_prompt``, ``shell_prompt``,
        ``login_failure``, ``pager_prompt``, ``line_ending``, ``encoding``.
        Unknown keys are ignored.
        """
        kwargs: dict[str, Any] = {}
        if "connect_timeout" in optional_args:
            kwargs["connect_timeout_s"] = float(optional_args["connect_timeout"])
        if "command_timeout" in optional_args:
            kwargs["command_timeout_s"] = float(optional_args["command_timeout"])
        for key in (
            "login_prompt",
            "password_prompt",
            "shell_prompt",
            "login_failure",
            "pager_prompt",
            "line_ending",
            "encoding",
        ):
            if key in optional_args:
                kwargs[key] = optional_args[key]
        return cls(**kwargs)


@dataclass(frozen=True)
class ProbeCommands:
    """Ordered candidate commands for each probed capability.

    Defaults come from :mod:`napalm_cpe.vendor.cli.commands`.
    """

    optical_power: tuple[str, ...] = OPTICAL_POWER_COMMANDS
    wifi_settings: tuple[str, ...] = WIFI_SETTINGS_COMMANDS
    traffic_stats: tuple[str, ...] = TRAFFIC_STATS_COMMANDS

    @classmethod
    def from_optional_args(cls, optional_args: dict[str, Any]) -> ProbeCommands:
        """Build command tables from ``optical_commands`` / ``wifi_commands`` /
        ``traffic_commands`` keys, keeping defaults for missing ones."""
        defaults = cls()
        return cls(
            optical_power=tuple(optional_args.get("optical_commands", defaults.optical_power)),
            wifi_settings=tuple(optional_args.get("wifi_commands", defaults.wifi_settings)),
            traffic_stats=tuple(optional_args.get("traffic_commands", defaults.traffic_stats)),
        )
