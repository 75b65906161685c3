"""Unit tests for napalm_cpe.client.probe_ops.

Sessions are replaced by a ``MagicMock`` whose ``execute`` answers from a
per-command table, so no device is needed.
"""

from __future__ import annotations

import pathlib
from unittest.mock import MagicMock, call

import pytest

from napalm_cpe.client.probe_ops import (
    probe,
    probe_optical_power,
    probe_traffic_stats,
    probe_wifi_settings,
)
from napalm_cpe.model.optical import OpticalPower
from napalm_cpe.model.result import CPEResult
from napalm_cpe.model.traffic import TrafficStats
from napalm_cpe.model.wifi import WiFiSettings
from napalm_cpe.parser.optical import parse_optical_power
from napalm_cpe.vendor.cli.commands import (
    OPTICAL_POWER_COMMANDS,
    TRAFFIC_STATS_COMMANDS,
    WIFI_SETTINGS_COMMANDS,
)

FIXTURES = pathlib.Path(__file__).parent.parent / "fixtures"

_UNKNOWN = CPEResult.success("% Unknown command")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _session(responses: dict[str, CPEResult[str]]) -> MagicMock:
    """Return a mock session answering ``execute(cmd)`` from *responses*."""
    session = MagicMock()
    session.execute.side_effect = lambda cmd: responses.get(
        cmd, CPEResult.failure("unsupported command")
    )
    return session


def _commands(session: MagicMock) -> list[str]:
    return [c.args[0] for c in session.execute.call_args_list]


# ---------------------------------------------------------------------------
# Generic probe loop
# ---------------------------------------------------------------------------

def test_first_usable_candidate_wins_and_stops() -> None:
    session = _session(
        {
            "cmdA": CPEResult.failure("timed out"),
            "cmdB": CPEResult.success("no markers here"),
            "cmdC": CPEResult.success("rx power: -14.5 dBm"),
            "cmdD": CPEResult.success("rx power: -3.0 dBm"),
        }
    )
    result = probe(session, ["cmdA", "cmdB", "cmdC", "cmdD"], parse_optical_power, "optical power")
    assert result.ok is True
    assert result.data == OpticalPower(rx_power_dbm=-14.5)
    assert _commands(session) == ["cmdA", "cmdB", "cmdC"]
    assert session.execute.call_count == 3


def test_exhaustion_returns_capability_failure() -> None:
    session = _session({"cmdA": CPEResult.failure("boom"), "cmdB": _UNKNOWN})
    result = probe(session, ["cmdA", "cmdB"], parse_optical_power, "optical power")
    assert result.ok is False
    assert result.error == "Could not read optical power"
    assert result.data is None


def test_empty_output_is_skipped_without_parsing() -> None:
    parser = MagicMock(return_value=OpticalPower(rx_power_dbm=-1.0))
    session = _session({"cmdA": CPEResult.success(""), "cmdB": CPEResult.success("x")})
    result = probe(session, ["cmdA", "cmdB"], parser, "optical power")
    assert result.ok is True
    parser.assert_called_once_with("x")


def test_no_candidates_fails_without_io() -> None:
    session = _session({})
    result = probe(session, [], parse_optical_power, "optical power")
    assert result.error == "Could not read optical power"
    session.execute.assert_not_called()


# ---------------------------------------------------------------------------
# Optical power
# ---------------------------------------------------------------------------

def test_optical_uses_default_candidates_in_order() -> None:
    session = _session({})
    result = probe_optical_power(session)
    assert result.ok is False
    assert _commands(session) == list(OPTICAL_POWER_COMMANDS)
    assert session.execute.call_args_list[0] == call("display ont optical-info")


def test_optical_huawei_fixture_on_first_candidate() -> None:
    text = (FIXTURES / "huawei_optical_info.txt").read_text()
    session = _session({"display ont optical-info": CPEResult.success(text)})
    result = probe_optical_power(session)
    assert result.ok is True
    assert result.data is not None
    assert result.data.rx_power_dbm == pytest.approx(-17.32)
    assert session.execute.call_count == 1


def test_optical_falls_through_to_generic_command() -> None:
    session = _session(
        {
            "display ont optical-info": _UNKNOWN,
            "show interface gpon-onu": _UNKNOWN,
            "pon show optic": CPEResult.failure("timed out"),
            "show optical": CPEResult.success("Tx power: 2.0 dBm"),
        }
    )
    result = probe_optical_power(session)
    assert result.ok is True
    assert result.data == OpticalPower(tx_power_dbm=2.0)


def test_optical_custom_commands() -> None:
    session = _session({"show pon": CPEResult.success("rx power: -9 dBm")})
    result = probe_optical_power(session, commands=("show pon",))
    assert result.ok is True
    assert _commands(session) == ["show pon"]


# ---------------------------------------------------------------------------
# WiFi
# ---------------------------------------------------------------------------

def test_wifi_requires_ssid() -> None:
    session = _session(
        {
            "show wlan": CPEResult.success("Password: abc\nStatus: disabled"),
            "display wlan ssid": CPEResult.success("SSID: Home\nKey: abc"),
        }
    )
    result = probe_wifi_settings(session)
    assert result.ok is True
    assert result.data == WiFiSettings(ssid="Home", password="abc", enabled=True, state="unknown")
    assert _commands(session) == ["show wlan", "display wlan ssid"]


def test_wifi_exhaustion_message() -> None:
    session = _session({})
    result = probe_wifi_settings(session)
    assert result.error == "Could not read WiFi settings"
    assert _commands(session) == list(WIFI_SETTINGS_COMMANDS)


# ---------------------------------------------------------------------------
# Traffic
# ---------------------------------------------------------------------------

def test_traffic_rejects_zero_counters() -> None:
    session = _session(
        {
            "show interface statistics": CPEResult.success("RX 0 bytes TX 0 bytes"),
            "display traffic": CPEResult.success("RX 1,234,567 bytes / TX 890 bytes"),
        }
    )
    result = probe_traffic_stats(session)
    assert result.ok is True
    assert result.data == TrafficStats(bytes_in=1234567, bytes_out=890)


def test_traffic_exhaustion_message() -> None:
    session = _session({})
    result = probe_traffic_stats(session)
    assert result.error == "Could not read traffic stats"
    assert _commands(session) == list(TRAFFIC_STATS_COMMANDS)
