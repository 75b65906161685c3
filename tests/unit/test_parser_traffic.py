"""Unit tests for napalm_cpe.parser.traffic and napalm_cpe.model.traffic."""

from __future__ import annotations

import pathlib

import pytest

from napalm_cpe.model.traffic import TrafficStats
from napalm_cpe.parser.traffic import _to_count, parse_traffic_stats

FIXTURES = pathlib.Path(__file__).parent.parent / "fixtures"


def test_fixture_interface_statistics() -> None:
    text = (FIXTURES / "interface_statistics.txt").read_text()
    stats = parse_traffic_stats(text)
    assert stats.bytes_in == 1234567
    assert stats.bytes_out == 890123


def test_fixture_packets_are_not_extracted() -> None:
    text = (FIXTURES / "interface_statistics.txt").read_text()
    stats = parse_traffic_stats(text)
    assert stats.packets_in == 0
    assert stats.packets_out == 0


def test_fixture_unknown_command() -> None:
    text = (FIXTURES / "unknown_command.txt").read_text()
    assert parse_traffic_stats(text) == TrafficStats()


def test_thousands_separators_stripped() -> None:
    stats = parse_traffic_stats("RX 1,234,567 bytes / TX 890 bytes")
    assert stats.bytes_in == 1234567
    assert stats.bytes_out == 890


@pytest.mark.parametrize(
    "text, bytes_in, bytes_out",
    [
        ("Receive: 100 bytes\nTransmit: 200 bytes", 100, 200),
        ("in 5 bytes, out 7 bytes", 5, 7),
        ("RX bytes:1234  TX bytes:5678", 1234, 5678),
        ("TX 42 bytes", 0, 42),
    ],
)
def test_byte_counter_variants(text: str, bytes_in: int, bytes_out: int) -> None:
    stats = parse_traffic_stats(text)
    assert (stats.bytes_in, stats.bytes_out) == (bytes_in, bytes_out)


def test_zero_counters_have_no_data() -> None:
    stats = parse_traffic_stats("RX 0 bytes TX 0 bytes")
    assert stats.bytes_in == 0
    assert stats.has_data is False


def test_to_count() -> None:
    assert _to_count("1,000") == 1000
    assert _to_count(None) == 0
    assert _to_count(",,") == 0
