#!/usr/bin/env python3
"""Poll the status of several CPEs concurrently with a bounded thread pool.

Each device gets its own session; the pool size caps how many telnet
sessions are open at once.

Usage::

    export CPE_USERNAME="root"
    export CPE_PASSWORD="your-password"
    python examples/poll_many.py 192.168.100.1 192.168.100.2 192.168.100.3
"""

from __future__ import annotations

import logging
import os
import sys
from concurrent.futures import ThreadPoolExecutor

from napalm_cpe.client.status import CPEStatus, collect_status
from napalm_cpe.model.connection import ConnectionDescriptor

_MAX_SESSIONS: int = 8


def _describe(status: CPEStatus) -> str:
    if not status.reachable:
        return f"{status.host}: unreachable ({status.connection.error})"
    optical = status.optical_power.data if status.optical_power.ok else "unknown"
    wifi = status.wifi_settings.data.ssid if status.wifi_settings.ok and status.wifi_settings.data else "unknown"
    traffic = status.traffic_stats.data if status.traffic_stats.ok else "unknown"
    return f"{status.host}: optical={optical} ssid={wifi} traffic={traffic}"


def main() -> None:
    hosts = sys.argv[1:]
    if not hosts:
        print("usage: poll_many.py HOST [HOST ...]", file=sys.stderr)
        sys.exit(1)
    username = os.environ.get("CPE_USERNAME", "admin")
    password = os.environ.get("CPE_PASSWORD", "admin")
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    descriptors = [
        ConnectionDescriptor(host=host, username=username, password=password) for host in hosts
    ]
    with ThreadPoolExecutor(max_workers=min(_MAX_SESSIONS, len(descriptors))) as pool:
        for status in pool.map(collect_status, descriptors):
            print(_describe(status))


if __name__ == "__main__":
    main()
