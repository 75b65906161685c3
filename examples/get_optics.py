#!/usr/bin/env python3
"""Print the PON receive/transmit power of an ONT and flag weak signal.

Reads optics through the NAPALM driver (``get_optics``).  A level the ONT
did not report comes back as NaN and is shown as "unknown".

Usage::

    export CPE_USERNAME="root"
    export CPE_PASSWORD="your-password"
    python examples/get_optics.py 192.168.100.1 [--port 23] [--type gpon]

Exits with 2 when the receive level is below the GPON class B+ sensitivity
floor, 1 on connection or read errors.
"""

from __future__ import annotations

import argparse
import math
import os
import sys

from napalm.base.exceptions import ConnectionException

from napalm_cpe.client.errors import CPEError
from napalm_cpe.driver import CPEDriver

# Class B+ ONU receiver sensitivity.
_RX_FLOOR_DBM: float = -27.0


def _fmt(dbm: float) -> str:
    return "unknown" if math.isnan(dbm) else f"{dbm:.2f} dBm"


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("host")
    parser.add_argument("--port", type=int, default=23)
    parser.add_argument("--type", dest="device_type", default="gpon",
                        choices=("gpon", "epon", "mikrotik"))
    args = parser.parse_args()

    driver = CPEDriver(
        hostname=args.host,
        username=os.environ.get("CPE_USERNAME", "admin"),
        password=os.environ.get("CPE_PASSWORD", "admin"),
        optional_args={"port": args.port, "device_type": args.device_type},
    )
    try:
        driver.open()
        optics = driver.get_optics()
    except (ConnectionException, CPEError) as exc:
        print(f"{args.host}: {exc}", file=sys.stderr)
        return 1
    finally:
        driver.close()

    state = optics["pon"]["physical_channels"]["channel"][0]["state"]
    rx = state["input_power"]["instant"]
    tx = state["output_power"]["instant"]
    print(f"{args.host}  rx={_fmt(rx)}  tx={_fmt(tx)}")
    if not math.isnan(rx) and rx < _RX_FLOOR_DBM:
        print(f"{args.host}: receive level below {_RX_FLOOR_DBM} dBm", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
