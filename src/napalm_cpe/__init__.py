"""NAPALM driver and telnet client for EPON/GPON ONTs and CPE routers."""

from __future__ import annotations

from napalm_cpe.driver import CPEDriver

__all__ = ["CPEDriver"]
