"""Parsers for router text output.

Modules:
    uptime: Uptime in seconds from banners, /proc/uptime or uptime(1) output
    stations: Interface SSIDs and wireless stations from iw dumps
    leases: DHCP leases from dnsmasq lease tables

All parsers are pure functions over text. Malformed input produces missing
values, never exceptions.
"""
from .uptime import parse_uptime
from .stations import parse_stations, parse_interfaces
from .leases import parse_leases

__all__ = ["parse_uptime", "parse_stations", "parse_interfaces", "parse_leases"]
