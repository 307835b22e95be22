"""
Aggregator - Merges parsed router output and DHCP leases into one report.

Aggregation Rules:
    - Routers with a failed or empty fetch get an unavailable uptime and
      contribute no networks or clients
    - SSIDs are normalized (lowercase, spaces -> underscores) before use as keys
    - Every declared SSID is reported, even with zero clients
    - Stations on an interface without a known SSID go to "unknown_ssid"
    - Display name is the lease hostname, else the lease IP, else the MAC
    - Groups are ordered by SSID; clients keep their encounter order
    - total_clients counts every station entry (no MAC deduplication)
"""
import logging
from typing import Dict, List, Optional

from openwrtstats.models import (
    RouterConfig,
    FetchResults,
    RawFetchResult,
    LeaseRecord,
    ClientStationRecord,
    ClientEntry,
    AggregateReport,
    UNKNOWN_SSID,
)
from openwrtstats.parsers import parse_uptime, parse_stations, parse_leases

logger = logging.getLogger(__name__)


def normalize_network_name(name: str) -> str:
    """Normalize an SSID for use as a grouping key."""
    return name.lower().replace(" ", "_")


def resolve_display_name(mac_address: str, leases: Dict[str, LeaseRecord]) -> str:
    """Return the best human readable name for a station."""
    lease = leases.get(mac_address.lower())
    if lease is None:
        return mac_address
    return lease.hostname or lease.ip_address or mac_address


def _usable_body(result: Optional[RawFetchResult]) -> Optional[str]:
    if result is None or result.failed or not result.body or not result.body.strip():
        return None
    return result.body


def _lease_table(results: FetchResults) -> Dict[str, LeaseRecord]:
    body = _usable_body(results.leases)
    if body is None:
        if results.leases is not None:
            logger.info("Lease source unavailable - falling back to MAC addresses for hostnames")
        return {}
    try:
        return parse_leases(body)
    except Exception as e:
        logger.error(f"Unable to parse lease table: {e}")
        return {}


def build_report(routers: List[RouterConfig], results: FetchResults) -> AggregateReport:
    """Build the aggregate report for one pass.

    Args:
        routers: Routers in configuration order
        results: Output of FetchCoordinator.fetch_all() for those routers

    Returns:
        AggregateReport with uptimes in configuration order and networks sorted
        by normalized SSID
    """
    leases = _lease_table(results)
    uptimes: Dict[str, Optional[int]] = {}
    known_networks = set()
    groups: Dict[str, List[ClientEntry]] = {}

    for router in routers:
        body = _usable_body(results.devices.get(router.id))
        if body is None:
            logger.debug(f"Router {router.id}: no data, marking unavailable")
            uptimes[router.id] = None
            continue

        try:
            uptime = parse_uptime(body)
            networks, stations = parse_stations(body)
        except Exception as e:
            logger.error(f"Router {router.id}: unable to parse status output: {e}")
            uptimes[router.id] = None
            continue

        uptimes[router.id] = uptime
        if uptime is None:
            logger.debug(f"Router {router.id}: no uptime found in status output")

        for ssid in networks.values():
            known_networks.add(normalize_network_name(ssid))

        for station in stations:
            network = normalize_network_name(networks.get(station.interface_name, UNKNOWN_SSID))
            groups.setdefault(network, []).append(_client_entry(station, leases))

        logger.debug(f"Router {router.id}: uptime={uptime} networks={len(networks)} stations={len(stations)}")

    ordered = sorted(known_networks | set(groups))
    report = AggregateReport(
        device_uptimes=uptimes,
        networks_client_counts={name: len(groups.get(name, [])) for name in ordered},
        total_clients=sum(len(entries) for entries in groups.values()),
        clients_by_network={name: groups.get(name, []) for name in ordered},
    )
    return report


def _client_entry(station: ClientStationRecord, leases: Dict[str, LeaseRecord]) -> ClientEntry:
    return ClientEntry(
        display_name=resolve_display_name(station.mac_address, leases),
        rx_bytes=station.rx_bytes,
        tx_bytes=station.tx_bytes,
        connected_seconds=station.connected_seconds,
    )
