"""
Core Business Logic Module

This package holds the aggregation pass that sits between the HTTP layer and
the routers.

Module Organization:

    fetcher.py - Fetch Coordinator
        • Purpose: Fetch every router info_url and the lease source
        • Concurrency: asyncio.gather over executor-run requests calls
        • Failure model: per-source failure record, never raises

    aggregator.py - Aggregator
        • Purpose: Parse fetched text and merge it with the lease table
        • Output: AggregateReport (uptimes, per-SSID counts, client lists)

    response.py - Response Builder
        • Purpose: Serialize AggregateReport to the dashboard JSON format

Data Flow:

    load_inventory() → FetchCoordinator.fetch_all() → FetchResults
                                                  ↓
                          build_report() → AggregateReport
                                                  ↓
                          to_wire() / to_json() → JSON response

Every pass is independent: no cache, no singleton, no state kept between
requests.
"""
from .fetcher import FetchCoordinator, select_lease_url, DEFAULT_TIMEOUT, LEASE_SOURCE_ID
from .aggregator import build_report, normalize_network_name, resolve_display_name
from .response import to_wire, to_json

__all__ = [
    "FetchCoordinator",
    "select_lease_url",
    "DEFAULT_TIMEOUT",
    "LEASE_SOURCE_ID",
    "build_report",
    "normalize_network_name",
    "resolve_display_name",
    "to_wire",
    "to_json",
]
