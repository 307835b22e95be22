"""
Data Models for openwrtstats

Pydantic models used as data transfer objects between the fetch coordinator,
the parsers, the aggregator and the response builder.

Model Hierarchy:

    RouterConfig (Configuration)
        └── One router to poll: id, info_url, optional dhcp_url

    RouterInventory (Configuration)
        └── Routers to poll plus the lease endpoint for the pass

    RawFetchResult / FetchResults (Transport)
        └── Body text or failure per source for a single pass

    NetworkInterfaceRecord, ClientStationRecord, LeaseRecord (Parsed)
        └── Structured records extracted from router text output

    AggregateReport (Combined)
        └── Uptimes, per-SSID client counts and client lists

Lifecycle:

    Every instance is created fresh for one aggregation pass and discarded
    once the response is built. RouterConfig and RawFetchResult are frozen.
"""
from .router import RouterConfig, RouterInventory, RawFetchResult, FetchResults
from .report import (
    NetworkInterfaceRecord,
    ClientStationRecord,
    LeaseRecord,
    ClientEntry,
    AggregateReport,
    UNAVAILABLE,
    UNKNOWN_SSID,
)

__all__ = [
    "RouterConfig",
    "RouterInventory",
    "RawFetchResult",
    "FetchResults",
    "NetworkInterfaceRecord",
    "ClientStationRecord",
    "LeaseRecord",
    "ClientEntry",
    "AggregateReport",
    "UNAVAILABLE",
    "UNKNOWN_SSID",
]
