"""Pydantic models for parsed router output and the aggregate report."""
from typing import Optional, Dict, List
from pydantic import BaseModel, Field

# Wire marker for any value that could not be obtained
UNAVAILABLE = "N/A"

# Group used for clients whose interface has no known SSID
UNKNOWN_SSID = "unknown_ssid"


class NetworkInterfaceRecord(BaseModel):
    """A wireless interface and the SSID it broadcasts."""
    interface_name: str
    network_name: str


class ClientStationRecord(BaseModel):
    """A station (wireless client) found in an iw dump.

    mac_address is always lowercase and colon separated. Counters are None
    when the dump did not include them.
    """
    mac_address: str
    interface_name: str
    rx_bytes: Optional[int] = None
    tx_bytes: Optional[int] = None
    connected_seconds: Optional[int] = None


class LeaseRecord(BaseModel):
    """A DHCP lease. hostname is None when the lease table shows '*'."""
    ip_address: str
    hostname: Optional[str] = None


class ClientEntry(BaseModel):
    """A client as shown in the report, after hostname resolution."""
    display_name: str
    rx_bytes: Optional[int] = None
    tx_bytes: Optional[int] = None
    connected_seconds: Optional[int] = None


class AggregateReport(BaseModel):
    """Combined view across all configured routers.

    Attributes:
        device_uptimes: Uptime in seconds per router id, None when unavailable
        networks_client_counts: Clients per normalized SSID, sorted by SSID
        total_clients: Sum of all group sizes (stations are not deduplicated)
        clients_by_network: Client entries per SSID, same order as the counts

    Usage:
        report = build_report(routers, results)
        print(f"{report.total_clients} clients on {len(report.networks_client_counts)} networks")
    """
    device_uptimes: Dict[str, Optional[int]] = Field(default_factory=dict)
    networks_client_counts: Dict[str, int] = Field(default_factory=dict)
    total_clients: int = 0
    clients_by_network: Dict[str, List[ClientEntry]] = Field(default_factory=dict)
