"""
Response Builder - Serializes an AggregateReport to the dashboard wire format.

Wire Format:
    {
      "router_uptimes": {"router1": "350735", "router2": "N/A"},
      "guest": "0",
      "homenet": "2",
      "total clients": "2",
      "clients": {
        "guest": [],
        "homenet": [
          {"hostname": "myphone", "rx/tx": "100/200", "uptime": "3600"},
          {"hostname": "aa:bb:cc:dd:ee:01", "rx/tx": "N/A/N/A", "uptime": "N/A"}
        ]
      }
    }

All numbers are decimal strings and missing values are "N/A". Uptimes are
always nested under "router_uptimes". Per-SSID counts are top-level keys in
sorted SSID order; an SSID that equals one of the reserved keys is left out of
the top level (it is still listed under "clients").
"""
import json
import logging
from typing import Any, Dict, Optional

from openwrtstats.models import AggregateReport, ClientEntry, UNAVAILABLE

logger = logging.getLogger(__name__)

UPTIMES_KEY = "router_uptimes"
TOTAL_KEY = "total clients"
CLIENTS_KEY = "clients"
RESERVED_KEYS = (UPTIMES_KEY, TOTAL_KEY, CLIENTS_KEY)


def _fmt(value: Optional[int]) -> str:
    return UNAVAILABLE if value is None else str(value)


def _client_to_wire(entry: ClientEntry) -> Dict[str, str]:
    return {
        "hostname": entry.display_name,
        "rx/tx": f"{_fmt(entry.rx_bytes)}/{_fmt(entry.tx_bytes)}",
        "uptime": _fmt(entry.connected_seconds),
    }


def to_wire(report: AggregateReport) -> Dict[str, Any]:
    """Return the report as an ordered dict ready for JSON encoding."""
    output: Dict[str, Any] = {
        UPTIMES_KEY: {router_id: _fmt(seconds) for router_id, seconds in report.device_uptimes.items()}
    }

    for network, count in report.networks_client_counts.items():
        if network in RESERVED_KEYS:
            logger.warning(f"SSID '{network}' collides with a reserved key - count only listed under '{CLIENTS_KEY}'")
            continue
        output[network] = str(count)

    output[TOTAL_KEY] = str(report.total_clients)
    output[CLIENTS_KEY] = {
        network: [_client_to_wire(entry) for entry in entries]
        for network, entries in report.clients_by_network.items()
    }
    return output


def to_json(report: AggregateReport, indent: Optional[int] = None) -> str:
    """Serialize the report. Identical reports always give identical text."""
    return json.dumps(to_wire(report), indent=indent, ensure_ascii=False)
