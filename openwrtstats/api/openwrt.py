"""
Router Status API Endpoint

Routes are prefixed with /api (configured in main.py).

Routes:
    - GET /api/openwrt -> Aggregated router uptimes, SSID client counts and clients

Design Notes:
    - Each request runs a fresh aggregation pass: routers and the lease
      endpoint are loaded from configuration, fetched concurrently and merged.
      Nothing is cached.
    - Always answers 200 once routed. Offline routers show "N/A" uptimes,
      a missing lease source falls back to MAC addresses.
    - The configuration is injected with Depends(get_inventory) so callers (and
      tests) can override where it comes from.
"""
import logging

from fastapi import APIRouter, Depends, Response

from openwrtstats.config import settings, load_inventory
from openwrtstats.core.aggregator import build_report
from openwrtstats.core.fetcher import FetchCoordinator
from openwrtstats.core.response import to_json
from openwrtstats.models import RouterInventory, AggregateReport

logger = logging.getLogger(__name__)

router = APIRouter()


def get_inventory() -> RouterInventory:
    """Load the configured routers and lease endpoint for this request."""
    return load_inventory(settings)


def get_coordinator() -> FetchCoordinator:
    """Create the fetch coordinator for this request."""
    return FetchCoordinator(timeout=settings.timeout)


@router.get("/openwrt")
async def openwrt_stats(
    inventory: RouterInventory = Depends(get_inventory),
    coordinator: FetchCoordinator = Depends(get_coordinator),
):
    """
    Get the combined status of all configured routers.

    Response includes:
        - router_uptimes: Uptime in seconds per router id, "N/A" if unavailable
        - <ssid>: Number of clients per SSID (one key per known SSID)
        - total clients: Total number of client entries
        - clients: Client list per SSID with hostname, "rx/tx" and uptime

    All numeric values are strings.
    """
    routers = inventory.routers
    try:
        results = await coordinator.fetch_all(routers, lease_url=inventory.lease_url)
        report = build_report(routers, results)
    except Exception as e:
        logger.exception(f"Aggregation pass failed, returning empty report: {e}")
        report = AggregateReport(device_uptimes={r.id: None for r in routers})

    logger.debug(f"Aggregated {len(routers)} router(s), {report.total_clients} client(s)")
    return Response(content=to_json(report), media_type="application/json")
