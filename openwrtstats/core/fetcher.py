"""
Fetch Coordinator - Concurrent, failure tolerant fetching of router endpoints.

Architecture:
    - One request per router info_url plus one for the lease source
    - Blocking requests calls run in a per-pass ThreadPoolExecutor
    - Every request is bounded by asyncio.wait_for with the same timeout that
      is handed to requests (default: 5s)
    - asyncio.gather joins all requests; nothing returns early

Lease Source:
    One lease endpoint per pass, passed in from configuration (the first entry
    declaring a dhcp_url, see config.load_inventory). Without one, the first
    router that declares a dhcp_url is used. Leases are never merged.

Error Handling:
    - Timeouts, connection errors and non-2xx responses mark only that source
      as failed and are logged at WARNING
    - No exception escapes fetch_all() for a per-source failure

Resource Lifetime:
    - The executor is created for the pass and shut down without waiting for
      requests that already timed out.
    - Each request opens and closes its own requests.Session unless a session
      is injected, in which case the caller owns it.
    - Nothing is shared between passes.
"""
import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

import requests

from openwrtstats.exceptions import SourceUnreachable
from openwrtstats.models import RouterConfig, RawFetchResult, FetchResults

logger = logging.getLogger(__name__)

# Seconds allowed for each upstream request
DEFAULT_TIMEOUT = 5.0

# Source id used in logs and on the RawFetchResult for the lease table
LEASE_SOURCE_ID = "dhcp"


def select_lease_url(routers: List[RouterConfig]) -> Optional[str]:
    """Return the dhcp_url of the first router that declares one."""
    for router in routers:
        if router.dhcp_url:
            return router.dhcp_url
    return None


class FetchCoordinator:
    """Runs one fan-out/fan-in fetch pass over a list of routers.

    Args:
        timeout: Seconds allowed per request (default: 5.0)
        session: Optional requests.Session-like object shared by every request
            and owned by the caller. When omitted each request uses its own
            short-lived session.

    Example:
        results = await FetchCoordinator(timeout=5.0).fetch_all(routers, lease_url)
        for router_id, result in results.devices.items():
            print(router_id, "failed" if result.failed else "ok")
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session=None):
        self.timeout = timeout
        self._session = session

    async def fetch_all(self, routers: List[RouterConfig], lease_url: Optional[str] = None) -> FetchResults:
        """Fetch every router and the lease source concurrently.

        Args:
            routers: Routers to poll, in configuration order
            lease_url: Lease endpoint from configuration. When omitted the
                dhcp_url of the first router that declares one is used.

        Waits for every request to succeed, fail or time out before returning.
        """
        if lease_url is None:
            lease_url = select_lease_url(routers)
        num_sources = len(routers) + (1 if lease_url else 0)
        if num_sources == 0:
            return FetchResults()

        executor = ThreadPoolExecutor(max_workers=num_sources, thread_name_prefix="openwrtstats")
        try:
            tasks = [
                self._fetch(executor, router.id, router.info_url)
                for router in routers
            ]
            if lease_url:
                tasks.append(self._fetch(executor, LEASE_SOURCE_ID, lease_url))
            outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        finally:
            # A hung request must not hold up the response
            executor.shutdown(wait=False)

        source_ids = [router.id for router in routers]
        if lease_url:
            source_ids.append(LEASE_SOURCE_ID)
        settled = []
        for source_id, outcome in zip(source_ids, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning(f"Fetch task for {source_id} ended unexpectedly: {outcome!r}")
                outcome = RawFetchResult(source_id=source_id, failed=True)
            settled.append(outcome)

        results = FetchResults(
            devices={result.source_id: result for result in settled[:len(routers)]},
            leases=settled[-1] if lease_url else None
        )

        failed = sum(1 for result in settled if result.failed)
        logger.debug(f"Fetch pass complete: {len(settled) - failed}/{len(settled)} source(s) succeeded")
        return results

    async def _fetch(self, executor, source_id: str, url: str) -> RawFetchResult:
        """Fetch one source. Always returns a RawFetchResult, never raises."""
        loop = asyncio.get_running_loop()
        try:
            body = await asyncio.wait_for(
                loop.run_in_executor(executor, self._get, source_id, url),
                timeout=self.timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"Request to {source_id} ({url}) timed out after {self.timeout}s")
            return RawFetchResult(source_id=source_id, failed=True)
        except SourceUnreachable as e:
            logger.warning(f"Request to {source_id} ({url}) failed: {e.reason}")
            return RawFetchResult(source_id=source_id, failed=True)
        except Exception as e:
            logger.warning(f"Request to {source_id} ({url}) failed: {e}")
            return RawFetchResult(source_id=source_id, failed=True)

        logger.debug(f"Fetched {len(body)} bytes from {source_id}")
        return RawFetchResult(source_id=source_id, body=body)

    def _get(self, source_id: str, url: str) -> str:
        """Blocking GET, run on an executor thread.

        Without an injected session each call opens and closes its own
        requests.Session, so a request that outlives its timeout never
        touches a session another thread has already closed.
        """
        if self._session is not None:
            return self._request(self._session, source_id, url)
        with requests.Session() as session:
            return self._request(session, source_id, url)

    def _request(self, session, source_id: str, url: str) -> str:
        try:
            r = session.get(url, timeout=self.timeout)
            r.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise SourceUnreachable(source_id, str(e))
        return r.text
