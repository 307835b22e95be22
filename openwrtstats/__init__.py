# openwrtstats Module
# -*- coding: utf-8 -*-
"""
 Python module to aggregate status from OpenWrt style routers

 Features
    * Polls every configured router concurrently with a bounded timeout
    * Tolerates any subset of routers (or the lease source) being offline
    * Parses uptime banners, iw station dumps and dnsmasq lease tables
    * Groups wireless clients by SSID and resolves hostnames from DHCP leases
    * Serves the summary as JSON for a refreshable dashboard

 Functions
    set_debug(toggle, color)              # Enable verbose logging
    collect(routers, timeout, lease_url)  # Run one aggregation pass (blocking)

 Requirements
    This module requires the following modules: requests, pydantic, pydantic-settings
    pip install requests pydantic pydantic-settings
"""
import asyncio
import logging
import sys
from typing import List, Optional

version_tuple = (0, 1, 0)
version = __version__ = '%d.%d.%d' % version_tuple
__author__ = 'openwrtstats'

from openwrtstats.models import RouterConfig, AggregateReport
from openwrtstats.core.fetcher import FetchCoordinator, DEFAULT_TIMEOUT
from openwrtstats.core.aggregator import build_report

log = logging.getLogger(__name__)
log.debug('%s version %s', __name__, __version__)
log.debug('Python %s on %s', sys.version, sys.platform)


def set_debug(toggle=True, color=True):
    """Enable verbose logging"""
    if toggle:
        if color:
            logging.basicConfig(format='\x1b[31;1m%(levelname)s:%(message)s\x1b[0m', level=logging.DEBUG)
        else:
            logging.basicConfig(format='%(levelname)s:%(message)s', level=logging.DEBUG)
        log.setLevel(logging.DEBUG)
        log.debug("%s [%s]\n" % (__name__, __version__))
    else:
        log.setLevel(logging.NOTSET)


async def collect_async(routers: List[RouterConfig], timeout: float = DEFAULT_TIMEOUT,
                        lease_url: Optional[str] = None) -> AggregateReport:
    """Fetch every router (and the lease source) and build the report."""
    results = await FetchCoordinator(timeout=timeout).fetch_all(routers, lease_url=lease_url)
    return build_report(routers, results)


def collect(routers: List[RouterConfig], timeout: float = DEFAULT_TIMEOUT,
            lease_url: Optional[str] = None) -> AggregateReport:
    """Blocking wrapper around collect_async() for scripts and the CLI."""
    return asyncio.run(collect_async(routers, timeout=timeout, lease_url=lease_url))
