"""Pytest configuration and fixtures."""
import time

import pytest
import requests
from fastapi.testclient import TestClient

from openwrtstats.main import app
from openwrtstats.api import openwrt
from openwrtstats.core.fetcher import FetchCoordinator
from openwrtstats.models import RouterConfig, RouterInventory

ROUTER1_URL = "http://192.168.1.1/cgi-bin/status"
ROUTER2_URL = "http://192.168.1.2/cgi-bin/status"
ROUTER3_URL = "http://192.168.1.3/cgi-bin/status"
LEASES_URL = "http://192.168.1.1/cgi-bin/leases"

ROUTER1_TEXT = """=== uptime router1 ===
350735.47 234388.90
=== iw ===
phy#0
\tInterface wlan0
\t\tifindex 9
\t\twdev 0x1
\t\taddr 00:11:22:33:44:55
\t\tssid HomeNet
\t\ttype AP
\tInterface wlan1
\t\tifindex 10
\t\tssid Guest Net
\t\ttype AP
Station AA:BB:CC:DD:EE:FF (on wlan0)
\tinactive time:\t1230 ms
\trx bytes:\t100
\ttx bytes:\t200
\tconnected time:\t3600 seconds
Station 11:22:33:44:55:66 (on wlan0)
\trx bytes:\t5000
"""

ROUTER2_TEXT = """ 12:01:33 up 4 days,  1:02:03,  load average: 0.00, 0.01, 0.05
phy#0
\tInterface wlan0
\t\tssid HomeNet
Station 22:33:44:55:66:77 (on wlan0)
\trx bytes:\t1
\ttx bytes:\t2
\tconnected time:\t10 seconds
Station 33:44:55:66:77:88 (on wlan9)
"""

LEASES_TEXT = """1718000000 aa:bb:cc:dd:ee:ff 192.168.1.50 myphone 01:aa:bb:cc:dd:ee:ff
1718000100 11:22:33:44:55:66 192.168.1.51 * *
"""


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, text="", status_code=200, delay=0.0):
        self.text = text
        self.status_code = status_code
        self.delay = delay

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """requests.Session stand-in serving canned responses by URL.

    Values may be a string body, a FakeResponse or an exception instance.
    Unknown URLs raise ConnectionError.
    """

    def __init__(self, responses):
        self.responses = responses
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        value = self.responses.get(url)
        if value is None:
            raise requests.exceptions.ConnectionError(f"connection refused: {url}")
        if isinstance(value, Exception):
            raise value
        if isinstance(value, str):
            value = FakeResponse(value)
        if value.delay:
            time.sleep(value.delay)
        return value

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


@pytest.fixture
def urls():
    """Endpoint URLs used by the routers fixture."""
    return {
        "router1": ROUTER1_URL,
        "router2": ROUTER2_URL,
        "router3": ROUTER3_URL,
        "leases": LEASES_URL,
    }


@pytest.fixture
def router1_text():
    """Status output with an uptime header, two SSIDs and two stations."""
    return ROUTER1_TEXT


@pytest.fixture
def router2_text():
    """Status output with an "up N days" banner and a station on an unknown interface."""
    return ROUTER2_TEXT


@pytest.fixture
def leases_text():
    """dnsmasq lease table for two of the stations."""
    return LEASES_TEXT


@pytest.fixture
def fake_session():
    """Factory for FakeSession: fake_session({url: body_or_response_or_exception})."""
    return FakeSession


@pytest.fixture
def fake_response():
    """Factory for FakeResponse: fake_response(text, status_code=200, delay=0.0)."""
    return FakeResponse


@pytest.fixture
def routers():
    """Three routers, the first one also serving leases."""
    return [
        RouterConfig(id="router1", info_url=ROUTER1_URL, dhcp_url=LEASES_URL),
        RouterConfig(id="router2", info_url=ROUTER2_URL),
        RouterConfig(id="router3", info_url=ROUTER3_URL),
    ]


@pytest.fixture
def healthy_session():
    """Session where router1, router2 and the lease source answer; router3 is down."""
    return FakeSession({
        ROUTER1_URL: ROUTER1_TEXT,
        ROUTER2_URL: ROUTER2_TEXT,
        LEASES_URL: LEASES_TEXT,
    })


@pytest.fixture
def client():
    """FastAPI test client. Dependency overrides are cleared afterwards."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def api_client(client, routers, healthy_session):
    """Test client whose /api/openwrt uses the fixture routers, lease URL and fake session."""
    app.dependency_overrides[openwrt.get_inventory] = lambda: RouterInventory(routers=routers, lease_url=LEASES_URL)
    app.dependency_overrides[openwrt.get_coordinator] = lambda: FetchCoordinator(timeout=1.0, session=healthy_session)
    return client
