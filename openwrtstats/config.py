"""
Configuration Management for openwrtstats

Server settings come from environment variables. The router list comes from a
JSON file (or an inline JSON environment variable) and is read fresh for every
aggregation pass, so edits take effect without a restart and no configuration
is cached between requests.

Configuration Methods:

    1. Router file (default: ./config.json):
        {
          "routers": [
            {
              "id": "router1",
              "info_url": "http://192.168.1.1/cgi-bin/status",
              "dhcp_url": "http://192.168.1.1/cgi-bin/leases"
            },
            {
              "id": "router2",
              "info_url": "http://192.168.1.2/cgi-bin/status"
            },
            {
              "id": "dhcp-server",
              "dhcp_url": "http://192.168.1.10/cgi-bin/leases"
            }
          ]
        }

    The lease table comes from the first entry that declares a dhcp_url, in
    file order. An entry with only a dhcp_url is a lease source, not a router.

    2. Inline JSON (takes priority over the file):
        export OWS_ROUTERS='[{"id": "router1", "info_url": "http://192.168.1.1/cgi-bin/status"}]'

Environment Variables:

    Server Settings:
        OWS_BIND_ADDRESS     - Server bind address (default: "0.0.0.0")
        OWS_PORT             - Server port (default: 8080)
        OWS_DEBUG            - Enable debug logging "yes"/"no" (default: "no")
        CORS_ORIGINS         - JSON list of allowed origins (default: ["*"])

    Polling Settings:
        OWS_TIMEOUT          - Seconds allowed per router request (default: 5)

    Router Settings:
        OWS_CONFIG_FILE      - Path to the router JSON file (default: "config.json")
        OWS_ROUTERS          - Inline router JSON, list or {"routers": [...]}

Failure Handling:

    - Missing file: no routers, empty report (logged at DEBUG)
    - Unreadable file, invalid JSON or wrong shape: no routers (logged at ERROR)
    - Entry with only a dhcp_url: used as lease source, not polled (DEBUG)
    - Entry without id or info_url, or a repeated id: entry skipped (WARNING)

Accessing Configuration:

    from openwrtstats.config import settings, load_inventory

    inventory = load_inventory(settings)
    inventory.routers, inventory.lease_url
"""
import json
import logging
from pathlib import Path
from typing import Any, List, Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

from openwrtstats import __version__
from openwrtstats.exceptions import InvalidConfiguration
from openwrtstats.models import RouterConfig, RouterInventory

logger = logging.getLogger(__name__)

# Server version
SERVER_VERSION = __version__


class Settings(BaseSettings):
    """Application settings loaded from OWS_* environment variables."""

    # Server configuration
    server_host: str = Field(default="0.0.0.0", alias="OWS_BIND_ADDRESS")
    server_port: int = Field(default=8080, alias="OWS_PORT")
    debug: bool = Field(default=False, alias="OWS_DEBUG")

    # Polling
    timeout: float = Field(default=5.0, alias="OWS_TIMEOUT")  # Per request, in seconds

    # Router sources
    config_file: str = Field(default="config.json", alias="OWS_CONFIG_FILE")
    routers_json: Optional[str] = Field(default=None, alias="OWS_ROUTERS")

    # CORS configuration
    cors_origins: List[str] = Field(default=["*"], alias="CORS_ORIGINS")

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "populate_by_name": True
    }


def _read_raw_config(settings: Settings) -> Any:
    """Return the decoded router JSON, or None when nothing is configured."""
    if settings.routers_json:
        try:
            return json.loads(settings.routers_json)
        except json.JSONDecodeError as e:
            raise InvalidConfiguration(f"OWS_ROUTERS is not valid JSON: {e}")

    path = Path(settings.config_file)
    if not path.exists():
        logger.debug(f"No router configuration at {path} - no routers configured")
        return None
    try:
        return json.loads(path.read_text())
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidConfiguration(f"Unable to read {path}: {e}")
    except json.JSONDecodeError as e:
        raise InvalidConfiguration(f"{path} is not valid JSON: {e}")


def _router_entries(raw: Any) -> List[Any]:
    if isinstance(raw, dict):
        raw = raw.get("routers", [])
    if not isinstance(raw, list):
        raise InvalidConfiguration(f"expected a list of routers, got {type(raw).__name__}")
    return raw


def parse_router(entry: Any) -> RouterConfig:
    """Validate a single router entry.

    Raises:
        InvalidConfiguration: entry is not an object, lacks id or info_url,
            or has values of the wrong type
    """
    if not isinstance(entry, dict):
        raise InvalidConfiguration(f"router entry is not an object: {entry!r}")
    if not entry.get("id") or not entry.get("info_url"):
        raise InvalidConfiguration(f"missing id or info_url: {json.dumps(entry)}")
    try:
        return RouterConfig.model_validate(entry)
    except ValidationError as e:
        raise InvalidConfiguration(f"invalid router entry {json.dumps(entry)}: {e.error_count()} error(s)")


def first_lease_url(entries: List[Any]) -> Optional[str]:
    """Return the dhcp_url of the first entry that declares one.

    Entries are not validated as routers first, so a lease-only entry
    ({"id": "dhcp-server", "dhcp_url": "..."}) still provides the lease source.
    Blank or non-string values count as not declared.
    """
    for entry in entries:
        if not isinstance(entry, dict) or entry.get("dhcp_url") is None:
            continue
        url = entry["dhcp_url"]
        if isinstance(url, str) and url.strip():
            return url.strip()
        if url != "":
            logger.warning(f"Ignoring unusable dhcp_url {url!r}")
    return None


def load_inventory(settings: Settings) -> RouterInventory:
    """Load the routers and the lease endpoint. Never raises; problems are logged instead."""
    try:
        raw = _read_raw_config(settings)
        if raw is None:
            return RouterInventory()
        entries = _router_entries(raw)
    except InvalidConfiguration as e:
        logger.error(f"Invalid router configuration, no routers will be polled: {e}")
        return RouterInventory()

    return RouterInventory(routers=_valid_routers(entries), lease_url=first_lease_url(entries))


def _valid_routers(entries: List[Any]) -> List[RouterConfig]:
    routers: List[RouterConfig] = []
    seen = set()
    for entry in entries:
        if isinstance(entry, dict) and entry.get("dhcp_url") and not entry.get("info_url"):
            logger.debug(f"Lease-only entry {entry.get('id')!r} - not polled as a router")
            continue
        try:
            router = parse_router(entry)
        except InvalidConfiguration as e:
            logger.warning(f"Skipping router configuration: {e}")
            continue
        if router.id in seen:
            logger.warning(f"Skipping router configuration: duplicate id '{router.id}'")
            continue
        seen.add(router.id)
        routers.append(router)
    return routers


# Global settings instance (server settings only; routers are loaded per pass)
settings = Settings()
