"""Pydantic models for router configuration and raw fetch outcomes."""
from typing import Optional, Dict, List
from pydantic import BaseModel, Field, field_validator


class RouterConfig(BaseModel):
    """A single router to poll.

    Attributes:
        id: Unique identifier, used as the key in router_uptimes
        info_url: Endpoint returning the plaintext status dump (uptime + iw output)
        dhcp_url: Optional endpoint returning the DHCP lease table

    Only the first router that declares a dhcp_url is used as the lease
    source for a pass. Leases are not merged across routers.

    Example:
        RouterConfig(id="router1", info_url="http://192.168.1.1/cgi-bin/info",
                     dhcp_url="http://192.168.1.1/cgi-bin/leases")
    """
    id: str
    info_url: str
    dhcp_url: Optional[str] = None

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("id", "info_url")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("dhcp_url")
    @classmethod
    def _blank_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


class RawFetchResult(BaseModel):
    """Outcome of a single upstream request.

    body is None whenever failed is True. A successful fetch can still carry
    an empty body, which the aggregator treats the same as a failure.
    """
    source_id: str
    body: Optional[str] = None
    failed: bool = False

    model_config = {"frozen": True}


class FetchResults(BaseModel):
    """Everything fetched during one aggregation pass.

    Attributes:
        devices: Result per router id, in configuration order
        leases: Result for the lease source, or None if no router declares one
    """
    devices: Dict[str, RawFetchResult] = Field(default_factory=dict)
    leases: Optional[RawFetchResult] = None


class RouterInventory(BaseModel):
    """Routers to poll plus the lease endpoint, as read from configuration.

    lease_url is the dhcp_url of the first configuration entry that declares
    one, even if that entry is not a usable router itself (e.g. a lease-only
    entry without info_url).
    """
    routers: List[RouterConfig] = Field(default_factory=list)
    lease_url: Optional[str] = None
