"""Tests for configuration."""
import json

import pytest

from openwrtstats.config import Settings, load_inventory, first_lease_url, parse_router
from openwrtstats.exceptions import InvalidConfiguration


def make_settings(tmp_path, content=None, routers_json=None):
    path = tmp_path / "config.json"
    if content is not None:
        path.write_text(content if isinstance(content, str) else json.dumps(content))
    return Settings(config_file=str(path), routers_json=routers_json)


def configured_routers(settings):
    return load_inventory(settings).routers


def test_settings_defaults(monkeypatch):
    """Test default settings values."""
    for name in ("OWS_PORT", "OWS_TIMEOUT", "OWS_CONFIG_FILE", "OWS_ROUTERS", "OWS_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings()
    assert settings.server_host == "0.0.0.0"
    assert settings.server_port == 8080
    assert settings.timeout == 5.0
    assert settings.config_file == "config.json"
    assert settings.debug is False


def test_settings_from_env(monkeypatch):
    """Test loading settings from environment variables."""
    monkeypatch.setenv("OWS_BIND_ADDRESS", "127.0.0.1")
    monkeypatch.setenv("OWS_PORT", "9000")
    monkeypatch.setenv("OWS_TIMEOUT", "2.5")
    monkeypatch.setenv("OWS_DEBUG", "yes")

    settings = Settings()
    assert settings.server_host == "127.0.0.1"
    assert settings.server_port == 9000
    assert settings.timeout == 2.5
    assert settings.debug is True


def test_load_routers_from_file(tmp_path):
    settings = make_settings(tmp_path, {"routers": [
        {"id": "router1", "info_url": "http://r1", "dhcp_url": "http://r1/leases"},
        {"id": "router2", "info_url": "http://r2"},
    ]})
    routers = configured_routers(settings)
    assert [r.id for r in routers] == ["router1", "router2"]
    assert routers[0].dhcp_url == "http://r1/leases"
    assert routers[1].dhcp_url is None


def test_load_routers_bare_list(tmp_path):
    settings = make_settings(tmp_path, [{"id": "r", "info_url": "http://r"}])
    assert [r.id for r in configured_routers(settings)] == ["r"]


def test_missing_file_is_empty(tmp_path):
    assert configured_routers(make_settings(tmp_path)) == []


@pytest.mark.parametrize("content", [
    "{not json",
    "42",
    json.dumps({"routers": "router1"}),
])
def test_malformed_config_is_empty(tmp_path, content, caplog):
    assert configured_routers(make_settings(tmp_path, content)) == []
    assert "Invalid router configuration" in caplog.text


def test_invalid_entries_are_skipped(tmp_path, caplog):
    settings = make_settings(tmp_path, {"routers": [
        {"id": "good", "info_url": "http://good"},
        {"id": "no-url"},
        {"info_url": "http://no-id"},
        {"id": "", "info_url": "http://blank-id"},
        {"id": 7, "info_url": "http://numeric-id"},
        "not-an-object",
        {"id": "good", "info_url": "http://duplicate"},
        {"id": "also-good", "info_url": "http://also", "dhcp_url": ""},
    ]})
    routers = configured_routers(settings)
    assert [r.id for r in routers] == ["good", "also-good"]
    assert routers[0].info_url == "http://good"
    assert routers[1].dhcp_url is None
    assert "duplicate id 'good'" in caplog.text


def test_inline_json_takes_priority(tmp_path):
    settings = make_settings(
        tmp_path,
        {"routers": [{"id": "from-file", "info_url": "http://file"}]},
        routers_json=json.dumps([{"id": "from-env", "info_url": "http://env"}]),
    )
    assert [r.id for r in configured_routers(settings)] == ["from-env"]


def test_inline_json_invalid(tmp_path):
    settings = make_settings(tmp_path, routers_json="[oops")
    assert configured_routers(settings) == []


def test_config_is_read_fresh_each_time(tmp_path):
    """Edits to the file are picked up without restarting."""
    settings = make_settings(tmp_path, {"routers": [{"id": "a", "info_url": "http://a"}]})
    assert [r.id for r in configured_routers(settings)] == ["a"]
    (tmp_path / "config.json").write_text(json.dumps({"routers": [{"id": "b", "info_url": "http://b"}]}))
    assert [r.id for r in configured_routers(settings)] == ["b"]


def test_parse_router_errors():
    with pytest.raises(InvalidConfiguration):
        parse_router(["id", "info_url"])
    with pytest.raises(InvalidConfiguration):
        parse_router({"id": "x"})
    router = parse_router({"id": " x ", "info_url": "http://x", "name": "ignored"})
    assert router.id == "x"


def test_lease_only_entry(tmp_path, caplog):
    """An entry with only a dhcp_url is the lease source but not a router."""
    settings = make_settings(tmp_path, [
        {"id": "dhcp-server", "dhcp_url": "http://leases"},
        {"id": "ap1", "info_url": "http://ap1"},
    ])
    inventory = load_inventory(settings)
    assert [r.id for r in inventory.routers] == ["ap1"]
    assert inventory.lease_url == "http://leases"
    assert "Skipping router configuration" not in caplog.text


def test_lease_url_first_declared_wins(tmp_path):
    settings = make_settings(tmp_path, {"routers": [
        {"id": "ap1", "info_url": "http://ap1"},
        {"id": "ap2", "info_url": "http://ap2", "dhcp_url": "http://ap2/leases"},
        {"id": "dhcp-server", "dhcp_url": "http://leases"},
    ]})
    inventory = load_inventory(settings)
    assert [r.id for r in inventory.routers] == ["ap1", "ap2"]
    assert inventory.lease_url == "http://ap2/leases"


def test_lease_url_from_invalid_router_entry(tmp_path):
    """The lease URL does not depend on the entry being a valid router."""
    settings = make_settings(tmp_path, [
        {"info_url": "http://no-id", "dhcp_url": "http://leases"},
        {"id": "ap1", "info_url": "http://ap1", "dhcp_url": "http://ap1/leases"},
    ])
    inventory = load_inventory(settings)
    assert [r.id for r in inventory.routers] == ["ap1"]
    assert inventory.lease_url == "http://leases"


def test_first_lease_url_skips_unusable_values():
    assert first_lease_url([
        "not-an-object",
        {"id": "a", "dhcp_url": ""},
        {"id": "b", "dhcp_url": 42},
        {"id": "c", "dhcp_url": " http://leases "},
    ]) == "http://leases"
    assert first_lease_url([{"id": "a", "info_url": "http://a"}]) is None
    assert first_lease_url([]) is None


def test_no_configuration_has_no_lease_url(tmp_path):
    inventory = load_inventory(make_settings(tmp_path))
    assert inventory.routers == []
    assert inventory.lease_url is None
