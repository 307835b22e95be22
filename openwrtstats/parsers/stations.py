"""
SSID and station extraction from `iw dev` / `iw dev <if> station dump` output.

Example input:

    phy#0
        Interface wlan0
            ifindex 9
            wdev 0x1
            ssid HomeNet
            type AP
    Station aa:bb:cc:dd:ee:ff (on wlan0)
        inactive time:  1230 ms
        rx bytes:       100
        tx bytes:       200
        connected time: 3600 seconds

The scan is a small state machine over a LineCursor:

    SEEKING_MARKER      Looking for an Interface or Station line
    IN_INTERFACE_BLOCK  On an Interface line; the next SSID_LOOKAHEAD lines are
                        peeked (not consumed) for its ssid
    IN_STATION_BLOCK    Collecting counters until a new Station, Interface or
                        phy# line ends the block
"""
import enum
import re
from typing import Dict, List, Optional, Tuple

from openwrtstats.models import ClientStationRecord, NetworkInterfaceRecord
from openwrtstats.parsers.cursor import LineCursor

SSID_LOOKAHEAD = 4

INTERFACE_RE = re.compile(r"^Interface\s+(\S+)")
SSID_RE = re.compile(r"^ssid\s+(.+)$")
STATION_RE = re.compile(r"^Station\s+([0-9a-fA-F:]{17})\s+\(on\s+(\S+)\)")
STATION_START_RE = re.compile(r"^Station\s+[0-9a-fA-F:]{17}")
PHY_RE = re.compile(r"^phy#\d+")

COUNTER_PATTERNS = (
    ("rx_bytes", re.compile(r"^rx bytes:\s+(\d+)")),
    ("tx_bytes", re.compile(r"^tx bytes:\s+(\d+)")),
    ("connected_seconds", re.compile(r"^connected time:\s+(\d+)\s+seconds")),
)


class ParseState(enum.Enum):
    SEEKING_MARKER = "seeking_marker"
    IN_INTERFACE_BLOCK = "in_interface_block"
    IN_STATION_BLOCK = "in_station_block"


def _ends_station_block(line: str) -> bool:
    return bool(STATION_START_RE.match(line) or INTERFACE_RE.match(line) or PHY_RE.match(line))


class StationParser:
    """Single pass parser producing the interface->SSID map and station list."""

    def __init__(self, text: str):
        self.cursor = LineCursor(text)
        self.networks: Dict[str, str] = {}
        self.stations: List[ClientStationRecord] = []
        self._station: Optional[dict] = None
        self._handlers = {
            ParseState.SEEKING_MARKER: self._seek_marker,
            ParseState.IN_INTERFACE_BLOCK: self._read_interface,
            ParseState.IN_STATION_BLOCK: self._read_station,
        }

    def parse(self) -> Tuple[Dict[str, str], List[ClientStationRecord]]:
        state = ParseState.SEEKING_MARKER
        while not self.cursor.done():
            state = self._handlers[state](self.cursor.current())
        self._close_station()
        return self.networks, self.stations

    def _seek_marker(self, line: str) -> ParseState:
        if INTERFACE_RE.match(line):
            return ParseState.IN_INTERFACE_BLOCK
        match = STATION_RE.match(line)
        if match:
            self._station = {"mac_address": match.group(1).lower(), "interface_name": match.group(2)}
            self.cursor.advance()
            return ParseState.IN_STATION_BLOCK
        self.cursor.advance()
        return ParseState.SEEKING_MARKER

    def _read_interface(self, line: str) -> ParseState:
        interface = INTERFACE_RE.match(line).group(1)
        for candidate in self.cursor.peek(SSID_LOOKAHEAD):
            match = SSID_RE.match(candidate)
            if match:
                self.networks[interface] = match.group(1).strip()
                break
        self.cursor.advance()
        return ParseState.SEEKING_MARKER

    def _read_station(self, line: str) -> ParseState:
        if _ends_station_block(line):
            # The terminating line is re-examined as a possible marker
            self._close_station()
            return ParseState.SEEKING_MARKER
        for field, pattern in COUNTER_PATTERNS:
            match = pattern.match(line)
            if match:
                self._station[field] = int(match.group(1))
        self.cursor.advance()
        return ParseState.IN_STATION_BLOCK

    def _close_station(self):
        if self._station is not None:
            self.stations.append(ClientStationRecord(**self._station))
            self._station = None


def parse_stations(text: str) -> Tuple[Dict[str, str], List[ClientStationRecord]]:
    """Return (interface -> raw SSID, stations in scan order).

    Duplicate MAC addresses are kept; every Station block becomes a record.
    """
    return StationParser(text).parse()


def parse_interfaces(text: str) -> List[NetworkInterfaceRecord]:
    """Return the interfaces with a known SSID, in declaration order."""
    networks, _ = parse_stations(text)
    return [NetworkInterfaceRecord(interface_name=name, network_name=ssid) for name, ssid in networks.items()]
