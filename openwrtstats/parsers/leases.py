"""
DHCP lease extraction from dnsmasq style lease tables.

Each lease line is:

    <expires> <mac> <ip> <hostname> [<client-id>]

e.g.

    1718000000 aa:bb:cc:dd:ee:ff 192.168.1.50 myphone 01:aa:bb:cc:dd:ee:ff
    1718000100 11:22:33:44:55:66 192.168.1.51 * *

A hostname of '*' means the client did not send one.
"""
import logging
from typing import Dict

from openwrtstats.models import LeaseRecord
from openwrtstats.parsers.cursor import LineCursor

log = logging.getLogger(__name__)

NO_HOSTNAME = "*"


def parse_leases(text: str) -> Dict[str, LeaseRecord]:
    """Return leases keyed by lowercase MAC address.

    Lines with fewer than four fields are skipped. When a MAC appears more
    than once the last line wins.
    """
    leases: Dict[str, LeaseRecord] = {}
    cursor = LineCursor(text)
    skipped = 0
    while not cursor.done():
        line = cursor.current()
        cursor.advance()
        if not line:
            continue
        parts = line.split()
        if len(parts) < 4:
            skipped += 1
            continue
        hostname = parts[3] if parts[3] != NO_HOSTNAME else None
        leases[parts[1].lower()] = LeaseRecord(ip_address=parts[2], hostname=hostname)
    if skipped:
        log.debug("skipped %d malformed lease line(s)" % skipped)
    return leases
