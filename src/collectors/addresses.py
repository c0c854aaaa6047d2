"""IPv4 interface addresses from ``ip -4 -o addr show``."""

from typing import List, Tuple

from .commands import run_command
from .exceptions import CommandError
from ..utils.logger import get_logger

logger = get_logger(__name__)


def parse_ip_addr(output: str) -> List[Tuple[str, str]]:
    """Parse one-line ``ip -o`` output into (interface, address) pairs.

    Lines look like ``2: eth0    inet 192.168.1.10/24 brd ...``. Loopback is dropped.
    """
    addresses = []
    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 4:
            continue
        name = parts[1]
        address = parts[3].split("/")[0]
        if name != "lo" and address:
            addresses.append((name, address))
    return addresses


class IpAddressSource:
    """Address source backed by iproute2."""

    def active_addresses(self) -> List[Tuple[str, str]]:
        try:
            output = run_command(["ip", "-4", "-o", "addr", "show"])
        except CommandError as e:
            logger.warning(f"Failed to get interface addresses: {e}")
            return []
        return parse_ip_addr(output)
