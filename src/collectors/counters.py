"""Kernel interface byte counters read from /proc/net/dev."""

from typing import Dict

from ..engine.throughput import InterfaceCounters
from ..utils.logger import get_logger

logger = get_logger(__name__)

PROC_NET_DEV = "/proc/net/dev"


def parse_proc_net_dev(text: str) -> Dict[str, InterfaceCounters]:
    """Parse the contents of /proc/net/dev into a counter snapshot.

    The first two lines are headers. Each data line is ``iface: rx_bytes ... tx_bytes ...``
    with the transmit byte counter in the ninth field after the colon.
    Malformed lines are skipped.
    """
    snapshot = {}
    for line in text.splitlines()[2:]:
        if ":" not in line:
            continue
        iface, data = line.split(":", 1)
        iface = iface.strip()
        parts = data.split()
        if not iface or len(parts) < 9:
            continue
        try:
            snapshot[iface] = InterfaceCounters(rx_bytes=int(parts[0]), tx_bytes=int(parts[8]))
        except ValueError:
            logger.debug(f"Skipping malformed counter line for {iface}")
    return snapshot


class ProcNetDevSource:
    """Counter source backed by the kernel's /proc/net/dev pseudo-file."""

    def __init__(self, path: str = PROC_NET_DEV):
        self.path = path

    def snapshot(self) -> Dict[str, InterfaceCounters]:
        """Return the current counters; an unreadable file yields an empty snapshot."""
        try:
            with open(self.path, 'r') as f:
                return parse_proc_net_dev(f.read())
        except OSError as e:
            logger.warning(f"Failed to read {self.path}: {e}")
            return {}
