"""
Per-interface throughput tracking.

Converts successive cumulative byte-counter snapshots into instantaneous
throughput (Mb/s) and keeps a bounded history per interface. Interfaces are
classified into lanes once, when first tracked.
"""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional, Sequence

from .constants import (
    BITS_PER_BYTE, BYTES_PER_MEBIBYTE, HISTORY_SIZE, LOOPBACK, TICK_INTERVAL,
)
from ..utils.logger import get_logger
from config.settings import (
    settings,
    DEFAULT_EXCLUDE_PREFIXES, DEFAULT_PHYSICAL_PREFIXES,
    DEFAULT_TUNNEL_PREFIXES, DEFAULT_WIRELESS_PREFIXES,
)

logger = get_logger(__name__)


class Lane(Enum):
    """Kind of link an interface represents."""
    PHYSICAL = "physical"
    WIRELESS = "wireless"
    TUNNEL = "tunnel"
    OTHER = "other"

    @property
    def is_uplink(self) -> bool:
        return self in (Lane.PHYSICAL, Lane.WIRELESS)


@dataclass(frozen=True)
class InterfaceCounters:
    """Cumulative byte counters for one interface."""
    rx_bytes: int
    tx_bytes: int


CounterSnapshot = Mapping[str, InterfaceCounters]


@dataclass
class InterfaceSample:
    """Live throughput state for one interface."""
    name: str
    lane: Lane

    # (sequence, rx Mb/s) points, oldest first
    history: deque = field(default_factory=lambda: deque(maxlen=HISTORY_SIZE))

    # Transmit rate is shown in tables but not graphed
    tx_speed: float = 0.0

    @property
    def current_speed(self) -> float:
        """Latest receive throughput in Mb/s."""
        return self.history[-1][1] if self.history else 0.0

    @property
    def last_sequence(self) -> Optional[float]:
        return self.history[-1][0] if self.history else None

    def record(self, sequence: float, rx_mbps: float, tx_mbps: float = 0.0) -> bool:
        """Append a point; the deque drops the oldest once full.

        Returns False (and records nothing) if ``sequence`` does not advance.
        """
        last = self.last_sequence
        if last is not None and sequence <= last:
            logger.debug(f"Ignoring non-increasing sequence {sequence} for {self.name} (last {last})")
            return False
        self.history.append((sequence, rx_mbps))
        self.tx_speed = tx_mbps
        return True


def throughput_mbps(previous_bytes: int, current_bytes: int, interval_seconds: float) -> float:
    """Megabits per second between two counter readings.

    A counter that went backwards (wrap or reset) counts as no traffic.
    """
    if interval_seconds <= 0:
        return 0.0
    delta = max(0, current_bytes - previous_bytes)
    return (delta * BITS_PER_BYTE) / (interval_seconds * BYTES_PER_MEBIBYTE)


def _matches(name: str, prefixes: Iterable[str]) -> bool:
    return any(name.startswith(p) for p in prefixes)


def is_excluded(name: str, exclude_prefixes: Iterable[str] = DEFAULT_EXCLUDE_PREFIXES) -> bool:
    """Loopback and container/bridge interfaces are never tracked."""
    return name == LOOPBACK or _matches(name, exclude_prefixes)


def classify_lane(name: str,
                  tunnel_prefixes: Sequence[str] = DEFAULT_TUNNEL_PREFIXES,
                  wireless_prefixes: Sequence[str] = DEFAULT_WIRELESS_PREFIXES,
                  physical_prefixes: Sequence[str] = DEFAULT_PHYSICAL_PREFIXES) -> Lane:
    """Classify an interface by name prefix.

    Tunnel prefixes are checked first so that e.g. ``wg0`` is not taken for a
    wireless device.
    """
    if _matches(name, tunnel_prefixes):
        return Lane.TUNNEL
    if _matches(name, wireless_prefixes):
        return Lane.WIRELESS
    if _matches(name, physical_prefixes):
        return Lane.PHYSICAL
    return Lane.OTHER


class ThroughputTracker:
    """Owns the per-interface samples and updates them from counter snapshots."""

    def __init__(self, interval_seconds: Optional[float] = None, history_size: Optional[int] = None):
        self.interval_seconds = interval_seconds or settings.get('dashboard.tick_interval', TICK_INTERVAL)
        self.history_size = history_size or settings.get('dashboard.history_size', HISTORY_SIZE)
        self.exclude_prefixes = settings.get('interfaces.exclude_prefixes', DEFAULT_EXCLUDE_PREFIXES)
        self.tunnel_prefixes = settings.get('interfaces.tunnel_prefixes', DEFAULT_TUNNEL_PREFIXES)
        self.wireless_prefixes = settings.get('interfaces.wireless_prefixes', DEFAULT_WIRELESS_PREFIXES)
        self.physical_prefixes = settings.get('interfaces.physical_prefixes', DEFAULT_PHYSICAL_PREFIXES)
        self.interfaces: Dict[str, InterfaceSample] = {}

    def update(self, previous: CounterSnapshot, current: CounterSnapshot, sequence: float) -> Dict[str, InterfaceSample]:
        """Fold one poll into the tracked samples.

        Every non-excluded interface present in both snapshots gets a point at
        ``sequence``; tracked interfaces missing from ``current`` are dropped.
        """
        for name, counters in current.items():
            if is_excluded(name, self.exclude_prefixes):
                continue

            old = previous.get(name)
            if old is None:
                continue

            sample = self.interfaces.get(name)
            if sample is None:
                sample = self._create_sample(name)

            sample.record(
                sequence,
                throughput_mbps(old.rx_bytes, counters.rx_bytes, self.interval_seconds),
                throughput_mbps(old.tx_bytes, counters.tx_bytes, self.interval_seconds),
            )

        stale = [name for name in self.interfaces if name not in current]
        for name in stale:
            logger.info(f"Interface {name} disappeared, dropping its history")
            del self.interfaces[name]

        return self.interfaces

    def classify(self, name: str) -> Lane:
        """Classify with the configured prefixes."""
        return classify_lane(name, self.tunnel_prefixes, self.wireless_prefixes, self.physical_prefixes)

    def _create_sample(self, name: str) -> InterfaceSample:
        lane = self.classify(name)
        sample = InterfaceSample(name=name, lane=lane, history=deque(maxlen=self.history_size))
        self.interfaces[name] = sample
        logger.info(f"Tracking interface {name} ({lane.value})")
        return sample
