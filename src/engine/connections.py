"""
Tunnel and Wi-Fi connection state tracking.

Each poll reads the active tunnel set and associated SSID, diffs the tunnels
against the previous poll, and reports one event per transition.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from ..utils.logger import get_logger

logger = get_logger(__name__)


class EventKind(Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class Urgency(Enum):
    """Notification urgency, named as notify-send expects."""
    NORMAL = "normal"
    CRITICAL = "critical"


@dataclass(frozen=True)
class ConnectionEvent:
    kind: EventKind
    name: str


@dataclass(frozen=True)
class Notification:
    title: str
    body: str
    urgency: Urgency
    icon: str


@dataclass(frozen=True)
class ConnectionState:
    """Tunnel/Wi-Fi state as of the latest poll."""
    active_tunnels: FrozenSet[str] = field(default_factory=frozenset)
    previous_active_tunnels: FrozenSet[str] = field(default_factory=frozenset)
    active_ssid: str = ""


def diff_tunnels(previous: FrozenSet[str], current: FrozenSet[str]) -> List[ConnectionEvent]:
    """Events for tunnels that went down, then tunnels that came up.

    Names are sorted within each group so the order is deterministic.
    """
    events = [ConnectionEvent(EventKind.DISCONNECTED, name) for name in sorted(previous - current)]
    events += [ConnectionEvent(EventKind.CONNECTED, name) for name in sorted(current - previous)]
    return events


def notification_for(event: ConnectionEvent) -> Notification:
    """Desktop notification announcing a tunnel transition."""
    if event.kind is EventKind.DISCONNECTED:
        return Notification(
            title="VPN Disconnected",
            body=f"Tunnel '{event.name}' closed.",
            urgency=Urgency.CRITICAL,
            icon="network-error",
        )
    return Notification(
        title="VPN Connected",
        body=f"Tunnel '{event.name}' active.",
        urgency=Urgency.NORMAL,
        icon="network-transmit-receive",
    )


class ConnectionStateTracker:
    """Polls a status source and remembers the last tunnel set for diffing.

    Only tunnel transitions produce events; SSID changes are recorded in the
    state without notification.
    """

    def __init__(self, status_source):
        self.status_source = status_source
        self.state = ConnectionState()

    def poll(self) -> Tuple[ConnectionState, List[ConnectionEvent]]:
        previous = self.state.active_tunnels
        current = frozenset(self.status_source.active_tunnels())
        ssid: Optional[str] = self.status_source.active_ssid()

        self.state = ConnectionState(
            active_tunnels=current,
            previous_active_tunnels=previous,
            active_ssid=ssid or "",
        )

        events = diff_tunnels(previous, current)
        for event in events:
            logger.info(f"Tunnel {event.name} {event.kind.value}")
        return self.state, events
