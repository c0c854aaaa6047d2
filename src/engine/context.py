"""
Application context owning all live dashboard state.

One ``DashboardContext`` is constructed per run and passed to whatever drives
it (the terminal app, tests). It holds the throughput samples, connection
state, selection state and graph index, and talks to the external
collaborators it was given:

- counter_source:  ``snapshot() -> {name: InterfaceCounters}``
- directory:       ``list_tunnels()``, ``list_wifi_networks()``
- status_source:   ``active_tunnels()``, ``active_ssid()``
- address_source:  ``active_addresses() -> [(name, address)]``
- actions:         ``connect(kind, name, secret)``, ``disconnect(name)``, ``open_external_editor()``
- notifier:        ``notify(title, body, urgency, icon=None)``
"""

from typing import List, Optional, Tuple

from .connections import ConnectionEvent, ConnectionState, ConnectionStateTracker, notification_for
from .constants import GRAPH_WINDOW
from .rendering import FrameDescription, render
from .selection import Effect, InputEvent, RequestDisconnect, SelectionMachine, SubmitSecret
from .throughput import CounterSnapshot, ThroughputTracker
from ..utils.logger import get_logger, set_log_tick
from config.settings import settings

logger = get_logger(__name__)


class DashboardContext:
    """Single owner of the engine state."""

    def __init__(self, counter_source, directory, status_source, address_source, actions, notifier,
                 interval_seconds: Optional[float] = None, graph_window: Optional[float] = None):
        self.counter_source = counter_source
        self.directory = directory
        self.address_source = address_source
        self.actions = actions
        self.notifier = notifier

        self.throughput = ThroughputTracker(interval_seconds=interval_seconds)
        self.connections = ConnectionStateTracker(status_source)
        self.selection = SelectionMachine()
        self.graph_window = graph_window or settings.get('dashboard.graph_window', GRAPH_WINDOW)

        self.connection_state = ConnectionState()
        self.addresses: List[Tuple[str, str]] = []
        self.last_snapshot: Optional[CounterSnapshot] = None
        self.sequence: float = 0.0
        self.graph_index: int = 0
        self.running = True

    @property
    def interval_seconds(self) -> float:
        return self.throughput.interval_seconds

    def start(self) -> None:
        """Take the counter baseline and load lists and connection state."""
        self.last_snapshot = self.counter_source.snapshot()
        self.refresh_lists()
        self._poll_connections()
        self.addresses = self.address_source.active_addresses()
        logger.info(f"Dashboard started with {len(self.last_snapshot)} interfaces in baseline")

    def tick(self) -> None:
        """One fixed-period update: counters, then connection state, then addresses."""
        current = self.counter_source.snapshot()

        if self.last_snapshot is None:
            # First poll only establishes the baseline
            self.last_snapshot = current
        else:
            self.sequence += 1
            set_log_tick(int(self.sequence))
            self.throughput.update(self.last_snapshot, current, self.sequence)
            self.last_snapshot = current

        self._poll_connections()
        self.addresses = self.address_source.active_addresses()
        logger.debug(f"Tick {self.sequence:.0f}: {len(self.throughput.interfaces)} interfaces tracked")

    def refresh_lists(self) -> None:
        """Re-fetch the VPN and Wi-Fi names from the directory."""
        vpn_names = self.directory.list_tunnels()
        wifi_ssids = self.directory.list_wifi_networks()
        self.selection.set_lists(vpn_names, wifi_ssids)
        logger.info(f"Lists refreshed: {len(vpn_names)} tunnels, {len(wifi_ssids)} Wi-Fi networks")

    def handle_event(self, event: InputEvent) -> bool:
        """Feed one input event to the selection machine and carry out its effects.

        Returns False once the user asked to quit.
        """
        for action in self.selection.handle(event):
            self._perform(action)
        return self.running

    def frame(self) -> FrameDescription:
        return render(
            self.selection,
            self.connection_state,
            self.throughput.interfaces,
            self.addresses,
            self.graph_index,
            self.sequence,
            self.graph_window,
            self.throughput.classify,
        )

    def _perform(self, action) -> None:
        if isinstance(action, SubmitSecret):
            self._fire(self.actions.connect, action.kind, action.name, action.secret)
        elif isinstance(action, RequestDisconnect):
            self._fire(self.actions.disconnect, action.name)
        elif action is Effect.REFRESH_LISTS:
            self.refresh_lists()
        elif action is Effect.OPEN_EDITOR:
            self._fire(self.actions.open_external_editor)
        elif action is Effect.CYCLE_GRAPH:
            self.graph_index += 1
        elif action is Effect.QUIT:
            self.running = False

    def _poll_connections(self) -> None:
        self.connection_state, events = self.connections.poll()
        for event in events:
            self._announce(event)

    def _announce(self, event: ConnectionEvent) -> None:
        note = notification_for(event)
        self._fire(self.notifier.notify, note.title, note.body, note.urgency, icon=note.icon)

    def _fire(self, func, *args, **kwargs) -> None:
        """Call a fire-and-forget collaborator; its failures never reach the caller."""
        try:
            func(*args, **kwargs)
        except Exception as e:
            logger.warning(f"{getattr(func, '__name__', 'action')} failed: {e}")
