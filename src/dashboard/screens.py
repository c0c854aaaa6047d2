"""
Screen classes for the dashboard.

Contains:
- DashboardScreen: the single full-screen view driven by the tick timer and key input
"""

from typing import Optional

from textual import events
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import Static

from src.engine.selection import key_to_event
from src.utils.logger import get_logger

from .widgets import InterfacePanel, SecretPrompt, SelectionPanel, ThroughputGraph

logger = get_logger(__name__)


class DashboardScreen(Screen):
    """Live throughput and VPN/Wi-Fi control.

    Key presses are translated for the current mode and handed to the
    application context; nothing here mutates engine state directly. The
    tick timer and key handlers both run on the app's event loop, so the
    context has a single owner.
    """

    def __init__(self):
        super().__init__()
        self.tick_timer: Optional[Timer] = None

    @property
    def context(self):
        return self.app.context

    def compose(self) -> ComposeResult:
        with Horizontal(id="top-row"):
            yield SelectionPanel(id="selection-panel")
            yield InterfacePanel(id="interface-panel")
        yield ThroughputGraph(id="graph-panel")
        yield Static("", id="status-bar")
        with Container(id="overlay"):
            yield SecretPrompt(id="secret-prompt")

    def on_mount(self) -> None:
        self._refresh_view()
        self.tick_timer = self.set_interval(self.context.interval_seconds, self._tick)
        logger.info(f"Tick timer started every {self.context.interval_seconds}s")

    def on_unmount(self) -> None:
        if self.tick_timer:
            self.tick_timer.stop()
            self.tick_timer = None

    def _tick(self) -> None:
        self.context.tick()
        self._refresh_view()

    def on_key(self, event: events.Key) -> None:
        """Route every key through the selection state machine."""
        # Keep keys away from app/screen bindings such as tab focus cycling
        event.stop()
        event.prevent_default()

        input_event = key_to_event(event.key, event.character, self.context.selection.in_secret_entry)
        if input_event is None:
            return

        if not self.context.handle_event(input_event):
            self.app.exit()
            return
        self._refresh_view()

    def _refresh_view(self) -> None:
        frame = self.context.frame()

        self.query_one("#selection-panel", SelectionPanel).show(frame.list_view)
        self.query_one("#interface-panel", InterfacePanel).show(frame.interfaces)
        self.query_one("#graph-panel", ThroughputGraph).show(frame.graph, frame.placeholder)
        self.query_one("#status-bar", Static).update(frame.status)

        overlay = self.query_one("#overlay", Container)
        if frame.secret_prompt is not None:
            self.query_one("#secret-prompt", SecretPrompt).show(frame.secret_prompt)
            overlay.add_class("visible")
        else:
            overlay.remove_class("visible")
