"""
Custom widgets for the dashboard.

Each widget draws one part of a FrameDescription:
- SelectionPanel: VPN or Wi-Fi list with the cursor highlighted
- InterfacePanel: interfaces with addresses and current rates
- ThroughputGraph: braille area graph of the selected interface
- SecretPrompt: masked secret-entry box
"""

from typing import Optional, Sequence

from rich.console import Group
from rich.text import Text
from textual.widgets import Static

from src.engine.selection import ListKind
from src.engine.rendering import GraphView, InterfaceRow, ListView, SecretPromptView, graph_columns

from .models import THEME, area_rows, format_mbps

HIGHLIGHT_SYMBOL = ">> "


class SelectionPanel(Static):
    """Selectable name list for the current browse mode."""

    def show(self, view: ListView) -> None:
        self.border_title = view.title
        self.set_class(view.kind is ListKind.WIFI, "wifi")

        if not view.items:
            self.update(Text("(empty - press R to refresh)", style=THEME.text_dim))
            return

        color = THEME.list_color(view.kind)
        lines = []
        for index, item in enumerate(view.items):
            selected = index == view.selected
            prefix = HIGHLIGHT_SYMBOL if selected else " " * len(HIGHLIGHT_SYMBOL)
            style = color if item.active else THEME.text
            if selected:
                style = f"bold {style} on {THEME.highlight}"
            lines.append(Text(prefix + item.label, style=style))
        self.update(Group(*lines))


class InterfacePanel(Static):
    """Interfaces with an IPv4 address, colored by lane."""

    def on_mount(self) -> None:
        self.border_title = " [ ACTIVE INTERFACES ] "

    def show(self, rows: Sequence[InterfaceRow]) -> None:
        if not rows:
            self.update(Text("No addresses assigned", style=THEME.text_dim))
            return

        lines = []
        for row in rows:
            text = Text()
            text.append(f" • {row.name:<15}", style=f"bold {THEME.lane_color(row.lane)}")
            text.append(f": {row.address:<16}", style=THEME.lane_color(row.lane))
            if row.rx_mbps is not None:
                text.append(f" ▼ {format_mbps(row.rx_mbps):>11}", style=THEME.text_dim)
                text.append(f" ▲ {format_mbps(row.tx_mbps):>11}", style=THEME.text_dim)
            lines.append(text)
        self.update(Group(*lines))


class ThroughputGraph(Static):
    """Autoscaled area graph of one interface's receive throughput."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._graph: Optional[GraphView] = None
        self._placeholder = ""

    def show(self, graph: Optional[GraphView], placeholder: str) -> None:
        self._graph = graph
        self._placeholder = placeholder
        self._draw()

    def on_resize(self) -> None:
        self._draw()

    def _draw(self) -> None:
        graph = self._graph
        if graph is None:
            self.border_title = ""
            self.update(Text(self._placeholder, style=THEME.text_dim, justify="center"))
            return

        width = max(1, self.content_size.width)
        # One row for the scale label
        height = max(1, self.content_size.height - 1)

        self.border_title = graph.title
        color = THEME.lane_color(graph.lane)
        rows = area_rows(graph_columns(graph, width), height, color)
        self.update(Group(Text(graph.max_label, style=THEME.text_dim), *rows))


class SecretPrompt(Static):
    """Shows one '*' per typed character, never the characters themselves."""

    def show(self, prompt: SecretPromptView) -> None:
        self.border_title = prompt.title
        text = Text()
        text.append(f"{prompt.target}\n", style=THEME.text_dim)
        text.append(prompt.masked or " ", style=f"bold {THEME.text}")
        self.update(text)
