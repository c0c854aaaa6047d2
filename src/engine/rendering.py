"""
Frame model for the dashboard.

``render`` turns engine state into a ``FrameDescription``: plain data that the
terminal widgets draw. It has no side effects and never fails; missing data
becomes empty lists or placeholder text.

The graph shows one interface at a time. Odd graph indices cycle through
tunnel interfaces that have an address; even indices show the first
physical/wireless interface with an address.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .connections import ConnectionState
from .constants import GRAPH_WINDOW, MIN_GRAPH_CEILING
from .selection import ListKind, SecretEntry, SelectionMachine, clamp_cursor
from .throughput import InterfaceSample, Lane, classify_lane

Point = Tuple[float, float]

LIST_TITLES: Dict[ListKind, str] = {
    ListKind.VPN: " [ VPN LIST ] ",
    ListKind.WIFI: " [ WIFI SCAN ] ",
}

BROWSE_HINTS = " [TAB] Mode | [G] Graph | [A] Add VPN | [ENTER] Connect | [X] Disc | [R] Refresh | [Q] Quit "
SECRET_HINTS = " [ENTER] Submit | [ESC] Cancel | [BKSP] Delete "
GRAPH_PLACEHOLDER = "Waiting for an interface with an address..."
SECRET_TITLE = " Password Required "


@dataclass(frozen=True)
class ListItemView:
    name: str
    label: str
    active: bool


@dataclass(frozen=True)
class ListView:
    kind: ListKind
    title: str
    items: Tuple[ListItemView, ...]
    selected: Optional[int]


@dataclass(frozen=True)
class InterfaceRow:
    name: str
    address: str
    lane: Lane
    rx_mbps: Optional[float] = None
    tx_mbps: Optional[float] = None


@dataclass(frozen=True)
class GraphView:
    interface: str
    lane: Lane
    speed: float
    points: Tuple[Point, ...]
    x_bounds: Tuple[float, float]
    y_max: float

    @property
    def title(self) -> str:
        return f" {self.interface} - {self.speed:.2f} Mb/s "

    @property
    def max_label(self) -> str:
        return f"{self.y_max:.1f} Mb/s max"


@dataclass(frozen=True)
class SecretPromptView:
    title: str
    target: str
    masked: str


@dataclass(frozen=True)
class FrameDescription:
    list_view: ListView
    interfaces: Tuple[InterfaceRow, ...]
    graph: Optional[GraphView]
    placeholder: str
    status: str
    secret_prompt: Optional[SecretPromptView] = None


def build_list_view(selection: SelectionMachine, connections: ConnectionState) -> ListView:
    kind = selection.browse.kind
    names = selection.items(kind)

    items = []
    for name in names:
        if kind is ListKind.VPN:
            active = name in connections.active_tunnels
            marker = "●" if active else "○"
        else:
            active = bool(connections.active_ssid) and name == connections.active_ssid
            marker = "📶" if active else "  "
        items.append(ListItemView(name=name, label=f" {marker} {name}", active=active))

    selected = clamp_cursor(selection.browse.cursor, len(names)) if names else None
    return ListView(kind=kind, title=LIST_TITLES[kind], items=tuple(items), selected=selected)


def build_interface_rows(interfaces: Mapping[str, InterfaceSample],
                         addresses: Sequence[Tuple[str, str]],
                         classify: Callable[[str], Lane] = classify_lane) -> Tuple[InterfaceRow, ...]:
    """Rows for addressed interfaces; untracked ones are classified with ``classify``."""
    rows = []
    for name, address in addresses:
        sample = interfaces.get(name)
        if sample is not None:
            rows.append(InterfaceRow(name, address, sample.lane, sample.current_speed, sample.tx_speed))
        else:
            rows.append(InterfaceRow(name, address, classify(name)))
    return tuple(rows)


def select_graph_series(interfaces: Mapping[str, InterfaceSample],
                        addresses: Sequence[Tuple[str, str]],
                        graph_index: int) -> Optional[InterfaceSample]:
    """Pick the interface to graph for this frame."""
    addressed = {name for name, _ in addresses}
    candidates = sorted(
        (sample for name, sample in interfaces.items() if name in addressed),
        key=lambda s: s.name,
    )
    tunnels = [s for s in candidates if s.lane is Lane.TUNNEL]
    uplinks = [s for s in candidates if s.lane.is_uplink]

    if graph_index % 2 == 1 and tunnels:
        return tunnels[(graph_index // 2) % len(tunnels)]
    if uplinks:
        return uplinks[0]
    if tunnels:
        return tunnels[(graph_index // 2) % len(tunnels)]
    return None


def build_graph_view(sample: InterfaceSample, sequence: float, window: float = GRAPH_WINDOW) -> GraphView:
    """Window the sample's history to ``[sequence - window, sequence]`` and autoscale."""
    low, high = sequence - window, sequence
    points = tuple((x, y) for x, y in sample.history if low <= x <= high)
    y_max = max([MIN_GRAPH_CEILING] + [y for _, y in points])
    return GraphView(
        interface=sample.name,
        lane=sample.lane,
        speed=sample.current_speed,
        points=points,
        x_bounds=(low, high),
        y_max=y_max,
    )


def graph_columns(graph: GraphView, width: int) -> List[Optional[float]]:
    """Map the graph's points onto ``width`` columns of fill levels in [0, 1].

    Consecutive points are joined by linear interpolation so sparse data still
    draws a continuous line. Columns with no data are None.
    """
    if width <= 0:
        return []
    columns: List[Optional[float]] = [None] * width
    low, high = graph.x_bounds
    span = high - low
    if span <= 0 or not graph.points:
        return columns

    def column_of(x: float) -> int:
        return min(width - 1, max(0, int(round((x - low) / span * (width - 1)))))

    def put(col: int, level: float) -> None:
        level = min(1.0, max(0.0, level))
        if columns[col] is None or level > columns[col]:
            columns[col] = level

    scaled = [(column_of(x), y / graph.y_max) for x, y in graph.points]
    put(*scaled[0])
    for (c0, v0), (c1, v1) in zip(scaled, scaled[1:]):
        steps = c1 - c0
        if steps <= 0:
            put(c1, v1)
            continue
        for step in range(1, steps + 1):
            put(c0 + step, v0 + (v1 - v0) * step / steps)
    return columns


def render(selection: SelectionMachine,
           connections: ConnectionState,
           interfaces: Mapping[str, InterfaceSample],
           addresses: Sequence[Tuple[str, str]],
           graph_index: int,
           sequence: float,
           window: float = GRAPH_WINDOW,
           classify: Callable[[str], Lane] = classify_lane) -> FrameDescription:
    """Describe the frame for the current engine state."""
    sample = select_graph_series(interfaces, addresses, graph_index)
    graph = build_graph_view(sample, sequence, window) if sample is not None else None

    prompt = None
    mode = selection.mode
    if isinstance(mode, SecretEntry):
        prompt = SecretPromptView(title=SECRET_TITLE, target=mode.target, masked="*" * len(mode.buffer))

    return FrameDescription(
        list_view=build_list_view(selection, connections),
        interfaces=build_interface_rows(interfaces, addresses, classify),
        graph=graph,
        placeholder=GRAPH_PLACEHOLDER,
        status=SECRET_HINTS if prompt else BROWSE_HINTS,
        secret_prompt=prompt,
    )
