"""
Presentation models for the dashboard.

Contains:
- ColorTheme: Centralized color theme management
- Braille helpers used to draw the throughput graph
- Formatting helpers for rates
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from rich.text import Text

from src.engine.selection import ListKind
from src.engine.throughput import Lane

# Braille vertical bar patterns for graph rendering (bottom-to-top, left column)
# Each character represents a fill level from 0 (empty) to 4 (full)
BRAILLE_BARS_UP = [
    '⠀',  # Level 0: blank (⠀)
    '⡀',  # Level 1: dot 7 - bottom (⡀)
    '⡄',  # Level 2: dots 3,7 (⡄)
    '⡆',  # Level 3: dots 2,3,7 (⡆)
    '⡇',  # Level 4: dots 1,2,3,7 - full left column (⡇)
]

# Number of braille levels per row (excluding the empty level)
BRAILLE_LEVELS_PER_ROW = 4


def get_braille_char(fill_level: float) -> str:
    """
    Get the braille character for a given fill level within a row.

    Args:
        fill_level: Value from 0.0 to 1.0 representing how full this row should be

    Returns:
        The appropriate braille character for the fill level
    """
    if fill_level <= 0:
        return BRAILLE_BARS_UP[0]

    # Any non-zero value shows at least a single dot
    index = int(fill_level * BRAILLE_LEVELS_PER_ROW)
    index = max(1, min(index, BRAILLE_LEVELS_PER_ROW))

    return BRAILLE_BARS_UP[index]


@dataclass
class ColorTheme:
    """Centralized color theme management."""

    primary: str = "#58a6ff"
    success: str = "#56d364"
    warning: str = "#d29922"
    error: str = "#f85149"

    # Lane colors
    physical: str = "#56d364"
    wireless: str = "#e3b341"
    tunnel: str = "#39c5cf"
    other: str = "#8b949e"

    # Mode colors
    vpn_border: str = "#39c5cf"
    wifi_border: str = "#e3b341"
    secret_border: str = "#bc8cff"

    # UI colors
    background: str = "#0d1117"
    surface: str = "#161b22"
    highlight: str = "#3a3a3a"

    text: str = "#c9d1d9"
    text_dim: str = "#8b949e"

    border: str = "#30363d"

    def lane_color(self, lane: Lane) -> str:
        return {
            Lane.PHYSICAL: self.physical,
            Lane.WIRELESS: self.wireless,
            Lane.TUNNEL: self.tunnel,
        }.get(lane, self.other)

    def list_color(self, kind: ListKind) -> str:
        return self.wifi_border if kind is ListKind.WIFI else self.vpn_border


# Global theme instance
THEME = ColorTheme()


def format_mbps(mbps: Optional[float]) -> str:
    """Format a Mb/s value, or a dash when there is no sample."""
    if mbps is None:
        return "-"
    if mbps >= 1024:
        return f"{mbps / 1024:.2f} Gb/s"
    if mbps >= 1:
        return f"{mbps:.2f} Mb/s"
    return f"{mbps * 1024:.0f} Kb/s"


def area_rows(columns: Sequence[Optional[float]], height: int, color: str) -> List[Text]:
    """
    Draw column fill levels as a filled braille area graph.

    Args:
        columns: Per-column fill levels in [0, 1], None where there is no data
        height: Number of text rows
        color: Base color of the series; the top rows take it, lower rows fade

    Returns:
        One Text per row, top row first
    """
    empty = BRAILLE_BARS_UP[0]
    total_levels = height * BRAILLE_LEVELS_PER_ROW
    normalized = [None if c is None else c * total_levels for c in columns]

    rows = []
    for row_num in range(height, 0, -1):
        row_base = (row_num - 1) * BRAILLE_LEVELS_PER_ROW
        row_top = row_num * BRAILLE_LEVELS_PER_ROW

        chars = []
        for val in normalized:
            if val is None or val <= row_base:
                chars.append(empty)
            elif val >= row_top:
                chars.append(get_braille_char(1.0))
            else:
                chars.append(get_braille_char((val - row_base) / BRAILLE_LEVELS_PER_ROW))

        style = color if row_num > height // 2 else f"dim {color}"
        rows.append(Text("".join(chars), style=style))
    return rows
