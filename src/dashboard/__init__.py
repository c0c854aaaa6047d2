"""
Network Dashboard - live interface throughput with VPN and Wi-Fi control.

Uses the Textual TUI framework; engine state lives in src.engine.
"""

from .app import NetDashboardApp, build_context, main
from .models import ColorTheme, THEME, format_mbps

__all__ = [
    # Main app and entry points
    "NetDashboardApp",
    "build_context",
    "main",
    # Presentation
    "ColorTheme",
    "THEME",
    "format_mbps",
]
