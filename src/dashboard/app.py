"""
Main application class and entry points for the dashboard.

Contains:
- NetDashboardApp: Main Textual application class
- build_context: Wires the concrete collaborators into a DashboardContext
- main: Main entry point function
"""

import sys
from typing import Optional

from textual.app import App

from src.collectors import (
    DesktopNotifier, IpAddressSource, NetworkManagerClient, ProcNetDevSource,
)
from src.engine.context import DashboardContext
from src.utils.logger import get_logger, suppress_console_logging

from .screens import DashboardScreen
from .styles import get_css

logger = get_logger(__name__)


class NetDashboardApp(App):
    """Terminal dashboard for interface throughput and VPN/Wi-Fi control."""

    TITLE = "Network Dashboard"
    ENABLE_COMMAND_PALETTE = False

    CSS = get_css()

    def __init__(self, context: DashboardContext):
        super().__init__()
        # Engine state lives here for the lifetime of the app
        self.context = context

    def on_mount(self) -> None:
        """Load initial state, then show the dashboard."""
        self.context.start()
        self.push_screen(DashboardScreen())


def build_context(interval_seconds: Optional[float] = None) -> DashboardContext:
    """Create a context backed by /proc, nmcli, iproute2 and notify-send."""
    network_manager = NetworkManagerClient()
    return DashboardContext(
        counter_source=ProcNetDevSource(),
        directory=network_manager,
        status_source=network_manager,
        address_source=IpAddressSource(),
        actions=network_manager,
        notifier=DesktopNotifier(),
        interval_seconds=interval_seconds,
    )


def main(interval_seconds: Optional[float] = None):
    """Main entry point."""
    # The TUI owns the terminal; logs still go to file
    suppress_console_logging()

    try:
        app = NetDashboardApp(build_context(interval_seconds))
        app.run()

    except KeyboardInterrupt:
        # Clean exit on Ctrl+C
        pass
    except Exception as e:
        from rich.console import Console
        console = Console()
        console.print(f"[red]Error: {e}[/red]")
        logger.exception("Fatal error")
        sys.exit(1)
