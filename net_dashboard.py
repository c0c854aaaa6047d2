#!/usr/bin/env python3
"""
Network Dashboard - live interface throughput with VPN and Wi-Fi control.

Uses the Textual TUI framework; run without arguments for the dashboard, or
see --help for the one-shot interfaces/connections commands.

This is the entry point script. The implementation is in src/.
"""

from src.utils.cli import cli

if __name__ == "__main__":
    cli()
