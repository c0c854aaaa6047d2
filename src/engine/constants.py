"""
Defaults shared by the dashboard engine.

Runtime values come from config/settings.py; these are the fallbacks.
"""

# Seconds between counter polls
TICK_INTERVAL: float = 0.5

# Samples kept per interface (sliding window)
HISTORY_SIZE: int = 300

# Width of the graph's x-axis in sequence units
GRAPH_WINDOW: float = 300.0

# Smallest vertical bound of the graph, in Mb/s
MIN_GRAPH_CEILING: float = 1.0

BITS_PER_BYTE: int = 8
BYTES_PER_MEBIBYTE: int = 1024 * 1024

LOOPBACK: str = "lo"
