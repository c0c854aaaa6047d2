"""Live metrics and interaction engine for the network dashboard."""

from .connections import ConnectionEvent, ConnectionState, ConnectionStateTracker, EventKind, Urgency
from .context import DashboardContext
from .rendering import FrameDescription, render
from .selection import Browse, CharInput, Command, ListKind, SecretEntry, SelectionMachine, key_to_event
from .throughput import InterfaceCounters, InterfaceSample, Lane, ThroughputTracker

__all__ = [
    'ConnectionEvent',
    'ConnectionState',
    'ConnectionStateTracker',
    'EventKind',
    'Urgency',
    'DashboardContext',
    'FrameDescription',
    'render',
    'Browse',
    'CharInput',
    'Command',
    'ListKind',
    'SecretEntry',
    'SelectionMachine',
    'key_to_event',
    'InterfaceCounters',
    'InterfaceSample',
    'Lane',
    'ThroughputTracker',
]
