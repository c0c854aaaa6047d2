"""External collaborators: kernel counters, NetworkManager, iproute2 and desktop notifications."""

from .addresses import IpAddressSource
from .counters import InterfaceCounters, ProcNetDevSource
from .exceptions import NetDashboardError, CommandError, ConfigurationError
from .network_manager import NetworkManagerClient
from .notifier import DesktopNotifier

__all__ = [
    'IpAddressSource',
    'InterfaceCounters',
    'ProcNetDevSource',
    'NetDashboardError',
    'CommandError',
    'ConfigurationError',
    'NetworkManagerClient',
    'DesktopNotifier',
]
