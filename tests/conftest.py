"""Pytest fixtures for network dashboard tests."""

import pytest
import sys
from pathlib import Path
from typing import Dict, List, Optional


def pytest_configure(config):
    """Register custom pytest marks."""
    config.addinivalue_line(
        "markers", "unit: Unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests"
    )

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.engine.throughput import InterfaceCounters


class FakeCounterSource:
    """Returns queued snapshots in order, repeating the last one."""

    def __init__(self, snapshots: Optional[List[Dict[str, InterfaceCounters]]] = None):
        self.snapshots = list(snapshots or [])
        self.calls = 0

    def queue(self, snapshot: Dict[str, InterfaceCounters]) -> None:
        self.snapshots.append(snapshot)

    def snapshot(self) -> Dict[str, InterfaceCounters]:
        self.calls += 1
        if not self.snapshots:
            return {}
        if len(self.snapshots) > 1:
            return self.snapshots.pop(0)
        return self.snapshots[0]


class FakeNetworkManager:
    """Directory and status source with settable contents."""

    def __init__(self, tunnels=(), wifi=(), active=(), ssid=None):
        self.tunnels = list(tunnels)
        self.wifi = list(wifi)
        self.active = set(active)
        self.ssid = ssid
        self.list_calls = 0

    def list_tunnels(self):
        self.list_calls += 1
        return list(self.tunnels)

    def list_wifi_networks(self):
        return list(self.wifi)

    def active_tunnels(self):
        return set(self.active)

    def active_ssid(self):
        return self.ssid


class FakeAddressSource:
    def __init__(self, addresses=()):
        self.addresses = list(addresses)

    def active_addresses(self):
        return list(self.addresses)


class RecordingActions:
    """Action sink that records calls instead of spawning processes."""

    def __init__(self):
        self.calls = []

    def connect(self, kind, name, secret):
        self.calls.append(('connect', kind, name, secret))

    def disconnect(self, name):
        self.calls.append(('disconnect', name))

    def open_external_editor(self):
        self.calls.append(('editor',))


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def notify(self, title, body, urgency=None, icon=None):
        self.sent.append((title, body, urgency, icon))


def counters(rx: int, tx: int = 0) -> InterfaceCounters:
    return InterfaceCounters(rx_bytes=rx, tx_bytes=tx)


@pytest.fixture
def counter_source():
    return FakeCounterSource()


@pytest.fixture
def network_manager():
    return FakeNetworkManager(tunnels=["home", "office"], wifi=["cafe", "lab"])


@pytest.fixture
def address_source():
    return FakeAddressSource([("eth0", "192.168.1.10")])


@pytest.fixture
def actions():
    return RecordingActions()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def dashboard_context(counter_source, network_manager, address_source, actions, notifier):
    """DashboardContext wired to fakes with a 0.5 s tick."""
    from src.engine.context import DashboardContext
    return DashboardContext(
        counter_source=counter_source,
        directory=network_manager,
        status_source=network_manager,
        address_source=address_source,
        actions=actions,
        notifier=notifier,
        interval_seconds=0.5,
        graph_window=300,
    )
