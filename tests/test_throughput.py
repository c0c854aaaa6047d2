"""Pytest tests for per-interface throughput tracking."""

import pytest

from src.engine.throughput import (
    InterfaceCounters, InterfaceSample, Lane, ThroughputTracker,
    classify_lane, is_excluded, throughput_mbps,
)


def snap(**interfaces):
    """Build a snapshot from name=(rx, tx) keyword pairs."""
    return {name: InterfaceCounters(rx, tx) for name, (rx, tx) in interfaces.items()}


class TestThroughputFormula:
    """Test cases for the Mb/s conversion."""

    @pytest.mark.unit
    def test_ten_megabits(self):
        """655360 bytes in half a second is exactly 10 Mb/s."""
        assert throughput_mbps(1_000_000, 1_655_360, 0.5) == pytest.approx(10.0)

    @pytest.mark.unit
    def test_counter_decrease_is_zero(self):
        """A reset counter yields zero rather than a negative rate."""
        assert throughput_mbps(5_000_000, 1_000, 0.5) == 0.0

    @pytest.mark.unit
    def test_no_change(self):
        assert throughput_mbps(42, 42, 0.5) == 0.0

    @pytest.mark.unit
    def test_non_positive_interval(self):
        assert throughput_mbps(0, 1_000_000, 0) == 0.0


class TestClassification:
    """Test cases for lane classification and exclusion."""

    @pytest.mark.unit
    @pytest.mark.parametrize("name,lane", [
        ("eth0", Lane.PHYSICAL),
        ("enp3s0", Lane.PHYSICAL),
        ("wlan0", Lane.WIRELESS),
        ("wlp2s0", Lane.WIRELESS),
        ("tun0", Lane.TUNNEL),
        ("wg0", Lane.TUNNEL),
        ("ppp0", Lane.TUNNEL),
        ("bond0", Lane.OTHER),
    ])
    def test_classify_lane(self, name, lane):
        assert classify_lane(name) is lane

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["lo", "docker0", "br-1a2b3c", "veth9f1", "virbr0"])
    def test_excluded(self, name):
        assert is_excluded(name)

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["eth0", "wlan0", "wg0", "local0"])
    def test_not_excluded(self, name):
        assert not is_excluded(name)

    @pytest.mark.unit
    def test_uplink_lanes(self):
        assert Lane.PHYSICAL.is_uplink
        assert Lane.WIRELESS.is_uplink
        assert not Lane.TUNNEL.is_uplink
        assert not Lane.OTHER.is_uplink


class TestInterfaceSample:
    """Test cases for InterfaceSample history handling."""

    @pytest.mark.unit
    def test_empty_sample(self):
        sample = InterfaceSample("eth0", Lane.PHYSICAL)
        assert sample.current_speed == 0.0
        assert sample.last_sequence is None

    @pytest.mark.unit
    def test_record_sets_current_speed(self):
        sample = InterfaceSample("eth0", Lane.PHYSICAL)
        assert sample.record(1, 3.5, 1.25)
        assert sample.current_speed == 3.5
        assert sample.tx_speed == 1.25

    @pytest.mark.unit
    def test_non_increasing_sequence_ignored(self):
        sample = InterfaceSample("eth0", Lane.PHYSICAL)
        sample.record(5, 1.0)
        assert not sample.record(5, 2.0)
        assert not sample.record(4, 2.0)
        assert list(sample.history) == [(5, 1.0)]


class TestThroughputTracker:
    """Test cases for ThroughputTracker."""

    @pytest.fixture
    def tracker(self):
        return ThroughputTracker(interval_seconds=0.5, history_size=300)

    @pytest.mark.unit
    def test_first_sighting_records_nothing(self, tracker):
        """An interface missing from the previous snapshot has no rate yet."""
        interfaces = tracker.update({}, snap(eth0=(100, 100)), 1)
        assert interfaces == {}

    @pytest.mark.unit
    def test_ten_megabit_scenario(self, tracker):
        interfaces = tracker.update(snap(eth0=(1_000_000, 0)), snap(eth0=(1_655_360, 0)), 1)

        sample = interfaces["eth0"]
        assert sample.lane is Lane.PHYSICAL
        assert sample.current_speed == pytest.approx(10.0)
        assert list(sample.history) == [(1, pytest.approx(10.0))]

    @pytest.mark.unit
    def test_tx_rate_recorded(self, tracker):
        interfaces = tracker.update(snap(eth0=(0, 0)), snap(eth0=(0, 131_072)), 1)
        assert interfaces["eth0"].tx_speed == pytest.approx(2.0)
        assert interfaces["eth0"].current_speed == 0.0

    @pytest.mark.unit
    def test_history_bounded_and_ordered(self, tracker):
        """After many polls history stays at 300 points with strictly rising x."""
        rx = 0
        previous = snap(wlan0=(rx, 0))
        for sequence in range(1, 351):
            rx += 65_536
            current = snap(wlan0=(rx, 0))
            tracker.update(previous, current, sequence)
            previous = current

        history = list(tracker.interfaces["wlan0"].history)
        assert len(history) == 300
        assert history[0][0] == 51
        assert history[-1][0] == 350
        assert all(a[0] < b[0] for a, b in zip(history, history[1:]))
        assert all(y >= 0 for _, y in history)

    @pytest.mark.unit
    def test_counter_reset_never_negative(self, tracker):
        interfaces = tracker.update(snap(eth0=(9_000_000, 9_000_000)), snap(eth0=(10, 10)), 1)
        assert interfaces["eth0"].current_speed == 0.0
        assert interfaces["eth0"].tx_speed == 0.0

    @pytest.mark.unit
    def test_disappeared_interface_removed(self, tracker):
        tracker.update(snap(eth0=(0, 0), tun0=(0, 0)), snap(eth0=(10, 0), tun0=(10, 0)), 1)
        assert set(tracker.interfaces) == {"eth0", "tun0"}

        interfaces = tracker.update(snap(eth0=(10, 0), tun0=(10, 0)), snap(eth0=(20, 0)), 2)
        assert set(interfaces) == {"eth0"}

    @pytest.mark.unit
    def test_excluded_interfaces_never_tracked(self, tracker):
        previous = snap(lo=(0, 0), docker0=(0, 0), veth1=(0, 0), eth0=(0, 0))
        current = snap(lo=(500, 0), docker0=(500, 0), veth1=(500, 0), eth0=(500, 0))
        assert set(tracker.update(previous, current, 1)) == {"eth0"}

    @pytest.mark.unit
    def test_lane_fixed_after_creation(self, tracker):
        tracker.update(snap(wg0=(0, 0)), snap(wg0=(1, 0)), 1)
        tracker.update(snap(wg0=(1, 0)), snap(wg0=(2, 0)), 2)
        assert tracker.interfaces["wg0"].lane is Lane.TUNNEL
        assert len(tracker.interfaces["wg0"].history) == 2

    @pytest.mark.unit
    def test_reused_sequence_not_appended(self, tracker):
        tracker.update(snap(eth0=(0, 0)), snap(eth0=(10, 0)), 1)
        tracker.update(snap(eth0=(10, 0)), snap(eth0=(20, 0)), 1)
        assert len(tracker.interfaces["eth0"].history) == 1

    @pytest.mark.unit
    def test_classify_uses_configured_prefixes(self, tracker):
        tracker.tunnel_prefixes = ['nordlynx']
        assert tracker.classify("nordlynx") is Lane.TUNNEL
        assert tracker.classify("tun0") is Lane.OTHER

        tracker.update(snap(nordlynx=(0, 0)), snap(nordlynx=(1, 0)), 1)
        assert tracker.interfaces["nordlynx"].lane is Lane.TUNNEL
