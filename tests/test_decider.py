"""Tests for the reception state machine."""

import pytest

from decider_sim.config import DeciderConfig
from decider_sim.core.decider import BaseDecider, SignalState
from decider_sim.core.mapping import Mapping
from decider_sim.core.signal import Transmission
from decider_sim.errors import ContractViolation
from decider_sim.units import dbm_to_mw


@pytest.fixture
def decider(host):
    return BaseDecider(host, DeciderConfig(sensitivity_dbm=-90.0))


def _frame(id, start=0.0, duration=10.0, power_dbm=-85.0):
    return Transmission.constant(id, start, duration, power_dbm)


class TestTransmission:
    @pytest.mark.parametrize("duration", [0.0, -1.0])
    def test_non_positive_duration_rejected(self, duration):
        with pytest.raises(ValueError, match="duration must be positive"):
            Transmission.constant(1, 0.0, duration, -85.0)
        with pytest.raises(ValueError, match="duration must be positive"):
            Transmission(id=1, start=0.0, duration=duration, power=Mapping())

    def test_end(self):
        assert _frame(1, start=2.0, duration=3.0).end == 5.0


class TestAcceptance:
    def test_strong_frame_accepted_until_end(self, host, decider):
        a = _frame(1)
        host.frames = [a]
        assert decider.on_frame_event(a) == 10.0
        assert decider.channel_idle is False
        assert decider.current_frame is a
        assert decider.signal_state(a) is SignalState.EXPECT_END

    def test_weak_frame_rejected(self, host, decider):
        a = _frame(1, power_dbm=-95.0)
        host.frames = [a]
        assert decider.on_frame_event(a) is None
        assert decider.channel_idle is True
        assert decider.current_frame is None
        assert host.sent_up == []

    def test_exactly_at_sensitivity_accepted(self, host, decider):
        a = _frame(1, power_dbm=-90.0)
        assert decider.on_frame_event(a) == 10.0

    def test_power_sampled_at_frame_start(self, host, decider):
        # Weak at the start, strong later: still refused.
        power = Mapping([0.0, 1.0, 10.0], [dbm_to_mw(-95.0), dbm_to_mw(-60.0), 0.0])
        a = Transmission(id=1, start=0.0, duration=10.0, power=power)
        assert decider.on_frame_event(a) is None

    def test_second_frame_rejected_while_receiving(self, host, decider):
        a = _frame(1)
        b = _frame(2, start=3.0, power_dbm=-40.0)
        decider.on_frame_event(a)
        host.time = 3.0
        assert decider.on_frame_event(b) is None
        assert decider.current_frame is a
        assert decider.channel_idle is False

    def test_missing_frame_is_fatal(self, decider):
        with pytest.raises(ContractViolation):
            decider.on_frame_event(None)


class TestEndOfReception:
    def test_delivered_once_and_idle_again(self, host, decider):
        a = _frame(1)
        decider.on_frame_event(a)
        host.time = 10.0
        assert decider.on_frame_event(a) is None
        assert len(host.sent_up) == 1
        frame, result = host.sent_up[0]
        assert frame is a
        assert result.decoded is True
        assert decider.channel_idle is True
        assert decider.current_frame is None

    def test_same_frame_after_end_is_new_again(self, host, decider):
        a = _frame(1)
        decider.on_frame_event(a)
        host.time = 10.0
        decider.on_frame_event(a)
        assert decider.signal_state(a) is SignalState.NEW

    def test_next_frame_accepted_after_end(self, host, decider):
        a = _frame(1)
        b = _frame(2, start=10.0)
        decider.on_frame_event(a)
        host.time = 10.0
        decider.on_frame_event(a)
        assert decider.on_frame_event(b) == 20.0


class TestHeaderCheckpoint:
    def test_header_then_end(self, host):
        decider = BaseDecider(host, DeciderConfig(sensitivity_dbm=-90.0, header_length=2.0))
        a = _frame(1)
        assert decider.on_frame_event(a) == 2.0
        assert decider.signal_state(a) is SignalState.EXPECT_HEADER
        host.time = 2.0
        assert decider.on_frame_event(a) == 10.0
        assert decider.signal_state(a) is SignalState.EXPECT_END
        host.time = 10.0
        assert decider.on_frame_event(a) is None
        assert len(host.sent_up) == 1

    def test_fade_during_header_drops_frame(self, host):
        decider = BaseDecider(host, DeciderConfig(sensitivity_dbm=-90.0, header_length=2.0))
        power = Mapping([0.0, 1.0, 10.0], [dbm_to_mw(-85.0), dbm_to_mw(-100.0), 0.0])
        a = Transmission(id=1, start=0.0, duration=10.0, power=power)
        decider.on_frame_event(a)
        host.time = 2.0
        assert decider.on_frame_event(a) is None
        assert decider.channel_idle is True
        assert decider.current_frame is None
        assert host.sent_up == []

    def test_header_longer_than_frame_is_skipped(self, host):
        decider = BaseDecider(host, DeciderConfig(sensitivity_dbm=-90.0, header_length=20.0))
        assert decider.on_frame_event(_frame(1)) == 10.0


class TestChannelState:
    def test_idle_empty_channel(self, host, decider):
        state = decider.current_channel_state()
        assert state.idle is True
        assert state.rssi == 0.0

    def test_busy_reports_instant_power(self, host, decider):
        a = _frame(1)
        host.frames = [a]
        decider.on_frame_event(a)
        host.time = 4.0
        state = decider.current_channel_state()
        assert state.idle is False
        assert state.rssi == pytest.approx(dbm_to_mw(-85.0))

    def test_query_has_no_side_effects(self, host, decider):
        a = _frame(1)
        host.frames = [a]
        decider.on_frame_event(a)
        decider.current_channel_state()
        decider.current_channel_state()
        assert decider.current_frame is a
        assert host.sent_up == []
