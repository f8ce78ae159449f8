"""Per-frame reception decisions and channel sensing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .host import PhyHost
from .mapping import Mapping
from .sense import ChannelSenseRequest, ChannelState, SenseMode
from .signal import DeciderResult, Transmission
from ..config import DeciderConfig
from ..errors import ContractViolation
from ..propagation.interference import InterferenceAccumulator

logger = logging.getLogger(__name__)

# Returned instead of a wake time: do not re-invoke for this frame/request.
NOT_AGAIN: Optional[float] = None


class SignalState(Enum):
    NEW = "new"
    EXPECT_HEADER = "expect_header"
    EXPECT_END = "expect_end"


@dataclass
class _PendingSense:
    request: ChannelSenseRequest
    arrival: float


class BaseDecider:
    """Decides which frames a receiver can demodulate and tracks channel occupancy.

    The receiver locks onto at most one frame at a time: the first frame that
    arrives at or above the sensitivity while nothing else is being received.
    Every handler returns the time at which the host should call it again for
    the same frame or request, or :data:`NOT_AGAIN`.

    Parameters
    ----------
    host : PhyHost
        Physical layer providing time, channel contents and upward delivery.
    config : DeciderConfig
        Sensitivity, header checkpoint and SNR settings.
    """

    def __init__(self, host: PhyHost, config: Optional[DeciderConfig] = None) -> None:
        self.host = host
        self.config = config or DeciderConfig()
        self.sensitivity = self.config.sensitivity_mw
        self.accumulator = InterferenceAccumulator(host)

        self.channel_idle = True
        self._current: Optional[Transmission] = None
        self._current_state = SignalState.NEW
        self._sense: Optional[_PendingSense] = None

    @property
    def current_frame(self) -> Optional[Transmission]:
        return self._current

    @property
    def pending_request(self) -> Optional[ChannelSenseRequest]:
        return self._sense.request if self._sense is not None else None

    # ------------------------------------------------------------------
    # Reception
    # ------------------------------------------------------------------
    def signal_state(self, frame: Transmission) -> SignalState:
        if self._current is not None and frame.id == self._current.id:
            return self._current_state
        return SignalState.NEW

    def on_frame_event(self, frame: Transmission) -> Optional[float]:
        """Process a frame when it arrives or when a requested wake time is reached."""
        if frame is None:
            raise ContractViolation("on_frame_event called without a transmission")
        logger.debug(f"Processing transmission {frame.id} at t={self.host.now():g}")

        state = self.signal_state(frame)
        if state is SignalState.EXPECT_HEADER:
            return self.process_signal_header(frame)
        if state is SignalState.EXPECT_END:
            return self.process_signal_end(frame)
        return self.process_new_signal(frame)

    def process_new_signal(self, frame: Transmission) -> Optional[float]:
        if self._current is not None:
            logger.debug(
                f"Rejecting transmission {frame.id}: already receiving {self._current.id}"
            )
            return NOT_AGAIN

        recv_power = frame.power.value_at(frame.start)
        if recv_power < self.sensitivity:
            logger.debug(
                f"Rejecting transmission {frame.id}: too weak "
                f"({recv_power:.3e} mW < {self.sensitivity:.3e} mW)"
            )
            return NOT_AGAIN

        logger.debug(f"Receiving transmission {frame.id} ({recv_power:.3e} mW)")
        self._current = frame
        header = self.config.header_length
        if 0.0 < header < frame.duration:
            self._current_state = SignalState.EXPECT_HEADER
            wake = frame.start + header
        else:
            self._current_state = SignalState.EXPECT_END
            wake = frame.end

        self._set_channel_idle(False)
        return wake

    def process_signal_header(self, frame: Transmission) -> Optional[float]:
        """Header checkpoint: keep receiving only while the frame stays above sensitivity."""
        header_end = frame.start + self.config.header_length
        recv_power = frame.power.value_at(header_end)
        if recv_power < self.sensitivity:
            logger.debug(
                f"Dropping transmission {frame.id} at header end: "
                f"{recv_power:.3e} mW < {self.sensitivity:.3e} mW"
            )
            self._clear_current()
            self._set_channel_idle(True)
            return NOT_AGAIN

        self._current_state = SignalState.EXPECT_END
        return frame.end

    def process_signal_end(self, frame: Transmission) -> Optional[float]:
        result = self.decide(frame)
        logger.debug(f"Transmission {frame.id} received, handing it up ({result})")
        self.host.send_up(frame, result)

        self._clear_current()
        self._set_channel_idle(True)
        return NOT_AGAIN

    def decide(self, frame: Transmission) -> DeciderResult:
        """Verdict for a frame that was received until its end."""
        return DeciderResult(decoded=True)

    def _clear_current(self) -> None:
        self._current = None
        self._current_state = SignalState.NEW

    def _set_channel_idle(self, idle: bool) -> None:
        self.channel_idle = idle
        # An occupancy change may satisfy the outstanding sense request early.
        if self.can_answer():
            self.host.cancel_scheduled_wake(self._sense.request.id)
            self._answer()

    # ------------------------------------------------------------------
    # Channel sensing
    # ------------------------------------------------------------------
    def on_sense_request(self, request: ChannelSenseRequest) -> Optional[float]:
        """Handle a new sense request or the timeout of the outstanding one."""
        if request is None:
            raise ContractViolation("on_sense_request called without a request")

        if self._sense is None:
            return self._handle_new_sense_request(request)

        if self._sense.request.id != request.id:
            raise ContractViolation(
                f"Sense request {request.id} arrived while {self._sense.request.id} is outstanding"
            )

        # Same request again: its timeout has fired.
        self._answer()
        return NOT_AGAIN

    def _handle_new_sense_request(self, request: ChannelSenseRequest) -> Optional[float]:
        now = self.host.now()
        self._sense = _PendingSense(request=request, arrival=now)

        if self.can_answer():
            self._answer()
            return NOT_AGAIN

        return now + request.timeout

    def can_answer(self) -> bool:
        """True when the outstanding request's mode is met or its timeout is reached."""
        if self._sense is None:
            return False

        request = self._sense.request
        if request.mode is SenseMode.UNTIL_IDLE:
            fulfilled = self.channel_idle
        elif request.mode is SenseMode.UNTIL_BUSY:
            fulfilled = not self.channel_idle
        else:
            fulfilled = False

        return fulfilled or self.host.now() >= self._sense.arrival + request.timeout

    def _answer(self) -> None:
        pending = self._sense
        now = self.host.now()
        rssi = self.accumulator.sample_max(pending.arrival, now)

        request = pending.request
        request.result = ChannelState(idle=self.channel_idle, rssi=rssi)
        self._sense = None
        logger.debug(
            f"Answering sense request {request.id} at t={now:g}: "
            f"idle={request.result.idle} rssi={rssi:.3e} mW"
        )
        self.host.send_control_msg(request)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def current_channel_state(self) -> ChannelState:
        """Occupancy flag and instantaneous total power."""
        now = self.host.now()
        return ChannelState(idle=self.channel_idle, rssi=self.accumulator.sample_max(now, now))

    def snr_mapping(self, frame: Transmission) -> Mapping:
        """SNR of *frame* over its duration, using the configured zero-divisor fallback."""
        return self.accumulator.build_snr_mapping(frame, self.config.zero_divisor_fallback)
