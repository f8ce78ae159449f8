"""What a decider needs from the physical layer hosting it."""

from __future__ import annotations

from typing import List, Optional, Protocol

from .mapping import Mapping
from .sense import ChannelSenseRequest
from .signal import DeciderResult, Transmission


class PhyHost(Protocol):
    """Physical-layer services a decider calls into.

    The host also owns scheduling: when a decider returns a wake time, the
    host re-invokes it at that time with the same frame or request.
    """

    def now(self) -> float:
        """Current simulated time (s)."""

    def send_up(self, frame: Transmission, result: DeciderResult) -> None:
        """Deliver a received frame to the layer above."""

    def send_control_msg(self, request: ChannelSenseRequest) -> None:
        """Return an answered sense request to its requester."""

    def get_channel_info(self, start: float, end: float) -> List[Transmission]:
        """All transmissions at this receiver overlapping ``[start, end]``."""

    def get_thermal_noise(self, start: float, end: float) -> Optional[Mapping]:
        """Noise floor (mW) for the window, or ``None`` without a noise source."""

    def cancel_scheduled_wake(self, correlation_id: int) -> None:
        """Drop a pending re-invocation for the frame or request with this id."""
