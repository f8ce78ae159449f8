"""Drive a decider through a scripted set of transmissions and sense requests."""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple, Type, Union

import numpy as np

from .decider import BaseDecider
from .mapping import Mapping
from .sense import ChannelSenseRequest
from .signal import DeciderResult, Transmission
from ..config import DeciderConfig
from ..profiles import RadioProfile
from ..units import dbm_to_mw, mw_to_dbm

logger = logging.getLogger(__name__)

# Event priorities at equal times: pending re-invocations first, then newly
# arriving frames, then newly arriving sense requests.
_WAKE, _ARRIVAL, _SENSE = 0, 1, 2

Item = Union[Transmission, ChannelSenseRequest]


@dataclass
class SimulationResult:
    """Everything the decider reported during a run."""

    received: List[Tuple[Transmission, DeciderResult]] = field(default_factory=list)
    """Frames handed up, with the decider's verdict."""
    answered: List[Tuple[float, float, ChannelSenseRequest]] = field(default_factory=list)
    """``(arrival, answered_at, request)`` for every answered sense request."""
    rejected: List[int] = field(default_factory=list)
    """Ids of frames refused on arrival."""
    channel_trace: List[Tuple[float, bool, float]] = field(default_factory=list)
    """``(time, idle, rssi_mw)`` after every processed event."""
    end_time: float = 0.0

    @property
    def delivered_ids(self) -> List[int]:
        return [frame.id for frame, _ in self.received]

    @property
    def decoded_ids(self) -> List[int]:
        return [frame.id for frame, res in self.received if res.decoded]


class Simulation:
    """Minimal discrete-event physical layer hosting one decider.

    Implements :class:`~decider_sim.core.host.PhyHost`.  Every transmission
    added is visible at this receiver from its start time on.

    Parameters
    ----------
    config : DeciderConfig
        Passed to the decider.
    decider_cls : type
        :class:`BaseDecider` or a subclass.
    noise_floor_dbm : float, optional
        Constant thermal noise.  Defaults to ``profile``'s noise floor when a
        profile is given, otherwise no noise.
    profile : RadioProfile, optional
        Receiver profile supplying the noise floor.
    """

    def __init__(
        self,
        config: Optional[DeciderConfig] = None,
        decider_cls: Type[BaseDecider] = BaseDecider,
        noise_floor_dbm: Optional[float] = None,
        profile: Optional[RadioProfile] = None,
    ) -> None:
        if noise_floor_dbm is None and profile is not None:
            noise_floor_dbm = profile.thermal_noise_dbm()
        self.noise_floor_dbm = noise_floor_dbm
        self.transmissions: List[Transmission] = []
        self.decider = decider_cls(self, config)
        self.result = SimulationResult()

        self._now = 0.0
        self._queue: List[Tuple[float, int, int, Item]] = []
        self._seq = itertools.count()
        self._wakes: Dict[int, int] = {}
        self._ids: Set[int] = set()
        self._sense_arrivals: Dict[int, float] = {}

    # ------------------------------------------------------------------
    # Scenario set-up
    # ------------------------------------------------------------------
    def _claim_id(self, item_id: int) -> None:
        if item_id in self._ids:
            raise ValueError(f"Correlation id {item_id} is already in use")
        self._ids.add(item_id)

    def add_transmission(self, frame: Transmission) -> None:
        self._claim_id(frame.id)
        self.transmissions.append(frame)
        self._push(frame.start, _ARRIVAL, frame)

    def add_sense_request(self, at: float, request: ChannelSenseRequest) -> None:
        self._claim_id(request.id)
        self._push(at, _SENSE, request)

    def _push(self, time: float, priority: int, item: Item) -> int:
        seq = next(self._seq)
        heapq.heappush(self._queue, (time, priority, seq, item))
        return seq

    # ------------------------------------------------------------------
    # PhyHost
    # ------------------------------------------------------------------
    def now(self) -> float:
        return self._now

    def send_up(self, frame: Transmission, result: DeciderResult) -> None:
        self.result.received.append((frame, result))

    def send_control_msg(self, request: ChannelSenseRequest) -> None:
        arrival = self._sense_arrivals.pop(request.id, self._now)
        self.result.answered.append((arrival, self._now, request))

    def get_channel_info(self, start: float, end: float) -> List[Transmission]:
        return [
            t for t in self.transmissions
            if t.start <= self._now and t.start <= end and t.end >= start
        ]

    def get_thermal_noise(self, start: float, end: float) -> Optional[Mapping]:
        if self.noise_floor_dbm is None:
            return None
        return Mapping.constant(float(dbm_to_mw(self.noise_floor_dbm)), start)

    def cancel_scheduled_wake(self, correlation_id: int) -> None:
        if self._wakes.pop(correlation_id, None) is not None:
            logger.debug(f"Cancelled pending wake for {correlation_id}")

    # ------------------------------------------------------------------
    def run(self, until: Optional[float] = None) -> SimulationResult:
        """Process events in time order, optionally stopping after *until*."""
        result = self.result
        while self._queue:
            if until is not None and self._queue[0][0] > until:
                break
            time, priority, seq, item = heapq.heappop(self._queue)
            if priority == _WAKE:
                if self._wakes.get(item.id) != seq:
                    continue
                del self._wakes[item.id]

            self._now = time
            if isinstance(item, Transmission):
                wake = self.decider.on_frame_event(item)
                if priority == _ARRIVAL and wake is None:
                    result.rejected.append(item.id)
            else:
                if priority == _SENSE:
                    self._sense_arrivals[item.id] = time
                wake = self.decider.on_sense_request(item)

            if wake is not None:
                if wake < time:
                    raise ValueError(f"Wake time {wake} for {item.id} lies in the past ({time})")
                self._wakes[item.id] = self._push(wake, _WAKE, item)

            state = self.decider.current_channel_state()
            result.channel_trace.append((time, state.idle, state.rssi))
            result.end_time = time

        return result

    # ------------------------------------------------------------------
    def reception_stats(self, result: SimulationResult) -> dict:
        """Return basic reception and occupancy statistics."""
        from ..analysis.occupancy import busy_fraction

        total = len(self.transmissions)
        delivered = len(result.received)
        rssi = np.array([r for _, _, r in result.channel_trace])
        peak = float(np.max(rssi)) if rssi.size else 0.0
        return {
            "total_frames": total,
            "delivered": delivered,
            "decoded": len(result.decoded_ids),
            "rejected": len(result.rejected),
            "delivery_pct": round(100.0 * delivered / total, 2) if total else 0.0,
            "busy_pct": round(100.0 * busy_fraction(result.channel_trace, result.end_time), 2),
            "sense_requests_answered": len(result.answered),
            "peak_rssi_dbm": round(float(mw_to_dbm(peak)), 2) if peak > 0 else None,
        }
