"""Channel occupancy and delivery analysis over a finished run."""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence, Tuple

import numpy as np

from ..core.simulation import SimulationResult


def busy_fraction(trace: Sequence[Tuple[float, bool, float]], end_time: float) -> float:
    """Share of ``[first sample, end_time]`` during which the channel was busy.

    Each sample's state holds until the next sample.
    """
    if not trace:
        return 0.0
    times = np.array([t for t, _, _ in trace] + [end_time])
    busy = np.array([not idle for _, idle, _ in trace])
    span = end_time - times[0]
    if span <= 0:
        return 0.0
    durations = np.diff(times)
    return float(np.sum(durations[busy]) / span)


def delivery_by_sender(result: SimulationResult) -> Dict[str, int]:
    """Number of decoded frames per sender label."""
    return dict(Counter(frame.sender for frame, res in result.received if res.decoded))


def sense_answer_delays(result: SimulationResult) -> List[float]:
    """Time each answered request waited between arrival and answer."""
    return [answered_at - arrival for arrival, answered_at, _ in result.answered]
