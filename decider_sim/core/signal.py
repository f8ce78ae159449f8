"""Transmissions as seen by a receiver, and the decider's verdict on them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .mapping import Mapping
from ..units import dbm_to_mw


@dataclass(frozen=True, eq=False)
class Transmission:
    """One frame on the air, as received at this node.

    ``id`` is the correlation id the host uses when it re-invokes the decider
    for this frame.  ``power`` is the received power (mW) over time; path loss
    and fading are already applied by whoever built it.
    """

    id: int
    start: float
    duration: float
    power: Mapping
    sender: str = ""

    def __post_init__(self) -> None:
        if self.duration <= 0:
            raise ValueError(
                f"Transmission {self.id}: duration must be positive, got {self.duration}"
            )

    @property
    def end(self) -> float:
        return self.start + self.duration

    @classmethod
    def constant(
        cls,
        id: int,
        start: float,
        duration: float,
        power_dbm: float,
        sender: str = "",
    ) -> "Transmission":
        """Frame received at a constant *power_dbm* for its whole duration."""
        if duration <= 0:
            raise ValueError(f"Transmission {id}: duration must be positive, got {duration}")
        power = Mapping.pulse(float(dbm_to_mw(power_dbm)), start, start + duration)
        return cls(id=id, start=start, duration=duration, power=power, sender=sender)


@dataclass(frozen=True)
class DeciderResult:
    """Outcome handed up together with a received frame."""

    decoded: bool
    snr_db: Optional[float] = None
