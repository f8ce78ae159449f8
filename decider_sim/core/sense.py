"""Channel sense requests and channel state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..units import mw_to_dbm


class SenseMode(str, Enum):
    """When a sense request may be answered before its timeout."""

    UNTIL_IDLE = "until_idle"
    UNTIL_BUSY = "until_busy"
    UNTIL_TIMEOUT = "until_timeout"


@dataclass(frozen=True)
class ChannelState:
    """Channel occupancy plus the strongest total power sensed (mW)."""

    idle: bool
    rssi: float

    @property
    def rssi_dbm(self) -> float:
        return float(mw_to_dbm(self.rssi))


@dataclass
class ChannelSenseRequest:
    """Question from the MAC: how busy is the channel until *mode* or *timeout*?

    The same object travels out and back: the decider fills in ``result`` and
    returns it through the host's control channel.
    """

    id: int
    mode: SenseMode
    timeout: float
    requester: str = ""
    result: Optional[ChannelState] = None

    def __post_init__(self) -> None:
        self.mode = SenseMode(self.mode)
        if self.timeout < 0:
            raise ValueError(f"Sense request {self.id}: negative timeout {self.timeout}")

    @property
    def answered(self) -> bool:
        return self.result is not None
