"""Physical-layer reception decisions and channel sensing for wireless receivers."""

from .core import (
    BaseDecider,
    ChannelSenseRequest,
    ChannelState,
    DeciderResult,
    Mapping,
    SenseMode,
    Simulation,
    SnrThresholdDecider,
    Transmission,
)
from .config import DeciderConfig
from .errors import ContractViolation, DeciderError

__all__ = [
    "BaseDecider", "ChannelSenseRequest", "ChannelState", "DeciderResult",
    "Mapping", "SenseMode", "Simulation", "SnrThresholdDecider", "Transmission",
    "DeciderConfig", "ContractViolation", "DeciderError",
]
