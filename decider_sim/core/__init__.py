from .mapping import Mapping
from .signal import Transmission, DeciderResult
from .sense import SenseMode, ChannelState, ChannelSenseRequest
from .host import PhyHost
from .decider import BaseDecider, SignalState, NOT_AGAIN
from .snr_decider import SnrThresholdDecider
from .simulation import Simulation, SimulationResult

__all__ = [
    "Mapping", "Transmission", "DeciderResult",
    "SenseMode", "ChannelState", "ChannelSenseRequest", "PhyHost",
    "BaseDecider", "SignalState", "NOT_AGAIN", "SnrThresholdDecider",
    "Simulation", "SimulationResult",
]
