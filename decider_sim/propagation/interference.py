"""Interference accumulation: total received power over a time window."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from ..config import DEFAULT_ZERO_DIVISOR_FALLBACK
from ..core.mapping import Mapping
from ..errors import ContractViolation

if TYPE_CHECKING:
    from ..core.host import PhyHost
    from ..core.signal import Transmission

logger = logging.getLogger(__name__)


class InterferenceAccumulator:
    """Sum thermal noise and every overlapping transmission into one mapping.

    Parameters
    ----------
    host : PhyHost
        Supplies the transmissions visible in a window and the noise floor.
    """

    def __init__(self, host: PhyHost) -> None:
        self.host = host

    def build_power_mapping(
        self,
        start: float,
        end: float,
        exclude: Optional[Transmission] = None,
    ) -> Mapping:
        """Total received power (mW) over ``[start, end]``.

        Transmissions whose id equals ``exclude.id`` are left out; with
        ``exclude=None`` everything is summed.
        """
        if exclude is None:
            logger.debug(f"Creating power map for [{start:g}, {end:g}]")
        else:
            logger.debug(
                f"Creating power map for [{start:g}, {end:g}] excluding transmission {exclude.id}"
            )

        frames = self.host.get_channel_info(start, end)
        noise = self.host.get_thermal_noise(start, end)
        total = noise if noise is not None else Mapping()

        for frame in frames:
            if frame is None:
                raise ContractViolation("Channel info contained an empty transmission")
            if exclude is not None and frame.id == exclude.id:
                continue
            logger.debug(
                f"Adding transmission {frame.id} [{frame.start:g}, {frame.end:g}]"
            )
            total = total.add(frame.power)

        return total

    def sample_max(self, start: float, end: float) -> float:
        """Strongest total power (mW) over ``[start, end]``, never negative.

        An empty aggregate (no noise, no transmissions) reads as ``0.0``.
        """
        peak = self.build_power_mapping(start, end).find_max(start, end)
        return max(peak, 0.0)

    def build_snr_mapping(
        self,
        frame: Transmission,
        zero_fallback: float = DEFAULT_ZERO_DIVISOR_FALLBACK,
    ) -> Mapping:
        """Linear SNR of *frame* against everything else on the channel.

        Where interference plus noise is exactly zero the ratio is
        *zero_fallback* (``0`` where the frame itself is silent too).
        """
        interference = self.build_power_mapping(frame.start, frame.end, exclude=frame)
        return frame.power.divide(interference, zero_fallback)
