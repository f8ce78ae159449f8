"""Decider that only decodes frames whose SNR stays above a threshold."""

from __future__ import annotations

import logging

from .decider import BaseDecider
from .signal import DeciderResult, Transmission
from ..units import linear_to_db

logger = logging.getLogger(__name__)


class SnrThresholdDecider(BaseDecider):
    """Receives like :class:`BaseDecider`, then checks the SNR at frame end.

    The frame is decoded when its minimum SNR over ``[start, end)`` reaches
    ``config.snr_threshold_db``.  It is handed up either way, with the verdict
    and the minimum SNR in the result.
    """

    def decide(self, frame: Transmission) -> DeciderResult:
        snr = self.snr_mapping(frame)
        min_snr_db = linear_to_db(snr.find_min(frame.start, frame.end, include_end=False))
        decoded = min_snr_db >= self.config.snr_threshold_db
        if not decoded:
            logger.debug(
                f"Transmission {frame.id} not decodable: SNR {min_snr_db:.2f} dB "
                f"< {self.config.snr_threshold_db:.2f} dB"
            )
        return DeciderResult(decoded=decoded, snr_db=min_snr_db)
