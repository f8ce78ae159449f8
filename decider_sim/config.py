"""Decider configuration."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .units import dbm_to_mw

if TYPE_CHECKING:
    from .profiles import RadioProfile

# SNR used wherever interference plus noise is exactly zero (120 dB).
# Where the frame's own power is zero too, the SNR is 0 instead.
DEFAULT_ZERO_DIVISOR_FALLBACK = 1e12


@dataclass
class DeciderConfig:
    """Receiver parameters shared by all deciders.

    Parameters
    ----------
    sensitivity_dbm : float
        Minimum received power at frame start for reception to begin.
    header_length : float
        Seconds after frame start at which the header checkpoint runs.
        ``0`` disables the checkpoint.
    snr_threshold_db : float
        Minimum SNR over the frame for :class:`SnrThresholdDecider` to decode it.
    zero_divisor_fallback : float
        Linear SNR reported where interference plus noise is zero.
    """

    sensitivity_dbm: float = -90.0
    header_length: float = 0.0
    snr_threshold_db: float = 0.0
    zero_divisor_fallback: float = DEFAULT_ZERO_DIVISOR_FALLBACK

    def __post_init__(self) -> None:
        if self.header_length < 0:
            raise ValueError(f"header_length must be >= 0, got {self.header_length}")
        if math.isnan(self.zero_divisor_fallback):
            raise ValueError("zero_divisor_fallback must be a number")

    @property
    def sensitivity_mw(self) -> float:
        return float(dbm_to_mw(self.sensitivity_dbm))

    @classmethod
    def from_profile(cls, profile: RadioProfile, **overrides: Any) -> "DeciderConfig":
        """Build a config whose sensitivity comes from *profile*."""
        overrides.setdefault("sensitivity_dbm", profile.sensitivity_dbm)
        return cls(**overrides)
