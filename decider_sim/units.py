"""Power unit conversions and the thermal noise floor."""

from __future__ import annotations

import numpy as np


def dbm_to_mw(power_dbm: np.ndarray | float) -> np.ndarray:
    """Convert dBm to linear milliwatts."""
    return 10.0 ** (np.asarray(power_dbm, dtype=np.float64) / 10.0)


def mw_to_dbm(power_mw: np.ndarray | float) -> np.ndarray:
    """Convert linear milliwatts to dBm (``-inf`` for zero power)."""
    with np.errstate(divide="ignore"):
        return 10.0 * np.log10(np.asarray(power_mw, dtype=np.float64))


def linear_to_db(ratio: float) -> float:
    """Power ratio in dB, ``-inf`` for a non-positive ratio."""
    if ratio <= 0.0:
        return float("-inf")
    return float(10.0 * np.log10(ratio))


def noise_power_dbm(bandwidth_hz: float, temperature_k: float = 290.0) -> float:
    """Thermal noise power in dBm.

    N = k·T·B  →  N(dBm) = 10·log10(k·T·B) + 30
    """
    k_b = 1.380649e-23  # Boltzmann constant (J/K)
    n_watts = k_b * temperature_k * bandwidth_hz
    return 10.0 * np.log10(n_watts) + 30.0
