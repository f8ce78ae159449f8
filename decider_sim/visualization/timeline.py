"""Matplotlib plots of power over time and channel occupancy."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np

from ..core.mapping import Mapping
from ..core.simulation import SimulationResult
from ..units import linear_to_db, mw_to_dbm

# Zero power is drawn at this level instead of -inf.
FLOOR_DBM = -150.0


# ------------------------------------------------------------------
# Internal helpers
# ------------------------------------------------------------------

def _step_points(mapping: Mapping, start: float, end: float) -> tuple[np.ndarray, np.ndarray]:
    inner = mapping.times[(mapping.times > start) & (mapping.times < end)]
    times = np.concatenate(([start], inner, [end]))
    return times, mapping.values_at(times)


def _finish(fig: plt.Figure, save_path: Optional[str | Path]) -> plt.Figure:  # type: ignore[name-defined]
    fig.tight_layout()
    if save_path:
        fig.savefig(str(save_path), dpi=150)
    return fig


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------

def plot_power_mapping(
    mapping: Mapping,
    start: float,
    end: float,
    title: str = "Received Power",
    sensitivity_dbm: Optional[float] = None,
    save_path: Optional[str | Path] = None,
    figsize: tuple[int, int] = (10, 4),
) -> plt.Figure:  # type: ignore[name-defined]
    """Step plot of a power mapping (mW) in dBm over ``[start, end]``."""
    times, values = _step_points(mapping, start, end)
    dbm = np.maximum(mw_to_dbm(np.maximum(values, 0.0)), FLOOR_DBM)

    fig, ax = plt.subplots(figsize=figsize)
    ax.step(times, dbm, where="post", color="tab:blue", label="total power")
    if sensitivity_dbm is not None:
        ax.axhline(sensitivity_dbm, color="red", linestyle="--", label="sensitivity")
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Power (dBm)")
    ax.set_title(title)
    ax.grid(True, alpha=0.3, linestyle="--")
    ax.legend(loc="upper right", fontsize=8)
    return _finish(fig, save_path)


def plot_snr_mapping(
    snr: Mapping,
    start: float,
    end: float,
    threshold_db: Optional[float] = None,
    save_path: Optional[str | Path] = None,
    figsize: tuple[int, int] = (10, 4),
) -> plt.Figure:  # type: ignore[name-defined]
    """Step plot of a linear SNR mapping in dB."""
    times, values = _step_points(snr, start, end)
    snr_db = np.array([max(linear_to_db(v), FLOOR_DBM) for v in values])

    fig, ax = plt.subplots(figsize=figsize)
    ax.step(times, snr_db, where="post", color="tab:green", label="SNR")
    if threshold_db is not None:
        ax.axhline(threshold_db, color="red", linestyle="--", label="threshold")
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("SNR (dB)")
    ax.set_title("SNR over Frame")
    ax.legend(loc="upper right", fontsize=8)
    return _finish(fig, save_path)


def plot_channel_trace(
    result: SimulationResult,
    save_path: Optional[str | Path] = None,
    figsize: tuple[int, int] = (10, 5),
) -> plt.Figure:  # type: ignore[name-defined]
    """Busy/idle state and sensed power after every event of a run."""
    fig, (ax_state, ax_power) = plt.subplots(2, 1, figsize=figsize, sharex=True)
    if result.channel_trace:
        times = np.array([t for t, _, _ in result.channel_trace])
        busy = np.array([0.0 if idle else 1.0 for _, idle, _ in result.channel_trace])
        rssi = np.array([r for _, _, r in result.channel_trace])
        ax_state.step(times, busy, where="post", color="tab:orange")
        ax_power.step(
            times, np.maximum(mw_to_dbm(rssi), FLOOR_DBM), where="post", color="tab:blue"
        )
        for _, at, _ in result.answered:
            ax_state.axvline(at, color="grey", linestyle=":", alpha=0.7)
    ax_state.set_yticks([0, 1], labels=["idle", "busy"])
    ax_state.set_title("Channel Occupancy")
    ax_power.set_xlabel("Time (s)")
    ax_power.set_ylabel("RSSI (dBm)")
    return _finish(fig, save_path)
