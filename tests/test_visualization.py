"""Smoke tests for the timeline plots."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from decider_sim.config import DeciderConfig
from decider_sim.core.mapping import Mapping
from decider_sim.core.signal import Transmission
from decider_sim.core.simulation import Simulation
from decider_sim.visualization import plot_channel_trace, plot_power_mapping, plot_snr_mapping


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def test_power_mapping_saved(tmp_path):
    m = Mapping.pulse(1e-8, 0.0, 5.0)
    out = tmp_path / "power.png"
    fig = plot_power_mapping(m, 0.0, 10.0, sensitivity_dbm=-90.0, save_path=out)
    assert out.exists()
    assert fig.axes[0].get_ylabel() == "Power (dBm)"


def test_snr_mapping():
    snr = Mapping.pulse(100.0, 0.0, 5.0)
    fig = plot_snr_mapping(snr, 0.0, 5.0, threshold_db=10.0)
    assert fig.axes[0].get_title() == "SNR over Frame"


def test_channel_trace():
    sim = Simulation(config=DeciderConfig(sensitivity_dbm=-90.0))
    sim.add_transmission(Transmission.constant(1, 0.0, 10.0, -85.0))
    fig = plot_channel_trace(sim.run())
    assert len(fig.axes) == 2
