from .timeline import plot_power_mapping, plot_snr_mapping, plot_channel_trace

__all__ = ["plot_power_mapping", "plot_snr_mapping", "plot_channel_trace"]
