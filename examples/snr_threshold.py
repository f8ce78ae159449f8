#!/usr/bin/env python3
"""SNR threshold example.

The receiver locks onto frame 1; frame 2 overlaps its second half 6 dB weaker.
With a 10 dB SNR requirement frame 1 is received but not decodable.
"""

from decider_sim import DeciderConfig, Simulation, SnrThresholdDecider, Transmission
from decider_sim.visualization import plot_snr_mapping


def main() -> None:
    config = DeciderConfig(sensitivity_dbm=-100.0, snr_threshold_db=10.0)
    sim = Simulation(config=config, decider_cls=SnrThresholdDecider, noise_floor_dbm=-120.0)

    wanted = Transmission.constant(1, start=0.0, duration=1.0, power_dbm=-80, sender="wanted")
    sim.add_transmission(wanted)
    sim.add_transmission(Transmission.constant(2, start=0.5, duration=1.0, power_dbm=-86, sender="interferer"))
    sim.add_transmission(Transmission.constant(3, start=2.0, duration=1.0, power_dbm=-80, sender="clean"))

    result = sim.run()
    for frame, res in result.received:
        print(f"frame {frame.id} ({frame.sender}): decoded={res.decoded}, min SNR={res.snr_db:.1f} dB")

    snr = sim.decider.accumulator.build_snr_mapping(wanted, config.zero_divisor_fallback)
    plot_snr_mapping(snr, wanted.start, wanted.end, threshold_db=config.snr_threshold_db,
                     save_path="snr_wanted.png")
    print("Plot saved: snr_wanted.png")


if __name__ == "__main__":
    main()
