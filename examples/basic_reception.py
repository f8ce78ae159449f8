#!/usr/bin/env python3
"""Basic reception example.

One LoRa receiver (SF9), three end devices.  Sensor-B starts while Sensor-A is
still on the air and is refused; a MAC-style sense request waits for the
channel to go idle.  Prints a reception report and saves timeline plots.
"""

import logging

from decider_sim import ChannelSenseRequest, DeciderConfig, SenseMode, Simulation, Transmission
from decider_sim.profiles import LoRaWAN
from decider_sim.visualization import plot_channel_trace, plot_power_mapping


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    # --- Receiver ---
    lora = LoRaWAN(spreading_factor=9)
    config = DeciderConfig.from_profile(lora)
    sim = Simulation(config=config, profile=lora)

    # --- Traffic (received powers already include path loss) ---
    sim.add_transmission(Transmission.constant(1, start=0.0, duration=0.2, power_dbm=-110, sender="Sensor-A"))
    sim.add_transmission(Transmission.constant(2, start=0.1, duration=0.2, power_dbm=-115, sender="Sensor-B"))
    sim.add_transmission(Transmission.constant(3, start=0.5, duration=0.2, power_dbm=-140, sender="Sensor-C"))

    # --- MAC asks at t=0.05 to be told when the channel frees up ---
    sim.add_sense_request(0.05, ChannelSenseRequest(id=100, mode=SenseMode.UNTIL_IDLE, timeout=1.0))

    result = sim.run()

    stats = sim.reception_stats(result)
    print("=" * 50)
    print("Decider Simulation — Reception Report")
    print("=" * 50)
    for k, v in stats.items():
        print(f"  {k:>24s}: {v}")
    for arrival, at, req in result.answered:
        print(f"  sense request {req.id} (t={arrival:g}s) answered at t={at:g}s: "
              f"idle={req.result.idle}, rssi={req.result.rssi_dbm:.1f} dBm")
    print("=" * 50)

    # --- Plots ---
    power = sim.decider.accumulator.build_power_mapping(0.0, result.end_time)
    plot_power_mapping(power, 0.0, result.end_time, sensitivity_dbm=config.sensitivity_dbm,
                       save_path="power_timeline.png")
    plot_channel_trace(result, save_path="channel_trace.png")
    print("Plots saved: power_timeline.png, channel_trace.png")


if __name__ == "__main__":
    main()
