"""Receiver radio profiles: sensitivity and noise floor per technology."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Type

from .units import dbm_to_mw, noise_power_dbm

# Sensitivity per spreading factor (dBm) for 125 kHz BW
LORA_SF_SENSITIVITY: Dict[int, float] = {
    7: -124.0,
    8: -127.0,
    9: -130.0,
    10: -133.0,
    11: -135.0,
    12: -137.0,
}

NBIOT_TONE_BANDWIDTH_KHZ: Dict[str, float] = {
    "single-3.75": 3.75,
    "single-15": 15.0,
    "multi-3": 45.0,
    "multi-6": 90.0,
    "multi-12": 180.0,
}


@dataclass
class RadioProfile:
    """Receiver front-end parameters.

    Subclasses derive bandwidth and sensitivity from technology settings;
    users can override any field.
    """

    name: str = "generic"
    frequency_mhz: float = 868.0
    bandwidth_khz: float = 125.0
    sensitivity_dbm: float = -130.0
    noise_figure_db: float = 6.0

    @property
    def sensitivity_mw(self) -> float:
        return float(dbm_to_mw(self.sensitivity_dbm))

    def thermal_noise_dbm(self, temperature_k: float = 290.0) -> float:
        """Noise floor at the receiver: kTB plus the noise figure."""
        return float(noise_power_dbm(self.bandwidth_khz * 1000.0, temperature_k) + self.noise_figure_db)


@dataclass
class LoRaWAN(RadioProfile):
    """LoRa receiver; sensitivity follows the spreading factor (SF7–SF12)."""

    name: str = "LoRaWAN"
    spreading_factor: int = 7

    def __post_init__(self) -> None:
        if self.spreading_factor not in LORA_SF_SENSITIVITY:
            raise ValueError(
                f"Unsupported spreading factor {self.spreading_factor}; "
                f"choose from {sorted(LORA_SF_SENSITIVITY)}"
            )
        self.sensitivity_dbm = LORA_SF_SENSITIVITY[self.spreading_factor]


@dataclass
class NBIoT(RadioProfile):
    """NB-IoT receiver; bandwidth follows the tone mode."""

    name: str = "NB-IoT"
    frequency_mhz: float = 791.0
    tone_mode: str = "single-15"
    sensitivity_dbm: float = -141.0
    noise_figure_db: float = 5.0

    def __post_init__(self) -> None:
        try:
            self.bandwidth_khz = NBIOT_TONE_BANDWIDTH_KHZ[self.tone_mode]
        except KeyError:
            raise ValueError(
                f"Unknown tone mode '{self.tone_mode}'. Choose from: "
                + ", ".join(sorted(NBIOT_TONE_BANDWIDTH_KHZ))
            ) from None


@dataclass
class WiFiHaLow(RadioProfile):
    """802.11ah receiver; higher MCS needs more power (≈3 dB per step)."""

    name: str = "WiFi-HaLow"
    frequency_mhz: float = 900.0
    channel_width_mhz: float = 1.0
    mcs: int = 0

    def __post_init__(self) -> None:
        self.bandwidth_khz = self.channel_width_mhz * 1000.0
        self.sensitivity_dbm = -130.0 + self.mcs * 3.0


PROFILES: Dict[str, Type[RadioProfile]] = {
    "generic": RadioProfile,
    "lorawan": LoRaWAN,
    "nbiot": NBIoT,
    "halow": WiFiHaLow,
}


def get_profile(name: str, **kwargs: Any) -> RadioProfile:
    """Instantiate a profile by its short name (case-insensitive)."""
    cls = PROFILES.get(name.lower())
    if cls is None:
        raise ValueError(
            f"Unknown radio profile '{name}'. Choose from: " + ", ".join(sorted(PROFILES))
        )
    return cls(**kwargs)
