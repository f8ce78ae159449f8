"""FastAPI web app for running reception scenarios against a decider."""

import logging
import math
from dataclasses import asdict
from fastapi import FastAPI
from pydantic import BaseModel
from typing import List, Dict, Literal, Optional

from decider_sim.config import DeciderConfig
from decider_sim.core import (
    BaseDecider, ChannelSenseRequest, SenseMode, Simulation, SnrThresholdDecider, Transmission,
)
from decider_sim.errors import DeciderError
from decider_sim.profiles import PROFILES, get_profile
from decider_sim.units import mw_to_dbm

logger = logging.getLogger(__name__)

app = FastAPI(title="Decider Simulator")

DECIDERS = {
    "base": BaseDecider,
    "snr": SnrThresholdDecider,
}

# ============================================================================
# Data models
# ============================================================================

class TransmissionSpec(BaseModel):
    id: int
    start: float
    duration: float
    power_dbm: float
    sender: str = ""

class SenseRequestSpec(BaseModel):
    id: int
    at: float
    timeout: float
    mode: Literal["until_idle", "until_busy", "until_timeout"] = "until_idle"
    requester: str = ""

class ScenarioConfig(BaseModel):
    decider: Literal["base", "snr"] = "base"
    profile: Optional[str] = None
    sensitivity_dbm: Optional[float] = None
    header_length: float = 0.0
    snr_threshold_db: float = 0.0
    noise_floor_dbm: Optional[float] = None
    transmissions: List[TransmissionSpec] = []
    sense_requests: List[SenseRequestSpec] = []

# ============================================================================
# Scenario runner
# ============================================================================

def _finite(value: Optional[float]) -> Optional[float]:
    """JSON has no infinities: report them as null."""
    if value is None or not math.isfinite(value):
        return None
    return round(float(value), 4)

def build_simulation(config: ScenarioConfig) -> Simulation:
    profile = get_profile(config.profile) if config.profile else None
    overrides = {
        "header_length": config.header_length,
        "snr_threshold_db": config.snr_threshold_db,
    }
    if config.sensitivity_dbm is not None:
        overrides["sensitivity_dbm"] = config.sensitivity_dbm
    if profile is not None:
        decider_config = DeciderConfig.from_profile(profile, **overrides)
    else:
        decider_config = DeciderConfig(**overrides)

    sim = Simulation(
        config=decider_config,
        decider_cls=DECIDERS[config.decider],
        noise_floor_dbm=config.noise_floor_dbm,
        profile=profile,
    )
    for spec in config.transmissions:
        sim.add_transmission(Transmission.constant(
            spec.id, spec.start, spec.duration, spec.power_dbm, sender=spec.sender,
        ))
    for spec in config.sense_requests:
        sim.add_sense_request(spec.at, ChannelSenseRequest(
            id=spec.id, mode=SenseMode(spec.mode), timeout=spec.timeout, requester=spec.requester,
        ))
    return sim

def run_scenario(config: ScenarioConfig) -> Dict:
    sim = build_simulation(config)
    result = sim.run()

    received = [
        {
            "id": frame.id,
            "sender": frame.sender,
            "end": frame.end,
            "decoded": res.decoded,
            "snr_db": _finite(res.snr_db),
        }
        for frame, res in result.received
    ]
    answered = [
        {
            "id": req.id,
            "requester": req.requester,
            "arrival": arrival,
            "answered_at": at,
            "idle": req.result.idle,
            "rssi_mw": req.result.rssi,
            "rssi_dbm": _finite(req.result.rssi_dbm),
        }
        for arrival, at, req in result.answered
    ]
    trace = [
        {"time": t, "idle": idle, "rssi_dbm": _finite(float(mw_to_dbm(rssi)))}
        for t, idle, rssi in result.channel_trace
    ]
    return {
        "sensitivity_dbm": sim.decider.config.sensitivity_dbm,
        "noise_floor_dbm": _finite(sim.noise_floor_dbm),
        "received": received,
        "rejected": result.rejected,
        "answered": answered,
        "channel_trace": trace,
        "stats": sim.reception_stats(result),
    }

# ============================================================================
# API endpoints
# ============================================================================

@app.post("/api/simulate")
async def simulate(config: ScenarioConfig):
    try:
        result = run_scenario(config)
        return {"ok": True, "result": result}
    except (ValueError, DeciderError) as e:
        logger.warning(f"Scenario failed: {e}")
        return {"ok": False, "error": str(e)}

@app.get("/api/profiles")
async def profiles():
    out = {}
    for name, cls in PROFILES.items():
        profile = cls()
        out[name] = {**asdict(profile), "thermal_noise_dbm": round(profile.thermal_noise_dbm(), 2)}
    return out

if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="127.0.0.1", port=8001)
