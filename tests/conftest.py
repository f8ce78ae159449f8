"""Shared fixtures: a hand-driven host for exercising deciders directly."""

import pytest

from decider_sim.core.mapping import Mapping


class RecordingHost:
    """PhyHost whose clock the test sets by hand; records everything sent to it."""

    def __init__(self, noise_mw=None):
        self.time = 0.0
        self.frames = []
        self.noise_mw = noise_mw
        self.sent_up = []
        self.control = []
        self.cancelled = []

    def now(self):
        return self.time

    def send_up(self, frame, result):
        self.sent_up.append((frame, result))

    def send_control_msg(self, request):
        self.control.append((self.time, request))

    def get_channel_info(self, start, end):
        return [f for f in self.frames if f.start <= end and f.end >= start]

    def get_thermal_noise(self, start, end):
        if self.noise_mw is None:
            return None
        return Mapping.constant(self.noise_mw, start)

    def cancel_scheduled_wake(self, correlation_id):
        self.cancelled.append(correlation_id)


@pytest.fixture
def host():
    return RecordingHost()


@pytest.fixture
def noisy_host():
    return RecordingHost(noise_mw=1e-12)
