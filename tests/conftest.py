"""Shared fixtures: a fake sounddevice output stream so no audio device is needed."""

import numpy as np
import pytest


class FakeOutputStream:
    """Stand-in for sounddevice.OutputStream that is driven by pump()."""

    instances = []

    def __init__(self, samplerate, blocksize, device, channels, dtype, callback):
        self.samplerate = samplerate
        self.blocksize = blocksize
        self.device = device
        self.channels = channels
        self.dtype = dtype
        self.callback = callback
        self.active = False
        self.closed = False
        self.start_calls = 0
        self.stop_calls = 0
        FakeOutputStream.instances.append(self)

    def start(self):
        self.start_calls += 1
        self.active = True

    def stop(self):
        self.stop_calls += 1
        self.active = False

    def close(self):
        self.active = False
        self.closed = True

    def pump(self, frames=None, status=None):
        """Run the callback once and return the block it filled."""
        frames = frames or self.blocksize
        outdata = np.zeros((frames, self.channels), dtype=np.float32)
        self.callback(outdata, frames, None, status)
        return outdata


@pytest.fixture
def fake_streams():
    """Factory that records every stream it creates."""
    FakeOutputStream.instances = []

    def factory(**kwargs):
        return FakeOutputStream(**kwargs)

    factory.instances = FakeOutputStream.instances
    return factory
