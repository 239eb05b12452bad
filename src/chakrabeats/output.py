"""
Audio output context for chakrabeats.

Wraps a single sounddevice OutputStream that is created once and then
started/stopped across play cycles. Opening and resuming the device are
the steps most likely to fail, so they are done as rarely as possible.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

SUSPENDED = "suspended"
RUNNING = "running"
CLOSED = "closed"


class AudioUnavailable(Exception):
    """Raised when the audio output device cannot be opened or resumed."""

    pass


def _default_stream_factory(**kwargs: Any) -> Any:
    # PortAudio is loaded when sounddevice is imported; a missing library
    # surfaces as OSError, which callers see as AudioUnavailable.
    import sounddevice as sd

    return sd.OutputStream(**kwargs)


class OutputContext:
    """Lazily-opened stereo output stream driven by a render callback."""

    def __init__(
        self,
        callback: Callable[..., None],
        samplerate: int = 48000,
        blocksize: int = 512,
        device: Optional[Any] = None,
        stream_factory: Optional[Callable[..., Any]] = None,
    ):
        """
        Initialize the output context. No device is touched until open().

        Args:
            callback: sounddevice-style callback (outdata, frames, time, status)
            samplerate: Output sample rate in Hz
            blocksize: Frames per callback block
            device: sounddevice device id or name (None for the default output)
            stream_factory: Callable returning an OutputStream-like object
        """
        self.callback = callback
        self.samplerate = samplerate
        self.blocksize = blocksize
        self.device = device
        self._stream_factory = stream_factory or _default_stream_factory
        self._stream: Optional[Any] = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    @property
    def state(self) -> str:
        if self._closed:
            return CLOSED
        if self._stream is not None and self._stream.active:
            return RUNNING
        return SUSPENDED

    def open(self) -> None:
        """Create the output stream if it does not exist yet."""
        if self._closed:
            raise AudioUnavailable("Audio output context has been closed")
        if self._stream is not None:
            return

        try:
            self._stream = self._stream_factory(
                samplerate=self.samplerate,
                blocksize=self.blocksize,
                device=self.device,
                channels=2,
                dtype="float32",
                callback=self.callback,
            )
        except Exception as e:
            raise AudioUnavailable(f"Could not open audio output: {e}") from e

        logging.info(f"Audio output opened ({self.samplerate} Hz, block {self.blocksize})")

    def resume(self) -> None:
        """Open if needed and start the stream if it is suspended."""
        self.open()
        if self._stream.active:
            return
        try:
            self._stream.start()
        except Exception as e:
            raise AudioUnavailable(f"Could not start audio output: {e}") from e
        logging.debug("Audio output resumed")

    def suspend(self) -> None:
        """Stop the stream but keep it for the next resume()."""
        if self._stream is None or not self._stream.active:
            return
        try:
            self._stream.stop()
        except Exception as e:
            logging.warning(f"Error suspending audio output: {e}")
        else:
            logging.debug("Audio output suspended")

    def close(self) -> None:
        """Release the device. The context cannot be reopened afterwards."""
        if self._stream is not None:
            try:
                self._stream.close()
            except Exception as e:
                logging.warning(f"Error closing audio output: {e}")
            self._stream = None
        self._closed = True
