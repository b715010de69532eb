from __future__ import annotations

"""sounddevice-based output device driving the Mixer clock."""

from typing import Any, Dict, Optional

import numpy as np

from .scheduler import AudioScheduler, Mixer
from .synthesis import Tone


class OutputDevice:
    """Mono float32 OutputStream whose callback pulls blocks from a Mixer."""

    def __init__(self, sample_rate: int = 44100, blocksize: int = 256) -> None:
        try:
            import sounddevice as sd  # type: ignore
        except Exception as e:  # pragma: no cover - runtime dependency
            raise RuntimeError("sounddevice is not installed or PortAudio is missing") from e

        self.mixer = Mixer(sample_rate)
        try:
            self._stream = sd.OutputStream(
                samplerate=sample_rate,
                blocksize=blocksize,
                channels=1,
                dtype="float32",
                callback=self._callback,
            )
            self._stream.start()
        except Exception as e:
            raise RuntimeError(f"Could not open audio output: {e}") from e

    def _callback(self, outdata, frames, time, status) -> None:
        if status:
            print("Stream status:", status)
        outdata[:, 0] = np.clip(self.mixer.render(frames), -1.0, 1.0)

    def close(self) -> None:
        try:
            self._stream.stop()
            self._stream.close()
        except Exception:
            pass


_DEVICE: Optional[OutputDevice] = None


def get_output_device(sample_rate: int = 44100, blocksize: int = 256) -> OutputDevice:
    """Process-wide device, created on first use and kept for the session."""
    global _DEVICE
    if _DEVICE is None:
        _DEVICE = OutputDevice(sample_rate=sample_rate, blocksize=blocksize)
    return _DEVICE


def make_scheduler_from_config(cfg: Dict[str, Any]) -> AudioScheduler:
    """Factory for an AudioScheduler from config dict.

    backend 'none' gives a silent scheduler whose mixer is never drained.
    """
    audio = cfg.get("audio", {})
    backend = audio.get("backend", "sounddevice")
    sample_rate = int(audio.get("sample_rate", 44100))
    tone = Tone(audio.get("tone", "triangle"))
    lookahead = float(audio.get("lookahead_s", 0.06))
    if backend == "sounddevice":
        device = get_output_device(sample_rate=sample_rate, blocksize=int(audio.get("blocksize", 256)))
        return AudioScheduler(device.mixer, tone=tone, lookahead=lookahead)
    if backend == "none":
        return AudioScheduler(Mixer(sample_rate), tone=tone, lookahead=lookahead)
    raise ValueError(f"Unsupported backend: {backend}")
