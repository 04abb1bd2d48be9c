from __future__ import annotations

from dataclasses import dataclass
from typing import Final

import numpy as np

DEFAULT_SAMPLE_RATE: Final[int] = 24000
DEFAULT_CHANNELS: Final[int] = 1
_INT16_SCALE: Final[float] = 32768.0


@dataclass(frozen=True, slots=True)
class AudioBuffer:
    samples: np.ndarray
    sample_rate: int
    channels: int

    @property
    def frame_count(self) -> int:
        return int(self.samples.shape[0])

    @property
    def duration_seconds(self) -> float:
        if self.sample_rate <= 0:
            return 0.0
        return self.frame_count / self.sample_rate

    def channel(self, index: int) -> np.ndarray:
        return self.samples[:, index]


def decode_audio(
    data: bytes,
    sample_rate: int = DEFAULT_SAMPLE_RATE,
    channels: int = DEFAULT_CHANNELS,
) -> AudioBuffer:
    """Turn raw little-endian 16-bit PCM into float samples in [-1, 1).

    Samples are interleaved by channel; a trailing partial frame is dropped.
    """
    if channels < 1:
        raise ValueError("channels must be positive")
    frame_bytes = 2 * channels
    usable = len(data) - (len(data) % frame_bytes)
    pcm = np.frombuffer(data[:usable], dtype="<i2")
    frames = pcm.reshape(-1, channels).astype(np.float32) / _INT16_SCALE
    return AudioBuffer(samples=frames, sample_rate=sample_rate, channels=channels)
