from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass
import threading

import sounddevice as sd

from translate_core.audio import AudioBuffer


@dataclass(slots=True)
class SoundDevicePlayer:
    """Plays decoded PCM on the default output device.

    ``sounddevice.play`` is non-blocking, so a worker thread waits for the
    stream to drain before resolving the returned future.
    """

    device: int | str | None = None

    def play(self, buffer: AudioBuffer) -> Future[None]:
        future: Future[None] = Future()
        future.set_running_or_notify_cancel()

        def _worker() -> None:
            try:
                sd.play(buffer.samples, samplerate=buffer.sample_rate, device=self.device)
                sd.wait()
            except Exception as exc:
                future.set_exception(exc)
                return
            future.set_result(None)

        threading.Thread(target=_worker, name="translator-audio", daemon=True).start()
        return future

    def stop(self) -> None:
        sd.stop()
