from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass

from translate_core.audio import AudioBuffer, decode_audio


@dataclass(slots=True)
class SpeechSession:
    """Synthesize, decode and play one utterance, then report completion.

    ``on_finished`` runs exactly once, whether playback ended normally or any
    step failed; the failure, if any, is passed along for logging only.
    """

    synthesize: Callable[[str, str], Future[bytes | None]]
    play: Callable[[AudioBuffer], Future[None]]
    on_finished: Callable[[BaseException | None], None]
    sample_rate: int = 24000
    channels: int = 1

    def run(self, text: str, language_name: str) -> None:
        try:
            future = self.synthesize(text, language_name)
        except Exception as exc:
            self.on_finished(exc)
            return
        future.add_done_callback(self._handle_audio)

    def _handle_audio(self, future: Future[bytes | None]) -> None:
        if future.cancelled():
            self.on_finished(None)
            return
        try:
            audio_bytes = future.result()
            if not audio_bytes:
                raise RuntimeError("Audio generation failed")
            buffer = decode_audio(audio_bytes, self.sample_rate, self.channels)
            playback = self.play(buffer)
        except Exception as exc:
            self.on_finished(exc)
            return
        playback.add_done_callback(self._handle_played)

    def _handle_played(self, future: Future[None]) -> None:
        if future.cancelled():
            self.on_finished(None)
            return
        error = future.exception()
        self.on_finished(error)
