from __future__ import annotations

import asyncio
from concurrent.futures import Future
from dataclasses import dataclass

import aiohttp

from translate_core.gemini import (
    GatewaySettings,
    synthesize_speech_gemini,
    translate_gemini,
)
from translate_core.http import JsonPoster, build_json_poster
from translate_core.models import TranslationResult
from translator_app.services.runtime import AsyncRuntime


@dataclass(slots=True)
class GatewayService:
    """Runs Gemini calls on the async runtime and hands back futures."""

    runtime: AsyncRuntime
    settings: GatewaySettings
    timeout: float | None = None

    _session: aiohttp.ClientSession | None = None
    _poster: JsonPoster | None = None
    _session_lock: asyncio.Lock | None = None

    def translate(
        self, text: str, source_lang: str, target_lang: str
    ) -> Future[TranslationResult]:
        return self.runtime.submit(self._translate_async(text, source_lang, target_lang))

    def synthesize(self, text: str, language_name: str) -> Future[bytes | None]:
        return self.runtime.submit(self._synthesize_async(text, language_name))

    async def close(self) -> None:
        if self._session is None:
            return
        await self._session.close()
        self._session = None
        self._poster = None

    async def _translate_async(
        self, text: str, source_lang: str, target_lang: str
    ) -> TranslationResult:
        poster = await self._ensure_poster()
        return await translate_gemini(
            text, source_lang, target_lang, poster, self.settings
        )

    async def _synthesize_async(self, text: str, language_name: str) -> bytes | None:
        poster = await self._ensure_poster()
        return await synthesize_speech_gemini(
            text, language_name, poster, self.settings
        )

    async def _ensure_poster(self) -> JsonPoster:
        if self._poster is not None and self._session is not None:
            return self._poster
        lock = self._session_lock
        if lock is None:
            lock = asyncio.Lock()
            self._session_lock = lock
        async with lock:
            if self._poster is not None and self._session is not None:
                return self._poster
            self._session = aiohttp.ClientSession()
            self._poster = build_json_poster(
                self._session,
                headers=self.settings.headers(),
                timeout=self.timeout,
            )
            return self._poster
