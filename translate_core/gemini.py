from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
import json
import logging
from typing import Final, TypeAlias

from translate_core.errors import GatewayError, MissingApiKeyError
from translate_core.http import JsonPoster
from translate_core.models import AUTO_DETECT_CODE, TranslationResult

GEMINI_BASE_URL: Final[str] = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_TRANSLATION_MODEL: Final[str] = "gemini-3-flash-preview"
DEFAULT_SPEECH_MODEL: Final[str] = "gemini-2.5-flash-preview-tts"
DEFAULT_VOICE: Final[str] = "Kore"

SYSTEM_INSTRUCTION: Final[str] = """You are a world-class professional translator.
Translate the given text accurately while maintaining tone, nuance, and cultural context.
If source language is 'auto', detect it.
Return the result in JSON format only.
Include:
- translatedText: The main translation.
- detectedLanguage: The ISO code or name of the source language (if auto).
- pronunciation: Optional phonetic spelling for non-Latin scripts.
- alternatives: Up to 2 other ways to say this (if appropriate)."""

RESPONSE_SCHEMA: Final[dict[str, object]] = {
    "type": "OBJECT",
    "properties": {
        "translatedText": {"type": "STRING"},
        "detectedLanguage": {"type": "STRING"},
        "pronunciation": {"type": "STRING"},
        "alternatives": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["translatedText"],
}

JsonValue: TypeAlias = (
    dict[str, "JsonValue"] | list["JsonValue"] | str | int | float | bool | None
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GatewaySettings:
    api_key: str
    base_url: str = GEMINI_BASE_URL
    translation_model: str = DEFAULT_TRANSLATION_MODEL
    speech_model: str = DEFAULT_SPEECH_MODEL
    voice: str = DEFAULT_VOICE

    def endpoint(self, model: str) -> str:
        return f"{self.base_url.rstrip('/')}/models/{model}:generateContent"

    def headers(self) -> dict[str, str]:
        return {"x-goog-api-key": self.api_key}


def build_translation_prompt(text: str, source_lang: str, target_lang: str) -> str:
    source_clause = f" from {source_lang}" if source_lang != AUTO_DETECT_CODE else ""
    return f'Translate this text to {target_lang}{source_clause}: "{text}"'


def build_translation_request(
    text: str, source_lang: str, target_lang: str
) -> dict[str, object]:
    return {
        "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
        "contents": [
            {
                "role": "user",
                "parts": [
                    {"text": build_translation_prompt(text, source_lang, target_lang)}
                ],
            }
        ],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": RESPONSE_SCHEMA,
        },
    }


def build_speech_request(
    text: str, language_name: str, voice: str = DEFAULT_VOICE
) -> dict[str, object]:
    return {
        "contents": [
            {"parts": [{"text": f"Speak this in {language_name} clearly: {text}"}]}
        ],
        "generationConfig": {
            "responseModalities": ["AUDIO"],
            "speechConfig": {
                "voiceConfig": {"prebuiltVoiceConfig": {"voiceName": voice}},
            },
        },
    }


async def translate_gemini(
    text: str,
    source_lang: str,
    target_lang: str,
    poster: JsonPoster,
    settings: GatewaySettings,
) -> TranslationResult:
    if not settings.api_key:
        raise MissingApiKeyError()
    payload = await poster(
        settings.endpoint(settings.translation_model),
        build_translation_request(text, source_lang, target_lang),
    )
    response_text = extract_response_text(payload)
    if response_text is None:
        raise GatewayError("Translation service returned no text.")
    return parse_translation_text(response_text)


async def synthesize_speech_gemini(
    text: str,
    language_name: str,
    poster: JsonPoster,
    settings: GatewaySettings,
) -> bytes | None:
    if not settings.api_key:
        raise MissingApiKeyError()
    try:
        payload = await poster(
            settings.endpoint(settings.speech_model),
            build_speech_request(text, language_name, settings.voice),
        )
    except GatewayError:
        logger.warning("speech synthesis request failed", exc_info=True)
        return None
    encoded = extract_inline_audio(payload)
    if encoded is None:
        return None
    try:
        return base64.b64decode(encoded, validate=False)
    except (binascii.Error, ValueError):
        logger.warning("speech payload is not valid base64")
        return None


def parse_translation_text(response_text: str) -> TranslationResult:
    """Decode the model's JSON answer, keeping the raw text when it is malformed."""
    try:
        decoded: JsonValue = json.loads(response_text)
    except json.JSONDecodeError:
        logger.warning("failed to parse translation response as JSON")
        return TranslationResult(translated_text=response_text)
    data = _as_dict(decoded)
    if data is None or not isinstance(data.get("translatedText"), str):
        logger.warning("translation response has no translatedText field")
        return TranslationResult(translated_text=response_text)
    return TranslationResult.from_payload(data)


def extract_response_text(payload: dict[str, object]) -> str | None:
    parts = _first_candidate_parts(payload)
    if parts is None:
        return None
    chunks: list[str] = []
    for part in parts:
        part_obj = _as_dict(part)
        if part_obj is None:
            continue
        text = part_obj.get("text")
        if isinstance(text, str):
            chunks.append(text)
    if not chunks:
        return None
    return "".join(chunks)


def extract_inline_audio(payload: dict[str, object]) -> str | None:
    parts = _first_candidate_parts(payload)
    if not parts:
        return None
    first = _as_dict(parts[0])
    if first is None:
        return None
    inline = _as_dict(first.get("inlineData"))
    if inline is None:
        return None
    data = inline.get("data")
    if isinstance(data, str) and data:
        return data
    return None


def _first_candidate_parts(payload: dict[str, object]) -> list[object] | None:
    candidates = _as_list(payload.get("candidates"))
    if not candidates:
        return None
    candidate = _as_dict(candidates[0])
    if candidate is None:
        return None
    content = _as_dict(candidate.get("content"))
    if content is None:
        return None
    return _as_list(content.get("parts"))


def _as_dict(value: object | None) -> dict[str, object] | None:
    if isinstance(value, dict):
        return value
    return None


def _as_list(value: object | None) -> list[object] | None:
    if isinstance(value, list):
        return value
    return None
