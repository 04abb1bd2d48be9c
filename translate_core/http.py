from __future__ import annotations

import asyncio
import json
from typing import Awaitable, Callable

import aiohttp

from translate_core.errors import FetchError, FetchStatusError, FetchTimeoutError

DEFAULT_USER_AGENT = "gemini-translator/0.1"

JsonPoster = Callable[[str, dict[str, object]], Awaitable[dict[str, object]]]


async def post_json_async(
    url: str,
    payload: dict[str, object],
    session: aiohttp.ClientSession,
    *,
    headers: dict[str, str] | None = None,
    timeout: float | None = None,
) -> dict[str, object]:
    request_headers = {
        "User-Agent": DEFAULT_USER_AGENT,
        "Content-Type": "application/json",
    }
    if headers:
        request_headers.update(headers)
    timeout_config = aiohttp.ClientTimeout(total=timeout)
    try:
        async with session.post(
            url,
            json=payload,
            headers=request_headers,
            timeout=timeout_config,
        ) as response:
            body = await response.text(errors="replace")
            if response.status != 200:
                raise FetchStatusError(
                    _status_message(response.status, body),
                    status_code=response.status,
                )
    except FetchStatusError:
        raise
    except asyncio.TimeoutError as exc:
        raise FetchTimeoutError("Translation service timed out.") from exc
    except aiohttp.ClientError as exc:
        raise FetchError(f"Translation service is unreachable: {exc}") from exc
    try:
        decoded: object = json.loads(body)
    except json.JSONDecodeError as exc:
        raise FetchError("Translation service returned invalid JSON.") from exc
    if not isinstance(decoded, dict):
        raise FetchError("Translation service returned an unexpected payload.")
    return decoded


def build_json_poster(
    session: aiohttp.ClientSession,
    *,
    headers: dict[str, str] | None = None,
    timeout: float | None = None,
) -> JsonPoster:
    async def post(url: str, payload: dict[str, object]) -> dict[str, object]:
        return await post_json_async(
            url, payload, session, headers=headers, timeout=timeout
        )

    return post


def _status_message(status: int, body: str) -> str:
    detail = _error_detail(body)
    if detail:
        return f"Request failed ({status}): {detail}"
    return f"Request failed ({status})."


def _error_detail(body: str) -> str:
    try:
        decoded: object = json.loads(body)
    except json.JSONDecodeError:
        return ""
    if not isinstance(decoded, dict):
        return ""
    error = decoded.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str):
            return message.strip()
    return ""
