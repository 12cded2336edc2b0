from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from studygen.core.config import Settings
from studygen.core.errors import ConfigurationError, EmptyResponseError, TransportError

logger = logging.getLogger("llm_client")


@dataclass(frozen=True)
class ChatCompletionResult:
    model: str
    content: str
    usage: Dict[str, Any] = field(default_factory=dict)


def has_usable_key(settings: Settings) -> bool:
    key = (settings.llm_api_key or "").strip()
    return len(key) >= settings.min_api_key_length


def _auth_headers(settings: Settings) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {settings.llm_api_key.strip()}",
        "Content-Type": "application/json",
    }


async def generate_chat(
    client: httpx.AsyncClient,
    settings: Settings,
    messages: List[Dict[str, str]],
    temperature: float,
    max_tokens: int,
    presence_penalty: Optional[float] = None,
    frequency_penalty: Optional[float] = None,
) -> ChatCompletionResult:
    """
    One OpenAI-compatible chat completion. The credential is checked before
    any I/O; every failure is raised as a StudyGenError subclass.
    """
    if not has_usable_key(settings):
        raise ConfigurationError("LLM_API_KEY is missing or too short. Set it in the env file")

    url = f"{settings.llm_base_url.rstrip('/')}/chat/completions"

    payload: Dict[str, Any] = {
        "model": settings.llm_model,
        "messages": messages,
        "temperature": temperature,
        "max_tokens": max_tokens,
    }
    if presence_penalty is not None:
        payload["presence_penalty"] = presence_penalty
    if frequency_penalty is not None:
        payload["frequency_penalty"] = frequency_penalty

    t0 = time.perf_counter()
    try:
        r = await client.post(
            url, headers=_auth_headers(settings), json=payload, timeout=settings.llm_timeout_s
        )
    except httpx.HTTPError as e:
        raise TransportError(f"chat completion request failed: {e!r}") from e

    if not r.is_success:
        raise TransportError(
            f"chat completion returned HTTP {r.status_code}: {r.text[:300]}",
            status_code=r.status_code,
        )

    try:
        data = r.json()
    except ValueError as e:
        raise TransportError("chat completion body is not JSON", status_code=r.status_code) from e

    if not isinstance(data, dict):
        raise TransportError(
            f"chat completion body is a JSON {type(data).__name__}, not an object",
            status_code=r.status_code,
        )

    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        raise EmptyResponseError("chat completion returned no choices")

    message = choices[0].get("message")
    if not isinstance(message, dict):
        raise EmptyResponseError("chat completion choice has no message object")

    content = message.get("content")
    if not isinstance(content, str) or not content.strip():
        raise EmptyResponseError("chat completion returned empty message content")

    usage = data.get("usage")
    if not isinstance(usage, dict):
        usage = {}
    latency_ms = int((time.perf_counter() - t0) * 1000)
    logger.info(
        "chat completion model=%s latency_ms=%s prompt_tokens=%s completion_tokens=%s chars=%s",
        data.get("model", settings.llm_model),
        latency_ms,
        usage.get("prompt_tokens"),
        usage.get("completion_tokens"),
        len(content),
    )
    return ChatCompletionResult(
        model=str(data.get("model") or settings.llm_model),
        content=content.strip(),
        usage=usage,
    )


async def list_models(
    client: httpx.AsyncClient, settings: Settings, timeout_s: float = 10.0
) -> Dict[str, Any]:
    """Best-effort model listing from {base}/models (OpenAI-compatible)."""
    url = f"{settings.llm_base_url.rstrip('/')}/models"

    if not has_usable_key(settings):
        return {
            "ok": False,
            "url": url,
            "error": "Missing LLM_API_KEY",
            "models": [],
        }

    try:
        r = await client.get(url, headers=_auth_headers(settings), timeout=timeout_s)
        r.raise_for_status()
        data = r.json()
        models = []
        for m in data.get("data", []) or []:
            mid = m.get("id")
            if mid:
                models.append(str(mid))
        return {"ok": True, "url": url, "error": None, "models": models[:50]}
    except Exception as e:
        return {"ok": False, "url": url, "error": str(e), "models": []}
