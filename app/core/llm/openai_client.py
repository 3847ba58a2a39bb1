from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx

from app.core.settings import Settings
from app.domain.exceptions import UNABLE_TO_GENERATE


class OpenAIError(Exception):
    """Base error for OpenAI client failures."""


class OpenAITimeoutError(OpenAIError):
    """Raised when the completion request does not finish before its deadline."""


class OpenAIRequestError(OpenAIError):
    """Raised when the request could not be sent or the response could not be read."""


class OpenAIUpstreamError(OpenAIError):
    """Raised when OpenAI answers with a non-success HTTP status."""

    def __init__(self, *, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


@dataclass(frozen=True)
class OpenAIConfig:
    api_key: str
    base_url: str
    model: str
    timeout_seconds: float

    @classmethod
    def from_settings(cls, settings: Settings) -> OpenAIConfig:
        return cls(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            model=settings.openai_model,
            timeout_seconds=float(settings.openai_timeout_seconds),
        )


def _extract_error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return UNABLE_TO_GENERATE
    error = data.get("error") if isinstance(data, dict) else None
    message = error.get("message") if isinstance(error, dict) else None
    if isinstance(message, str):
        return message
    return UNABLE_TO_GENERATE


def _extract_content(data: Any) -> str | None:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    if isinstance(content, str) and content:
        return content
    return None


class OpenAIClient:
    """
    Minimal OpenAI chat-completions client for free-text drafting.

    Design notes:
    - No logging in this module (prompts/outputs carry applicant details).
    - One request per call: no retries, no conversation history.
    - The deadline covers the whole exchange and surfaces as OpenAITimeoutError.
    """

    def __init__(self, *, config: OpenAIConfig, transport: httpx.AsyncBaseTransport | None = None):
        self._config = config
        self._transport = transport

    async def complete_chat(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        timeout_seconds: float | None = None,
    ) -> str | None:
        deadline = timeout_seconds if timeout_seconds is not None else self._config.timeout_seconds
        url = f"{self._config.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        payload: dict[str, Any] = {
            "model": self._config.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": temperature,
        }

        try:
            resp = await asyncio.wait_for(
                self._post(url=url, headers=headers, payload=payload, timeout_seconds=deadline),
                timeout=deadline,
            )
        except (TimeoutError, httpx.TimeoutException) as exc:
            raise OpenAITimeoutError("LLM request timed out") from exc
        except httpx.HTTPError as exc:
            raise OpenAIRequestError(str(exc) or "LLM request failed") from exc

        if not resp.is_success:
            raise OpenAIUpstreamError(
                status_code=resp.status_code, message=_extract_error_message(resp)
            )

        return _extract_content(resp.json())

    async def _post(
        self,
        *,
        url: str,
        headers: dict[str, str],
        payload: dict[str, Any],
        timeout_seconds: float,
    ) -> httpx.Response:
        async with httpx.AsyncClient(timeout=timeout_seconds, transport=self._transport) as client:
            return await client.post(url, headers=headers, json=payload)
