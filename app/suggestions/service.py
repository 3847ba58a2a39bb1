from __future__ import annotations

from typing import Any, Protocol

from pydantic import ValidationError

from app.core.llm.openai_client import OpenAITimeoutError, OpenAIUpstreamError
from app.domain.exceptions import (
    MISSING_REQUIRED_FIELDS,
    UNABLE_TO_GENERATE,
    EmptyResponseError,
    InternalError,
    ProviderError,
    ProviderTimeoutError,
    SuggestionValidationError,
)
from app.suggestions.prompt import build_suggestion_prompts
from app.suggestions.schemas import SUPPORTED_FIELDS, SuggestionOut, SuggestionRequest

SUGGESTION_TEMPERATURE = 0.6


class LLMClient(Protocol):
    async def complete_chat(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        timeout_seconds: float | None = None,
    ) -> str | None: ...


def _is_present(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def parse_suggestion_request(body: Any) -> SuggestionRequest:
    """Validate a decoded JSON body; raises SuggestionValidationError (400) on any problem."""

    if not isinstance(body, dict):
        raise SuggestionValidationError(MISSING_REQUIRED_FIELDS)
    if not _is_present(body.get("field")) or not _is_present(body.get("language")):
        raise SuggestionValidationError(MISSING_REQUIRED_FIELDS)
    if body["field"] not in SUPPORTED_FIELDS:
        raise SuggestionValidationError(
            "Unsupported field. Supported values: " + ", ".join(SUPPORTED_FIELDS) + "."
        )

    try:
        return SuggestionRequest.model_validate(body)
    except ValidationError as exc:
        raise SuggestionValidationError("Invalid request body.") from exc


class SuggestionService:
    def __init__(self, *, llm_client: LLMClient, timeout_seconds: float | None = None):
        # None defers to the deadline in the client's own configuration.
        self._llm = llm_client
        self._timeout_seconds = timeout_seconds

    async def generate_suggestion(self, *, request: SuggestionRequest) -> SuggestionOut:
        system_prompt, user_prompt = build_suggestion_prompts(
            field=request.field,
            output_language=request.output_language,
            existing_text=request.existing_text,
            applicant_details=request.applicant_details,
        )

        try:
            content = await self._llm.complete_chat(
                system_prompt=system_prompt,
                user_prompt=user_prompt,
                temperature=SUGGESTION_TEMPERATURE,
                timeout_seconds=self._timeout_seconds,
            )
        except OpenAITimeoutError as exc:
            raise ProviderTimeoutError() from exc
        except OpenAIUpstreamError as exc:
            raise ProviderError(exc.message, status_code=exc.status_code) from exc
        except Exception as exc:  # noqa: BLE001 - transport or parse failure: 500 with its message
            raise InternalError(str(exc) or UNABLE_TO_GENERATE) from exc

        text = content.strip() if content else ""
        if not text:
            raise EmptyResponseError()

        return SuggestionOut(suggestion=text)
