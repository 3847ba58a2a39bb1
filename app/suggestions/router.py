from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from app.api.schemas import ErrorOut
from app.core.llm.deps import get_openai_client
from app.core.metrics import suggestions_total
from app.domain.exceptions import SuggestionError
from app.suggestions.schemas import SuggestionOut
from app.suggestions.service import SuggestionService, parse_suggestion_request

router = APIRouter(prefix="/suggestions", tags=["suggestions"])
logger = logging.getLogger("app.suggestions")


@router.options(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Cross-origin pre-flight",
)
async def suggestions_preflight() -> Response:
    # Body is ignored; cross-origin headers are added by CorsHeadersMiddleware.
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "",
    response_model=SuggestionOut,
    responses={
        400: {"model": ErrorOut, "description": "Missing or invalid request fields."},
        500: {"model": ErrorOut, "description": "No usable suggestion or unexpected failure."},
        504: {"model": ErrorOut, "description": "The provider did not answer in time."},
    },
    summary="Draft a first-person paragraph for an application form field",
)
async def create_suggestion(
    request: Request,
    openai_client=Depends(get_openai_client),
) -> SuggestionOut:
    """
    Draft one paragraph in the applicant's voice using an LLM.

    Provider failures propagate the provider's status code with its message.

    IMPORTANT (privacy):
    - Nothing is stored; each request makes exactly one provider call with no retries.
    - We do not log prompts, applicant text or generated text.
    """

    request_id = getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")

    try:
        body = await request.json()
    except ValueError:
        body = None

    field: str | None = None
    language: str | None = None
    try:
        payload = parse_suggestion_request(body)
        field, language = payload.field, payload.output_language
        svc = SuggestionService(llm_client=openai_client)
        suggestion = await svc.generate_suggestion(request=payload)
    except SuggestionError as exc:
        outcome = exc.outcome
        logger.info(
            "Suggestion failed",
            extra={
                "request_id": request_id,
                "field": field,
                "language": language,
                "status_code": exc.status_code,
                "outcome": outcome,
                "success": False,
            },
        )
        suggestions_total.labels(field=field or "unknown", outcome=outcome).inc()
        raise

    logger.info(
        "Suggestion generated",
        extra={
            "request_id": request_id,
            "field": field,
            "language": language,
            "status_code": status.HTTP_200_OK,
            "outcome": "success",
            "success": True,
        },
    )
    suggestions_total.labels(field=field, outcome="success").inc()
    return suggestion
