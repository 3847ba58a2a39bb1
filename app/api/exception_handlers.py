from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.domain.exceptions import SuggestionError


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(SuggestionError)
    async def handle_suggestion_error(
        request: Request,
        exc: SuggestionError,
    ) -> JSONResponse:
        # Logged once by the suggestions router; this only renders the error body.
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
