from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.exception_handlers import register_exception_handlers
from app.api.schemas import HealthOut
from app.core.llm.deps import build_openai_client
from app.core.logging import setup_logging
from app.core.metrics import PrometheusMetricsMiddleware, metrics_router
from app.core.middleware.cors import CorsHeadersMiddleware
from app.core.middleware.http_logging import HttpLoggingMiddleware
from app.core.settings import get_settings
from app.suggestions.router import router as suggestions_router

setup_logging()


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Settings are validated here, once: a missing OPENAI_API_KEY aborts startup.
        # Deferring to startup keeps imports (e.g. pytest collection) env-free.
        settings = get_settings()
        app.state.openai_client = build_openai_client(settings=settings)
        yield

    app = FastAPI(
        title="Social Support Suggestions API",
        description=(
            "Drafts first-person paragraphs for a social-support application form.\n\n"
            "Design principles:\n"
            "- Stateless: suggestions are generated on demand and never stored.\n"
            "- One provider call per request, bounded by a fixed deadline, never retried.\n"
            "- Logging and metrics avoid applicant data by using route templates and "
            "metadata only."
        ),
        lifespan=lifespan,
        docs_url="/swagger",
        redoc_url="/docs",
        openapi_tags=[
            {
                "name": "health",
                "description": (
                    "Basic uptime and readiness checks for load balancers and monitoring."
                ),
            },
            {
                "name": "suggestions",
                "description": (
                    "Draft a paragraph for one application form field in English or Arabic."
                ),
            },
            {
                "name": "metrics",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    # Last added runs first: logging wraps metrics, which wraps the CORS headers.
    app.add_middleware(CorsHeadersMiddleware)
    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    register_exception_handlers(app)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running.\n\n"
            "The LLM provider is not contacted, so this is safe for frequent uptime checks."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(suggestions_router)
    return app


app = create_app()
