from __future__ import annotations

from fastapi import Request

from app.core.llm.openai_client import OpenAIClient, OpenAIConfig
from app.core.settings import Settings


def build_openai_client(*, settings: Settings) -> OpenAIClient:
    """Build the process-wide client from already validated settings."""

    return OpenAIClient(config=OpenAIConfig.from_settings(settings))


def get_openai_client(request: Request) -> OpenAIClient:
    """
    Dependency provider for OpenAIClient.

    The client is created once during application startup (see `app.main`), so a
    missing API key fails the process before any request is served.
    """

    return request.app.state.openai_client
