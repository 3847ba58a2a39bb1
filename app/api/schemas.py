from __future__ import annotations

from pydantic import BaseModel, Field


class HealthOut(BaseModel):
    """Health check response."""

    status: str = Field(
        description="Service status indicator. `ok` means the API process is up and responding.",
        examples=["ok"],
    )


class ErrorOut(BaseModel):
    """Error envelope shared by every failing suggestion response."""

    error: str = Field(
        description="Human-readable message suitable for showing to the applicant.",
        examples=["Missing required fields."],
    )
