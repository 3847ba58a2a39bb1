from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

SuggestionField = Literal["currentFinancialSituation", "employmentCircumstances", "reasonForApplying"]

SUPPORTED_FIELDS: tuple[str, ...] = (
    "currentFinancialSituation",
    "employmentCircumstances",
    "reasonForApplying",
)


class SuggestionRequest(BaseModel):
    """Body of `POST /suggestions`."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    field: SuggestionField = Field(
        description="Application form section to draft a paragraph for.",
        examples=["currentFinancialSituation"],
    )
    language: str = Field(
        min_length=1,
        description="Output language. `ar` selects Arabic; any other value selects English.",
        examples=["en"],
    )
    existing_text: str | None = Field(
        default=None,
        alias="existingText",
        description="Text the applicant already drafted for this field (optional).",
    )
    applicant_details: str | None = Field(
        default=None,
        alias="applicantDetails",
        description="Free-text context about the applicant's household (optional).",
    )

    @field_validator("existing_text", "applicant_details")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        # Blank optional inputs are omitted from the prompt entirely.
        if value is None or not value.strip():
            return None
        return value

    @property
    def output_language(self) -> str:
        return "Arabic" if self.language == "ar" else "English"


class SuggestionOut(BaseModel):
    suggestion: str = Field(
        description="Generated first-person paragraph, trimmed of surrounding whitespace.",
        examples=["Over the last six months my hours at the warehouse were cut in half..."],
    )
