from __future__ import annotations

from app.suggestions.schemas import SuggestionField

# What the paragraph must cover, per form field.
FIELD_FOCUS: dict[str, str] = {
    "currentFinancialSituation": (
        "current income sources, essential expenses, debts, and concrete examples of "
        "financial strain or recent hardship"
    ),
    "employmentCircumstances": (
        "employment status, hours or income level, stability of work, caregiving or health "
        "barriers, and any recent changes affecting employment"
    ),
    "reasonForApplying": (
        "specific reasons for seeking support now, the type of assistance needed, and how it "
        "will help meet urgent household needs"
    ),
}

# How the paragraph should open and sound, per form field.
FIELD_GUIDANCE: dict[str, str] = {
    "currentFinancialSituation": (
        "Begin with the main financial pressure (for example rising bills, debt, or reduced "
        "income). Mention amounts when they help explain the strain. Avoid greetings or "
        "introductions."
    ),
    "employmentCircumstances": (
        "Start by describing the current work situation or lack of work. Include hours worked, "
        "pay level, or caregiving/health limits if relevant. Avoid greetings or introductions."
    ),
    "reasonForApplying": (
        "Lead with the immediate need for assistance and connect it to day-to-day realities. "
        "Highlight how support would be used. Avoid greetings or introductions."
    ),
}


def build_system_prompt(*, field: SuggestionField) -> str:
    return " ".join(
        [
            "You are assisting with drafting a government social support application.",
            "Write in the applicant's first-person voice as if they are typing their own paragraph.",
            "Keep the tone sincere, respectful, and grounded in practical details.",
            'Never open with salutations, introductions, or phrases like "My name is".',
            "Do not repeat names, ID numbers, phone numbers, or other personal identifiers.",
            f"Focus tightly on {FIELD_FOCUS[field]}.",
            "Limit the response to one paragraph under 120 words, avoid bullet lists,",
            "and never refer to yourself as an assistant or AI.",
        ]
    )


def build_user_prompt(
    *,
    field: SuggestionField,
    output_language: str,
    existing_text: str | None = None,
    applicant_details: str | None = None,
) -> str:
    segments = [
        f"Write the paragraph in {output_language}.",
        "Sound like a real person describing lived experience in a warm but direct way.",
        "Do not start with a salutation.",
        FIELD_GUIDANCE[field],
        f"Applicant context: {applicant_details}." if applicant_details else "",
        f"Applicant notes: {existing_text}" if existing_text else "",
    ]
    return " ".join(segment for segment in segments if segment)


def build_suggestion_prompts(
    *,
    field: SuggestionField,
    output_language: str,
    existing_text: str | None = None,
    applicant_details: str | None = None,
) -> tuple[str, str]:
    """
    Create (system_prompt, user_prompt) for drafting one form paragraph.

    Design decisions:
    - The system prompt carries the voice, length and privacy rules plus the field focus.
    - The user prompt carries language, field-specific opening guidance and the
      applicant's own context; absent optional inputs leave no placeholder behind.
    - Each call is standalone: no conversation history is sent.
    """

    system_prompt = build_system_prompt(field=field)
    user_prompt = build_user_prompt(
        field=field,
        output_language=output_language,
        existing_text=existing_text,
        applicant_details=applicant_details,
    )
    return system_prompt, user_prompt
