from __future__ import annotations

MISSING_REQUIRED_FIELDS = "Missing required fields."
REQUEST_TIMED_OUT = "The request timed out."
NO_SUGGESTION_RECEIVED = "No suggestion received."
UNABLE_TO_GENERATE = "Unable to generate suggestion."


class SuggestionError(Exception):
    """Base error for a suggestion request; rendered as `{"error": message}`."""

    status_code: int = 500
    outcome: str = "internal_error"

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class SuggestionValidationError(SuggestionError):
    """Raised when the request body is malformed or incomplete (client fault)."""

    status_code = 400
    outcome = "validation_error"


class ProviderTimeoutError(SuggestionError):
    """Raised when the provider call exceeds its deadline."""

    status_code = 504
    outcome = "timeout"

    def __init__(self, message: str = REQUEST_TIMED_OUT):
        super().__init__(message)


class ProviderError(SuggestionError):
    """Raised when the provider answers with a non-success status (status is propagated)."""

    outcome = "provider_error"


class EmptyResponseError(SuggestionError):
    """Raised when the provider succeeds without any usable text."""

    status_code = 500
    outcome = "empty_response"

    def __init__(self, message: str = NO_SUGGESTION_RECEIVED):
        super().__init__(message)


class InternalError(SuggestionError):
    """Raised for any other unexpected failure while drafting a suggestion."""

    status_code = 500
    outcome = "internal_error"
