"""LLM integration layer.

This package is intentionally small and conservative:
- No prompt/output logging (may contain applicant details).
- Configured once at startup from environment variables.
- Treated as a pure/stateless function by callers.
"""
