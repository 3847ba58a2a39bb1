"""Request a sample suggestion from a locally running API.

This script is meant for manual checks during development:
- It only runs when APP_ENV=development
- It uses synthetic applicant context (no real personal data)
"""

# pyright: reportMissingImports=false
from __future__ import annotations

import argparse
import json
import os

import httpx


def _sample_payload(*, field: str, language: str) -> dict[str, str]:
    return {
        "field": field,
        "language": language,
        "applicantDetails": "Household of four, two children in primary school, renting",
        "existingText": "hours cut at work since spring, electricity bill overdue",
    }


def main() -> None:
    """Entry point."""
    app_env = os.getenv("APP_ENV", "production").strip().lower()
    if app_env != "development":
        print(f"Request skipped: APP_ENV={app_env!r} (only runs in development).")
        return

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--base-url", default=os.getenv("API_BASE_URL", "http://localhost:8000"))
    parser.add_argument(
        "--field",
        default="currentFinancialSituation",
        choices=["currentFinancialSituation", "employmentCircumstances", "reasonForApplying"],
    )
    parser.add_argument("--language", default="en", choices=["en", "ar"])
    args = parser.parse_args()

    # Slightly above the server-side provider deadline so a 504 is observed, not a client timeout.
    res = httpx.post(
        f"{args.base_url.rstrip('/')}/suggestions",
        json=_sample_payload(field=args.field, language=args.language),
        timeout=25.0,
    )
    print(f"HTTP {res.status_code}")
    print(json.dumps(res.json(), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
