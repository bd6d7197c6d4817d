#!/usr/bin/env python3
"""Run a quick campaign generation smoke test against the FastAPI service."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict

from fastapi.testclient import TestClient

from campaign_studio.config import get_settings
from campaign_studio.main import app
from campaign_studio.schemas.campaign import CampaignRequest
import campaign_studio.dependencies.services as services_module


def _ensure_api_key() -> None:
    settings = get_settings()
    if settings.llm_provider == "gemini" and not settings.google_api_key:
        raise RuntimeError(
            "GOOGLE_API_KEY environment variable is required for the smoke test."
        )
    if settings.llm_provider == "openai" and not settings.openai_api_key:
        raise RuntimeError(
            "OPENAI_API_KEY environment variable is required for the smoke test."
        )


def run_smoke_test(payload: Dict[str, Any], request_timeout: float) -> Dict[str, Any]:
    """POST ``payload`` to /api/generate-campaign and print the campaign."""

    # Ensure configuration changes are respected between runs.
    get_settings.cache_clear()
    services_module._get_text_generator_cached.cache_clear()

    _ensure_api_key()

    settings = get_settings()
    model = settings.gemini_model if settings.llm_provider == "gemini" else settings.openai_model
    print(f"Running smoke test with {settings.llm_provider} model '{model}'")

    with TestClient(app) as client:
        response = client.post(
            "/api/generate-campaign",
            json=payload,
            timeout=request_timeout,
        )

    if response.status_code != 200:
        raise RuntimeError(
            f"Campaign generation failed ({response.status_code}): {response.text}"
        )

    result: Dict[str, Any] = response.json()
    if result.get("note"):
        print(f"Note: {result['note']}\n")
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return result


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Run a smoke test against the local campaign studio. The test sends "
            "a product through /api/generate-campaign using the configured model."
        )
    )
    parser.add_argument("--product", default="Organic Cold Brew Coffee")
    parser.add_argument(
        "--description",
        default="Small-batch cold brew made from organic beans, steeped for 18 hours.",
    )
    parser.add_argument("--audience", default="")
    parser.add_argument(
        "--platform",
        action="append",
        default=[],
        help="Platform to target; repeat for more than one.",
    )
    parser.add_argument("--tone", default="Friendly")
    parser.add_argument(
        "--regenerate-tone",
        default=None,
        help="When set, resubmit the same product with only the tone changed.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=60.0,
        help="Timeout (in seconds) for the generation HTTP request.",
    )

    args = parser.parse_args(argv)
    request = CampaignRequest.from_form(
        args.product, args.description, args.audience, args.platform, args.tone
    )

    try:
        run_smoke_test(request.model_dump(by_alias=True), args.timeout)
        if args.regenerate_tone:
            print(f"\nRegenerating with tone '{args.regenerate_tone}'")
            regenerated = request.with_tone(args.regenerate_tone)
            run_smoke_test(regenerated.model_dump(by_alias=True), args.timeout)
    except Exception as exc:  # pragma: no cover - manual diagnostic utility
        print(f"Smoke test failed: {exc}", file=sys.stderr)
        return 1

    print("\nSmoke test completed successfully.")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual diagnostic utility
    raise SystemExit(main())
