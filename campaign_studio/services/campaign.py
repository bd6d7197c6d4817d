from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict

from pydantic import ValidationError

from campaign_studio.clients.llm import TextGenerator
from campaign_studio.schemas.campaign import CampaignRequest, CampaignResult
from campaign_studio.services.exceptions import (
    InvalidCampaignInput,
    QuotaExceededError,
    ServiceError,
    UpstreamMalformedError,
    UpstreamServiceError,
)
from campaign_studio.services.fallback import build_fallback_result
from campaign_studio.services.prompts import build_campaign_prompt

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "productName and description are required"
DEFAULT_FAILURE_MESSAGE = "Something went wrong while generating campaign content."

_OPENING_FENCE = re.compile(r"^```[A-Za-z0-9_-]*\s*")
_CLOSING_FENCE = re.compile(r"\s*```$")


def is_quota_error(exc: BaseException) -> bool:
    """Return True when ``exc`` carries the provider's exhausted-quota signal."""

    if isinstance(exc, QuotaExceededError):
        return True
    if getattr(exc, "code", None) == "insufficient_quota":
        return True
    for attr in ("status_code", "status"):
        if getattr(exc, attr, None) == 429:
            return True
    return False


def parse_campaign_payload(raw: str) -> Dict[str, Any]:
    """Decode the model reply into a JSON object, tolerating one markdown fence."""

    text = (raw or "").strip()
    if text.startswith("```"):
        text = _CLOSING_FENCE.sub("", _OPENING_FENCE.sub("", text, count=1), count=1)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise UpstreamMalformedError(
            f"Model returned invalid JSON: {exc.msg}", cause=exc
        ) from exc
    if not isinstance(data, dict):
        raise UpstreamMalformedError("Model returned JSON that is not an object")
    return data


class CampaignService:
    """Validates campaign requests, calls the text generator and applies fallback."""

    def __init__(self, generator: TextGenerator) -> None:
        self._generator = generator

    async def generate(self, request: CampaignRequest) -> CampaignResult:
        # Whitespace-only fields count as empty.
        if not request.product_name.strip() or not request.description.strip():
            logger.warning("Rejected campaign request with missing required fields")
            raise InvalidCampaignInput(REQUIRED_FIELDS_MESSAGE)

        logger.info(
            "Generating campaign for '%s' (platform=%s, tone=%s)",
            request.product_name,
            request.platform,
            request.tone,
        )
        prompt = build_campaign_prompt(request)

        try:
            raw = await self._generator.generate(prompt)
        except Exception as exc:
            if is_quota_error(exc):
                logger.warning(
                    "Provider quota exhausted; returning fallback campaign for '%s'",
                    request.product_name,
                )
                return build_fallback_result(request)
            logger.exception("Campaign generation failed")
            if isinstance(exc, ServiceError):
                raise
            raise UpstreamServiceError(
                str(exc) or DEFAULT_FAILURE_MESSAGE, cause=exc
            ) from exc

        try:
            data = parse_campaign_payload(raw)
            return CampaignResult.model_validate(data)
        except UpstreamMalformedError:
            logger.exception("Unable to parse campaign JSON from model output")
            raise
        except ValidationError as exc:
            logger.exception("Model output does not match the campaign shape")
            raise UpstreamMalformedError(
                f"Model output is missing or has invalid fields: "
                f"{', '.join(str(err['loc'][0]) for err in exc.errors())}",
                cause=exc,
            ) from exc
