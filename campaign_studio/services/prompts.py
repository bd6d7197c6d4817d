from __future__ import annotations

from campaign_studio.schemas.campaign import CampaignRequest

SYSTEM_INSTRUCTION = "You are a helpful marketing AI."

RESULT_KEYS = (
    "tagline",
    "brand_story",
    "hooks",
    "captions",
    "hashtags",
    "translated_caption_hi",
    "translated_caption_kn",
)


def build_campaign_prompt(request: CampaignRequest) -> str:
    """Return the user prompt asking the model for a JSON campaign package."""

    return f"""
You are a senior marketing strategist and AI copywriter.

Create a marketing content package for:

Product: {request.product_name}
Description: {request.description}
Audience: {request.audience or "Not specified"}
Platform: {request.platform}
Tone: {request.tone}

Return STRICT JSON with exactly these keys:
- tagline
- brand_story (3–5 sentences)
- hooks (array of 3 hooks)
- captions (array of 2 platform-optimized captions)
- hashtags (array of 8–12)
- translated_caption_hi (Hindi translation)
- translated_caption_kn (Kannada translation)
Return ONLY the JSON object, no explanation and no markdown code fences.
"""
