from __future__ import annotations

from functools import lru_cache
from typing import Tuple

from fastapi import Depends

from campaign_studio.clients.llm import TextGenerator, build_text_generator
from campaign_studio.config import Settings, get_settings
from campaign_studio.services import CampaignService


def _cache_key(settings: Settings) -> Tuple[str, str, str, float]:
    if settings.llm_provider == "openai":
        return ("openai", settings.openai_model, settings.openai_api_key or "", settings.llm_temperature)
    return ("gemini", settings.gemini_model, settings.google_api_key or "", settings.llm_temperature)


@lru_cache(maxsize=1)
def _get_text_generator_cached(cache_key: Tuple[str, str, str, float]) -> TextGenerator:
    return build_text_generator(get_settings())


def get_text_generator(settings: Settings = Depends(get_settings)) -> TextGenerator:
    return _get_text_generator_cached(_cache_key(settings))


def get_campaign_service(
    generator: TextGenerator = Depends(get_text_generator),
) -> CampaignService:
    return CampaignService(generator)
