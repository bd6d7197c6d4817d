import asyncio
from types import SimpleNamespace

import httpx
import openai
import pytest
from google.api_core.exceptions import InternalServerError, ResourceExhausted

import campaign_studio.clients.llm as llm_module
from campaign_studio.clients.llm import (
    GeminiTextGenerator,
    OpenAITextGenerator,
    build_text_generator,
)
from campaign_studio.config import Settings
from campaign_studio.services.exceptions import (
    QuotaExceededError,
    UpstreamMalformedError,
    UpstreamServiceError,
)
from campaign_studio.services.prompts import SYSTEM_INSTRUCTION

_OPENAI_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


class FakeGeminiModel:
    """Stand-in for ``genai.GenerativeModel`` with a scripted outcome."""

    outcome: object = None
    instances: list = []

    def __init__(self, model_name, **kwargs) -> None:
        self.model_name = model_name
        self.kwargs = kwargs
        FakeGeminiModel.instances.append(self)

    def generate_content(self, prompt):
        if isinstance(FakeGeminiModel.outcome, Exception):
            raise FakeGeminiModel.outcome
        return SimpleNamespace(text=FakeGeminiModel.outcome)


@pytest.fixture
def gemini(monkeypatch):
    configured = {}
    FakeGeminiModel.instances = []
    FakeGeminiModel.outcome = None
    monkeypatch.setattr(llm_module.genai, "configure", lambda **kwargs: configured.update(kwargs))
    monkeypatch.setattr(llm_module.genai, "GenerativeModel", FakeGeminiModel)
    return configured


def test_gemini_generator_returns_stripped_text(gemini) -> None:
    FakeGeminiModel.outcome = '  {"tagline": "x"}\n'
    generator = GeminiTextGenerator(api_key="test-key", model="gemini-test", temperature=0.3)

    text = asyncio.run(generator.generate("prompt"))

    assert text == '{"tagline": "x"}'
    assert gemini == {"api_key": "test-key"}
    model = FakeGeminiModel.instances[0]
    assert model.model_name == "gemini-test"
    assert model.kwargs["system_instruction"] == SYSTEM_INSTRUCTION
    assert model.kwargs["generation_config"]["temperature"] == 0.3
    assert model.kwargs["generation_config"]["response_mime_type"] == "application/json"


def test_gemini_resource_exhausted_maps_to_quota_error(gemini) -> None:
    FakeGeminiModel.outcome = ResourceExhausted("Quota exceeded for quota metric")
    generator = GeminiTextGenerator(api_key="test-key")

    with pytest.raises(QuotaExceededError):
        asyncio.run(generator.generate("prompt"))


def test_gemini_api_error_maps_to_upstream_error(gemini) -> None:
    FakeGeminiModel.outcome = InternalServerError("backend unavailable")
    generator = GeminiTextGenerator(api_key="test-key")

    with pytest.raises(UpstreamServiceError) as exc_info:
        asyncio.run(generator.generate("prompt"))

    assert "backend unavailable" in str(exc_info.value)
    assert exc_info.value.upstream_status == 500


def test_gemini_empty_text_maps_to_malformed_error(gemini) -> None:
    FakeGeminiModel.outcome = ""
    generator = GeminiTextGenerator(api_key="test-key")

    with pytest.raises(UpstreamMalformedError):
        asyncio.run(generator.generate("prompt"))


def test_gemini_missing_api_key_fails_before_calling_model(gemini) -> None:
    generator = GeminiTextGenerator(api_key=None)

    with pytest.raises(UpstreamServiceError, match="GOOGLE_API_KEY"):
        asyncio.run(generator.generate("prompt"))

    assert gemini == {}
    assert FakeGeminiModel.instances == []


def _openai_generator(create) -> OpenAITextGenerator:
    generator = OpenAITextGenerator(api_key="sk-test", model="gpt-test", temperature=0.8)
    generator._client = SimpleNamespace(
        chat=SimpleNamespace(completions=SimpleNamespace(create=create))
    )
    return generator


def test_openai_generator_sends_system_and_user_messages() -> None:
    captured = {}

    def create(**kwargs):
        captured.update(kwargs)
        message = SimpleNamespace(content='{"tagline": "x"}')
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    text = asyncio.run(_openai_generator(create).generate("user prompt"))

    assert text == '{"tagline": "x"}'
    assert captured["model"] == "gpt-test"
    assert captured["temperature"] == 0.8
    assert captured["messages"] == [
        {"role": "system", "content": SYSTEM_INSTRUCTION},
        {"role": "user", "content": "user prompt"},
    ]


def test_openai_empty_content_defaults_to_empty_object() -> None:
    def create(**kwargs):
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=None))])

    assert asyncio.run(_openai_generator(create).generate("prompt")) == "{}"


def test_openai_insufficient_quota_maps_to_quota_error() -> None:
    def create(**kwargs):
        raise openai.RateLimitError(
            "You exceeded your current quota",
            response=httpx.Response(429, request=_OPENAI_REQUEST),
            body={"code": "insufficient_quota", "message": "You exceeded your current quota"},
        )

    with pytest.raises(QuotaExceededError):
        asyncio.run(_openai_generator(create).generate("prompt"))


def test_openai_server_error_maps_to_upstream_error() -> None:
    def create(**kwargs):
        raise openai.InternalServerError(
            "The server had an error",
            response=httpx.Response(500, request=_OPENAI_REQUEST),
            body=None,
        )

    with pytest.raises(UpstreamServiceError) as exc_info:
        asyncio.run(_openai_generator(create).generate("prompt"))

    assert exc_info.value.upstream_status == 500


def test_openai_connection_error_maps_to_upstream_error() -> None:
    def create(**kwargs):
        raise openai.APIConnectionError(request=_OPENAI_REQUEST)

    with pytest.raises(UpstreamServiceError) as exc_info:
        asyncio.run(_openai_generator(create).generate("prompt"))

    assert exc_info.value.upstream_status is None


def test_openai_missing_api_key_fails() -> None:
    generator = OpenAITextGenerator(api_key=None)

    with pytest.raises(UpstreamServiceError, match="OPENAI_API_KEY"):
        asyncio.run(generator.generate("prompt"))


def test_build_text_generator_selects_provider() -> None:
    gemini_settings = Settings(_env_file=None, llm_provider="gemini", google_api_key="g")
    openai_settings = Settings(_env_file=None, llm_provider="openai", openai_api_key="o")

    assert isinstance(build_text_generator(gemini_settings), GeminiTextGenerator)
    assert isinstance(build_text_generator(openai_settings), OpenAITextGenerator)
