from functools import lru_cache
from typing import Annotated, List, Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = Field(default="AI Creative Campaign Studio")
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]
    )
    llm_provider: Literal["gemini", "openai"] = Field(
        default="gemini"
    )
    google_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "CAMPAIGN_STUDIO_GOOGLE_API_KEY", "GOOGLE_API_KEY"
        ),
    )
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "CAMPAIGN_STUDIO_OPENAI_API_KEY", "OPENAI_API_KEY"
        ),
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash"
    )
    openai_model: str = Field(
        default="gpt-4.1-mini"
    )
    llm_temperature: float = Field(
        default=0.8
    )

    model_config = SettingsConfigDict(
        env_prefix="CAMPAIGN_STUDIO_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
        case_sensitive=False,
    )

    @field_validator("cors_origins", mode="before")
    def _split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()
