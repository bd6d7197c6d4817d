from __future__ import annotations

from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PLATFORM = "Instagram"
DEFAULT_TONE = "Friendly"
PLATFORM_SEPARATOR = ", "


def _as_text(value: Any) -> str:
    # Falsy JSON values (null, 0, false, "") count as absent.
    if not value:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


class CampaignRequest(BaseModel):
    """Product inputs submitted from the studio form."""

    model_config = ConfigDict(populate_by_name=True)

    product_name: str = Field(default="", alias="productName")
    description: str = ""
    audience: str = ""
    platform: str = DEFAULT_PLATFORM
    tone: str = DEFAULT_TONE

    @field_validator("product_name", "description", "audience", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("platform", mode="before")
    @classmethod
    def _coerce_platform(cls, value: Any) -> str:
        if isinstance(value, (list, tuple)):
            value = join_platforms(value)
        return _as_text(value) or DEFAULT_PLATFORM

    @field_validator("tone", mode="before")
    @classmethod
    def _coerce_tone(cls, value: Any) -> str:
        return _as_text(value) or DEFAULT_TONE

    @classmethod
    def from_form(
        cls,
        product_name: Optional[str],
        description: Optional[str],
        audience: Optional[str] = None,
        platforms: Iterable[str] = (),
        tone: Optional[str] = None,
    ) -> "CampaignRequest":
        """Build a request from raw form selections.

        Mirrors the payload rules of the studio page script: selected platforms
        are joined with ", " (Instagram when none), tone defaults to Friendly.
        """

        return cls(
            product_name=product_name or "",
            description=description or "",
            audience=audience or "",
            platform=join_platforms(platforms),
            tone=tone or DEFAULT_TONE,
        )

    def with_tone(self, tone: str) -> "CampaignRequest":
        """Return the regenerate payload: every field kept, only ``tone`` replaced.

        Mirrors the page script's regenerate action.
        """

        return self.model_copy(update={"tone": tone or DEFAULT_TONE})


def join_platforms(platforms: Iterable[str]) -> str:
    selected = [str(platform) for platform in platforms if platform]
    if not selected:
        return DEFAULT_PLATFORM
    return PLATFORM_SEPARATOR.join(selected)


class CampaignResult(BaseModel):
    """Marketing copy package returned to the studio page."""

    model_config = ConfigDict(extra="allow")

    tagline: str
    brand_story: str
    hooks: List[str]
    captions: List[str]
    hashtags: List[str]
    translated_caption_hi: str
    translated_caption_kn: str
    note: Optional[str] = Field(
        default=None,
        description="Present only when the deterministic fallback payload was used",
    )


class ErrorResponse(BaseModel):
    error: str
