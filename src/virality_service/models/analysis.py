"""Analysis result models returned by the video analysis model."""

from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field


class SocialCaption(BaseModel):
    """A caption generated for one social platform."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    platform: str = Field(..., description="Target platform, e.g. TikTok, Instagram, Facebook/YouTube")
    title: str | None = Field(None, description="Short SEO title (Facebook/YouTube)")
    body: str = Field(..., alias="caption", description="Caption text")
    hashtags: list[str] = Field(default_factory=list)
    strategy: str = Field(..., description="Strategy label, e.g. Viral/Hook, Educational")
    max_length: int | None = Field(None, alias="maxLength", description="Length constraint honored")


class AnalysisResult(BaseModel):
    """Structured analysis of one video."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    summary: str = Field(..., alias="transcriptSummary")
    keywords: list[str] = Field(default_factory=list)
    audience_profile: str = Field(..., alias="audienceAnalysis")
    captions: list[SocialCaption] = Field(default_factory=list)


# Long-form platforms whose captions are listed first
BROADCAST_PLATFORMS = ("facebook", "youtube")


def is_broadcast_platform(platform: str) -> bool:
    name = platform.lower()
    return any(family in name for family in BROADCAST_PLATFORMS)


def order_captions(captions: Sequence[SocialCaption]) -> list[SocialCaption]:
    """Move Facebook/YouTube captions to the front, keeping relative order."""
    return sorted(captions, key=lambda caption: not is_broadcast_platform(caption.platform))
