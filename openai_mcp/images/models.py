"""Pydantic models for image generation requests and results.

GenerationRequest mirrors the tool's input contract. Optional fields are
None until the adapter fills them from the default table. GenerationResult
is parsed from the upstream body and keeps unknown keys untouched.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from openai_mcp.types import (
    ImageModel,
    ImageQuality,
    ImageSize,
    ImageStyle,
    ResponseFormat,
)


class GenerationRequest(BaseModel):
    """Parameters for a single image generation call."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    prompt: str = Field(min_length=1, description="Text description of the image")
    model: ImageModel | None = None
    n: int | None = Field(default=None, ge=1, le=10)
    size: ImageSize | None = None
    quality: ImageQuality | None = None
    style: ImageStyle | None = None
    response_format: ResponseFormat | None = None
    user: str | None = None

    @field_validator("n", mode="before")
    @classmethod
    def validate_n(cls, v: Any) -> Any:
        """Reject booleans, which lax int parsing would read as 0 or 1."""
        if isinstance(v, bool):
            raise ValueError("n must be a number, not a boolean")
        return v


class GeneratedImage(BaseModel):
    """One entry of the upstream ``data`` list."""

    model_config = ConfigDict(extra="allow")

    url: str | None = None
    b64_json: str | None = None
    revised_prompt: str | None = None

    @property
    def location(self) -> str | None:
        """The image URL, or the inline base64 data when no URL was returned."""
        return self.url if self.url is not None else self.b64_json


class GenerationResult(BaseModel):
    """Upstream response for a successful generation."""

    model_config = ConfigDict(extra="allow")

    created: int
    data: list[GeneratedImage]

    def first_image(self) -> GeneratedImage:
        """Return the first generated image."""
        return self.data[0]

    def to_summary(self) -> dict[str, Any]:
        """Summarize the result using the first image only.

        ``revised_prompt`` is included only when the upstream supplied one.
        """
        image = self.first_image()
        summary: dict[str, Any] = {"created": self.created, "url": image.location}
        if image.revised_prompt is not None:
            summary["revised_prompt"] = image.revised_prompt
        return summary


__all__ = ["GeneratedImage", "GenerationRequest", "GenerationResult"]
