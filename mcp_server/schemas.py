"""Pydantic schemas for MCP tool responses.

These schemas define the JSON carried in the text content of tool results.
"""

from pydantic import BaseModel, ConfigDict

from openai_mcp.images.models import GenerationResult


class GenerateImageResponse(BaseModel):
    """Response for generate_image tool.

    Only the first generated image is described, even when more than one
    was requested.
    """

    model_config = ConfigDict(extra="forbid")

    created: int
    url: str | None
    revised_prompt: str | None = None

    @classmethod
    def from_result(cls, result: GenerationResult) -> "GenerateImageResponse":
        """Build the response from an upstream result."""
        return cls(**result.to_summary())

    def to_text(self) -> str:
        """Render as indented JSON, omitting a missing revised prompt."""
        return self.model_dump_json(indent=2, exclude_none=True)


__all__ = ["GenerateImageResponse"]
