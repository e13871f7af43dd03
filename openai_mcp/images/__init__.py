"""Image generation module.

This module handles:
- Request and result models for the DALL-E generations endpoint
- Defaulting of optional generation parameters
- The outbound HTTP call and normalization of upstream failures
"""

from openai_mcp.images.client import (
    DEFAULT_PARAMETERS,
    Err,
    GenerationOutcome,
    Ok,
    UpstreamError,
    apply_defaults,
    build_payload,
    generate,
    generate_image,
)
from openai_mcp.images.models import GeneratedImage, GenerationRequest, GenerationResult

__all__ = [
    # Models
    "GeneratedImage",
    "GenerationRequest",
    "GenerationResult",
    # Client module
    "DEFAULT_PARAMETERS",
    "Err",
    "GenerationOutcome",
    "Ok",
    "UpstreamError",
    "apply_defaults",
    "build_payload",
    "generate",
    "generate_image",
]
