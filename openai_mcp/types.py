"""Shared type definitions for openai_mcp.

This module contains the enumerations accepted by the image generation
endpoint and the error kinds shared between the adapter and the MCP server.
"""

from enum import Enum


class ImageModel(str, Enum):
    """DALL-E model used for generation."""

    DALL_E_2 = "dall-e-2"
    DALL_E_3 = "dall-e-3"


class ImageSize(str, Enum):
    """Output image dimensions (width x height)."""

    SQUARE_256 = "256x256"
    SQUARE_512 = "512x512"
    SQUARE_1024 = "1024x1024"
    LANDSCAPE = "1792x1024"
    PORTRAIT = "1024x1792"


class ImageQuality(str, Enum):
    """Rendering quality."""

    STANDARD = "standard"
    HD = "hd"


class ImageStyle(str, Enum):
    """Rendering style."""

    VIVID = "vivid"
    NATURAL = "natural"


class ResponseFormat(str, Enum):
    """How generated images are returned by the upstream."""

    URL = "url"
    B64_JSON = "b64_json"


class ErrorKind(str, Enum):
    """Anticipated failure categories of a tool call."""

    CONFIGURATION = "configuration_error"
    VALIDATION = "validation"
    UPSTREAM = "upstream_error"


__all__ = [
    "ErrorKind",
    "ImageModel",
    "ImageQuality",
    "ImageSize",
    "ImageStyle",
    "ResponseFormat",
]
