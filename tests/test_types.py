"""Tests for shared types module."""

from openai_mcp.types import (
    ErrorKind,
    ImageModel,
    ImageQuality,
    ImageSize,
    ImageStyle,
    ResponseFormat,
)


class TestEnums:
    """Test enum definitions."""

    def test_image_model_values(self) -> None:
        """ImageModel should list both DALL-E models."""
        assert [m.value for m in ImageModel] == ["dall-e-2", "dall-e-3"]

    def test_image_size_values(self) -> None:
        """ImageSize should list the five supported sizes."""
        assert [s.value for s in ImageSize] == [
            "256x256",
            "512x512",
            "1024x1024",
            "1792x1024",
            "1024x1792",
        ]

    def test_quality_and_style_values(self) -> None:
        """Quality and style enums should have expected values."""
        assert [q.value for q in ImageQuality] == ["standard", "hd"]
        assert [s.value for s in ImageStyle] == ["vivid", "natural"]

    def test_response_format_values(self) -> None:
        """ResponseFormat should offer url and b64_json."""
        assert ResponseFormat.URL.value == "url"
        assert ResponseFormat.B64_JSON.value == "b64_json"

    def test_enums_compare_to_strings(self) -> None:
        """str-based enums should compare equal to their wire values."""
        assert ImageModel.DALL_E_3 == "dall-e-3"
        assert ErrorKind.UPSTREAM == "upstream_error"
