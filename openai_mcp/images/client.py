"""DALL-E image generation adapter.

This module handles:
- Merging caller parameters over the default table
- The single POST to the images/generations endpoint
- Normalizing upstream failures into UpstreamError
- A result-typed wrapper (Ok | Err) for callers that branch on outcome
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from openai_mcp.config import DEFAULT_API_BASE_URL
from openai_mcp.images.models import GenerationRequest, GenerationResult
from openai_mcp.types import (
    ErrorKind,
    ImageModel,
    ImageQuality,
    ImageSize,
    ImageStyle,
    ResponseFormat,
)

logger = logging.getLogger(__name__)

# Path of the generation endpoint relative to the API base URL
GENERATIONS_PATH = "/images/generations"

# Timeout for generation requests (seconds)
DEFAULT_TIMEOUT = 60.0

ERROR_PREFIX = "DALL-E API error"
UNKNOWN_ERROR = "Unknown error"

DEFAULT_PARAMETERS: dict[str, Any] = {
    "model": ImageModel.DALL_E_3,
    "n": 1,
    "size": ImageSize.SQUARE_1024,
    "quality": ImageQuality.STANDARD,
    "style": ImageStyle.VIVID,
    "response_format": ResponseFormat.URL,
}


class UpstreamError(Exception):
    """Raised when the image generation API call fails."""

    def __init__(
        self,
        message: str,
        code: str = "http_error",
        status_code: int | None = None,
    ) -> None:
        """Initialize UpstreamError.

        Args:
            message: Error description.
            code: Error code for structured error handling.
            status_code: HTTP status returned by the upstream, if any.
        """
        super().__init__(message)
        self.code = code
        self.status_code = status_code


@dataclass(frozen=True)
class Ok:
    """Successful generation."""

    value: GenerationResult


@dataclass(frozen=True)
class Err:
    """Failed generation."""

    kind: ErrorKind
    message: str
    code: str | None = None


GenerationOutcome = Ok | Err


def apply_defaults(request: GenerationRequest) -> GenerationRequest:
    """Fill every unset optional field from DEFAULT_PARAMETERS.

    ``user`` has no default and stays unset. Applying this twice is the
    same as applying it once.
    """
    updates = {
        name: value
        for name, value in DEFAULT_PARAMETERS.items()
        if getattr(request, name) is None
    }
    if not updates:
        return request
    return request.model_copy(update=updates)


def build_payload(request: GenerationRequest) -> dict[str, Any]:
    """Build the JSON body for the generation endpoint.

    Args:
        request: Request to send; defaults are applied first.

    Returns:
        JSON-ready dict with ``user`` omitted when absent.
    """
    return apply_defaults(request).model_dump(mode="json", exclude_none=True)


def build_headers(api_key: str) -> dict[str, str]:
    """Build request headers with bearer authorization."""
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
    }


def extract_error_message(response: httpx.Response) -> str:
    """Extract ``error.message`` from an upstream error body.

    Args:
        response: Non-success HTTP response.

    Returns:
        The upstream message, or a generic fallback when the body does not
        follow the ``{"error": {"message": ...}}`` shape.
    """
    try:
        body = response.json()
    except ValueError:
        return UNKNOWN_ERROR

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            if isinstance(message, str) and message:
                return message
    return UNKNOWN_ERROR


def _parse_result(response: httpx.Response) -> GenerationResult:
    try:
        result = GenerationResult.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        raise UpstreamError(
            f"{ERROR_PREFIX}: invalid response body",
            code="invalid_response",
            status_code=response.status_code,
        ) from e

    if not result.data:
        raise UpstreamError(
            f"{ERROR_PREFIX}: response contained no images",
            code="invalid_response",
            status_code=response.status_code,
        )
    return result


async def _post(
    client: httpx.AsyncClient,
    url: str,
    api_key: str,
    payload: dict[str, Any],
    timeout: float,
) -> httpx.Response:
    try:
        return await client.post(
            url, json=payload, headers=build_headers(api_key), timeout=timeout
        )
    except httpx.TimeoutException as e:
        raise UpstreamError(
            f"{ERROR_PREFIX}: request timed out after {timeout:g}s",
            code="timeout",
        ) from e
    except httpx.RequestError as e:
        raise UpstreamError(
            f"{ERROR_PREFIX}: {str(e) or UNKNOWN_ERROR}",
            code="network_error",
        ) from e


async def generate_image(
    api_key: str,
    request: GenerationRequest,
    *,
    client: httpx.AsyncClient | None = None,
    base_url: str = DEFAULT_API_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> GenerationResult:
    """Generate images with the DALL-E API.

    Args:
        api_key: OpenAI API key. Must be non-empty.
        request: Generation parameters; unset fields take their defaults.
        client: Optional HTTPX client; a short-lived one is used otherwise.
        base_url: Base URL of the OpenAI API.
        timeout: Request timeout in seconds.

    Returns:
        Parsed upstream result.

    Raises:
        UpstreamError: On non-2xx status, transport failure or a malformed body.
    """
    payload = build_payload(request)
    url = base_url.rstrip("/") + GENERATIONS_PATH

    logger.info(
        "Requesting %d image(s) from %s (model=%s, size=%s)",
        payload["n"],
        url,
        payload["model"],
        payload["size"],
    )

    if client is None:
        async with httpx.AsyncClient() as own_client:
            response = await _post(own_client, url, api_key, payload, timeout)
    else:
        response = await _post(client, url, api_key, payload, timeout)

    if not response.is_success:
        message = extract_error_message(response)
        logger.warning(
            "Image generation failed with HTTP %d: %s", response.status_code, message
        )
        raise UpstreamError(
            f"{ERROR_PREFIX}: {message}",
            code="http_error",
            status_code=response.status_code,
        )

    result = _parse_result(response)
    logger.info("Generated %d image(s)", len(result.data))
    return result


async def generate(
    api_key: str,
    request: GenerationRequest,
    *,
    client: httpx.AsyncClient | None = None,
    base_url: str = DEFAULT_API_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> GenerationOutcome:
    """Generate images and return the outcome instead of raising.

    Only UpstreamError is converted to Err; anything else propagates.
    """
    try:
        result = await generate_image(
            api_key, request, client=client, base_url=base_url, timeout=timeout
        )
    except UpstreamError as e:
        return Err(kind=ErrorKind.UPSTREAM, message=str(e), code=e.code)
    return Ok(result)


__all__ = [
    "DEFAULT_PARAMETERS",
    "DEFAULT_TIMEOUT",
    "ERROR_PREFIX",
    "GENERATIONS_PATH",
    "Err",
    "GenerationOutcome",
    "Ok",
    "UNKNOWN_ERROR",
    "UpstreamError",
    "apply_defaults",
    "build_headers",
    "build_payload",
    "extract_error_message",
    "generate",
    "generate_image",
]
