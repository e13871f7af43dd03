"""Tool registry for the MCP server.

Tools are registered as data: a name maps to the descriptor advertised by
tools/list and the coroutine that handles tools/call. Handlers are thin
wrappers around openai_mcp services.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import httpx
from mcp.types import CallToolResult, Tool, ToolAnnotations
from pydantic import ValidationError

from mcp_server.errors import error_result, text_result
from mcp_server.schemas import GenerateImageResponse
from openai_mcp.config import Settings
from openai_mcp.images import Err, GenerationRequest, Ok, generate
from openai_mcp.types import (
    ImageModel,
    ImageQuality,
    ImageSize,
    ImageStyle,
    ResponseFormat,
)

logger = logging.getLogger(__name__)

GENERATE_IMAGE = "generate_image"


@dataclass(frozen=True)
class ToolContext:
    """Per-call inputs a handler may need besides its arguments."""

    settings: Settings
    api_key: str | None = None
    http_client: httpx.AsyncClient | None = None


ToolHandler = Callable[[dict[str, Any], ToolContext], Awaitable[CallToolResult]]


@dataclass(frozen=True)
class RegisteredTool:
    """A tool descriptor paired with its handler."""

    descriptor: Tool
    handler: ToolHandler
    requires_credential: bool = True

    @property
    def name(self) -> str:
        return self.descriptor.name


@dataclass
class ToolRegistry:
    """Mapping from tool name to registered tool."""

    tools: dict[str, RegisteredTool] = field(default_factory=dict)

    def register(self, tool: RegisteredTool) -> None:
        self.tools[tool.name] = tool

    def get(self, name: str) -> RegisteredTool | None:
        return self.tools.get(name)

    def descriptors(self) -> list[Tool]:
        return [tool.descriptor for tool in self.tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self.tools

    def __len__(self) -> int:
        return len(self.tools)


def _enum_values(enum_cls: type) -> list[str]:
    return [member.value for member in enum_cls]


GENERATE_IMAGE_INPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "prompt": {
            "type": "string",
            "description": "Text description of the desired image",
        },
        "model": {
            "type": "string",
            "description": "DALL-E model to use (dall-e-2 or dall-e-3)",
            "enum": _enum_values(ImageModel),
        },
        "n": {
            "type": "number",
            "description": "Number of images to generate (1-10)",
            "minimum": 1,
            "maximum": 10,
        },
        "size": {
            "type": "string",
            "description": "Size of the generated image",
            "enum": _enum_values(ImageSize),
        },
        "quality": {
            "type": "string",
            "description": "Quality of the generated image",
            "enum": _enum_values(ImageQuality),
        },
        "style": {
            "type": "string",
            "description": "Style of the generated image",
            "enum": _enum_values(ImageStyle),
        },
        "response_format": {
            "type": "string",
            "description": "Format of the response",
            "enum": _enum_values(ResponseFormat),
        },
        "user": {
            "type": "string",
            "description": "A unique identifier for the end-user",
        },
    },
    "required": ["prompt"],
}


def format_validation_error(error: ValidationError) -> str:
    """Render a pydantic ValidationError as one line per field."""
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        parts.append(f"{location}: {item['msg']}")
    return "Invalid arguments: " + "; ".join(parts)


async def handle_generate_image(
    arguments: dict[str, Any], context: ToolContext
) -> CallToolResult:
    """Generate an image and describe the first result.

    The server resolves the credential before dispatch, so
    ``context.api_key`` is always set here.

    Returns:
        Text content with ``{created, url, revised_prompt}`` as JSON, or
        error content with the failure message.
    """
    try:
        request = GenerationRequest.model_validate(arguments)
    except ValidationError as e:
        message = format_validation_error(e)
        logger.warning("Rejected generate_image call: %s", message)
        return error_result(message)

    outcome = await generate(
        context.api_key,
        request,
        client=context.http_client,
        base_url=context.settings.api_base_url,
        timeout=context.settings.request_timeout,
    )

    match outcome:
        case Ok(value=result):
            return text_result(GenerateImageResponse.from_result(result).to_text())
        case Err(message=message):
            return error_result(message)


generate_image_tool = RegisteredTool(
    descriptor=Tool(
        name=GENERATE_IMAGE,
        description="Generate an image using OpenAI's DALL-E API",
        inputSchema=GENERATE_IMAGE_INPUT_SCHEMA,
        annotations=ToolAnnotations(
            readOnlyHint=False,
            destructiveHint=False,
            idempotentHint=False,
            openWorldHint=True,
        ),
    ),
    handler=handle_generate_image,
)


def default_registry() -> ToolRegistry:
    """Return a registry holding the generate_image tool."""
    registry = ToolRegistry()
    registry.register(generate_image_tool)
    return registry


__all__ = [
    "GENERATE_IMAGE",
    "GENERATE_IMAGE_INPUT_SCHEMA",
    "RegisteredTool",
    "ToolContext",
    "ToolHandler",
    "ToolRegistry",
    "default_registry",
    "format_validation_error",
    "generate_image_tool",
    "handle_generate_image",
]
