"""Error definitions for MCP tools.

Tool-domain failures (missing credential, invalid arguments, upstream
errors) are returned to the client as error content with ``isError`` set.
Protocol-level failures are raised as McpError and reach the client as
JSON-RPC errors.
"""

from mcp.shared.exceptions import McpError
from mcp.types import METHOD_NOT_FOUND, CallToolResult, ErrorData, TextContent

from openai_mcp.config import API_KEY_ENV_VAR
from openai_mcp.types import ErrorKind

# Error code constants
CONFIGURATION_ERROR = ErrorKind.CONFIGURATION.value
VALIDATION_ERROR = ErrorKind.VALIDATION.value
UPSTREAM_ERROR = ErrorKind.UPSTREAM.value
UNKNOWN_TOOL = "unknown_tool"


class ConfigurationError(Exception):
    """Raised when a required setting is missing."""

    def __init__(self, message: str, code: str = CONFIGURATION_ERROR) -> None:
        """Initialize ConfigurationError.

        Args:
            message: Error description.
            code: Error code for structured error handling.
        """
        super().__init__(message)
        self.code = code


def missing_api_key() -> ConfigurationError:
    """Create the error for a missing OpenAI credential."""
    return ConfigurationError(f"{API_KEY_ENV_VAR} environment variable is required")


class UnknownToolError(McpError):
    """Raised when a client calls a tool that is not registered."""

    def __init__(self, name: str) -> None:
        """Initialize UnknownToolError.

        Args:
            name: The requested tool name.
        """
        super().__init__(
            ErrorData(
                code=METHOD_NOT_FOUND,
                message=f"Unknown tool: {name}",
                data={"code": UNKNOWN_TOOL, "tool": name},
            )
        )
        self.name = name


def text_result(text: str) -> CallToolResult:
    """Wrap text in a successful tool result."""
    return CallToolResult(content=[TextContent(type="text", text=text)])


def error_result(message: str) -> CallToolResult:
    """Wrap an error message in a tool result flagged as an error."""
    return CallToolResult(
        content=[TextContent(type="text", text=message)],
        isError=True,
    )


__all__ = [
    "CONFIGURATION_ERROR",
    "ConfigurationError",
    "UNKNOWN_TOOL",
    "UPSTREAM_ERROR",
    "UnknownToolError",
    "VALIDATION_ERROR",
    "error_result",
    "missing_api_key",
    "text_result",
]
