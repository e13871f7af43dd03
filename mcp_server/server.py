"""MCP server implementation.

This module builds the MCP server and wires the tool registry into the
tools/list and tools/call requests. Configuration is passed in once at
construction and never mutated.

Error policy:
- Unknown tool names raise UnknownToolError (a JSON-RPC error)
- Missing credentials, invalid arguments and upstream failures become
  error content with isError set
- Any other exception propagates and is reported as a JSON-RPC error

SIGINT and SIGTERM both leave the stdio transport cleanly.
"""

import asyncio
import logging
import signal
from typing import Any

import httpx
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from mcp_server.errors import (
    ConfigurationError,
    UnknownToolError,
    error_result,
    missing_api_key,
)
from mcp_server.tools import ToolContext, ToolRegistry, default_registry
from openai_mcp import __version__
from openai_mcp.config import Settings, get_settings

logger = logging.getLogger(__name__)


class OpenAIMcpServer:
    """MCP server exposing the tools of a ToolRegistry."""

    def __init__(
        self,
        settings: Settings,
        registry: ToolRegistry | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the server.

        Args:
            settings: Effective settings, including the optional API key.
            registry: Tools to expose; defaults to generate_image only.
            http_client: Optional HTTPX client shared by all tool calls.
        """
        self.settings = settings
        self.registry = registry if registry is not None else default_registry()
        self.http_client = http_client

        self.server = Server(settings.server_name, version=__version__)
        self.server.list_tools()(self.list_tools)
        # Registered directly: the call_tool() decorator turns every exception,
        # McpError included, into error content.
        self.server.request_handlers[types.CallToolRequest] = self._handle_call_tool

    async def list_tools(self) -> list[types.Tool]:
        """Return the descriptors of all registered tools."""
        return self.registry.descriptors()

    def require_api_key(self) -> str:
        """Return the configured API key.

        Raises:
            ConfigurationError: If no non-empty key is configured.
        """
        api_key = self.settings.api_key()
        if api_key is None:
            raise missing_api_key()
        return api_key

    async def call_tool(
        self, name: str, arguments: dict[str, Any] | None = None
    ) -> types.CallToolResult:
        """Dispatch one tool call.

        Args:
            name: Requested tool name.
            arguments: Raw tool arguments.

        Returns:
            Tool result, flagged as an error for anticipated failures.

        Raises:
            UnknownToolError: If no tool is registered under ``name``.
        """
        tool = self.registry.get(name)
        if tool is None:
            logger.warning("Unknown tool requested: %s", name)
            raise UnknownToolError(name)

        api_key: str | None = None
        if tool.requires_credential:
            try:
                api_key = self.require_api_key()
            except ConfigurationError as e:
                logger.error("Cannot call %s: %s", name, e)
                return error_result(str(e))

        logger.info("Calling tool %s", name)
        context = ToolContext(
            settings=self.settings,
            api_key=api_key,
            http_client=self.http_client,
        )
        return await tool.handler(arguments or {}, context)

    async def _handle_call_tool(
        self, request: types.CallToolRequest
    ) -> types.ServerResult:
        result = await self.call_tool(request.params.name, request.params.arguments)
        return types.ServerResult(result)

    async def run_stdio(self) -> None:
        """Serve requests on stdin/stdout until the client disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("%s server running on stdio", self.settings.server_name)
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )

    async def run_until_terminated(self) -> None:
        """Run on stdio, leaving the transport cleanly on SIGTERM.

        SIGTERM cancels the serving task so the stdio context managers exit
        before the process does. Platforms without loop signal handlers fall
        back to plain run_stdio().
        """
        loop = asyncio.get_running_loop()
        task = asyncio.current_task()
        terminated = False

        def terminate() -> None:
            nonlocal terminated
            terminated = True
            task.cancel()

        try:
            loop.add_signal_handler(signal.SIGTERM, terminate)
        except (NotImplementedError, RuntimeError) as e:
            logger.debug("Could not set SIGTERM handler: %s", e)
            await self.run_stdio()
            return

        try:
            await self.run_stdio()
        except asyncio.CancelledError:
            if not terminated:
                raise
            logger.info("Terminated, server stopped")
        finally:
            loop.remove_signal_handler(signal.SIGTERM)


def create_server(settings: Settings | None = None) -> OpenAIMcpServer:
    """Create a server from the given or environment settings."""
    if settings is None:
        settings = get_settings()
    if not settings.has_api_key:
        logger.warning(
            "OPENAI_API_KEY is not set; tool calls will fail until it is provided"
        )
    return OpenAIMcpServer(settings)


def run_server(settings: Settings | None = None) -> None:
    """Run the MCP server on stdio until interrupted."""
    server = create_server(settings)
    try:
        asyncio.run(server.run_until_terminated())
    except KeyboardInterrupt:
        logger.info("Interrupted, server stopped")


__all__ = [
    "OpenAIMcpServer",
    "create_server",
    "run_server",
]
