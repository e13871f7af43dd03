"""MCP server exposing OpenAI image generation.

This package implements the Model Context Protocol (MCP) server that
exposes openai_mcp's image generation to MCP clients as the
``generate_image`` tool.

MCP tools:
- Are registered as data in a ToolRegistry
- Return anticipated failures as error content
- Map directly to core services
"""

from mcp_server.server import OpenAIMcpServer, create_server, run_server

__all__ = ["OpenAIMcpServer", "create_server", "run_server"]
