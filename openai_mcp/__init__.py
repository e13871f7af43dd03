"""OpenAI MCP - expose OpenAI image generation as a Model Context Protocol tool.

This package provides the DALL-E request adapter, configuration, the host
application installer and the command-line interface. The MCP server itself
lives in the sibling ``mcp_server`` package.
"""

__version__ = "1.1.0"
__all__ = ["__version__"]
