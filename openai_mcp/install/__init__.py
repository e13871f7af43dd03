"""Host application installer.

This module handles:
- Locating MCP host settings files (Roo Code, Claude Desktop)
- Merging this server's registration into a host settings file
- Manual instructions when no host is found
"""

from openai_mcp.install.hosts import HostApplication, default_hosts, find_host
from openai_mcp.install.service import (
    API_KEY_PLACEHOLDER,
    SERVE_ARGS,
    InstallError,
    InstallResult,
    install_server,
    manual_instructions,
    register_server,
    server_entry,
)

__all__ = [
    # Hosts
    "HostApplication",
    "default_hosts",
    "find_host",
    # Service
    "API_KEY_PLACEHOLDER",
    "SERVE_ARGS",
    "InstallError",
    "InstallResult",
    "install_server",
    "manual_instructions",
    "register_server",
    "server_entry",
]
