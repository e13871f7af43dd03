"""Register this MCP server with a host application.

The installer finds a host settings file, merges a server entry under
``mcpServers`` and writes the file back. Existing keys and other server
entries are preserved. When no host is found, callers get manual
instructions instead.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from openai_mcp.config import API_KEY_ENV_VAR, DEFAULT_SERVER_NAME
from openai_mcp.install.hosts import HostApplication, default_hosts, find_host

logger = logging.getLogger(__name__)

API_KEY_PLACEHOLDER = "your-openai-api-key"
SERVE_ARGS = ["serve"]


class InstallError(Exception):
    """Raised when a host settings file cannot be updated."""

    def __init__(self, message: str, code: str = "install_error") -> None:
        """Initialize InstallError.

        Args:
            message: Error description.
            code: Error code for structured error handling.
        """
        super().__init__(message)
        self.code = code


@dataclass
class InstallResult:
    """Result of an install attempt."""

    success: bool
    message: str
    config_path: Path | None = None
    host: HostApplication | None = None


def server_entry(executable: str, args: list[str] | None = None) -> dict[str, Any]:
    """Build the ``mcpServers`` entry for this server.

    Args:
        executable: Command the host should launch.
        args: Arguments for ``executable``; defaults to ``serve``.

    Returns:
        Entry with the launch arguments and a placeholder API key.
    """
    return {
        "command": executable,
        "args": list(args if args is not None else SERVE_ARGS),
        "env": {API_KEY_ENV_VAR: API_KEY_PLACEHOLDER},
    }


def load_settings_file(path: Path) -> dict[str, Any]:
    """Load a host settings file.

    An empty file is treated as an empty object.

    Raises:
        InstallError: If the file cannot be read or is not a JSON object.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InstallError(f"Cannot read {path}: {e}", code="read_error") from e

    if not content.strip():
        return {}

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise InstallError(f"Invalid JSON in {path}: {e}", code="invalid_json") from e
    if not isinstance(data, dict):
        raise InstallError(
            f"Expected a JSON object in {path}, got {type(data).__name__}",
            code="invalid_json",
        )
    return data


def register_server(
    config_path: Path,
    executable: str,
    server_name: str = DEFAULT_SERVER_NAME,
    args: list[str] | None = None,
) -> dict[str, Any]:
    """Add or replace this server's entry in a host settings file.

    Args:
        config_path: Host settings file to update.
        executable: Command the host should launch.
        server_name: Key under ``mcpServers``.
        args: Arguments for ``executable``; defaults to ``serve``.

    Returns:
        The updated settings document.

    Raises:
        InstallError: If the file cannot be read, parsed or written.
    """
    config = load_settings_file(config_path)

    servers = config.get("mcpServers")
    if not isinstance(servers, dict):
        servers = {}
        config["mcpServers"] = servers
    servers[server_name] = server_entry(executable, args)

    try:
        config_path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    except OSError as e:
        raise InstallError(
            f"Cannot write {config_path}: {e}", code="write_error"
        ) from e

    logger.info("Registered %s in %s", server_name, config_path)
    return config


def manual_instructions(
    executable: str,
    server_name: str = DEFAULT_SERVER_NAME,
    args: list[str] | None = None,
) -> str:
    """Instructions for registering the server by hand."""
    snippet = json.dumps(
        {"mcpServers": {server_name: server_entry(executable, args)}}, indent=2
    )
    return (
        "Could not find Roo Code or Claude Desktop configuration file.\n"
        "Please make sure Roo Code or Claude Desktop is installed.\n"
        "\n"
        "Manual installation instructions:\n"
        "1. Add the following to your MCP settings configuration file:\n"
        f"\n{snippet}\n"
    )


def install_server(
    executable: str,
    hosts: list[HostApplication] | None = None,
    config_path: Path | None = None,
    server_name: str = DEFAULT_SERVER_NAME,
    args: list[str] | None = None,
) -> InstallResult:
    """Install the server into the first available host.

    Args:
        executable: Command the host should launch.
        hosts: Hosts to search in order; defaults to ``default_hosts()``.
        config_path: Explicit settings file; skips the host search.
        server_name: Key under ``mcpServers``.
        args: Arguments for ``executable``; defaults to ``serve``.

    Returns:
        InstallResult. On failure to find a host, ``message`` holds manual
        instructions.

    Raises:
        InstallError: If the chosen settings file cannot be updated.
    """
    host: HostApplication | None = None
    if config_path is None:
        host = find_host(hosts if hosts is not None else default_hosts())
        if host is None:
            return InstallResult(
                success=False,
                message=manual_instructions(executable, server_name, args),
            )
        config_path = host.config_path

    register_server(config_path, executable, server_name, args)
    return InstallResult(
        success=True,
        message=f"Successfully installed OpenAI MCP server configuration to {config_path}",
        config_path=config_path,
        host=host,
    )


__all__ = [
    "API_KEY_PLACEHOLDER",
    "SERVE_ARGS",
    "InstallError",
    "InstallResult",
    "install_server",
    "load_settings_file",
    "manual_instructions",
    "register_server",
    "server_entry",
]
