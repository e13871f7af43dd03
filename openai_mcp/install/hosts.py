"""Host applications that can load this MCP server.

Each host keeps its MCP server registrations in a JSON settings file with a
top-level ``mcpServers`` object. The default lookup order is Roo Code, then
Claude Desktop; callers may pass their own host list instead.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class HostApplication:
    """An MCP host application and the location of its settings file."""

    key: str
    display_name: str
    config_path: Path

    def is_installed(self) -> bool:
        """Whether the host's settings file exists."""
        return self.config_path.is_file()


def roo_code(home: Path) -> HostApplication:
    """Roo Code (VS Code extension) settings location."""
    return HostApplication(
        key="roo-code",
        display_name="Roo Code",
        config_path=home
        / ".config"
        / "Code"
        / "User"
        / "globalStorage"
        / "rooveterinaryinc.roo-cline"
        / "settings"
        / "cline_mcp_settings.json",
    )


def claude_desktop(home: Path) -> HostApplication:
    """Claude Desktop settings location."""
    return HostApplication(
        key="claude-desktop",
        display_name="Claude Desktop",
        config_path=home
        / "Library"
        / "Application Support"
        / "Claude"
        / "claude_desktop_config.json",
    )


def default_hosts(home: Path | None = None) -> list[HostApplication]:
    """Return the known hosts in lookup order.

    Args:
        home: Home directory to resolve paths against; defaults to the user's.
    """
    if home is None:
        home = Path.home()
    return [roo_code(home), claude_desktop(home)]


def find_host(hosts: list[HostApplication]) -> HostApplication | None:
    """Return the first host whose settings file exists, or None."""
    for host in hosts:
        if host.is_installed():
            return host
    return None


__all__ = [
    "HostApplication",
    "claude_desktop",
    "default_hosts",
    "find_host",
    "roo_code",
]
