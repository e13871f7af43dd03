"""Smoke tests for the CLI.

These tests verify CLI behaviour without a real network, using respx
for the upstream API and temporary files for host settings.
"""

import json
import subprocess
import sys
from unittest.mock import patch

import httpx
import respx
from typer.testing import CliRunner

from openai_mcp import __version__
from openai_mcp.cli import app, launch_command
from openai_mcp.config import DEFAULT_API_BASE_URL, Settings
from openai_mcp.images.client import GENERATIONS_PATH

runner = CliRunner()

GENERATIONS_URL = DEFAULT_API_BASE_URL + GENERATIONS_PATH


class TestCLIHelp:
    """Test CLI help and version commands."""

    def test_help_returns_zero(self) -> None:
        """CLI --help should return exit code 0."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "OpenAI MCP" in result.stdout

    def test_version_flag(self) -> None:
        """CLI --version should print version and exit 0."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_short_version_flag(self) -> None:
        """CLI -V should print version and exit 0."""
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_no_args_shows_help(self) -> None:
        """CLI with no args should show help."""
        result = runner.invoke(app, [])
        assert "Usage:" in result.output

    def test_commands_listed(self) -> None:
        """All commands should appear in the help output."""
        result = runner.invoke(app, ["--help"])
        for command in ("serve", "install", "config", "generate"):
            assert command in result.stdout


class TestCLIConfig:
    """Test CLI config command."""

    def test_config_command(self) -> None:
        """CLI config should show all configuration sections."""
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "Credentials:" in result.stdout
        assert "Upstream:" in result.stdout
        assert "Server:" in result.stdout
        assert "OpenAI API key:      not set" in result.stdout
        assert "Request timeout" in result.stdout

    def test_config_shows_key_is_set(self, monkeypatch) -> None:
        """CLI config should report a configured key without printing it."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-secret-value")
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "OpenAI API key:      set" in result.stdout
        assert "sk-secret-value" not in result.stdout

    def test_config_json(self) -> None:
        """CLI config --json should output JSON with every setting."""
        result = runner.invoke(app, ["config", "--json"])
        assert result.exit_code == 0
        config_data = json.loads(result.stdout)
        for key in (
            "openai_api_key",
            "api_base_url",
            "request_timeout",
            "server_name",
            "log_level",
        ):
            assert key in config_data, f"Missing key: {key}"


class TestCLIServe:
    """Test CLI serve command."""

    def test_serve_runs_server(self, monkeypatch) -> None:
        """CLI serve should start the server with the loaded settings."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        with patch("mcp_server.server.run_server") as run_server:
            result = runner.invoke(app, ["serve"])

        assert result.exit_code == 0
        run_server.assert_called_once()
        settings = run_server.call_args.args[0]
        assert isinstance(settings, Settings)
        assert settings.api_key() == "sk-test"

    def test_serve_exits_cleanly_on_interrupt(self) -> None:
        """CLI serve should exit 0 when interrupted."""
        from mcp_server.server import OpenAIMcpServer

        with patch.object(
            OpenAIMcpServer, "run_stdio", side_effect=KeyboardInterrupt
        ) as run_stdio:
            result = runner.invoke(app, ["serve"])

        assert result.exit_code == 0
        run_stdio.assert_called_once()


class TestCLIInstall:
    """Test CLI install command."""

    def test_install_explicit_config(self, tmp_path) -> None:
        """CLI install --config should register the server in that file."""
        path = tmp_path / "mcp_settings.json"
        path.write_text("{}", encoding="utf-8")

        result = runner.invoke(app, ["install", "--config", str(path)])

        assert result.exit_code == 0
        assert "Successfully installed" in result.stdout
        assert "your-openai-api-key" in result.stdout
        entry = json.loads(path.read_text(encoding="utf-8"))["mcpServers"]["openai-mcp"]
        assert entry["args"] == ["serve"]

    def test_install_under_python_m(self, tmp_path, monkeypatch) -> None:
        """Under python -m the entry should launch the interpreter."""
        monkeypatch.setattr(
            sys, "argv", ["/venv/lib/openai_mcp/__main__.py", "install"]
        )
        path = tmp_path / "mcp_settings.json"
        path.write_text("{}", encoding="utf-8")

        result = runner.invoke(app, ["install", "--config", str(path)])

        assert result.exit_code == 0
        entry = json.loads(path.read_text(encoding="utf-8"))["mcpServers"]["openai-mcp"]
        assert entry["command"] == sys.executable
        assert entry["args"] == ["-m", "openai_mcp", "serve"]

    def test_install_custom_name(self, tmp_path) -> None:
        """CLI install --name should set the mcpServers key."""
        path = tmp_path / "mcp_settings.json"
        path.write_text("{}", encoding="utf-8")

        result = runner.invoke(
            app, ["install", "--config", str(path), "--name", "dalle"]
        )

        assert result.exit_code == 0
        assert "dalle" in json.loads(path.read_text(encoding="utf-8"))["mcpServers"]

    def test_install_detects_host(self, tmp_path, monkeypatch) -> None:
        """CLI install should find a host settings file under HOME."""
        monkeypatch.setenv("HOME", str(tmp_path))
        path = (
            tmp_path
            / "Library"
            / "Application Support"
            / "Claude"
            / "claude_desktop_config.json"
        )
        path.parent.mkdir(parents=True)
        path.write_text("{}", encoding="utf-8")

        result = runner.invoke(app, ["install"])

        assert result.exit_code == 0
        assert "Restart Claude Desktop" in result.stdout
        assert "openai-mcp" in json.loads(path.read_text(encoding="utf-8"))["mcpServers"]

    def test_install_no_host(self, tmp_path, monkeypatch) -> None:
        """CLI install without a host should print manual instructions."""
        monkeypatch.setenv("HOME", str(tmp_path))

        result = runner.invoke(app, ["install"])

        assert result.exit_code == 1
        assert "Manual installation instructions" in result.output
        assert '"serve"' in result.output

    def test_install_invalid_json(self, tmp_path) -> None:
        """CLI install should fail cleanly on an invalid settings file."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        result = runner.invoke(app, ["install", "--config", str(path)])

        assert result.exit_code == 1
        assert "Error installing" in result.output


class TestCLIGenerate:
    """Test CLI generate command."""

    def test_generate_without_key(self) -> None:
        """CLI generate should fail without an API key."""
        result = runner.invoke(app, ["generate", "a cat"])

        assert result.exit_code == 1
        assert "OPENAI_API_KEY environment variable is required" in result.output

    @respx.mock
    def test_generate_success(self, monkeypatch) -> None:
        """CLI generate should print each image."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        route = respx.post(GENERATIONS_URL).mock(
            return_value=httpx.Response(
                200,
                json={
                    "created": 1700000000,
                    "data": [
                        {"url": "https://x/img.png", "revised_prompt": "a fluffy cat"}
                    ],
                },
            )
        )

        result = runner.invoke(
            app, ["generate", "a cat", "--quality", "hd", "--size", "1792x1024"]
        )

        assert result.exit_code == 0
        assert "https://x/img.png" in result.stdout
        assert "a fluffy cat" in result.stdout
        sent = json.loads(route.calls.last.request.content)
        assert sent["quality"] == "hd"
        assert sent["size"] == "1792x1024"
        assert sent["style"] == "vivid"

    @respx.mock
    def test_generate_json(self, monkeypatch) -> None:
        """CLI generate --json should print the upstream result."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        respx.post(GENERATIONS_URL).mock(
            return_value=httpx.Response(
                200,
                json={"created": 1700000000, "data": [{"url": "https://x/img.png"}]},
            )
        )

        result = runner.invoke(app, ["generate", "a cat", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "created": 1700000000,
            "data": [{"url": "https://x/img.png"}],
        }

    @respx.mock
    def test_generate_upstream_error(self, monkeypatch) -> None:
        """CLI generate should report upstream errors and exit 1."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        respx.post(GENERATIONS_URL).mock(
            return_value=httpx.Response(
                400, json={"error": {"message": "invalid prompt"}}
            )
        )

        result = runner.invoke(app, ["generate", "a cat"])

        assert result.exit_code == 1
        assert "DALL-E API error: invalid prompt" in result.output

    def test_generate_rejects_bad_size(self) -> None:
        """CLI generate should reject sizes outside the enumeration."""
        result = runner.invoke(app, ["generate", "a cat", "--size", "800x600"])
        assert result.exit_code != 0


class TestModuleEntryPoint:
    """Test python -m openai_mcp entry point."""

    def test_module_version(self) -> None:
        """python -m openai_mcp --version should work."""
        result = subprocess.run(
            [sys.executable, "-m", "openai_mcp", "--version"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert __version__ in result.stdout


class TestLaunchCommand:
    """Test the command written into host settings."""

    def test_console_script(self, monkeypatch, tmp_path) -> None:
        """An installed script should be launched directly with serve."""
        script = tmp_path / "openai-mcp"
        monkeypatch.setattr(sys, "argv", [str(script), "install"])

        assert launch_command() == (str(script.resolve()), ["serve"])

    def test_module_entry_point(self, monkeypatch) -> None:
        """A __main__.py script should be replaced by the interpreter."""
        monkeypatch.setattr(sys, "argv", ["/venv/lib/openai_mcp/__main__.py"])

        assert launch_command() == (
            sys.executable,
            ["-m", "openai_mcp", "serve"],
        )
