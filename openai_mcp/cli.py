"""Thin CLI wrapper for openai_mcp.

This module provides the command-line interface using Typer.
All business logic is delegated to core modules.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from openai_mcp import __version__
from openai_mcp.config import Settings, get_settings, print_settings_json
from openai_mcp.types import (
    ImageModel,
    ImageQuality,
    ImageSize,
    ImageStyle,
    ResponseFormat,
)

app = typer.Typer(
    name="openai-mcp",
    help="OpenAI MCP - serve OpenAI image generation to MCP clients",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings) -> None:
    """Send log records to stderr; stdout is reserved for the MCP protocol."""
    logging.basicConfig(level=settings.log_level, stream=sys.stderr, format=LOG_FORMAT)


def launch_command() -> tuple[str, list[str]]:
    """Command and arguments a host application should launch.

    Under ``python -m openai_mcp`` the script is ``__main__.py``, which a
    host cannot execute directly, so the interpreter is launched instead.
    """
    from openai_mcp.install import SERVE_ARGS

    script = Path(sys.argv[0])
    if script.name == "__main__.py":
        return sys.executable, ["-m", "openai_mcp", *SERVE_ARGS]
    return str(script.resolve()), list(SERVE_ARGS)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"openai-mcp version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """OpenAI MCP - serve OpenAI image generation to MCP clients."""


@app.command()
def serve() -> None:
    """Start the MCP server on stdio."""
    from mcp_server.server import run_server

    settings = get_settings()
    configure_logging(settings)
    run_server(settings)


@app.command()
def install(
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Host settings file to update (skips host detection)",
        ),
    ] = None,
    name: Annotated[
        str | None,
        typer.Option("--name", help="Server name under mcpServers"),
    ] = None,
) -> None:
    """Install the MCP server configuration for Roo Code or Claude Desktop."""
    from openai_mcp.install import API_KEY_PLACEHOLDER, InstallError, install_server

    settings = get_settings()
    server_name = name or settings.server_name
    console.print("Installing OpenAI MCP server configuration...")

    executable, args = launch_command()
    try:
        result = install_server(
            executable, config_path=config_path, server_name=server_name, args=args
        )
    except InstallError as e:
        err_console.print(f"[red]Error installing:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    if not result.success:
        err_console.print(result.message, markup=False)
        raise typer.Exit(code=1)

    console.print(f"[green]{escape(result.message)}[/green]", soft_wrap=True)
    console.print()
    console.print(
        f'[bold]IMPORTANT:[/bold] You need to replace "{API_KEY_PLACEHOLDER}" '
        "with your actual OpenAI API key."
    )
    console.print("You can edit the configuration file directly or use the settings UI.")
    host_name = result.host.display_name if result.host else "your MCP host"
    console.print(f"\nRestart {host_name} for the changes to take effect.")


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        console.print(print_settings_json(settings))
    else:
        console.print("[bold]Effective Configuration:[/bold]")
        console.print()
        console.print("[bold]Credentials:[/bold]")
        console.print(
            f"  OpenAI API key:      {'set' if settings.has_api_key else 'not set'}"
        )
        console.print()
        console.print("[bold]Upstream:[/bold]")
        console.print(f"  API base URL:        {settings.api_base_url}")
        console.print(f"  Request timeout:     {settings.request_timeout:g}s")
        console.print()
        console.print("[bold]Server:[/bold]")
        console.print(f"  Server name:         {settings.server_name}")
        console.print(f"  Log level:           {settings.log_level}")


@app.command()
def generate(
    prompt: Annotated[str, typer.Argument(help="Text description of the image")],
    model: Annotated[
        ImageModel | None, typer.Option("--model", "-m", help="DALL-E model")
    ] = None,
    size: Annotated[
        ImageSize | None, typer.Option("--size", "-s", help="Image size")
    ] = None,
    quality: Annotated[
        ImageQuality | None, typer.Option("--quality", "-q", help="Image quality")
    ] = None,
    style: Annotated[
        ImageStyle | None, typer.Option("--style", help="Image style")
    ] = None,
    count: Annotated[
        int | None,
        typer.Option("--count", "-n", min=1, max=10, help="Number of images"),
    ] = None,
    response_format: Annotated[
        ResponseFormat | None,
        typer.Option("--response-format", help="Return URLs or base64 data"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Generate an image directly, without going through MCP."""
    from openai_mcp.images import GenerationRequest, UpstreamError, generate_image

    settings = get_settings()
    configure_logging(settings)

    api_key = settings.api_key()
    if api_key is None:
        err_console.print(
            "[red]Error:[/red] OPENAI_API_KEY environment variable is required"
        )
        raise typer.Exit(code=1)

    request = GenerationRequest(
        prompt=prompt,
        model=model,
        n=count,
        size=size,
        quality=quality,
        style=style,
        response_format=response_format,
    )

    try:
        result = asyncio.run(
            generate_image(
                api_key,
                request,
                base_url=settings.api_base_url,
                timeout=settings.request_timeout,
            )
        )
    except UpstreamError as e:
        err_console.print(f"[red]Error generating image:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    if json_output:
        typer.echo(json.dumps(result.model_dump(exclude_none=True), indent=2))
        return

    console.print("[green]Image generated successfully![/green]")
    console.print(f"Created: {result.created}")
    for index, image in enumerate(result.data, start=1):
        console.print(f"[bold]Image {index}:[/bold]")
        if image.url:
            console.print(f"  URL: {image.url}", soft_wrap=True)
        elif image.b64_json:
            console.print(f"  Base64 data: {len(image.b64_json)} characters")
        if image.revised_prompt:
            console.print(f"  Revised prompt: {image.revised_prompt}")


if __name__ == "__main__":
    app()
