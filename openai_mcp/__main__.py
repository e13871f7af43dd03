"""Allow running as ``python -m openai_mcp``."""

from openai_mcp.cli import app

app(prog_name="openai-mcp")
