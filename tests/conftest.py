"""Shared fixtures for the test suite."""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Run each test without a real API key or local .env file."""
    for name in list(os.environ):
        if name == "OPENAI_API_KEY" or name.startswith("OPENAI_MCP_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
