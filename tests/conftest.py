"""Shared pytest fixtures for higress_sdk tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from higress_sdk.cli.main import app


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """Create a temporary layer config file."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
controller_namespace: gateway-test
controller_service_host: controller.example.com
controller_service_port: 8888
protected_namespaces:
  - kube-system
  - kube-public
"""
    )
    return config_path


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear HIGRESS_ prefixed environment variables for each test."""
    for key in list(os.environ.keys()):
        if key.startswith("HIGRESS_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def cli_app() -> typer.Typer:
    """Return the CLI app for testing."""
    return app
