"""Shared fixtures for CLI tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture(autouse=True)
def _no_logging_setup() -> Iterator[MagicMock]:
    """Keep CLI invocations from installing handlers on the runner's streams."""
    with patch("higress_sdk.cli.main.configure_logging") as mock_configure:
        yield mock_configure


@pytest.fixture
def config_args(tmp_path: Path) -> list[str]:
    """Root options pointing at a config file that does not exist (defaults apply)."""
    return ["--config", str(tmp_path / "absent.yaml")]


@pytest.fixture
def mock_service() -> Iterator[MagicMock]:
    """Patch the service facade built by CLI commands."""
    service = MagicMock()
    service.__enter__.return_value = service
    service.client.namespace = "higress-system"
    service.in_cluster = False
    service.client.resolver.controller_base_url.return_value = "http://localhost:15014"
    with patch(
        "higress_sdk.cli.commands.base.KubernetesClientService.from_config",
        return_value=service,
    ):
        yield service
