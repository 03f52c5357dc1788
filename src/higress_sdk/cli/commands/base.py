"""Shared plumbing for CLI commands: service construction and error output."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.console import Console

from higress_sdk.integrations.controller.exceptions import (
    ControllerApiError,
    ControllerConnectionError,
    ControllerError,
)
from higress_sdk.integrations.kubernetes.config import HigressConfig
from higress_sdk.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConfigurationError,
    KubernetesError,
)
from higress_sdk.services.kubernetes.client import KubernetesClientService

console = Console()
err_console = Console(stderr=True)

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to the YAML config file (defaults to ~/.config/higress/config.yaml).",
        envvar="HIGRESS_CONFIG",
    ),
]


def load_config(ctx: typer.Context) -> HigressConfig:
    """Load the layer configuration from the path given to the root command."""
    path: Path | None = (ctx.obj or {}).get("config_path")
    try:
        return HigressConfig.load(path)
    except KubernetesConfigurationError as e:
        handle_k8s_error(e)


def open_service(ctx: typer.Context) -> KubernetesClientService:
    """Build the Kubernetes service facade for a command.

    Raises:
        typer.Exit: If the client cannot be configured.
    """
    config = load_config(ctx)
    try:
        return KubernetesClientService.from_config(config)
    except KubernetesError as e:
        handle_k8s_error(e)


def handle_k8s_error(error: KubernetesError) -> NoReturn:
    """Print a Kubernetes error and exit with status 1."""
    if isinstance(error, KubernetesConfigurationError):
        err_console.print("[red]Error:[/red] Kubernetes client is not configured")
        err_console.print(f"  {error.message}")
        err_console.print(
            "\n[dim]Hint: Set --config, HIGRESS_KUBECONFIG or run inside the cluster.[/dim]"
        )
    elif isinstance(error, KubernetesAuthError):
        err_console.print("[red]Error:[/red] Authentication/authorization failed")
        err_console.print(f"  {error.message}")
        err_console.print("\n[dim]Hint: Check your credentials or RBAC permissions.[/dim]")
    else:
        err_console.print(f"[red]Error:[/red] {error.message}")
        if error.status_code:
            err_console.print(f"  HTTP Status: {error.status_code}")

    raise typer.Exit(1)


def handle_controller_error(error: ControllerError) -> NoReturn:
    """Print a controller error and exit with status 1."""
    if isinstance(error, ControllerConnectionError):
        err_console.print("[red]Error:[/red] Cannot reach the gateway controller")
        err_console.print(f"  {error.message}")
    elif isinstance(error, ControllerApiError) and error.status_code is None:
        err_console.print("[red]Error:[/red] Controller returned an unreadable response")
        err_console.print(f"  {error.message}")
    elif isinstance(error, ControllerApiError):
        err_console.print(f"[red]Error:[/red] Controller returned HTTP {error.status_code}")
        err_console.print(f"  {error.message}")
    else:
        err_console.print(f"[red]Error:[/red] {error.message}")

    raise typer.Exit(1)
