"""Status command: connectivity of the layer to the cluster and controller."""

from __future__ import annotations

import structlog
import typer

from higress_sdk import __version__
from higress_sdk.cli.commands.base import console, handle_k8s_error, open_service
from higress_sdk.cli.output import Table
from higress_sdk.integrations.kubernetes.exceptions import KubernetesError

logger = structlog.get_logger()


def status(ctx: typer.Context) -> None:
    """Show how the layer reaches the cluster and the gateway controller."""
    logger.info("checking_status")

    with open_service(ctx) as service:
        try:
            namespace_exists = service.namespaces.gateway_namespace_exists()
        except KubernetesError as e:
            handle_k8s_error(e)
        api_reachable = service.client.check_connection()
        resolver = service.client.resolver

        table = Table(title="Higress Gateway Status")
        table.add_column("Component", style="cyan", no_wrap=True)
        table.add_column("Status", style="green")
        table.add_column("Details", style="dim")

        table.add_row("SDK Version", __version__, "higress-sdk")
        table.add_row(
            "Connectivity",
            "in-cluster" if service.in_cluster else "external",
            "service account" if service.in_cluster else str(resolver.config.kubeconfig_path),
        )
        table.add_row(
            "API Server",
            "reachable" if api_reachable else "[red]unreachable[/red]",
            "",
        )
        table.add_row(
            "Namespace",
            service.client.namespace,
            "exists" if namespace_exists else "[yellow]missing[/yellow]",
        )
        table.add_row("Controller", resolver.controller_base_url(), "debug endpoints")

        console.print(table)

    logger.info("status_check_complete", namespace_exists=namespace_exists)
