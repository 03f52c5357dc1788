"""Read-only listing commands for gateway-owned resources."""

from __future__ import annotations

from typing import Annotated

import typer

from higress_sdk.cli.commands.base import (
    console,
    err_console,
    handle_controller_error,
    handle_k8s_error,
    open_service,
)
from higress_sdk.cli.output import Table, labels_cell
from higress_sdk.integrations.controller.exceptions import ControllerError
from higress_sdk.integrations.kubernetes.exceptions import KubernetesError


def ingresses(
    ctx: typer.Context,
    domain: Annotated[
        str | None,
        typer.Option("--domain", "-d", help="Only list ingresses serving this domain."),
    ] = None,
) -> None:
    """List gateway-owned Ingresses.

    Examples:
        higress ingresses
        higress ingresses --domain example.com
    """
    with open_service(ctx) as service:
        try:
            if domain:
                items = service.ingresses.list_ingresses_by_domain(domain)
            else:
                items = service.ingresses.list_ingresses()
        except KubernetesError as e:
            handle_k8s_error(e)

    table = Table(title=f"Ingresses in {service.client.namespace}")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Class")
    table.add_column("Hosts")
    table.add_column("Labels", style="dim")
    for ingress in items:
        spec = ingress.spec
        hosts = sorted({rule.host for rule in (spec.rules or []) if rule.host}) if spec else []
        table.add_row(
            ingress.metadata.name,
            (spec.ingress_class_name if spec else None) or "-",
            "\n".join(hosts) or "*",
            labels_cell(ingress.metadata.labels),
        )
    console.print(table)


def plugins(
    ctx: typer.Context,
    name: Annotated[str | None, typer.Option("--name", help="Plugin name label.")] = None,
    version: Annotated[str | None, typer.Option("--version", help="Plugin version label.")] = None,
    built_in: Annotated[
        bool | None,
        typer.Option(
            "--built-in/--no-built-in",
            help="Only built-in or only custom plugins; both when omitted.",
            show_default=False,
        ),
    ] = None,
) -> None:
    """List gateway-owned WasmPlugins.

    Examples:
        higress plugins
        higress plugins --name key-auth --version 1.0.0
        higress plugins --no-built-in
    """
    with open_service(ctx) as service:
        try:
            items = service.wasm_plugins.list_plugins(name=name, version=version, built_in=built_in)
        except KubernetesError as e:
            handle_k8s_error(e)

    table = Table(title="Wasm Plugins")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Phase")
    table.add_column("Priority", justify="right")
    table.add_column("Image")
    table.add_column("Labels", style="dim")
    for plugin in items:
        spec = plugin.spec
        table.add_row(
            plugin.metadata.name if plugin.metadata else "-",
            (spec.phase if spec else None) or "-",
            str(spec.priority) if spec and spec.priority is not None else "-",
            (spec.url if spec else None) or "-",
            labels_cell(plugin.metadata.labels if plugin.metadata else None),
        )
    console.print(table)


def services(ctx: typer.Context) -> None:
    """List services registered with the gateway controller."""
    with open_service(ctx) as service:
        try:
            registered = service.controller.fetch_registered_services() or []
        except ControllerError as e:
            handle_controller_error(e)
        except OSError as e:
            err_console.print(f"[red]Error:[/red] Cannot read controller token: {e}")
            raise typer.Exit(1) from e

    table = Table(title="Registered Services")
    table.add_column("Hostname", style="cyan")
    table.add_column("Namespace")
    table.add_column("Registry")
    table.add_column("Ports")
    for entry in sorted(registered, key=lambda s: s.hostname or ""):
        attrs = entry.attributes
        ports = ", ".join(
            f"{p.port}/{p.protocol}" if p.protocol else str(p.port) for p in entry.ports or []
        )
        table.add_row(
            entry.hostname or "-",
            (attrs.namespace if attrs else None) or "-",
            (attrs.service_registry if attrs else None) or "-",
            ports or "-",
        )
    console.print(table)
