"""Shared CLI output helpers.

Usage:
    from higress_sdk.cli.output import Table

    table = Table(title="Ingresses")
    table.add_column("Name", style="cyan")
    table.add_row("route-a")
    console.print(table)
"""

from higress_sdk.cli.output.table import Table, labels_cell

__all__ = ["Table", "labels_cell"]
