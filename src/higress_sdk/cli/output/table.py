"""Rich table defaults for CLI output."""

from __future__ import annotations

from typing import Any

from rich.table import Table as RichTable


class Table(RichTable):
    """Rich Table whose columns wrap long text instead of truncating.

    Any column can still opt out with an explicit ``overflow`` or
    ``no_wrap=True``.
    """

    def add_column(self, *args: Any, **kwargs: Any) -> None:
        """Add a column with overflow="fold" unless told otherwise."""
        kwargs.setdefault("overflow", "fold")
        super().add_column(*args, **kwargs)


def labels_cell(labels: dict[str, str] | None) -> str:
    """Render a label map as one ``key=value`` pair per line."""
    if not labels:
        return "-"
    return "\n".join(f"{key}={value}" for key, value in sorted(labels.items()))
