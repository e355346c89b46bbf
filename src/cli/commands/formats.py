"""List the supported wire formats."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from content.formats import FORMAT_REGISTRY


def formats_command() -> int:
    """Show every wire format with its MIME type and file extensions.

    Returns
    -------
    int
        Exit status code.
    """
    table = Table(title="Wire formats")
    table.add_column("Format")
    table.add_column("MIME type")
    table.add_column("Binary")
    table.add_column("Extensions")
    for wire_format, handle in FORMAT_REGISTRY.items():
        table.add_row(
            wire_format.value,
            handle.mime_type,
            "yes" if handle.binary else "no",
            ", ".join(f".{ext}" for ext in wire_format.extensions),
        )
    Console().print(table)
    return 0


__all__ = ["formats_command"]
