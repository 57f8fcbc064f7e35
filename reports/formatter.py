"""
    Report formatting functions
"""
from dataclasses import fields
from datetime import datetime

from rich.console import Console
from rich.table import Table

from core.models import OperatingSystemInfo, OsInventory

console = Console()

_MEMORY_FIELDS = {
    "paging_file_size",
    "total_visible_memory",
    "free_physical_memory",
    "total_virtual_memory",
    "free_virtual_memory",
}


def format_size(num_bytes: int | None) -> str:
    if num_bytes is None:
        return ""
    if num_bytes < 1024:
        return f"{num_bytes} B"
    size = float(num_bytes)
    for unit in ("KB", "MB", "GB"):
        size /= 1024
        if size < 1024:
            return f"{size:.2f} {unit}"
    return f"{size / 1024:.2f} TB"


def format_value(name: str, value) -> str:
    if value is None:
        return ""
    if name in _MEMORY_FIELDS:
        return format_size(value)
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    return str(value)


def print_os_info(record: OperatingSystemInfo) -> None:
    table = Table(title=record.computer_name, show_header=True, header_style="bold")
    table.add_column("Property")
    table.add_column("Value")
    for f in fields(record):
        table.add_row(f.name, format_value(f.name, getattr(record, f.name)))
    console.print(table)


def print_inventory(inventory: OsInventory) -> None:
    for record in inventory.results:
        print_os_info(record)

    if inventory.errors:
        console.print("\n[bold]Errors:[/bold]")
        for err in inventory.errors:
            console.print(f"  [red]{err.computer_name} ({err.stage}): {err.error}[/red]")
            if err.remediation:
                console.print(f"    [dim]{err.remediation}[/dim]")
