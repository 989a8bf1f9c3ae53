from __future__ import annotations

from typing import Any, Dict, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from idbench.domain.models import TABLES


def print_result(result: Dict[str, Any], console: Optional[Console] = None) -> None:
    """
    Render one insertion run as a rich table.
    """
    console = console or Console()

    if not result:
        console.print("[yellow]No results to display.[/yellow]")
        return

    table = Table(title="idbench Insertion Results", box=box.ROUNDED)
    table.add_column("Mode", style="cyan", no_wrap=True)
    table.add_column("Table", style="blue")
    table.add_column("Rows", justify="right", style="magenta")
    table.add_column("Duration (s)", justify="right", style="green")
    table.add_column("Throughput (rows/s)", justify="right", style="bold green")
    table.add_column("Peak Memory (MB)", justify="right", style="yellow")
    table.add_column("CPU %", justify="right", style="red")

    mem_bytes = result.get("peak_rss_bytes")
    mem_str = f"{mem_bytes / (1024 * 1024):.2f}" if mem_bytes else "N/A"
    cpu = result.get("cpu_percent")
    cpu_str = f"{cpu:.1f}" if cpu is not None else "N/A"

    table.add_row(
        str(result.get("mode", "Unknown")),
        str(result.get("table", "-")),
        f"{result.get('rows', 0):,}",
        f"{result.get('duration_seconds', 0.0):.2f}",
        f"{result.get('throughput_rows_per_sec', 0.0):,.2f}",
        mem_str,
        cpu_str,
    )
    if "snowflake_node" in result:
        table.caption = f"Snowflake node {result['snowflake_node']}"

    console.print(table)


def print_modes(console: Optional[Console] = None) -> None:
    """
    List the identifier modes and the table each one writes to.
    """
    console = console or Console()
    table = Table(title="Modes", box=box.ROUNDED)
    table.add_column("Mode", style="cyan", no_wrap=True)
    table.add_column("Table", style="blue")
    table.add_column("Key column", style="magenta")
    for mode, table_spec in TABLES.items():
        table.add_row(mode.value, table_spec.name, table_spec.key_column)
    console.print(table)


__all__ = ["print_modes", "print_result"]
