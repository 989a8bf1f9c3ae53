from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from idbench.config import get_settings
from idbench.errors import IdBenchError
from idbench.infrastructure.db_factory import build_dsn
from idbench.orchestrator import RunConfig, run_benchmark
from idbench.reporter import print_modes, print_result
from idbench.utils.logging import configure_logging

app = typer.Typer(help="Bulk identifier insertion benchmark (UUID / Snowflake / ULID).")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DSN={build_dsn(settings)} | mode={settings.bench_mode} rows={settings.bench_rows} "
        f"progress_every={settings.bench_progress_interval} "
        f"snowflake_node={settings.snowflake_node if settings.snowflake_node is not None else 'random'}"
    )


@app.command()
def modes() -> None:
    """
    List identifier modes and their target tables.
    """
    print_modes()


@app.command()
def run(
    mode: Optional[str] = typer.Option(
        None,
        "--mode",
        "-m",
        help="Identifier kind: uuid, snowflake or ulid (default from settings: uuid).",
    ),
    count: Optional[int] = typer.Option(
        None,
        "--count",
        "-n",
        min=0,
        help="Number of rows to insert (default from settings: 1,000,000).",
    ),
    dsn: Optional[str] = typer.Option(
        None,
        "--dsn",
        help="Optional DSN override for Postgres.",
    ),
    persist: bool = typer.Option(
        True,
        "--persist/--no-persist",
        help="Write results/latest.json and a timestamped archive.",
    ),
    results_dir: Optional[Path] = typer.Option(
        None,
        "--results-dir",
        help="Directory for persisted results (default from settings).",
    ),
) -> None:
    """
    Insert COUNT rows keyed by MODE identifiers into the matching table.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    try:
        result = run_benchmark(
            RunConfig(
                mode=mode,
                count=count,
                dsn_override=dsn,
                persist=persist,
                results_dir=results_dir,
            )
        )
    except IdBenchError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    print_result(result)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
