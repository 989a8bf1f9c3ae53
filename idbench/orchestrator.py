"""
Orchestrator for insertion runs: mode resolution, profiling, and persistence.

Usage (example from CLI):
    from idbench.orchestrator import RunConfig, run_benchmark

    result = run_benchmark(RunConfig(mode="ulid", count=100_000))
    print(result)

Outputs are saved to `results/` by default:
- `results/latest.json` (last run)
- `results/run-<timestamp>.json` (timestamped archive)
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from idbench.config import get_settings
from idbench.domain.models import Mode, table_for
from idbench.generators import build_generator
from idbench.generators.abstract import IdGenerator
from idbench.inserter import BulkInserter, ConnectionFactory, InsertResult
from idbench.utils.logging import get_logger
from idbench.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)


@dataclass
class RunConfig:
    """
    Parameters of one insertion run.

    `mode` and `count` fall back to settings.bench_mode / settings.bench_rows
    when left as None.
    """

    mode: Optional[str] = None
    count: Optional[int] = None
    results_dir: Path | str | None = None
    persist: bool = True
    dsn_override: Optional[str] = None
    progress_interval: Optional[int] = None
    connect: Optional[ConnectionFactory] = None
    generator: Optional[IdGenerator] = None


def _round_float(value: float, decimals: int = 2) -> float:
    """Round a float to specified decimal places for human-readable output."""
    return round(value, decimals)


def _merge_result(result: InsertResult, stats: ProfileStats) -> dict:
    """Merge inserter metrics with profiler stats, rounding floats for readability."""
    merged = dict(result)
    extra = merged.pop("extra", None) or {}
    merged.update(extra)
    merged.setdefault("rows", 0)
    merged.setdefault("duration_seconds", stats.duration_seconds)
    merged["duration_seconds"] = _round_float(merged["duration_seconds"], 3)
    merged.setdefault(
        "throughput_rows_per_sec",
        merged["rows"] / merged["duration_seconds"] if merged["duration_seconds"] else 0.0,
    )
    merged["throughput_rows_per_sec"] = _round_float(merged["throughput_rows_per_sec"])
    merged["peak_rss_bytes"] = stats.peak_rss_bytes
    merged["cpu_percent"] = (
        _round_float(stats.cpu_percent, 1) if stats.cpu_percent is not None else None
    )
    merged["profile"] = {
        "label": stats.label,
        "duration_seconds": _round_float(stats.duration_seconds, 3),
        "peak_rss_bytes": stats.peak_rss_bytes,
        "cpu_percent": merged["cpu_percent"],
    }
    return merged


def _persist_results(payload: dict, results_dir: Path) -> Path:
    results_dir.mkdir(parents=True, exist_ok=True)
    latest_path = results_dir / "latest.json"
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    archive_path = results_dir / f"run-{timestamp}.json"

    for path in (latest_path, archive_path):
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, sort_keys=True)

    log.info("Results persisted", extra={"latest": str(latest_path), "archive": str(archive_path)})
    return archive_path


def run_benchmark(config: Optional[RunConfig] = None) -> dict:
    """
    Run one insertion benchmark and optionally persist its result.

    The mode is validated before the generator or the connection is created.
    Failures are logged and re-raised; nothing is persisted for a failed run.

    Returns
    -------
    dict
        Inserter metrics merged with profiler stats.
    """
    config = config or RunConfig()
    settings = get_settings()
    mode = Mode.parse(config.mode if config.mode is not None else settings.bench_mode)
    count = config.count if config.count is not None else settings.bench_rows
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")

    table = table_for(mode)
    generator = config.generator or build_generator(mode, settings)
    inserter = BulkInserter(
        mode,
        generator,
        progress_interval=config.progress_interval,
        connect=config.connect,
        dsn_override=config.dsn_override,
    )

    log.info(
        f"[RUN START] {mode.value} -> {table.name} ({count} rows)",
        extra={"mode": mode.value, "table": table.name, "count": count, **generator.describe()},
    )
    with profile_block(mode.value) as stats:
        try:
            result = inserter.execute(count)
        except Exception:
            log.exception(f"[RUN FAILED] {mode.value}", extra={"mode": mode.value})
            raise

    merged = _merge_result(result, stats)
    log.info(
        f"[RUN COMPLETE] {mode.value}",
        extra={
            "mode": mode.value,
            "rows": merged["rows"],
            "throughput_rps": merged["throughput_rows_per_sec"],
        },
    )

    if config.persist:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "mode": mode.value,
            "count": count,
            "result": merged,
        }
        _persist_results(payload, Path(config.results_dir or settings.results_dir))

    return merged


__all__ = ["RunConfig", "run_benchmark"]
