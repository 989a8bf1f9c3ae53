"""
Generators package for idbench.

Re-exports the generator interfaces and concrete classes, and hosts the
mode -> generator registry used by the orchestrator.
"""

from __future__ import annotations

import random
from typing import Callable, Dict, List, Optional

from idbench.config import Settings, get_settings
from idbench.domain.models import Mode
from idbench.generators.abstract import (
    AbstractIdGenerator,
    Clock,
    IdGenerator,
    IdValue,
    wall_clock_ms,
)
from idbench.generators.snowflake import SnowflakeGenerator, random_node
from idbench.generators.ulid_monotonic import MonotonicULIDGenerator
from idbench.generators.uuid_v4 import UUIDv4Generator


def _snowflake_factory(settings: Settings, rng: Optional[random.Random]) -> SnowflakeGenerator:
    node = settings.snowflake_node
    if node is None:
        node = random_node(rng)
    return SnowflakeGenerator(node=node, epoch_ms=settings.snowflake_epoch_ms)


def _generator_factories() -> Dict[Mode, Callable[[Settings, Optional[random.Random]], IdGenerator]]:
    """Registry of available generators."""
    return {
        Mode.UUID: lambda settings, rng: UUIDv4Generator(),
        Mode.SNOWFLAKE: _snowflake_factory,
        Mode.ULID: lambda settings, rng: MonotonicULIDGenerator(),
    }


def available_modes() -> List[str]:
    """List mode names that have a generator."""
    return sorted(mode.value for mode in _generator_factories())


def build_generator(
    mode: str | Mode,
    settings: Optional[Settings] = None,
    rng: Optional[random.Random] = None,
) -> IdGenerator:
    """
    Create a fresh generator for `mode`.

    A new instance is built per run, so the Snowflake node is drawn once per
    run unless `SNOWFLAKE_NODE` pins it.
    """
    resolved = Mode.parse(mode)
    return _generator_factories()[resolved](settings or get_settings(), rng)


__all__ = [
    # Abstracts
    "AbstractIdGenerator",
    "Clock",
    "IdGenerator",
    "IdValue",
    "wall_clock_ms",
    # Concrete generators
    "MonotonicULIDGenerator",
    "SnowflakeGenerator",
    "UUIDv4Generator",
    # Registry
    "available_modes",
    "build_generator",
    "random_node",
]
