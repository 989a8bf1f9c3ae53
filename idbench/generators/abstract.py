"""
Abstract generator interfaces for idbench.

Concrete generators (uuid, snowflake, ulid) implement the IdGenerator protocol
so the inserter can stay agnostic of the identifier kind it writes.
"""

from __future__ import annotations

import abc
import time
from typing import Any, Callable, Dict, Protocol, Union, runtime_checkable

IdValue = Union[int, str]

#: Returns the current Unix time in milliseconds.
Clock = Callable[[], int]


def wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


@runtime_checkable
class IdGenerator(Protocol):
    """
    Common interface of identifier generators.

    Attributes
    ----------
    name : str
        Mode name the generator serves.
    description : str
        A human-friendly summary of the identifier layout.
    """

    name: str
    description: str

    def next_id(self) -> IdValue:
        """Return a new identifier."""
        ...

    def describe(self) -> Dict[str, Any]:
        """Per-run parameters worth reporting (node id, epoch...)."""
        ...


class AbstractIdGenerator(abc.ABC):
    """
    Optional ABC helper for class-based implementations.

    Subclasses set `name` and `description` and implement `next_id`.
    """

    name: str
    description: str

    @abc.abstractmethod
    def next_id(self) -> IdValue:  # pragma: no cover - interface only
        raise NotImplementedError

    def describe(self) -> Dict[str, Any]:
        return {}


__all__ = [
    "AbstractIdGenerator",
    "Clock",
    "IdGenerator",
    "IdValue",
    "wall_clock_ms",
]
