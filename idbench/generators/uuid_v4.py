"""
Random UUID (version 4) generator: the fully unordered baseline.
"""

from __future__ import annotations

import uuid

from idbench.generators.abstract import AbstractIdGenerator


class UUIDv4Generator(AbstractIdGenerator):
    """Canonical lowercase, hyphenated v4 UUID strings (36 characters)."""

    name: str = "uuid"
    description: str = "Random v4 UUID (122 random bits), 8-4-4-4-12 hex string."

    def next_id(self) -> str:
        return str(uuid.uuid4())


__all__ = ["UUIDv4Generator"]
