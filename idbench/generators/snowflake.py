"""
Snowflake-style 64-bit identifier generator.

Layout (most significant bit first):

    0 | 41 bits ms since epoch | 10 bits node | 12 bits sequence

The sequence restarts every millisecond; when all 4096 values of a millisecond
are used, the generator spins until the clock moves on. A clock that moves
backwards is clamped to the last millisecond seen, so ids from one generator
never decrease.
"""

from __future__ import annotations

import random
import threading
from typing import Any, Dict, Optional

from idbench.config import TWITTER_EPOCH_MS
from idbench.generators.abstract import AbstractIdGenerator, Clock, wall_clock_ms

NODE_BITS = 10
STEP_BITS = 12
TIME_SHIFT = NODE_BITS + STEP_BITS
NODE_SHIFT = STEP_BITS
NODE_MAX = (1 << NODE_BITS) - 1
STEP_MASK = (1 << STEP_BITS) - 1

# Nodes are drawn from [0, NODE_RANDOM_UPPER).
NODE_RANDOM_UPPER = 1023


def random_node(rng: Optional[random.Random] = None) -> int:
    """Pick a node number uniformly from [0, 1023)."""
    return (rng or random).randrange(NODE_RANDOM_UPPER)


class SnowflakeGenerator(AbstractIdGenerator):
    """
    Time-ordered ids bound to a single node for the lifetime of the instance.
    """

    name: str = "snowflake"
    description: str = "41-bit ms timestamp + 10-bit node + 12-bit sequence (BIGINT)."

    def __init__(
        self,
        node: int,
        epoch_ms: int = TWITTER_EPOCH_MS,
        clock: Clock = wall_clock_ms,
    ) -> None:
        if not 0 <= node <= NODE_MAX:
            raise ValueError(f"Snowflake node must be within [0, {NODE_MAX}], got {node}")
        self.node = node
        self.epoch_ms = epoch_ms
        self._clock = clock
        self._lock = threading.Lock()
        self._last_ms = -1
        self._step = 0

    def _elapsed_ms(self) -> int:
        return self._clock() - self.epoch_ms

    def next_id(self) -> int:
        with self._lock:
            now = max(self._elapsed_ms(), self._last_ms)
            if now == self._last_ms:
                self._step = (self._step + 1) & STEP_MASK
                if self._step == 0:
                    while now <= self._last_ms:
                        now = self._elapsed_ms()
            else:
                self._step = 0
            self._last_ms = now
            return (now << TIME_SHIFT) | (self.node << NODE_SHIFT) | self._step

    def describe(self) -> Dict[str, Any]:
        return {"snowflake_node": self.node, "snowflake_epoch_ms": self.epoch_ms}

    @staticmethod
    def decompose(value: int) -> Dict[str, int]:
        """Split an id back into its timestamp offset, node and sequence."""
        return {
            "ms": value >> TIME_SHIFT,
            "node": (value >> NODE_SHIFT) & NODE_MAX,
            "step": value & STEP_MASK,
        }


__all__ = ["SnowflakeGenerator", "random_node", "NODE_MAX", "NODE_RANDOM_UPPER"]
