"""
Monotonic ULID generator.

A ULID is a 48-bit millisecond timestamp followed by 80 bits of entropy,
rendered as 26 Crockford base32 characters. Within one millisecond this
generator does not draw fresh entropy: it adds a random increment in
[1, 2**32) to the previous value, so ids of the same millisecond still sort in
call order. The entropy source is a `random.Random` seeded from the wall clock
when the generator is created.
"""

from __future__ import annotations

import random
import threading
import time
from typing import Any, Dict, Optional

from ulid import ULID

from idbench.errors import ULIDOverflowError
from idbench.generators.abstract import AbstractIdGenerator, Clock, wall_clock_ms

ENTROPY_BITS = 80
ENTROPY_MAX = (1 << ENTROPY_BITS) - 1
MAX_INCREMENT = 1 << 32


class MonotonicULIDGenerator(AbstractIdGenerator):
    """
    ULIDs whose timestamp prefix never decreases and whose entropy grows
    within a millisecond.
    """

    name: str = "ulid"
    description: str = "48-bit ms timestamp + 80-bit monotonic entropy, 26-char base32."

    def __init__(self, clock: Clock = wall_clock_ms, seed: Optional[int] = None) -> None:
        self.seed = time.time_ns() if seed is None else seed
        self._rng = random.Random(self.seed)
        self._clock = clock
        self._lock = threading.Lock()
        self._last_ms = -1
        self._entropy = 0

    def next_ulid(self) -> ULID:
        with self._lock:
            now = max(self._clock(), self._last_ms)
            if now == self._last_ms:
                entropy = self._entropy + self._rng.randrange(1, MAX_INCREMENT)
                if entropy > ENTROPY_MAX:
                    raise ULIDOverflowError(
                        f"ULID entropy exhausted within millisecond {now}"
                    )
            else:
                entropy = self._rng.getrandbits(ENTROPY_BITS)
            self._last_ms = now
            self._entropy = entropy
            value = (now << ENTROPY_BITS) | entropy
        return ULID.from_bytes(value.to_bytes(16, "big"))

    def next_id(self) -> str:
        return str(self.next_ulid())

    def describe(self) -> Dict[str, Any]:
        return {"ulid_seed": self.seed}


__all__ = ["MonotonicULIDGenerator"]
