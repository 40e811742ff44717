"""Seeded, domain-separated dice for combat and encounter generation.

Every draw is ``xxh64(seed, domain, stream, counter)``.  A *stream* is a
key the caller keeps stable for one encounter (the generator hands each
weapon its own spawn slot), and the counter is the caller's own draw
count, so the same seed always replays the same encounter.
"""

from __future__ import annotations

import struct

import xxhash

from skirmish.core.enums import Domain

_PACK = struct.Struct("<qiqq")
_SPAN = float(1 << 64)


class DeterministicRNG:
    """Pure function of (seed, domain, stream, counter); holds only the seed."""

    __slots__ = ("_seed",)

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _draw(self, domain: Domain, stream: int, counter: int) -> int:
        return xxhash.xxh64_intdigest(_PACK.pack(self._seed, int(domain), stream, counter))

    def next_float(self, domain: Domain, stream: int, counter: int) -> float:
        """Uniform float in [0.0, 1.0)."""
        return self._draw(domain, stream, counter) / _SPAN

    def next_int(self, domain: Domain, stream: int, counter: int, low: int, high: int) -> int:
        """Uniform integer in [low, high] inclusive."""
        if high < low:
            raise ValueError(f"empty range [{low}, {high}]")
        return low + self._draw(domain, stream, counter) % (high - low + 1)

    def next_bool(self, domain: Domain, stream: int, counter: int, probability: float = 0.5) -> bool:
        return self.next_float(domain, stream, counter) < probability

    def roll_percent(self, domain: Domain, stream: int, counter: int) -> int:
        """A d100 roll: 1-100 inclusive."""
        return self.next_int(domain, stream, counter, 1, 100)

    def percent_check(self, chance: int, domain: Domain, stream: int, counter: int) -> bool:
        """True when a d100 roll lands at or under *chance* (0 never, 100 always)."""
        return self.roll_percent(domain, stream, counter) <= chance
