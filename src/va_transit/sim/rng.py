# sim/rng.py
from __future__ import annotations

from dataclasses import dataclass
from zlib import crc32

import numpy as np


def _u32(x: int) -> int:
    return int(x & 0xFFFFFFFF)


def _crc32_u32(s: str) -> int:
    return _u32(crc32(s.encode("utf-8")))


@dataclass(frozen=True)
class RNGKey:
    """Draw name plus optional key parts, each folded to u32."""

    stream: str
    parts: tuple[int, ...]

    @classmethod
    def from_parts(cls, stream: str, *parts: object) -> RNGKey:
        norm: list[int] = [_crc32_u32(stream)]
        for p in parts:
            if isinstance(p, (int, np.integer)):
                norm.append(_u32(int(p)))
            elif isinstance(p, str):
                norm.append(_crc32_u32(p))
            else:
                norm.append(_crc32_u32(repr(p)))
        return cls(stream=stream, parts=tuple(norm))


class RNGRegistry:
    """
    Deterministic draws keyed by [master_seed, scenario, *key.parts].
    Every draw seeds its own generator, so call order never matters.
    """

    def __init__(self, master_seed: int, *, scenario: str | int = 0):
        self.master_seed = _u32(master_seed)
        self.scenario_tag = _crc32_u32(str(scenario))

    def _seed(self, key: RNGKey) -> np.random.SeedSequence:
        return np.random.SeedSequence(entropy=[self.master_seed, self.scenario_tag, *key.parts])

    def coin(self, name: str, *parts: object) -> bool:
        """One fair boolean from a freshly seeded generator; same key => same answer."""
        fresh = np.random.Generator(np.random.PCG64(self._seed(RNGKey.from_parts(name, *parts))))
        return bool(fresh.integers(0, 2))
