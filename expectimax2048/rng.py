"""SplitMix64: the seeded generator shared by tile spawning and search sampling."""

from __future__ import annotations

MASK64 = 0xFFFFFFFFFFFFFFFF

GOLDEN_GAMMA = 0x9E3779B97F4A7C15
MIX_1 = 0xBF58476D1CE4E5B9
MIX_2 = 0x94D049BB133111EB


class SplitMix64:
    __slots__ = ("state",)

    def __init__(self, seed: int) -> None:
        self.state: int = seed & MASK64

    def next_u64(self) -> int:
        self.state = (self.state + GOLDEN_GAMMA) & MASK64
        z = self.state
        z = ((z ^ (z >> 30)) * MIX_1) & MASK64
        z = ((z ^ (z >> 27)) * MIX_2) & MASK64
        return z ^ (z >> 31)

    def next_int(self, upper_bound: int) -> int:
        """Uniform int in [0, upper_bound), rejection‑sampled so there is no modulo bias."""
        assert upper_bound > 0, "upper_bound must be positive"
        threshold = (1 << 64) % upper_bound
        while True:
            r = self.next_u64()
            m = r % upper_bound
            if r - m >= threshold:
                return m

    def copy(self) -> "SplitMix64":
        return SplitMix64(self.state)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SplitMix64) and other.state == self.state

    def __hash__(self) -> int:
        return hash(self.state)

    def __repr__(self) -> str:
        return f"SplitMix64(state=0x{self.state:016x})"
