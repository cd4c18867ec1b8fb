# randomness.py
# Injectable randomness provider; only setup/reset code draws from it
from __future__ import annotations
import secrets
from typing import Protocol


class RandomSource(Protocol):
    """Anything exposing `getrandbits`, e.g. `random.Random` or `secrets.SystemRandom`."""

    def getrandbits(self, k: int) -> int: ...


def default_rng() -> RandomSource:
    return secrets.SystemRandom()
