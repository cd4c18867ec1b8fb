# sprng.py
# Sponge-based PRNG of Gazi and Tessaro (2016)
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Sequence, Tuple

from ..permutations.base import Permutation
from ..utilities.bitops import bytes_needed
from ..utilities.errors import EmptyInputError, require
from ..utilities.randomness import RandomSource, default_rng
from ..utilities.ustates import UX4_64, Shape, State
from .base import PRNG

logger = logging.getLogger(__name__)


@dataclass
class SPRNG(PRNG):
    """Sponge PRNG with an `s`-word seed and `t` permutation calls per output.

    Parameters: state size `n`, rate `r`, truncation rounds `t >= 1` and
    seed length `s > 1`. The state is reversed, the rate is its low `r` bits.

    `refresh` absorbs inputs whitened by the seed words, cycling through
    the seed starting at index 1. `next` squeezes one rate block and then,
    `t - 1` times, zeroes the rate and permutes so that a later state
    compromise does not reveal the block just returned.
    """
    n: int
    r: int
    t: int
    s: int
    perm: Permutation
    shape: Shape = UX4_64
    rng: RandomSource = field(default_factory=default_rng, repr=False)

    def __post_init__(self):
        require(0 < self.r <= self.n, f"rate r={self.r} must satisfy 0 < r <= n={self.n}")
        require(self.t >= 1, f"t={self.t} must be at least 1")
        require(self.s > 1, f"seed length s={self.s} must be greater than 1")
        require(self.n <= self.shape.width,
                f"state size n={self.n} exceeds the {self.shape.width}-bit word")

        self.mask = self.shape.mask(self.r)
        self._seed = tuple(self.shape.random(self.rng) & self.mask for _ in range(self.s))
        # random capacity, zero rate
        self.state = self.shape.random(self.rng) & ~self.mask & self.shape.mask(self.n)
        self.j = 1
        logger.debug("sprng setup n=%d r=%d t=%d s=%d", self.n, self.r, self.t, self.s)

    @property
    def seed(self) -> Tuple[State, ...]:
        return self._seed

    def refresh(self, inputs: Sequence[State]) -> None:
        if not inputs:
            raise EmptyInputError("sprng refresh: no inputs provided")
        for value in inputs:
            self.state = self.perm(self.state ^ ((value ^ self._seed[self.j]) & self.mask))
            self.j = (self.j + 1) % self.s

    def next(self) -> State:
        self.state = self.perm(self.state)
        out = self.state & self.mask
        for _ in range(self.t - 1):
            self.state = self.perm(self.state & ~self.mask)
        self.j = 1
        return out

    def next_bytes(self) -> bytes:
        return self.next().to_le_bytes()[:bytes_needed(self.r)]
