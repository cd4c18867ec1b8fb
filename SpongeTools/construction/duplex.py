# duplex.py
# Keyed duplex construction of Dobraunig and Mennink (2019)
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List

from ..permutations.base import Permutation
from ..utilities.errors import require
from ..utilities.randomness import RandomSource, default_rng
from ..utilities.ustates import UX4_64, Shape, State

logger = logging.getLogger(__name__)


@dataclass
class Duplex:
    """Keyed duplex with `u` keys of `k` bits over a `b`-bit state.

    The state is stored reversed: the outer part (rate) is the low `r` bits,
    the key occupies the low `k` bits before the rotation by `alpha`.
    """
    b: int
    r: int
    k: int
    u: int
    alpha: int
    perm: Permutation
    shape: Shape = UX4_64
    rng: RandomSource = field(default_factory=default_rng, repr=False)

    def __post_init__(self):
        require(0 < self.r <= self.b, f"rate r={self.r} must satisfy 0 < r <= b={self.b}")
        require(0 < self.k <= self.b, f"key size k={self.k} must satisfy 0 < k <= b={self.b}")
        require(self.u >= 1, f"number of keys u={self.u} must be at least 1")
        require(self.b <= self.shape.width,
                f"state size b={self.b} exceeds the {self.shape.width}-bit word")

        self.mask = self.shape.mask(self.r)
        self.kmask = self.shape.mask(self.k)
        # IV bits: everything above the key inside the b-bit state
        self.ivmask = ~self.kmask & self.shape.mask(self.b)
        self._keys: List[State] = [self.shape.random(self.rng) & self.kmask for _ in range(self.u)]
        self.state = self.shape.zero()
        logger.debug("duplex setup b=%d r=%d k=%d u=%d alpha=%d", self.b, self.r, self.k, self.u, self.alpha)

    @property
    def c(self) -> int:
        return self.b - self.r

    def reset(self, delta: int) -> None:
        """Start a new session under key `delta mod u` with a fresh random IV."""
        iv = self.shape.random(self.rng) & self.ivmask
        self.state = self.perm((self._keys[delta % self.u] | iv).rotl(self.alpha))
        logger.debug("duplex reset with key index %d", delta % self.u)

    def duplex(self, flag: bool, data: State) -> State:
        """Return the current outer part, then absorb `data` and permute.

        With `flag` set the outer part is cleared first (overwrite); otherwise
        `data` is XORed onto it.
        """
        output = self.state & self.mask
        if flag:
            self.state = self.state & ~self.mask
        self.state = self.perm(self.state ^ data)
        return output
