# siphash.py
# SipHash / Half-SipHash ARX round as a permutation over four-limb states
from __future__ import annotations
from typing import Optional, Sequence, Tuple

from ..utilities.bitops import rotl
from ..utilities.ustates import Ux4

# rotation amounts (a, b, c, d, e) of the SipRound
SIPHASH_ROTATIONS = (13, 16, 17, 21, 32)
HALF_SIPHASH_ROTATIONS = (5, 8, 7, 13, 16)

DEFAULT_ROTATIONS = {64: SIPHASH_ROTATIONS, 32: HALF_SIPHASH_ROTATIONS}


def sip_round(limbs: Sequence[int], rotations: Sequence[int], bits: int) -> Tuple[int, int, int, int]:
    p0, p1, p2, p3 = limbs
    a, b, c, d, e = rotations
    m = (1 << bits) - 1

    p0 = (p0 + p1) & m
    p1 = rotl(p1, a, bits) ^ p0
    p0 = rotl(p0, e, bits)
    p2 = (p2 + p3) & m
    p3 = rotl(p3, b, bits) ^ p2
    p0 = (p0 + p3) & m
    p3 = rotl(p3, d, bits) ^ p0
    p2 = (p2 + p1) & m
    p1 = rotl(p1, c, bits) ^ p2
    p2 = rotl(p2, e, bits)
    return p0, p1, p2, p3


class SipHashPermutation:
    """`rounds` SipRounds over the limbs of a `Ux4`.

    64-bit limbs use the SipHash rotations and 32-bit limbs the Half-SipHash
    ones; other limb widths need explicit `rotations`.
    """

    def __init__(self, rounds: int = 1, rotations: Optional[Sequence[int]] = None):
        if rounds < 1:
            raise ValueError("rounds must be >= 1")
        if rotations is not None and len(rotations) != 5:
            raise ValueError("rotations must hold 5 values")
        self.rounds = rounds
        self.rotations = tuple(rotations) if rotations is not None else None

    def _rotations_for(self, bits: int) -> Tuple[int, ...]:
        if self.rotations is not None:
            return self.rotations
        try:
            return DEFAULT_ROTATIONS[bits]
        except KeyError:
            raise ValueError(f"no default SipHash rotations for {bits}-bit limbs") from None

    def transform(self, state: Ux4) -> Ux4:
        if not isinstance(state, Ux4):
            raise TypeError(f"SipHashPermutation works on Ux4 states, got {type(state).__name__}")
        bits = state.limb_bits
        rot = self._rotations_for(bits)
        limbs = state.limbs
        for _ in range(self.rounds):
            limbs = sip_round(limbs, rot, bits)
        return Ux4(limbs, bits)

    __call__ = transform

    def __repr__(self):
        return f"SipHashPermutation(rounds={self.rounds})"
