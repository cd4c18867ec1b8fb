# base.py
# Permutation contract and the trivial rotation permutation
from __future__ import annotations
from typing import Protocol

from ..utilities.ustates import State


class Permutation(Protocol):
    """Pure, shape-preserving map from a state to a state."""

    def __call__(self, state: State) -> State: ...


class RotationPermutation:
    """Rotates the whole state left by `alpha` bits. Useful for tests and demos only."""

    def __init__(self, alpha: int):
        self.alpha = alpha

    def transform(self, state: State) -> State:
        return state.rotl(self.alpha)

    __call__ = transform

    def __repr__(self):
        return f"RotationPermutation(alpha={self.alpha})"
