# asakey.py
# Asakey stream cipher of Dobraunig, Mennink and Primas (CCS 2022)
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from ..utilities.ustates import State
from .keystream import SpongeStream


@dataclass
class Asakey(SpongeStream):
    """Single-sponge nonce-keyed stream cipher.

    The state is reversed: the outer part is stored in the lower bits, so
    the printed hex value ends with the keystream block.
    """
    name = "asakey"

    state: Optional[State] = field(default=None, init=False, repr=False)

    def _drop_session(self) -> None:
        self.state = None

    def _start(self, value: State) -> None:
        self.state = value

    @property
    def initialized(self) -> bool:
        return self.state is not None

    def _squeeze(self) -> State:
        self.state = self.perm(self.state)
        return self.state & self.rmask
