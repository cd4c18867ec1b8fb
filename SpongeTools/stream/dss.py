# dss.py
# Double sponge stream cipher: two branches cross-mixed after every block
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from ..utilities.ustates import State
from .keystream import SpongeStream


@dataclass
class DSS(SpongeStream):
    """Two copies of the Asakey state told apart by the domain bit b-1.

    Each block permutes both branches, outputs the rate of the lower branch
    ("down"), and rebuilds both from the rate of the upper branch ("up")
    next to the XOR of the two capacities.
    """
    name = "dss"

    state_up: Optional[State] = field(default=None, init=False, repr=False)
    state_down: Optional[State] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        super().__post_init__()
        self.dmask = self.shape.one() << (self.b - 1)

    def _drop_session(self) -> None:
        self.state_up = None
        self.state_down = None

    def _start(self, value: State) -> None:
        self.state_up = value & ~self.dmask
        self.state_down = value | self.dmask

    @property
    def initialized(self) -> bool:
        return self.state_up is not None

    def _squeeze(self) -> State:
        # both branches must be permuted before either is rewritten
        up = self.perm(self.state_up)
        down = self.perm(self.state_down)

        subkey = up & self.rmask
        output = down & self.rmask
        mixed_c = (up & ~self.rmask) ^ (down & ~self.rmask)

        self._start(subkey | mixed_c)
        return output
