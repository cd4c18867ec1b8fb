# base.py
# Common interface of refresh/next generators
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Sequence

from ..utilities.ustates import State


class PRNG(ABC):
    """A generator fed through `refresh` and read through `next`."""

    @abstractmethod
    def refresh(self, inputs: Sequence[State]) -> None: ...

    @abstractmethod
    def next(self) -> State: ...
