# keystream.py
# Shared machinery of the nonce-keyed sponge stream ciphers
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import ClassVar, Optional

import numpy as np

from ..permutations.base import Permutation
from ..utilities.bitops import bits_to_bytes, bytes_needed, bytes_to_bits, xor_bytes
from ..utilities.errors import (InvalidDomainValueError, NotInitializedError,
                                NotKeyedError, require)
from ..utilities.ustates import UX4_64, Shape, State

logger = logging.getLogger(__name__)


@dataclass
class SpongeStream:
    """Base class for stream ciphers keyed as in Asakey.

    Lifecycle: `rekey(key)` stores a key and drops the session,
    `init(nonce)` absorbs the nonce and opens a session, `next()` squeezes
    one block of `r` bits. Subclasses decide how the absorbed value is held
    (`_start`), cleared (`_drop_session`) and squeezed (`_squeeze`).
    """
    b: int
    r: int
    k: int
    perm: Permutation
    shape: Shape = UX4_64

    name: ClassVar[str] = "stream"

    def __post_init__(self):
        require(0 < self.r <= self.b, f"rate r={self.r} must satisfy 0 < r <= b={self.b}")
        require(0 < self.k <= self.b, f"key size k={self.k} must satisfy 0 < k <= b={self.b}")
        require(self.b <= self.shape.width,
                f"state size b={self.b} exceeds the {self.shape.width}-bit word")
        self.kmask = self.shape.mask(self.k)
        self.rmask = self.shape.mask(self.r)
        self.key: Optional[State] = None
        self._drop_session()
        logger.debug("%s setup b=%d r=%d k=%d", self.name, self.b, self.r, self.k)

    @property
    def c(self) -> int:
        return self.b - self.r

    @property
    def block_bytes(self) -> int:
        return bytes_needed(self.r)

    # --- session hooks ---------------------------------------------------

    def _drop_session(self) -> None:
        raise NotImplementedError

    def _start(self, value: State) -> None:
        raise NotImplementedError

    def _squeeze(self) -> State:
        raise NotImplementedError

    @property
    def initialized(self) -> bool:
        raise NotImplementedError

    # --- protocol --------------------------------------------------------

    def rekey(self, key: State) -> None:
        if key == self.shape.zero():
            raise InvalidDomainValueError("key")
        self.key = key
        self._drop_session()
        logger.debug("%s rekeyed", self.name)

    def absorb_nonce(self, nonce: State) -> State:
        """Key in the top bits, nonce absorbed one bit per permutation call.

        The low `k` bits of the result are the nonce itself; every other bit
        is whatever the absorption left behind.
        """
        if nonce == self.shape.zero():
            raise InvalidDomainValueError("nonce")
        if self.key is None:
            raise NotKeyedError(self.name)

        state = self.perm((self.key & self.kmask) << (self.b - self.k))
        one = self.shape.one()
        for i in range(self.k):
            state = self.perm(state ^ ((nonce >> i) & one))
        return (nonce & self.kmask) | (state & ~self.kmask)

    def init(self, nonce: State) -> None:
        self._start(self.absorb_nonce(nonce))
        logger.debug("%s initialized", self.name)

    def next(self) -> bytes:
        """One block: the rate bits as ceil(r/8) little-endian bytes."""
        if not self.initialized:
            raise NotInitializedError(self.name)
        return self._squeeze().to_le_bytes()[:self.block_bytes]

    def next_bytes(self, nbytes: int) -> bytes:
        """Collect `nbytes` of keystream, keeping only the `r` valid bits of each block."""
        if not self.initialized:
            raise NotInitializedError(self.name)
        needed = nbytes * 8
        chunks, collected = [], 0
        while collected < needed:
            bits = bytes_to_bits(self.next())[:self.r]
            chunks.append(bits)
            collected += bits.size
        if not chunks:
            return b""
        return bits_to_bytes(np.concatenate(chunks)[:needed])

    def encrypt(self, key: State, nonce: State, data: bytes) -> bytes:
        self.rekey(key)
        self.init(nonce)
        data = bytes(data)
        return xor_bytes(data, self.next_bytes(len(data)))

    # keystream XOR is its own inverse
    decrypt = encrypt
