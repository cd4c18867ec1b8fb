# ustates.py
# Fixed-width words and four-limb wide states with integer semantics
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple, Union

from .randomness import RandomSource


@dataclass(frozen=True)
class Shape:
    """Describes a word type: `limbs` limbs of `limb_bits` bits each.

    A shape is the factory every construction uses to build constants,
    masks and random values of the right type. `limbs == 1` gives plain
    `Word` values, `limbs == 4` gives `Ux4` values.
    """
    limb_bits: int = 64
    limbs: int = 4

    def __post_init__(self):
        if self.limb_bits <= 0:
            raise ValueError(f"limb width must be positive, got {self.limb_bits}")
        if self.limbs not in (1, 4):
            raise ValueError(f"unsupported limb count {self.limbs} (expected 1 or 4)")

    @property
    def width(self) -> int:
        return self.limb_bits * self.limbs

    @property
    def byte_width(self) -> int:
        return (self.width + 7) // 8

    def from_limbs(self, limbs: Sequence[int]) -> State:
        if self.limbs == 1:
            (value,) = limbs
            return Word(value, self.limb_bits)
        return Ux4(limbs, self.limb_bits)

    def from_int(self, value: int) -> State:
        value &= (1 << self.width) - 1
        lmask = (1 << self.limb_bits) - 1
        return self.from_limbs([(value >> (self.limb_bits * i)) & lmask for i in range(self.limbs)])

    def from_bytes(self, data: bytes) -> State:
        """Little-endian decode; extra bytes are ignored, missing ones are zero."""
        return self.from_int(int.from_bytes(bytes(data[:self.byte_width]), "little"))

    def zero(self) -> State:
        return self.from_limbs([0] * self.limbs)

    def one(self) -> State:
        return self.from_limbs([1] + [0] * (self.limbs - 1))

    def mask(self, nbits: int) -> State:
        """Value with the low `nbits` bits set."""
        return (self.one() << nbits) - self.one()

    def random(self, rng: RandomSource) -> State:
        return self.from_limbs([rng.getrandbits(self.limb_bits) for _ in range(self.limbs)])


class Word:
    """Unsigned integer of `bits` bits with wrapping arithmetic."""
    __slots__ = ("value", "bits")

    def __init__(self, value: int, bits: int = 64):
        if not 0 <= value < (1 << bits):
            raise ValueError(f"{value:#x} does not fit in {bits} bits")
        self.value = value
        self.bits = bits

    @property
    def shape(self) -> Shape:
        return Shape(self.bits, 1)

    @property
    def limbs(self) -> Tuple[int]:
        return (self.value,)

    def _new(self, value: int) -> Word:
        return Word(value & ((1 << self.bits) - 1), self.bits)

    def _compatible(self, other) -> bool:
        return isinstance(other, Word) and other.bits == self.bits

    def __invert__(self) -> Word:
        return self._new(~self.value)

    def __and__(self, other):
        if not self._compatible(other):
            return NotImplemented
        return Word(self.value & other.value, self.bits)

    def __or__(self, other):
        if not self._compatible(other):
            return NotImplemented
        return Word(self.value | other.value, self.bits)

    def __xor__(self, other):
        if not self._compatible(other):
            return NotImplemented
        return Word(self.value ^ other.value, self.bits)

    def __add__(self, other):
        if not self._compatible(other):
            return NotImplemented
        return self._new(self.value + other.value)

    def __sub__(self, other):
        if not self._compatible(other):
            return NotImplemented
        return self._new(self.value - other.value)

    def __lshift__(self, shift: int) -> Word:
        if shift < 0:
            raise ValueError("negative shift count")
        return self._new(self.value << shift)

    def __rshift__(self, shift: int) -> Word:
        if shift < 0:
            raise ValueError("negative shift count")
        return Word(self.value >> shift, self.bits)

    def rotl(self, shift: int) -> Word:
        shift %= self.bits
        if shift == 0:
            return self
        return (self << shift) | (self >> (self.bits - shift))

    def rotr(self, shift: int) -> Word:
        return self.rotl(self.bits - shift % self.bits)

    def __eq__(self, other):
        if not isinstance(other, Word):
            return NotImplemented
        return self.bits == other.bits and self.value == other.value

    def __hash__(self):
        return hash((Word, self.bits, self.value))

    def __bool__(self):
        return self.value != 0

    def __int__(self):
        return self.value

    def __format__(self, spec: str) -> str:
        return format(self.value, spec)

    def to_le_bytes(self) -> bytes:
        return self.value.to_bytes((self.bits + 7) // 8, "little")

    def __repr__(self):
        return f"Word({self.value:#x}, bits={self.bits})"


class Ux4:
    """Four equal-width limbs read as one unsigned integer.

    Limb 0 holds the least significant bits, so the rate of a sponge state
    (its low bits) sits in the first limbs and is the tail of the hex form.
    Every operation matches arithmetic on a single 4N-bit integer.
    """
    __slots__ = ("_limbs", "limb_bits")

    def __init__(self, limbs: Iterable[int], limb_bits: int = 64):
        limbs = tuple(limbs)
        if len(limbs) != 4:
            raise ValueError(f"Ux4 needs exactly 4 limbs, got {len(limbs)}")
        top = 1 << limb_bits
        for limb in limbs:
            if not 0 <= limb < top:
                raise ValueError(f"limb {limb:#x} does not fit in {limb_bits} bits")
        self._limbs = limbs
        self.limb_bits = limb_bits

    @property
    def limbs(self) -> Tuple[int, int, int, int]:
        return self._limbs

    @property
    def shape(self) -> Shape:
        return Shape(self.limb_bits, 4)

    @property
    def _lmask(self) -> int:
        return (1 << self.limb_bits) - 1

    def _compatible(self, other) -> bool:
        return isinstance(other, Ux4) and other.limb_bits == self.limb_bits

    def _new(self, limbs) -> Ux4:
        return Ux4(limbs, self.limb_bits)

    def __invert__(self) -> Ux4:
        m = self._lmask
        return self._new(~x & m for x in self._limbs)

    def __and__(self, other):
        if not self._compatible(other):
            return NotImplemented
        return self._new(a & b for a, b in zip(self._limbs, other._limbs))

    def __or__(self, other):
        if not self._compatible(other):
            return NotImplemented
        return self._new(a | b for a, b in zip(self._limbs, other._limbs))

    def __xor__(self, other):
        if not self._compatible(other):
            return NotImplemented
        return self._new(a ^ b for a, b in zip(self._limbs, other._limbs))

    def __lshift__(self, shift: int) -> Ux4:
        if shift < 0:
            raise ValueError("negative shift count")
        n, m = self.limb_bits, self._lmask
        if shift >= 4 * n:
            return self._new([0] * 4)
        q, s = divmod(shift, n)
        out = [0] * 4
        for i in range(q, 4):
            src = self._limbs[i - q]
            carried = self._limbs[i - q - 1] >> (n - s) if i - q > 0 else 0
            out[i] = ((src << s) | carried) & m
        return self._new(out)

    def __rshift__(self, shift: int) -> Ux4:
        if shift < 0:
            raise ValueError("negative shift count")
        n, m = self.limb_bits, self._lmask
        if shift >= 4 * n:
            return self._new([0] * 4)
        q, s = divmod(shift, n)
        out = [0] * 4
        for i in range(0, 4 - q):
            src = self._limbs[i + q]
            carried = self._limbs[i + q + 1] << (n - s) if i + q + 1 < 4 else 0
            out[i] = ((src >> s) | carried) & m
        return self._new(out)

    def rotl(self, shift: int) -> Ux4:
        width = 4 * self.limb_bits
        shift %= width
        if shift == 0:
            return self
        return (self << shift) | (self >> (width - shift))

    def rotr(self, shift: int) -> Ux4:
        width = 4 * self.limb_bits
        return self.rotl(width - shift % width)

    def __add__(self, other):
        if not self._compatible(other):
            return NotImplemented
        n, m = self.limb_bits, self._lmask
        out, carry = [], 0
        for a, b in zip(self._limbs, other._limbs):
            total = a + b + carry
            out.append(total & m)
            carry = total >> n
        # the carry out of limb 3 is dropped: arithmetic is modulo 2**(4N)
        return self._new(out)

    def __sub__(self, other):
        if not self._compatible(other):
            return NotImplemented
        return self + (~other + self._new([1, 0, 0, 0]))

    def __eq__(self, other):
        if not isinstance(other, Ux4):
            return NotImplemented
        return self.limb_bits == other.limb_bits and all(
            a == b for a, b in zip(self._limbs, other._limbs))

    def __hash__(self):
        return hash((Ux4, self.limb_bits, self._limbs))

    def __bool__(self):
        return any(self._limbs)

    def __int__(self):
        return sum(limb << (self.limb_bits * i) for i, limb in enumerate(self._limbs))

    def __format__(self, spec: str) -> str:
        return format(int(self), spec)

    def to_le_bytes(self) -> bytes:
        return int(self).to_bytes((4 * self.limb_bits + 7) // 8, "little")

    def __repr__(self):
        return "Ux4([{}], limb_bits={})".format(
            ", ".join(f"{x:#x}" for x in self._limbs), self.limb_bits)


State = Union[Word, Ux4]

WORD_64 = Shape(64, 1)
UX4_32 = Shape(32, 4)
UX4_64 = Shape(64, 4)
