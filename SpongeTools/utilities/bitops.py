# bitops.py
# Bit-level helpers: limb rotation and LSB-first bit packing
from __future__ import annotations
import numpy as np


def rotl(value: int, shift: int, bits: int) -> int:
    """Rotate a `bits`-wide integer left by `shift`."""
    shift %= bits
    m = (1 << bits) - 1
    return ((value << shift) | (value >> (bits - shift))) & m


def bytes_needed(nbits: int) -> int:
    return (nbits + 7) // 8


def bytes_to_bits(data: bytes) -> np.ndarray:
    """Unpack bytes into a 0/1 array, least significant bit of each byte first."""
    return np.unpackbits(np.frombuffer(data, dtype=np.uint8), bitorder="little")


def bits_to_bytes(bits: np.ndarray) -> bytes:
    """Inverse of `bytes_to_bits`; a trailing partial byte is zero padded at the top."""
    return np.packbits(np.asarray(bits, dtype=np.uint8), bitorder="little").tobytes()


def xor_bytes(a: bytes, b: bytes) -> bytes:
    if len(a) != len(b):
        raise ValueError(f"length mismatch: {len(a)} != {len(b)}")
    x = np.frombuffer(a, dtype=np.uint8) ^ np.frombuffer(b, dtype=np.uint8)
    return x.tobytes()
