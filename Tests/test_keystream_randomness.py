import os, math, random
from collections import Counter
import numpy as np
import pytest

from SpongeTools.permutations.siphash import SipHashPermutation
from SpongeTools.stream.asakey import Asakey
from SpongeTools.stream.dss import DSS
from SpongeTools.utilities.ustates import UX4_64

ROUNDS = int(os.getenv("SPONGE_ROUNDS", "4"))
SIZE = 4096

def keystream(cls, seed: int, nbytes: int = SIZE) -> bytes:
    rng = random.Random(seed)
    c = cls(256, 64, 32, SipHashPermutation(rounds=ROUNDS), UX4_64)
    c.rekey(UX4_64.random(rng) | UX4_64.one())
    c.init(UX4_64.random(rng) | UX4_64.one())
    return c.next_bytes(nbytes)

def shannon_entropy(data: bytes) -> float:
    N = len(data); c = Counter(data); return -sum((v/N) * math.log2(v/N) for v in c.values())

def monobit_fraction(data: bytes) -> float:
    bits = np.unpackbits(np.frombuffer(data, dtype=np.uint8)); return float(bits.mean())

def chi_square_uniform(data: bytes) -> float:
    N = len(data); counts = np.bincount(np.frombuffer(data, dtype=np.uint8), minlength=256)
    expected = N / 256.0; return float(((counts - expected) ** 2 / expected).sum())

@pytest.mark.parametrize("cls", [Asakey, DSS])
def test_keystream_statistics(cls):
    data = keystream(cls, seed=12)
    assert len(data) == SIZE
    assert shannon_entropy(data) > 7.9
    assert 0.47 < monobit_fraction(data) < 0.53
    # df = 255; 400 is far in the tail for a uniform source
    assert chi_square_uniform(data) < 400

@pytest.mark.parametrize("cls", [Asakey, DSS])
def test_keystream_has_no_short_period(cls):
    data = keystream(cls, seed=13, nbytes=1024)
    blocks = [data[i:i+8] for i in range(0, len(data), 8)]
    assert len(set(blocks)) == len(blocks)
