import random
import pytest

from SpongeTools.permutations.base import RotationPermutation
from SpongeTools.permutations.siphash import SipHashPermutation
from SpongeTools.prng.base import PRNG
from SpongeTools.prng.sprng import SPRNG
from SpongeTools.utilities.bitops import rotl
from SpongeTools.utilities.errors import EmptyInputError, ParameterError
from SpongeTools.utilities.ustates import Word, WORD_64, UX4_64

N, R, T, S, ROT = 64, 8, 3, 3, 3
M64 = (1 << 64) - 1
RATE = 0xFF


def make_prng(seed=21, t=T):
    return SPRNG(N, R, t, S, RotationPermutation(ROT), WORD_64, random.Random(seed))


def reference_setup(seed=21):
    ref = random.Random(seed)
    seeds = [ref.getrandbits(64) & RATE for _ in range(S)]
    state = ref.getrandbits(64) & ~RATE & M64
    return seeds, state


def test_setup_zero_rate_random_capacity():
    p = make_prng()
    seeds, state = reference_setup()
    assert [int(x) for x in p.seed] == seeds
    assert int(p.state) == state
    assert p.j == 1
    assert isinstance(p, PRNG)


def test_refresh_whitens_inputs_with_the_seed_cycle():
    p = make_prng()
    seeds, state = reference_setup()
    inputs = [0x11, 0x22, 0x33, 0x44]
    p.refresh([Word(x) for x in inputs])

    j = 1
    for x in inputs:
        state = rotl(state ^ ((x ^ seeds[j]) & RATE), ROT, N)
        j = (j + 1) % S
    assert int(p.state) == state
    assert p.j == j


def test_next_truncates_rate_between_permutations():
    p = make_prng()
    p.refresh([Word(0x5A)])

    state = int(p.state)
    out = p.next()
    state = rotl(state, ROT, N)
    assert int(out) == state & RATE
    for _ in range(T - 1):
        state = rotl(state & ~RATE & M64, ROT, N)
    assert int(p.state) == state
    assert p.j == 1


def test_single_round_next_leaves_rate_in_place():
    p = make_prng(t=1)
    before = int(p.state)
    out = p.next()
    assert int(p.state) == rotl(before, ROT, N)
    assert int(out) == int(p.state) & RATE


def test_refresh_requires_inputs():
    with pytest.raises(EmptyInputError):
        make_prng().refresh([])


def test_identical_seeds_give_identical_streams():
    batches = [[UX4_64.random(random.Random(i * 10 + j)) for j in range(5)] for i in range(4)]

    def run():
        p = SPRNG(256, 64, 2, 4, SipHashPermutation(), UX4_64, random.Random(77))
        out = []
        for batch in batches:
            p.refresh(batch)
            out.extend(p.next() for _ in range(3))
        return out

    first, second = run(), run()
    assert first == second
    assert len(set(first)) == len(first)


def test_next_bytes_length():
    p = SPRNG(256, 12, 2, 2, SipHashPermutation(), UX4_64, random.Random(1))
    block = p.next_bytes()
    assert len(block) == 2
    assert block[1] & 0xF0 == 0


@pytest.mark.parametrize("n, r, t, s", [
    (64, 0, 1, 2),
    (64, 65, 1, 2),
    (64, 8, 0, 2),
    (64, 8, 1, 1),
    (64, 8, 1, 0),
    (128, 8, 1, 2),
])
def test_invalid_parameters(n, r, t, s):
    with pytest.raises(ParameterError):
        SPRNG(n, r, t, s, RotationPermutation(1), WORD_64, random.Random(0))
