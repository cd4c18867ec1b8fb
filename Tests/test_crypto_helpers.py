import random
import pytest

from SpongeTools.crypto.crypto_helpers import (decrypt_envelope, encrypt_bytes, fresh_nonce,
                                               make_cipher, NONCE_BYTES)
from SpongeTools.stream.asakey import Asakey
from SpongeTools.stream.dss import DSS
from SpongeTools.utilities.errors import InvalidDomainValueError

KEY = bytes(range(1, 33))


@pytest.mark.parametrize("cipher", ["asakey", "dss"])
@pytest.mark.parametrize("message", [b"", b"x", b"Hello, world!", bytes(range(256)) * 2])
def test_envelope_roundtrip(cipher, message):
    env = encrypt_bytes(KEY, message, cipher=cipher, rate=24, key_bits=32, rounds=1,
                        rng=random.Random(len(message)))
    assert env["cipher"] == cipher
    assert len(bytes.fromhex(env["nonce_hex"])) == NONCE_BYTES
    assert decrypt_envelope(KEY, env) == message


def test_envelope_records_parameters():
    env = encrypt_bytes(KEY, b"abc", rate=40, key_bits=16, rounds=2, rng=random.Random(1))
    assert (env["rate"], env["key_bits"], env["rounds"]) == (40, 16, 2)


def test_wrong_key_does_not_decrypt():
    env = encrypt_bytes(KEY, b"attack at dawn", rounds=1, rng=random.Random(2))
    assert decrypt_envelope(bytes(reversed(KEY)), env) != b"attack at dawn"


def test_fresh_nonce_skips_zero():
    class Stuck:
        def __init__(self):
            self.calls = 0

        def getrandbits(self, k):
            self.calls += 1
            return 0 if self.calls == 1 else 7

    assert fresh_nonce(Stuck()) == (7).to_bytes(NONCE_BYTES, "little")


def test_make_cipher():
    assert isinstance(make_cipher("asakey", rounds=1), Asakey)
    assert isinstance(make_cipher("dss", rounds=1), DSS)
    with pytest.raises(ValueError):
        make_cipher("rc4")


def test_bad_envelopes():
    env = encrypt_bytes(KEY, b"abc", rounds=1, rng=random.Random(3))
    with pytest.raises(ValueError):
        decrypt_envelope(KEY, env | {"nonce_hex": "zz"})
    with pytest.raises(ValueError):
        decrypt_envelope(KEY, env | {"ciphertext_b64": "!!!"})
    with pytest.raises(InvalidDomainValueError):
        encrypt_bytes(b"\x00" * 32, b"abc", rounds=1)
