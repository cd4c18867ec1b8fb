import os, base64
from typing import Optional

from ..permutations.siphash import SipHashPermutation
from ..stream.asakey import Asakey
from ..stream.dss import DSS
from ..utilities.randomness import RandomSource, default_rng
from ..utilities.ustates import UX4_64

DEFAULT_CIPHER = os.getenv("SPONGE_CIPHER", "asakey")
DEFAULT_RATE = int(os.getenv("SPONGE_RATE", "32"))
DEFAULT_KEY_BITS = int(os.getenv("SPONGE_KEY_BITS", "128"))
DEFAULT_ROUNDS = int(os.getenv("SPONGE_ROUNDS", "4"))

STATE_BITS = UX4_64.width
KEY_BYTES = UX4_64.byte_width
NONCE_BYTES = UX4_64.byte_width

CIPHERS = {"asakey": Asakey, "dss": DSS}

def make_cipher(name: str = DEFAULT_CIPHER,
                rate: int = DEFAULT_RATE,
                key_bits: int = DEFAULT_KEY_BITS,
                rounds: int = DEFAULT_ROUNDS):
    try:
        cls = CIPHERS[name]
    except KeyError:
        raise ValueError(f"unknown cipher {name!r} (expected one of {sorted(CIPHERS)})") from None
    return cls(STATE_BITS, rate, key_bits, SipHashPermutation(rounds=rounds), UX4_64)

def fresh_nonce(rng: RandomSource) -> bytes:
    while True:
        nonce = rng.getrandbits(8 * NONCE_BYTES).to_bytes(NONCE_BYTES, "little")
        if any(nonce):
            return nonce

def encrypt_bytes(key: bytes, plaintext: bytes,
                  cipher: str = DEFAULT_CIPHER,
                  rate: int = DEFAULT_RATE,
                  key_bits: int = DEFAULT_KEY_BITS,
                  rounds: int = DEFAULT_ROUNDS,
                  rng: Optional[RandomSource] = None) -> dict:

    nonce = fresh_nonce(rng or default_rng())
    stream = make_cipher(cipher, rate, key_bits, rounds)
    ciphertext = stream.encrypt(UX4_64.from_bytes(key), UX4_64.from_bytes(nonce), plaintext)

    return {
        "cipher": cipher,
        "nonce_hex": nonce.hex(),
        "ciphertext_b64": base64.b64encode(ciphertext).decode("ascii"),
        "rate": rate,
        "key_bits": key_bits,
        "rounds": rounds,
    }

def decrypt_envelope(key: bytes, env: dict) -> bytes:
    """Decrypt an envelope (dict with cipher parameters, nonce and ciphertext)."""
    nonce = bytes.fromhex(env["nonce_hex"])
    ciphertext = base64.b64decode(env["ciphertext_b64"], validate=True)
    stream = make_cipher(env.get("cipher", DEFAULT_CIPHER),
                         env.get("rate", DEFAULT_RATE),
                         env.get("key_bits", DEFAULT_KEY_BITS),
                         env.get("rounds", DEFAULT_ROUNDS))
    return stream.decrypt(UX4_64.from_bytes(key), UX4_64.from_bytes(nonce), ciphertext)
