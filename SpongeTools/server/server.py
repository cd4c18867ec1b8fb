import os, base64, threading
from typing import Optional
from fastapi import FastAPI, Form, HTTPException, Query
from pydantic import BaseModel
from ..crypto.crypto_helpers import (encrypt_bytes, decrypt_envelope, DEFAULT_CIPHER, DEFAULT_RATE,
                                     DEFAULT_KEY_BITS, DEFAULT_ROUNDS, KEY_BYTES)
from ..permutations.siphash import SipHashPermutation
from ..prng.sprng import SPRNG
from ..utilities.errors import SpongeError
from ..utilities.randomness import default_rng
from ..utilities.ustates import UX4_64

app = FastAPI(title="SpongeTools demo service")

KEY_DIR = os.path.join(os.path.dirname(__file__), "..", "keys")
KEY_PATH = os.path.abspath(os.getenv("SPONGE_KEY_PATH", os.path.join(KEY_DIR, "shared_key.bin")))

def load_or_create_key(path: str = KEY_PATH) -> bytes:
    if not os.path.exists(path):
        os.makedirs(os.path.dirname(path), exist_ok=True)
        key = b"\x00"
        while not any(key):
            key = os.urandom(KEY_BYTES)
        with open(path, "wb") as f:
            f.write(key)
    with open(path, "rb") as f:
        return f.read()

SHARED_KEY = load_or_create_key()

PRNG_RATE = 64
PRNG = SPRNG(UX4_64.width, PRNG_RATE, 2, 4, SipHashPermutation(rounds=DEFAULT_ROUNDS), UX4_64)
PRNG_LOCK = threading.Lock()

class Envelope(BaseModel):
    cipher: str = DEFAULT_CIPHER
    nonce_hex: str
    ciphertext_b64: str
    rate: int = DEFAULT_RATE
    key_bits: int = DEFAULT_KEY_BITS
    rounds: int = DEFAULT_ROUNDS
    content_type: Optional[str] = None

@app.post("/encrypt")
def encrypt_text(text: str = Form(...), cipher: str = Form(DEFAULT_CIPHER)):
    try:
        env = encrypt_bytes(SHARED_KEY, text.encode("utf-8"), cipher=cipher)
    except (SpongeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return env | {"content_type": "text/plain; charset=utf-8"}

@app.post("/decrypt")
def decrypt(env: Envelope):
    try:
        pt = decrypt_envelope(SHARED_KEY, env.model_dump())
    except (SpongeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"plaintext_b64": base64.b64encode(pt).decode("ascii"), "length": len(pt)}

@app.get("/prng/next")
def prng_next(count: int = Query(1, ge=1, le=64), refresh: bool = False):
    with PRNG_LOCK:
        if refresh:
            PRNG.refresh([UX4_64.random(default_rng()) for _ in range(4)])
        outputs = [PRNG.next_bytes().hex() for _ in range(count)]
    return {"rate": PRNG_RATE, "outputs": outputs}
