# sponge_tools_cli.py
# Demonstrations for the duplex, the Asakey / DSS stream ciphers and the sponge PRNG
from __future__ import annotations
import argparse, binascii, logging, random, time
from typing import List, Optional

from SpongeTools.construction.duplex import Duplex
from SpongeTools.permutations.base import RotationPermutation
from SpongeTools.permutations.siphash import SipHashPermutation
from SpongeTools.prng.sprng import SPRNG
from SpongeTools.stream.asakey import Asakey
from SpongeTools.stream.dss import DSS
from SpongeTools.utilities.errors import SpongeError
from SpongeTools.utilities.randomness import default_rng
from SpongeTools.utilities.ustates import UX4_64, WORD_64, Shape, State

BANNER = "\n################\n# Sponge Tools #\n################\n"

def parse_hex_or_ascii(s: str, expected_len: int) -> bytes:
    s = s.strip()
    try:
        if s.startswith("0x") or all(c in "0123456789abcdefABCDEF" for c in s):
            b = binascii.unhexlify(s[2:] if s.startswith("0x") else s)
        else:
            b = s.encode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise argparse.ArgumentTypeError(f"Bad key/nonce: {e}")
    if len(b) < expected_len: b = b + b"\x00"*(expected_len - len(b))
    return b[:expected_len]

def domain_value(s: Optional[str], shape: Shape, rng) -> State:
    """Parse a key/nonce argument, or draw a random non-zero one."""
    if s is None:
        value = shape.zero()
        while value == shape.zero():
            value = shape.random(rng)
        return value
    return shape.from_bytes(parse_hex_or_ascii(s, shape.byte_width))

def select_shape(name: str) -> Shape:
    return {"ux4": UX4_64, "word": WORD_64}[name]

def select_perm(args, shape: Shape):
    if shape.limbs == 1 or args.rotation is not None:
        return RotationPermutation(args.rotation if args.rotation is not None else 17)
    return SipHashPermutation(rounds=args.rounds)

def run_stream(args, rng) -> None:
    shape = select_shape(args.shape)
    cls = Asakey if args.command == "asakey" else DSS
    tag = f"[{args.command}]"
    stream = cls(args.b, args.r, args.k, select_perm(args, shape), shape)
    print(f"{tag} parameters: b={stream.b} r={stream.r} c={stream.c} k={stream.k}")

    key = domain_value(args.key, shape, rng)
    nonce = domain_value(args.nonce, shape, rng)
    print(f"{tag} key:   {key:x}")
    print(f"{tag} nonce: {nonce:x}\n")

    stream.rekey(key)
    stream.init(nonce)
    for i in range(args.blocks):
        print(f"{tag} round {i}, output: {stream.next().hex()}")

    plaintext = args.message.encode("utf-8")
    ciphertext = stream.encrypt(key, nonce, plaintext)
    decrypted = stream.decrypt(key, nonce, ciphertext)
    print(f"\n{tag} plaintext:  {args.message!r}")
    print(f"{tag} ciphertext: {ciphertext.hex()}")
    print(f"{tag} decrypted:  {decrypted.decode('utf-8', 'replace')!r}")

def run_duplex(args, rng) -> None:
    shape = select_shape(args.shape)
    duplex = Duplex(args.b, args.r, args.k, args.u, args.alpha, select_perm(args, shape), shape, rng)
    print(f"[duplex] parameters: b={duplex.b} r={duplex.r} k={duplex.k} u={duplex.u} alpha={duplex.alpha}")
    digits = (args.r + 3) // 4
    for delta in range(args.sessions):
        duplex.reset(delta)
        outputs = [duplex.duplex(not args.xor, shape.random(rng)) for _ in range(args.calls)]
        print(f"[duplex] session {delta}: " + "".join(format(o, f"0{digits}x") for o in outputs))

def run_prng(args, rng) -> None:
    shape = select_shape(args.shape)
    sprng = SPRNG(args.b, args.r, args.t, args.s, select_perm(args, shape), shape, rng)
    print(f"[prng] parameters: n={sprng.n} r={sprng.r} t={sprng.t} s={sprng.s}")
    for i in range(args.batches):
        sprng.refresh([shape.random(rng) & sprng.mask for _ in range(args.inputs)])
        outputs: List[bytes] = [sprng.next_bytes() for _ in range(args.calls)]
        print(f"[prng] output {i}: 0x" + "".join(o[::-1].hex() for o in outputs))

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Permutation-based duplex, stream ciphers and sponge PRNG")
    p.add_argument("--shape", choices=["ux4", "word"], default="ux4",
                   help="State word: 4x64-bit limbs (default) or a single 64-bit word")
    p.add_argument("--rounds", type=int, default=4, help="SipHash rounds per permutation call (default 4)")
    p.add_argument("--rotation", type=int, default=None,
                   help="Use a plain rotation by this many bits as the permutation")
    p.add_argument("--seed", type=int, default=None, help="Seed the randomness for reproducible runs")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    for name in ("asakey", "dss"):
        s = sub.add_parser(name, help=f"{name} stream cipher demo")
        s.add_argument("-b", type=int, default=256, help="State size in bits (default 256)")
        s.add_argument("-r", type=int, default=32, help="Rate in bits (default 32)")
        s.add_argument("-k", type=int, default=32, help="Key size in bits (default 32)")
        s.add_argument("--key", help="Key (hex or ASCII); random when omitted")
        s.add_argument("--nonce", help="Nonce (hex or ASCII); random when omitted")
        s.add_argument("--blocks", type=int, default=4, help="Keystream blocks to print (default 4)")
        s.add_argument("--message", default="Hello, world!", help="Message to encrypt")

    d = sub.add_parser("duplex", help="keyed duplex demo")
    d.add_argument("-b", type=int, default=256)
    d.add_argument("-r", type=int, default=32)
    d.add_argument("-k", type=int, default=32)
    d.add_argument("-u", type=int, default=3, help="Number of keys (default 3)")
    d.add_argument("--alpha", type=int, default=17, help="Rotation applied at reset (default 17)")
    d.add_argument("--sessions", type=int, default=3)
    d.add_argument("--calls", type=int, default=16)
    d.add_argument("--xor", action="store_true", help="XOR inputs onto the rate instead of overwriting it")

    g = sub.add_parser("prng", help="sponge PRNG demo")
    g.add_argument("-b", type=int, default=256, help="State size n in bits (default 256)")
    g.add_argument("-r", type=int, default=64)
    g.add_argument("-t", type=int, default=2, help="Permutation calls per output (default 2)")
    g.add_argument("-s", type=int, default=4, help="Seed length (default 4)")
    g.add_argument("--batches", type=int, default=4)
    g.add_argument("--inputs", type=int, default=8)
    g.add_argument("--calls", type=int, default=4)
    return p

COMMANDS = {"asakey": run_stream, "dss": run_stream, "duplex": run_duplex, "prng": run_prng}

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    rng = random.Random(args.seed) if args.seed is not None else default_rng()

    print(BANNER)
    start = time.perf_counter()
    try:
        COMMANDS[args.command](args, rng)
    except SpongeError as e:
        print(f"[error] {e}")
        return 2
    print(f"\n-> Total execution time: {time.perf_counter() - start:.2f}s")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
