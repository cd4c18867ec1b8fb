import sys, base64, requests

def encrypt_remote(server: str, message: str, cipher: str = "asakey") -> dict:
    r = requests.post(f"{server}/encrypt", data={"text": message, "cipher": cipher}, timeout=10)
    r.raise_for_status()
    return r.json()

def decrypt_remote(server: str, env: dict) -> str:
    r = requests.post(f"{server}/decrypt", json=env, timeout=10)
    r.raise_for_status()
    return base64.b64decode(r.json()["plaintext_b64"]).decode("utf-8", "replace")

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) < 2:
        print("Usage: python3 -m SpongeTools.client.send_text <server_base_url> <message...>")
        sys.exit(1)

    server = argv[0].rstrip("/")
    message = " ".join(argv[1:])

    env = encrypt_remote(server, message)
    print(f"[{env['cipher']}] nonce={env['nonce_hex']} ciphertext={env['ciphertext_b64']}")
    print(f"[{env['cipher']}] decrypted: {decrypt_remote(server, env)}")

if __name__ == "__main__":
    main()
