"""secp256k1 key pairs and version 3 keystore wallet files."""

from __future__ import annotations

import hashlib
import hmac
import json
import os
import uuid
from dataclasses import dataclass, field
from typing import Any

from Crypto.Cipher import AES
from Crypto.Hash import keccak
from Crypto.Protocol.KDF import scrypt
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

SCRYPT_N = 262144
SCRYPT_R = 8
SCRYPT_P = 1
_DKLEN = 32
_CIPHER = "aes-128-ctr"
_CURVE_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


def _keccak256(data: bytes) -> bytes:
    digest = keccak.new(digest_bits=256)
    digest.update(data)
    return digest.digest()


@dataclass(frozen=True)
class KeyPair:
    """A secp256k1 private key with its public key and Ethereum address."""

    private_key: bytes = field(repr=False)
    public_key: bytes = field(init=False, repr=False)
    address: str = field(init=False)

    def __post_init__(self) -> None:
        key = bytes(self.private_key)
        if len(key) != 32:
            raise ValueError("private key must be 32 bytes")
        value = int.from_bytes(key, "big")
        if not 0 < value < _CURVE_ORDER:
            raise ValueError("private key is out of range for secp256k1")
        private = ec.derive_private_key(value, ec.SECP256K1())
        point = private.public_key().public_bytes(Encoding.X962, PublicFormat.UncompressedPoint)[1:]
        object.__setattr__(self, "private_key", key)
        object.__setattr__(self, "public_key", point)
        object.__setattr__(self, "address", "0x" + _keccak256(point)[-20:].hex())


def generate_key_pair() -> KeyPair:
    """Generate a new random key pair."""
    private = ec.generate_private_key(ec.SECP256K1())
    return KeyPair(private.private_numbers().private_value.to_bytes(32, "big"))


def _as_bytes(password) -> bytes:
    return password.encode("utf-8") if isinstance(password, str) else bytes(password)


def encrypt_keystore(password, key_pair) -> dict[str, Any]:
    """Encrypt a key pair into a version 3 keystore document using scrypt."""
    salt = os.urandom(32)
    iv = os.urandom(16)
    derived = scrypt(_as_bytes(password), salt, _DKLEN, N=SCRYPT_N, r=SCRYPT_R, p=SCRYPT_P)
    cipher = AES.new(derived[:16], AES.MODE_CTR, nonce=b"", initial_value=iv)
    ciphertext = cipher.encrypt(key_pair.private_key)
    mac = _keccak256(derived[16:32] + ciphertext)
    return {
        "address": key_pair.address[2:],
        "id": str(uuid.uuid4()),
        "version": 3,
        "crypto": {
            "cipher": _CIPHER,
            "ciphertext": ciphertext.hex(),
            "cipherparams": {"iv": iv.hex()},
            "kdf": "scrypt",
            "kdfparams": {
                "dklen": _DKLEN,
                "n": SCRYPT_N,
                "p": SCRYPT_P,
                "r": SCRYPT_R,
                "salt": salt.hex(),
            },
            "mac": mac.hex(),
        },
    }


def _derive_key(password: bytes, kdf: str, params: dict[str, Any]) -> bytes:
    salt = bytes.fromhex(params["salt"])
    dklen = int(params["dklen"])
    if kdf == "scrypt":
        return scrypt(password, salt, dklen, N=int(params["n"]), r=int(params["r"]), p=int(params["p"]))
    if kdf == "pbkdf2":
        if params.get("prf", "hmac-sha256") != "hmac-sha256":
            raise ValueError(f"unsupported pbkdf2 prf: {params.get('prf')}")
        return hashlib.pbkdf2_hmac("sha256", password, salt, int(params["c"]), dklen)
    raise ValueError(f"unsupported kdf: {kdf}")


def decrypt_keystore(password, keystore) -> KeyPair:
    """Recover the key pair from a version 3 keystore document or its JSON text."""
    if isinstance(keystore, (str, bytes, bytearray)):
        keystore = json.loads(keystore)
    try:
        crypto = keystore.get("crypto") or keystore["Crypto"]
        if crypto["cipher"] != _CIPHER:
            raise ValueError(f"unsupported cipher: {crypto['cipher']}")
        derived = _derive_key(_as_bytes(password), crypto["kdf"], crypto["kdfparams"])
        ciphertext = bytes.fromhex(crypto["ciphertext"])
        iv = bytes.fromhex(crypto["cipherparams"]["iv"])
        expected_mac = bytes.fromhex(crypto["mac"])
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"malformed keystore: {exc}") from exc
    if not hmac.compare_digest(_keccak256(derived[16:32] + ciphertext), expected_mac):
        raise ValueError("invalid password")
    cipher = AES.new(derived[:16], AES.MODE_CTR, nonce=b"", initial_value=iv)
    return KeyPair(cipher.decrypt(ciphertext))


def create_wallet_file(output_directory, prefix, password) -> tuple[KeyPair, str]:
    """Generate a key pair and write it as an encrypted wallet file.

    The file is named after the address, optionally preceded by ``prefix_``.
    Returns the key pair and the path of the written file.
    """
    key_pair = generate_key_pair()
    keystore = encrypt_keystore(password, key_pair)
    output_directory = os.fspath(output_directory)
    os.makedirs(output_directory, exist_ok=True)
    basename = f"{prefix}_{key_pair.address[2:]}" if prefix else key_pair.address[2:]
    filename = os.path.join(output_directory, basename)
    with open(filename, "w", encoding="utf-8") as handle:
        json.dump(keystore, handle)
    return key_pair, filename