"""
Address Book Keys

The 32-byte key value type shared by every other module, its canonical base58
text form, Ed25519 keypairs for holder accounts, and the well-known
executable addresses a fresh registry starts with.

A Key is opaque: equality and hashing are byte-exact and nothing here
interprets the bytes beyond encoding them.

Copyright (c) 2026 Momentum. All rights reserved.
Contact: engineering@momentum.inc
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from typing import Union

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from addressbook.errors import InvalidKeyError


KEY_LENGTH = 32


# Base58 implementation (no external deps)
B58_ALPHABET = b"123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
B58_MAP = {c: i for i, c in enumerate(B58_ALPHABET)}


def b58decode(s: Union[str, bytes]) -> bytes:
    if isinstance(s, str):
        s_bytes = s.encode("ascii")
    else:
        s_bytes = s
    num = 0
    for c in s_bytes:
        if c not in B58_MAP:
            raise ValueError("Invalid base58 character")
        num = num * 58 + B58_MAP[c]
    # Count leading zeros
    n_pad = 0
    for c in s_bytes:
        if c == B58_ALPHABET[0]:
            n_pad += 1
        else:
            break
    full = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
    return b"\x00" * n_pad + full


def b58encode(b: bytes) -> str:
    # Count leading zeros
    n_pad = 0
    for c in b:
        if c == 0:
            n_pad += 1
        else:
            break
    num = int.from_bytes(b, "big")
    out = bytearray()
    while num > 0:
        num, rem = divmod(num, 58)
        out.append(B58_ALPHABET[rem])
    out.extend(B58_ALPHABET[0] for _ in range(n_pad))
    out.reverse()
    return out.decode("ascii")


# =============================================================================
# KEY
# =============================================================================

_unique_counter = itertools.count(1)
_unique_lock = threading.Lock()


@dataclass(frozen=True)
class Key:
    """
    32-byte public key identifier.

    The canonical text form is base58; str(key) returns it and
    Key.from_string() parses it back.
    """
    data: bytes

    def __post_init__(self):
        if isinstance(self.data, (bytearray, memoryview)):
            object.__setattr__(self, "data", bytes(self.data))
        if not isinstance(self.data, bytes):
            raise InvalidKeyError(
                f"Key requires bytes, got {type(self.data).__name__}", self.data
            )
        if len(self.data) != KEY_LENGTH:
            raise InvalidKeyError(
                f"Key must be {KEY_LENGTH} bytes, got {len(self.data)}", self.data
            )

    @classmethod
    def from_string(cls, text: str) -> "Key":
        """Parse a base58 key."""
        try:
            raw = b58decode(text)
        except ValueError as e:
            raise InvalidKeyError(f"Invalid base58 key '{text}': {e}", text) from e
        if len(raw) != KEY_LENGTH:
            raise InvalidKeyError(
                f"Invalid key '{text}': decodes to {len(raw)} bytes", text
            )
        return cls(raw)

    @classmethod
    def default(cls) -> "Key":
        return cls(bytes(KEY_LENGTH))

    @classmethod
    def unique(cls) -> "Key":
        """
        Process-unique key for tests.

        The first eight bytes hold a big-endian counter; the rest are zero.
        """
        with _unique_lock:
            n = next(_unique_counter)
        return cls(n.to_bytes(8, "big") + bytes(KEY_LENGTH - 8))

    def to_bytes(self) -> bytes:
        return self.data

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return b58encode(self.data)

    def __repr__(self) -> str:
        return f"Key('{self}')"


# =============================================================================
# KEYPAIR
# =============================================================================

class Keypair:
    """Ed25519 signing keypair whose public half is a Key."""

    def __init__(self, private_key: Ed25519PrivateKey):
        self._private_key = private_key
        pub_bytes = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        self._pubkey = Key(pub_bytes)

    @classmethod
    def generate(cls) -> "Keypair":
        return cls(Ed25519PrivateKey.generate())

    @classmethod
    def from_seed(cls, seed: bytes) -> "Keypair":
        """Deterministic keypair from a 32-byte secret seed."""
        if len(seed) != KEY_LENGTH:
            raise InvalidKeyError(
                f"Keypair seed must be {KEY_LENGTH} bytes, got {len(seed)}", seed
            )
        return cls(Ed25519PrivateKey.from_private_bytes(bytes(seed)))

    def pubkey(self) -> Key:
        return self._pubkey

    def secret_bytes(self) -> bytes:
        return self._private_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def to_bytes(self) -> bytes:
        """64-byte secret-then-public encoding used by ledger keypair files."""
        return self.secret_bytes() + bytes(self._pubkey)

    def sign(self, message: bytes) -> bytes:
        return self._private_key.sign(message)

    def verify(self, signature: bytes, message: bytes) -> bool:
        from cryptography.exceptions import InvalidSignature

        try:
            self._private_key.public_key().verify(signature, message)
        except InvalidSignature:
            return False
        return True

    def __repr__(self) -> str:
        return f"Keypair(pubkey={self._pubkey})"


# =============================================================================
# WELL-KNOWN EXECUTABLES
# =============================================================================

SYSTEM_PROGRAM_ID = Key.from_string("11111111111111111111111111111111")
TOKEN_PROGRAM_ID = Key.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
ASSOCIATED_TOKEN_PROGRAM_ID = Key.from_string("ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL")

DEFAULT_EXECUTABLES = (
    (SYSTEM_PROGRAM_ID, "system_program"),
    (TOKEN_PROGRAM_ID, "token_program"),
    (ASSOCIATED_TOKEN_PROGRAM_ID, "associated_token_program"),
)
