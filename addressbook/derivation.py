"""
Deterministic Address Derivation

Derived addresses are SHA-256 digests of (seeds, namespace, marker) that are
deliberately NOT valid Ed25519 public keys, so no private key can ever sign
for them. The owning namespace (a program) is the only thing that can act
on their behalf.

Derivation:

    address = sha256(seed_0 || ... || seed_n || namespace || "ProgramDerivedAddress")

    find_derived_address() appends one discriminator byte ("bump") as the
    final seed, trying 255, 254, ... 0, and returns the first candidate
    that lands off the curve. The search is bounded at 256 attempts.

Limits:

    - each seed is at most 32 bytes
    - at most 16 seeds per hash, discriminator included

Everything here is a pure function of its inputs: no randomness, no clock,
no logging.

Copyright (c) 2026 Momentum. All rights reserved.
Contact: engineering@momentum.inc
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Sequence, Tuple

from addressbook.errors import (
    DiscriminatorExhaustedError,
    InvalidSeedsError,
    SeedTooLongError,
    TooManySeedsError,
)
from addressbook.keys import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    KEY_LENGTH,
    TOKEN_PROGRAM_ID,
    Key,
)
from addressbook.seeds import seed_bytes, seed_to_string


MAX_SEED_LEN = 32
MAX_SEEDS = 16
DERIVATION_MARKER = b"ProgramDerivedAddress"


# =============================================================================
# CURVE MEMBERSHIP
# =============================================================================

# Edwards25519: -x^2 + y^2 = 1 + d*x^2*y^2 over GF(2^255 - 19)
_P = 2 ** 255 - 19
_D = (-121665 * pow(121666, _P - 2, _P)) % _P


def is_on_curve(data: bytes) -> bool:
    """
    True if 32 bytes decompress to an Edwards25519 point.

    The top bit is the sign of x and is ignored; y is reduced mod p. A point
    exists iff x^2 = (y^2 - 1) / (d*y^2 + 1) has a square root.
    """
    if len(data) != KEY_LENGTH:
        return False
    y = (int.from_bytes(data, "little") & ((1 << 255) - 1)) % _P
    y2 = y * y % _P
    u = (y2 - 1) % _P
    v = (_D * y2 + 1) % _P
    x2 = u * pow(v, _P - 2, _P) % _P
    if x2 == 0:
        return True
    # Euler's criterion
    return pow(x2, (_P - 1) // 2, _P) == 1


# =============================================================================
# DERIVATION PRIMITIVES
# =============================================================================

def _check_seeds(seeds: Sequence[bytes], limit: int) -> None:
    if len(seeds) > limit:
        raise TooManySeedsError(len(seeds), limit)
    for index, seed in enumerate(seeds):
        if len(seed) > MAX_SEED_LEN:
            raise SeedTooLongError(index, len(seed), MAX_SEED_LEN)


def _hash_address(seeds: Sequence[bytes], namespace: Key) -> bytes:
    hasher = hashlib.sha256()
    for seed in seeds:
        hasher.update(seed)
    hasher.update(bytes(namespace))
    hasher.update(DERIVATION_MARKER)
    return hasher.digest()


def create_derived_address(seeds: Sequence[Any], namespace: Key) -> Key:
    """
    Hash seeds into an address for one exact seed list.

    Raises InvalidSeedsError when the digest is a valid curve point.
    """
    raw = [seed_bytes(s) for s in seeds]
    _check_seeds(raw, MAX_SEEDS)
    digest = _hash_address(raw, namespace)
    if is_on_curve(digest):
        raise InvalidSeedsError(
            f"Seeds produce an on-curve address for namespace {namespace}"
        )
    return Key(digest)


def find_derived_address(seeds: Sequence[Any], namespace: Key) -> Tuple[Key, int]:
    """Search discriminators 255..0 and return (address, discriminator)."""
    raw = [seed_bytes(s) for s in seeds]
    _check_seeds(raw, MAX_SEEDS - 1)

    for discriminator in range(255, -1, -1):
        candidate = _hash_address(raw + [bytes([discriminator])], namespace)
        if not is_on_curve(candidate):
            return Key(candidate), discriminator

    raise DiscriminatorExhaustedError(namespace)


# =============================================================================
# DERIVED ADDRESS
# =============================================================================

@dataclass(frozen=True)
class DerivedAddress:
    """A derived address bundled with printable and raw forms of its seeds."""
    key: Key
    discriminator: int
    seed_strings: Tuple[str, ...]
    seed_bytes: Tuple[bytes, ...]

    @property
    def bump(self) -> int:
        return self.discriminator

    def verify(self, namespace: Key) -> bool:
        """Recompute from the stored seed bytes and compare."""
        key, discriminator = find_derived_address(self.seed_bytes, namespace)
        return key == self.key and discriminator == self.discriminator


def derive(seeds: Sequence[Any], namespace: Key) -> DerivedAddress:
    raw = tuple(seed_bytes(s) for s in seeds)
    key, discriminator = find_derived_address(raw, namespace)
    return DerivedAddress(
        key=key,
        discriminator=discriminator,
        seed_strings=tuple(seed_to_string(s) for s in raw),
        seed_bytes=raw,
    )


def derive_holding_account(
    holder: Key,
    issuer: Key,
    token_program: Key = TOKEN_PROGRAM_ID,
    namespace: Key = ASSOCIATED_TOKEN_PROGRAM_ID,
) -> Key:
    """Canonical account holding `issuer` units for `holder`."""
    key, _ = find_derived_address([holder, token_program, issuer], namespace)
    return key
