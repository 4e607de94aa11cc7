"""
Seed encoding for address derivation.

A seed is anything that can be viewed as bytes: short text, a Key (or an
AccountRef wrapping one), or a raw byte buffer. seed_bytes() gives the exact
bytes fed to the derivation hash; seed_to_string() gives a debug rendering
that never feeds back into derivation.

Copyright (c) 2026 Momentum. All rights reserved.
Contact: engineering@momentum.inc
"""

from __future__ import annotations

from typing import Any, List, Sequence

from addressbook.keys import KEY_LENGTH, b58encode


def seed_bytes(value: Any) -> bytes:
    """Return the unmodified byte form of a seed value."""
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if hasattr(value, "__bytes__"):
        return bytes(value)
    raise TypeError(f"Cannot use {type(value).__name__} as a derivation seed")


def _is_printable(data: bytes) -> bool:
    return all(0x20 <= b <= 0x7E for b in data)


def seed_to_string(value: Any) -> str:
    """
    Human-readable form of a seed.

    Printable ASCII is returned verbatim, 32-byte values as base58 key text,
    anything else as lowercase hex.
    """
    data = seed_bytes(value)
    if _is_printable(data):
        return data.decode("ascii")
    if len(data) == KEY_LENGTH:
        return b58encode(data)
    return data.hex()


def encode_seeds(values: Sequence[Any]) -> List[bytes]:
    return [seed_bytes(v) for v in values]
