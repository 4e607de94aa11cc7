"""Tests for seed byte encoding and debug rendering."""

import pytest

from addressbook.keys import Key
from addressbook.seeds import encode_seeds, seed_bytes, seed_to_string


class TestSeedBytes:

    def test_text_is_utf8(self):
        assert seed_bytes("vault") == b"vault"
        assert seed_bytes("é") == "é".encode("utf-8")

    def test_buffers_pass_through(self):
        assert seed_bytes(b"\x00\x01") == b"\x00\x01"
        assert seed_bytes(bytearray(b"ab")) == b"ab"
        assert seed_bytes(memoryview(b"cd")) == b"cd"

    def test_key_uses_raw_bytes(self):
        key = Key.unique()
        assert seed_bytes(key) == key.to_bytes()

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            seed_bytes(42)

    def test_encode_seeds(self):
        key = Key.unique()
        assert encode_seeds(["a", key, b"\x02"]) == [b"a", bytes(key), b"\x02"]


class TestSeedToString:

    def test_printable_text_verbatim(self):
        assert seed_to_string(b"vault seed ~!") == "vault seed ~!"

    def test_printable_wins_over_key_rendering(self):
        assert seed_to_string(b"a" * 32) == "a" * 32

    def test_key_sized_binary_as_base58(self):
        key = Key.unique()
        assert seed_to_string(key) == str(key)

    def test_short_binary_as_hex(self):
        assert seed_to_string(b"\x00\xff\x10") == "00ff10"

    def test_empty(self):
        assert seed_to_string(b"") == ""
