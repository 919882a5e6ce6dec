"""
Crypto - Hashing Utilities
Pluggable fixed-width hashing for tree nodes.

This module provides:
- Hasher: a named, fixed-width digest function
- A small registry of hashers (BLAKE2b-64, FNV-1a-64, SHA-256)
- Item encoding (raw bytes, or canonical JSON for everything else)
- Leaf hashing and pairwise node hashing
- Hex encoding/decoding with 0x prefix

Security Notes:
- The default hasher is a 64-bit digest. Collisions are feasible at that
  width; use "sha256" when the root is published as an integrity commitment.
- "fnv1a-64" is not cryptographic at all. It exists for speed and for
  parity with trees built on non-cryptographic 64-bit hashes.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Callable

from hashtree.schemas.canonical import dumps_canonical
from hashtree.schemas.errors import UnknownHashAlgorithmException


DEFAULT_HASH_ALGORITHM = "blake2b-64"

_FNV64_OFFSET_BASIS = 0xCBF29CE484222325
_FNV64_PRIME = 0x100000001B3
_U64_MASK = 0xFFFFFFFFFFFFFFFF


@dataclass(frozen=True)
class Hasher:
    """
    A fixed-width hash function.

    Attributes:
        name: Registry name (e.g. "blake2b-64")
        digest_size: Width of every digest in bytes
        digest: Function mapping raw bytes to a digest of digest_size bytes
    """
    name: str
    digest_size: int
    digest: Callable[[bytes], bytes]


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def blake2b_64(data: bytes) -> bytes:
    """BLAKE2b with an 8-byte digest."""
    return hashlib.blake2b(data, digest_size=8).digest()


def fnv1a_64(data: bytes) -> bytes:
    """64-bit FNV-1a, big-endian encoded."""
    value = _FNV64_OFFSET_BASIS
    for byte in data:
        value ^= byte
        value = (value * _FNV64_PRIME) & _U64_MASK
    return value.to_bytes(8, "big")


_HASHERS: dict[str, Hasher] = {
    "blake2b-64": Hasher(name="blake2b-64", digest_size=8, digest=blake2b_64),
    "fnv1a-64": Hasher(name="fnv1a-64", digest_size=8, digest=fnv1a_64),
    "sha256": Hasher(name="sha256", digest_size=32, digest=sha256),
}


def available_hashers() -> list[str]:
    """Names of all registered hash algorithms, sorted."""
    return sorted(_HASHERS)


def get_hasher(name: str | None = None) -> Hasher:
    """
    Look up a registered hasher by name.

    Args:
        name: Algorithm name, or None for the default

    Raises:
        UnknownHashAlgorithmException: If the name is not registered
    """
    key = (name or DEFAULT_HASH_ALGORITHM).lower()
    try:
        return _HASHERS[key]
    except KeyError:
        raise UnknownHashAlgorithmException(key, available=available_hashers()) from None


DEFAULT_HASHER: Hasher = _HASHERS[DEFAULT_HASH_ALGORITHM]


def encode_item(item: Any) -> bytes:
    """
    Encode a leaf item to the bytes that get hashed.

    Raw bytes are hashed as-is. Every other value is serialized with
    dumps_canonical and UTF-8 encoded, so {"a": 1, "b": 2} and
    {"b": 2, "a": 1} produce the same leaf. Dict keys must be strings.

    Raises:
        CanonicalizationException: If the item cannot be canonically serialized
    """
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    return dumps_canonical(item).encode("utf-8")


def hash_value(item: Any, hasher: Hasher = DEFAULT_HASHER) -> bytes:
    """
    Hash a single item into a leaf value.

    Rule: leaf = hasher(encode_item(item))
    """
    return hasher.digest(encode_item(item))


def hash_concat(left: bytes, right: bytes, hasher: Hasher = DEFAULT_HASHER) -> bytes:
    """
    Hash the concatenation of two node values.

    Rule: parent = hasher(left + right). Order matters.
    """
    return hasher.digest(left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "DEFAULT_HASH_ALGORITHM",
    "DEFAULT_HASHER",
    "Hasher",
    "sha256",
    "blake2b_64",
    "fnv1a_64",
    "available_hashers",
    "get_hasher",
    "encode_item",
    "hash_value",
    "hash_concat",
    "to_hex",
    "from_hex",
]
