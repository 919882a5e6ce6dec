"""
Hashing primitives used to build tree nodes.
"""
from .hashing import (
    DEFAULT_HASH_ALGORITHM,
    DEFAULT_HASHER,
    Hasher,
    available_hashers,
    blake2b_64,
    encode_item,
    fnv1a_64,
    from_hex,
    get_hasher,
    hash_concat,
    hash_value,
    sha256,
    to_hex,
)

__all__ = [
    "DEFAULT_HASH_ALGORITHM",
    "DEFAULT_HASHER",
    "Hasher",
    "available_hashers",
    "blake2b_64",
    "encode_item",
    "fnv1a_64",
    "from_hex",
    "get_hasher",
    "hash_concat",
    "hash_value",
    "sha256",
    "to_hex",
]
