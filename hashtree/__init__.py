"""
hashtree - padded binary Merkle tree with incremental append and inclusion proofs.

Usage:
    from hashtree import MerkleTree

    tree = MerkleTree([1, 2, 3, 4, 5, 6, 7, 8])
    proof = tree.generate_proof(2)
    assert tree.verify(3, 2, proof)
"""

from hashtree.crypto import Hasher, get_hasher, hash_value
from hashtree.merkle import MerkleTree, merge_trees, generate_tree_from_hashes, verify_proof
from hashtree.schemas import (
    HashTreeException,
    IndexOutOfBoundsException,
    MalformedProofException,
    ShapeMismatchException,
)

__version__ = "0.1.0"

__all__ = [
    "MerkleTree",
    "Hasher",
    "get_hasher",
    "hash_value",
    "merge_trees",
    "generate_tree_from_hashes",
    "verify_proof",
    "HashTreeException",
    "IndexOutOfBoundsException",
    "MalformedProofException",
    "ShapeMismatchException",
]
