"""
Merkle Tree Engine
Padded binary Merkle tree with incremental append and inclusion proofs.

Usage:
    from hashtree.merkle import MerkleTree

    tree = MerkleTree([1, 2, 3, 4, 5])
    tree.push(6)

    proof = tree.generate_proof(2)
    assert tree.verify(3, 2, proof)
"""
from .merkle_tree import (
    DEFAULT_PADDING_VALUE,
    Levels,
    MerkleTree,
    add_padding,
    generate_tree_from_hashes,
    hash_two_values,
    merge_trees,
    next_power_of_two,
    validate_proof_shape,
    verify_proof,
)


__all__ = [
    # Engine
    "MerkleTree",
    "Levels",
    "DEFAULT_PADDING_VALUE",
    # Helpers
    "next_power_of_two",
    "hash_two_values",
    "add_padding",
    "generate_tree_from_hashes",
    "merge_trees",
    "validate_proof_shape",
    "verify_proof",
]
