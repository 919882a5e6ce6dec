"""
Merkle Tree Engine
Padded binary Merkle tree with incremental append and inclusion proofs.

This module provides:
- Pure helpers: pairwise hashing, padding, level-wise construction, merge
- MerkleTree: the stateful engine (build, push, regenerate, proofs)
- verify_proof: root recomputation from a leaf, its index and a proof

Commitment Rules:
1. Leaf hashing: leaf = hasher(encode_item(item))
2. Parent hashing: parent = hasher(left + right), left before right
3. Padding: level 0 is filled up to a power of two with hash(padding_value)
   (hash(0) by default)
4. Single leaf: root = leaf
5. Zero items: level 0 holds one padding leaf and leaf_count is 0

Storage is a list of levels, level 0 = leaves, last level = [root].
Level lengths are L, L/2, ..., 1 with L a power of two.

Known limitation: a padding leaf is indistinguishable from a real leaf whose
item hashes to the same value. The real/padding boundary is tracked only by
leaf_count.
"""
from __future__ import annotations

import copy
import logging
import operator
from typing import Any, Iterable, Sequence

from hashtree.crypto.hashing import (
    DEFAULT_HASHER,
    Hasher,
    hash_concat,
    hash_value,
)
from hashtree.schemas.errors import (
    CanonicalizationException,
    IndexOutOfBoundsException,
    MalformedProofException,
    ShapeMismatchException,
)


logger = logging.getLogger(__name__)

Levels = list[list[bytes]]

DEFAULT_PADDING_VALUE = 0


# =============================================================================
# Pure helpers
# =============================================================================

def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n. Returns 1 for n <= 1."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def hash_two_values(left: bytes, right: bytes, hasher: Hasher = DEFAULT_HASHER) -> bytes:
    """
    Combine two child nodes into their parent.

    Order matters: hash_two_values(a, b) != hash_two_values(b, a) in general.
    """
    return hash_concat(left, right, hasher)


def add_padding(level: list[bytes], up_to: int, padding_leaf: bytes) -> None:
    """
    Append padding leaves to level (in place) until it holds up_to entries.

    An empty level is left untouched.
    """
    if not level:
        return
    while len(level) < up_to:
        level.append(padding_leaf)


def generate_tree_from_hashes(leaves: Sequence[bytes], hasher: Hasher = DEFAULT_HASHER) -> Levels:
    """
    Build every level of a tree from an already padded leaf level.

    Consecutive pairs (2i, 2i+1) of each level are combined into entry i
    of the next level until a level of length 1 is reached.

    Args:
        leaves: Leaf hashes; the count must be a power of two
        hasher: Hasher used for parent nodes

    Returns:
        List of levels, leaves first, [root] last

    Raises:
        ShapeMismatchException: If leaves is empty or not a power of two long
    """
    count = len(leaves)
    if count == 0 or count & (count - 1):
        raise ShapeMismatchException(
            f"Leaf level length must be a power of two, got {count}",
            details={"leaf_count": count},
        )

    levels: Levels = [list(leaves)]
    while len(levels[-1]) > 1:
        current = levels[-1]
        levels.append([
            hash_two_values(current[i], current[i + 1], hasher)
            for i in range(0, len(current), 2)
        ])
    return levels


def merge_trees(left: Levels, right: Levels, hasher: Hasher = DEFAULT_HASHER) -> Levels:
    """
    Merge two trees of equal depth into one tree twice as wide.

    Each level of right is concatenated after the matching level of left,
    then a new root level hash(left_root + right_root) is added on top.
    Neither input is modified.

    Raises:
        ShapeMismatchException: If the trees have different level counts
    """
    if not left or len(left) != len(right):
        raise ShapeMismatchException(
            "Trees must have the same number of levels to be merged",
            left_levels=len(left),
            right_levels=len(right),
        )

    merged: Levels = [
        left_level + right_level
        for left_level, right_level in zip(left, right)
    ]
    merged.append([hash_two_values(left[-1][0], right[-1][0], hasher)])
    return merged


def validate_proof_shape(proof: Sequence[Any], depth: int, digest_size: int) -> None:
    """
    Check that a proof fits a tree of the given depth.

    Raises:
        MalformedProofException: If the proof length differs from depth or an
            entry is not a digest of digest_size bytes
    """
    if not isinstance(proof, Sequence) or isinstance(proof, (str, bytes, bytearray)):
        raise MalformedProofException(
            f"Proof must be a sequence of digests, got {type(proof).__name__}",
            expected_length=depth,
        )
    if len(proof) != depth:
        raise MalformedProofException(
            f"Proof has {len(proof)} entries, tree depth is {depth}",
            expected_length=depth,
            actual_length=len(proof),
        )
    for position, sibling in enumerate(proof):
        if not isinstance(sibling, (bytes, bytearray)) or len(sibling) != digest_size:
            raise MalformedProofException(
                f"Proof entry {position} is not a {digest_size}-byte digest",
                details={"position": position, "digest_size": digest_size},
            )


def verify_proof(
    root: bytes,
    leaf: bytes,
    index: int,
    proof: Sequence[bytes],
    hasher: Hasher = DEFAULT_HASHER,
) -> bool:
    """
    Recompute a root from a leaf hash and its proof and compare.

    At each step the running hash is the left child when the current index
    is even and the right child when it is odd; the index is then halved.

    Args:
        root: Expected root
        leaf: Leaf hash being proven
        index: 0-based leaf position
        proof: Sibling hashes, leaf-to-root order
        hasher: Hasher used for parent nodes

    Returns:
        True if the recomputed root equals root
    """
    try:
        index = operator.index(index)
    except TypeError:
        return False
    if index < 0 or index >> len(proof):
        return False

    current_hash = leaf
    current_index = index
    for sibling in proof:
        if current_index % 2 == 0:
            current_hash = hash_two_values(current_hash, bytes(sibling), hasher)
        else:
            current_hash = hash_two_values(bytes(sibling), current_hash, hasher)
        current_index //= 2

    return current_hash == root


# =============================================================================
# Engine
# =============================================================================

class MerkleTree:
    """
    Padded binary Merkle tree over an ordered sequence of items.

    Example:
        >>> tree = MerkleTree([1, 2, 3, 4, 5, 6, 7, 8])
        >>> proof = tree.generate_proof(2)
        >>> tree.verify(3, 2, proof)
        True
        >>> tree.push(9).capacity
        16

    Not safe for concurrent mutation: one owner appends at a time.
    """

    def __init__(
        self,
        items: Iterable[Any] = (),
        hasher: Hasher | None = None,
        padding_value: Any = DEFAULT_PADDING_VALUE,
    ) -> None:
        self._hasher = hasher or DEFAULT_HASHER
        self._padding_value = padding_value
        self._padding_leaf = hash_value(padding_value, self._hasher)

        leaves = [hash_value(item, self._hasher) for item in items]
        self._leaf_count = len(leaves)
        if not leaves:
            leaves.append(self._padding_leaf)
        add_padding(leaves, next_power_of_two(len(leaves)), self._padding_leaf)
        self._levels = generate_tree_from_hashes(leaves, self._hasher)

        logger.debug(
            "Built tree: %d items, %d leaves, %d levels (%s)",
            self._leaf_count, len(leaves), len(self._levels), self._hasher.name,
        )

    @classmethod
    def from_leaf_hashes(
        cls,
        leaves: Sequence[bytes],
        leaf_count: int | None = None,
        hasher: Hasher | None = None,
        padding_value: Any = DEFAULT_PADDING_VALUE,
    ) -> "MerkleTree":
        """
        Regenerate a tree from stored leaf hashes.

        Leaves are padded to a power of two and every level above them is
        rebuilt. leaf_count defaults to len(leaves).
        """
        tree = cls(hasher=hasher, padding_value=padding_value)
        padded = list(leaves) or [tree._padding_leaf]
        add_padding(padded, next_power_of_two(len(padded)), tree._padding_leaf)

        count = len(leaves) if leaf_count is None else leaf_count
        if not 0 <= count <= len(padded):
            raise IndexOutOfBoundsException(
                f"leaf_count {count} does not fit a level of {len(padded)} leaves",
                index=count,
                size=len(padded),
            )

        tree._levels = generate_tree_from_hashes(padded, tree._hasher)
        tree._leaf_count = count
        return tree

    @classmethod
    def from_config(cls, items: Iterable[Any] = (), config: Any = None) -> "MerkleTree":
        """Build a tree using the hasher and padding value of a RuntimeConfig."""
        from hashtree.config.runtime import get_default_config

        config = config or get_default_config()
        return cls(
            items,
            hasher=config.get_hasher(),
            padding_value=config.tree.padding_value,
        )

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def padding_leaf(self) -> bytes:
        return self._padding_leaf

    @property
    def leaf_count(self) -> int:
        """Number of real (non-padding) items."""
        return self._leaf_count

    @property
    def capacity(self) -> int:
        """Length of level 0, padding included."""
        return len(self._levels[0])

    @property
    def depth(self) -> int:
        """Number of levels above the leaves; also the proof length."""
        return len(self._levels) - 1

    @property
    def root(self) -> bytes:
        return self._levels[-1][0]

    @property
    def leaves(self) -> list[bytes]:
        return list(self._levels[0])

    @property
    def tree(self) -> Levels:
        """Copy of every level, leaves first."""
        return copy.deepcopy(self._levels)

    def get_tree(self) -> Levels:
        return self.tree

    def __len__(self) -> int:
        return self._leaf_count

    def __repr__(self) -> str:
        return (
            f"MerkleTree(leaf_count={self._leaf_count}, capacity={self.capacity}, "
            f"hasher={self._hasher.name!r}, root=0x{self.root.hex()})"
        )

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def push(self, item: Any) -> "MerkleTree":
        """
        Append an item after the last real leaf.

        If level 0 still has a padding slot, the slot is overwritten and only
        the path to the root is recomputed. Otherwise a same-width subtree
        holding the item is built and merged in, doubling capacity.
        """
        leaf = hash_value(item, self._hasher)

        if self.capacity > self._leaf_count:
            logger.debug("Appending in place at leaf %d", self._leaf_count)
            self._overwrite_leaf(self._leaf_count, leaf)
        else:
            logger.debug("No padding left, merging subtree of %d leaves", self.capacity)
            right_leaves = [leaf]
            add_padding(right_leaves, self.capacity, self._padding_leaf)
            right_subtree = generate_tree_from_hashes(right_leaves, self._hasher)
            self._levels = merge_trees(self._levels, right_subtree, self._hasher)

        self._leaf_count += 1
        return self

    append = push

    def extend(self, items: Iterable[Any]) -> "MerkleTree":
        for item in items:
            self.push(item)
        return self

    def _overwrite_leaf(self, index: int, leaf: bytes) -> None:
        self._levels[0][index] = leaf
        for level in range(1, len(self._levels)):
            below = self._levels[level - 1]
            left = index - index % 2
            self._levels[level][index // 2] = hash_two_values(
                below[left], below[left + 1], self._hasher
            )
            index //= 2

    def regenerate(self) -> "MerkleTree":
        """Rebuild every level above level 0 from the stored leaves."""
        self._levels = generate_tree_from_hashes(self._levels[0], self._hasher)
        return self

    # -------------------------------------------------------------------------
    # Proofs
    # -------------------------------------------------------------------------

    def generate_proof(self, index: int) -> list[bytes]:
        """
        Collect the sibling hashes from leaf index up to (excluding) the root.

        Args:
            index: 0-based leaf position, 0 <= index < capacity

        Returns:
            Sibling hashes in leaf-to-root order, depth entries long

        Raises:
            TypeError: If index is not an integer
            IndexOutOfBoundsException: If index is outside level 0
        """
        index = operator.index(index)
        if not 0 <= index < self.capacity:
            raise IndexOutOfBoundsException(
                f"Leaf index {index} out of range for {self.capacity} leaves",
                index=index,
                size=self.capacity,
            )

        proof: list[bytes] = []
        position = index
        for level in self._levels[:-1]:
            # XOR with 1 selects the other child of the same parent
            proof.append(level[position ^ 1])
            position //= 2

        logger.debug("Generated proof for leaf %d (%d siblings)", index, len(proof))
        return proof

    def verify(self, value: Any, index: int, proof: Sequence[bytes]) -> bool:
        """
        Check that value sits at index under the current root.

        Never raises: an unhashable value, an out-of-range index or a
        malformed proof all yield False.
        """
        try:
            leaf = hash_value(value, self._hasher)
        except CanonicalizationException as e:
            logger.debug("Cannot hash claimed value: %s", e.message)
            return False
        return self.verify_leaf(leaf, index, proof)

    def verify_leaf(self, leaf: bytes, index: int, proof: Sequence[bytes]) -> bool:
        """Same as verify, for a leaf that is already hashed."""
        try:
            index = operator.index(index)
        except TypeError:
            logger.debug("Index %r is not an integer", index)
            return False
        if not 0 <= index < self.capacity:
            logger.debug("Index %d outside level 0 (%d leaves)", index, self.capacity)
            return False
        try:
            validate_proof_shape(proof, self.depth, self._hasher.digest_size)
        except MalformedProofException as e:
            logger.debug("Rejecting malformed proof: %s", e.message)
            return False
        return verify_proof(self.root, leaf, index, proof, self._hasher)


__all__ = [
    "DEFAULT_PADDING_VALUE",
    "Levels",
    "MerkleTree",
    "next_power_of_two",
    "hash_two_values",
    "add_padding",
    "generate_tree_from_hashes",
    "merge_trees",
    "validate_proof_shape",
    "verify_proof",
]
