"""
Merkle Tree Implementation
Unbalanced, digest-ordered Merkle tree with membership proofs.

This module provides:
- MerkleTree: a single recursive node shape (leaf or branch)
- Insertion keyed on digest magnitude
- Membership queries by data or by digest
- Proof-tree extraction and root-hash recomputation

Commitment Rules (Hard Contracts):
1. Leaf: digest = hash(data), data encoded with the configured text encoding
2. Branch: digest = hash(left.digest + right.digest)
3. A node is a branch iff it has children; a branch always has two
4. Proof stubs are digest-only nodes and behave exactly like leaves

Placement Rule:
- Leaf target: the leaf splits into two leaves; the numerically smaller
  digest (unsigned big-endian integer) goes left, the other right
- Branch target: descend left if the new digest is smaller than the
  left-most leaf digest of the right subtree, otherwise descend right

Known Limitation:
The tree is never rebalanced. Hash-distributed digests give a logarithmic
expected depth, but a run of strictly increasing digests degrades it into
a linked list, making proofs and traversals linear. All traversals are
recursive and share that depth.
"""
from __future__ import annotations

import logging
from typing import Iterator, Optional

from hashtree.crypto import hashing
from hashtree.schemas.errors import NotFoundException

logger = logging.getLogger(__name__)


def _as_int(digest: bytes) -> int:
    """Digest as an unsigned big-endian integer, for placement ordering."""
    return int.from_bytes(digest, "big")


class MerkleTree:
    """
    A Merkle tree, or any node inside one.

    The root the caller holds is the tree: it owns its two children
    exclusively and no child points back at its parent. A freshly created
    tree is a single leaf; it becomes a branch on the first insert and
    stays one.

    Not safe for concurrent mutation: insert rewrites digests along the
    path it walks. Read-only operations may run together.

    Example:
        >>> tree = MerkleTree("alpha")
        >>> tree.insert("beta")
        >>> tree.contains("beta")
        True
        >>> proof = tree.get_proof_tree_for("beta")
        >>> proof.verify_root_hash(tree.get_hash())
        True
    """

    __slots__ = ("digest", "left", "right", "algorithm")

    def __init__(self, data: str | bytes, algorithm: str | None = None) -> None:
        """
        Create a single-leaf tree holding the digest of data.

        Raises:
            EncodingException: If data cannot be converted to bytes
            ValueError: If the algorithm is not supported
        """
        self.algorithm: str = hashing.resolve_algorithm(algorithm)
        self.digest: bytes = hashing.digest(data, self.algorithm)
        self.left: Optional[MerkleTree] = None
        self.right: Optional[MerkleTree] = None

    @classmethod
    def from_digest(cls, digest: bytes, algorithm: str | None = None) -> MerkleTree:
        """
        Create a leaf from an already computed digest.

        Raises:
            ValueError: If the digest length does not match the algorithm
        """
        algorithm = hashing.resolve_algorithm(algorithm)
        digest = bytes(digest)
        expected = hashing.digest_size(algorithm)
        if len(digest) != expected:
            raise ValueError(
                f"Digest length {len(digest)} does not match {algorithm} "
                f"digest length {expected}"
            )
        return cls._leaf(digest, algorithm)

    @classmethod
    def _leaf(cls, digest: bytes, algorithm: str) -> MerkleTree:
        node = cls.__new__(cls)
        node.algorithm = algorithm
        node.digest = digest
        node.left = None
        node.right = None
        return node

    def _stub(self) -> MerkleTree:
        return MerkleTree._leaf(self.digest, self.algorithm)

    def _with_children(self, left: MerkleTree, right: MerkleTree) -> MerkleTree:
        node = self._stub()
        node.left = left
        node.right = right
        return node

    @property
    def is_leaf(self) -> bool:
        """True for leaves and proof stubs (no children)."""
        return self.left is None

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def insert(self, data: str | bytes) -> None:
        """
        Hash data and insert it as a new leaf.

        The digest is computed before anything is touched, so a failing
        insert leaves the tree unchanged.

        Raises:
            EncodingException: If data cannot be converted to bytes
        """
        self.insert_digest(hashing.digest(data, self.algorithm))

    def insert_digest(self, digest: bytes) -> None:
        """
        Insert a precomputed digest as a new leaf.

        Raises:
            ValueError: If the digest length differs from this tree's digests
        """
        digest = bytes(digest)
        if len(digest) != len(self.digest):
            raise ValueError(
                f"Digest length {len(digest)} does not match tree digest "
                f"length {len(self.digest)} ({self.algorithm})"
            )
        self._insert(digest)
        logger.debug(
            f"Inserted {hashing.to_hex(digest)}; root is now {hashing.to_hex(self.digest)}"
        )

    def _insert(self, digest: bytes) -> None:
        if self.is_leaf:
            existing = self._stub()
            added = MerkleTree._leaf(digest, self.algorithm)
            if _as_int(digest) < _as_int(self.digest):
                self.left, self.right = added, existing
            else:
                self.left, self.right = existing, added
        elif _as_int(digest) < _as_int(self.right.min_digest()):
            self.left._insert(digest)
        else:
            self.right._insert(digest)

        self.digest = hashing.hash_concat(
            self.left.digest, self.right.digest, self.algorithm
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_hash(self) -> bytes:
        """Current root digest."""
        return self.digest

    def min_digest(self) -> bytes:
        """Digest of the left-most leaf, reached by following left children."""
        if self.is_leaf:
            return self.digest
        return self.left.min_digest()

    def contains(self, data: str | bytes) -> bool:
        """
        True if the digest of data is held by some leaf.

        Raises:
            EncodingException: If data cannot be converted to bytes
        """
        return self.contains_digest(hashing.digest(data, self.algorithm))

    def contains_digest(self, digest: bytes) -> bool:
        """True if some leaf holds exactly this digest (full traversal)."""
        if self.is_leaf:
            return self.digest == digest
        return self.left.contains_digest(digest) or self.right.contains_digest(digest)

    def __contains__(self, data: str | bytes) -> bool:
        return self.contains(data)

    def get_size(self) -> int:
        """Number of leaves; branches are not counted."""
        if self.is_leaf:
            return 1
        return self.left.get_size() + self.right.get_size()

    def get_depth(self) -> int:
        """Levels from this node to its deepest leaf; a lone leaf has depth 1."""
        if self.is_leaf:
            return 1
        return 1 + max(self.left.get_depth(), self.right.get_depth())

    def iter_leaf_digests(self) -> Iterator[bytes]:
        """Yield leaf digests from left to right."""
        if self.is_leaf:
            yield self.digest
        else:
            yield from self.left.iter_leaf_digests()
            yield from self.right.iter_leaf_digests()

    # -------------------------------------------------------------------------
    # Proofs
    # -------------------------------------------------------------------------

    def get_proof_tree_for(self, data: str | bytes) -> MerkleTree:
        """
        Build a proof tree showing that data is a member of this tree.

        Raises:
            EncodingException: If data cannot be converted to bytes
            NotFoundException: If data is not in the tree
        """
        return self.get_proof_tree_for_digest(hashing.digest(data, self.algorithm))

    def get_proof_tree_for_digest(self, digest: bytes) -> MerkleTree:
        """
        Build a proof tree for a leaf digest.

        The proof keeps the path from the root down to the target leaf.
        Every subtree hanging off that path is replaced by a stub holding
        only its top digest, so the proof has O(depth) nodes and the same
        root digest as this tree. The source tree is not modified.

        Raises:
            NotFoundException: If no leaf holds the digest
        """
        proof = self._reduce(digest)
        if proof is None:
            logger.warning(f"Proof requested for absent digest {hashing.to_hex(digest)}")
            raise NotFoundException(
                "Cannot build a proof tree for data that is not in the tree",
                digest_hex=hashing.to_hex(digest),
            )

        if logger.isEnabledFor(logging.INFO):
            logger.info(
                f"Built proof tree for {hashing.to_hex(digest)}: "
                f"{proof.get_size()} of {self.get_size()} leaves kept"
            )
        return proof

    def _reduce(self, digest: bytes) -> Optional[MerkleTree]:
        if self.is_leaf:
            return self._stub() if self.digest == digest else None

        left_proof = self.left._reduce(digest)
        if left_proof is not None:
            return self._with_children(left_proof, self.right._stub())

        right_proof = self.right._reduce(digest)
        if right_proof is not None:
            return self._with_children(self.left._stub(), right_proof)

        return None

    def recalculate_root_hash(self) -> bytes:
        """
        Recompute the root digest bottom-up from the leaves.

        Stored branch digests are ignored; leaf and stub digests are taken
        as given. Nothing is modified.
        """
        if self.is_leaf:
            return self.digest
        return hashing.hash_concat(
            self.left.recalculate_root_hash(),
            self.right.recalculate_root_hash(),
            self.algorithm,
        )

    def verify_root_hash(self, known_root: bytes | str) -> bool:
        """
        True if the recomputed root equals a published root.

        known_root may be raw bytes or its hex form. A hex string that does
        not parse cannot match any root, so the result is False.
        """
        if isinstance(known_root, str):
            try:
                known_root = hashing.from_hex(known_root)
            except ValueError:
                logger.debug(f"Known root {known_root!r} is not valid hex")
                return False
        return self.recalculate_root_hash() == known_root

    def __repr__(self) -> str:
        kind = "leaf" if self.is_leaf else "branch"
        return (
            f"MerkleTree({kind}, root={hashing.to_hex(self.digest)[:16]}..., "
            f"algorithm={self.algorithm!r})"
        )


__all__ = [
    "MerkleTree",
]
