"""
Merkle Proofs Convenience Wrappers
Thin wrappers around MerkleTree for the prove/verify round trip.

This module provides class-based interfaces:
- MerkleProver: Build trees and extract proof trees
- MerkleVerifier: Check a proof tree against a published root

The verifier never trusts the prover's hashing: it hashes the claimed
data itself, looks for that digest in the proof tree, and recomputes the
root from the proof tree's leaves and stubs.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from hashtree.crypto import hashing
from hashtree.merkle.merkle_tree import MerkleTree
from hashtree.schemas.errors import LeafNotInProofException, RootMismatchException

logger = logging.getLogger(__name__)


def _root_bytes(root: bytes | str) -> bytes:
    return hashing.from_hex(root) if isinstance(root, str) else root


class MerkleProver:
    """
    Convenience class for building trees and generating proof trees.

    Example:
        >>> tree = MerkleProver.build_tree(["alpha", "beta", "gamma"])
        >>> proof = MerkleProver.prove(tree, "beta")
        >>> MerkleVerifier.verify(proof, "beta", tree.get_hash())
        True
    """

    @staticmethod
    def build_tree(
        items: Iterable[str | bytes],
        algorithm: str | None = None,
    ) -> MerkleTree:
        """
        Build a tree from data items in order.

        The first item creates the tree; the rest are inserted.

        Raises:
            ValueError: If items is empty
            EncodingException: If an item cannot be converted to bytes
        """
        iterator = iter(items)
        try:
            first = next(iterator)
        except StopIteration:
            raise ValueError("Cannot build a Merkle tree from no items") from None

        tree = MerkleTree(first, algorithm)
        for item in iterator:
            tree.insert(item)
        return tree

    @staticmethod
    def build_tree_from_objects(
        objects: Iterable[Any],
        algorithm: str | None = None,
    ) -> MerkleTree:
        """
        Build a tree from structured records.

        Each record is canonically hashed to produce its leaf digest.

        Raises:
            ValueError: If objects is empty
            CanonicalizationException: If a record cannot be serialized
        """
        digests = [hashing.hash_canonical(obj, algorithm) for obj in objects]
        if not digests:
            raise ValueError("Cannot build a Merkle tree from no objects")

        tree = MerkleTree.from_digest(digests[0], algorithm)
        for leaf in digests[1:]:
            tree.insert_digest(leaf)
        return tree

    @staticmethod
    def prove(tree: MerkleTree, data: str | bytes) -> MerkleTree:
        """
        Extract the proof tree for data.

        Raises:
            NotFoundException: If data is not in the tree
        """
        return tree.get_proof_tree_for(data)

    @staticmethod
    def prove_object(tree: MerkleTree, obj: Any) -> MerkleTree:
        """
        Extract the proof tree for a structured record.

        Raises:
            NotFoundException: If the record is not in the tree
        """
        return tree.get_proof_tree_for_digest(hashing.hash_canonical(obj, tree.algorithm))


class MerkleVerifier:
    """
    Convenience class for verifying proof trees.

    A third party holding only a proof tree and a previously published
    root uses these to confirm that a claimed item belongs to the
    original dataset.
    """

    @staticmethod
    def verify_digest(proof: MerkleTree, digest: bytes, root: bytes | str) -> bool:
        """
        Verify that a leaf digest is committed to by root.

        Returns:
            True if the proof holds the digest and hashes to root
            (False for a hex root that does not parse)
        """
        return proof.contains_digest(digest) and proof.verify_root_hash(root)

    @staticmethod
    def verify(proof: MerkleTree, data: str | bytes, root: bytes | str) -> bool:
        """
        Verify that data is committed to by root.

        The data is hashed here, with the proof's algorithm.
        """
        return MerkleVerifier.verify_digest(
            proof, hashing.digest(data, proof.algorithm), root
        )

    @staticmethod
    def verify_object(proof: MerkleTree, obj: Any, root: bytes | str) -> bool:
        """Verify that a structured record is committed to by root."""
        return MerkleVerifier.verify_digest(
            proof, hashing.hash_canonical(obj, proof.algorithm), root
        )

    @staticmethod
    def require(proof: MerkleTree, data: str | bytes, root: bytes | str) -> None:
        """
        Raising form of verify().

        Raises:
            LeafNotInProofException: If the data's digest is not in the proof
            RootMismatchException: If the proof does not hash to root
            ValueError: If root is a str that is not valid hex
        """
        leaf = hashing.digest(data, proof.algorithm)
        if not proof.contains_digest(leaf):
            raise LeafNotInProofException(
                "Claimed data is not a leaf of the proof tree",
                digest_hex=hashing.to_hex(leaf),
            )

        expected = _root_bytes(root)
        actual = proof.recalculate_root_hash()
        if actual != expected:
            logger.warning(
                f"Proof root mismatch: expected {hashing.to_hex(expected)}, "
                f"got {hashing.to_hex(actual)}"
            )
            raise RootMismatchException(
                "Proof tree does not hash to the published root",
                expected_root=hashing.to_hex(expected),
                actual_root=hashing.to_hex(actual),
            )


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
