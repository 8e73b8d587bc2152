"""
Merkle Tree and Proofs
Digest-ordered Merkle tree with proof-tree generation/verification.

This module provides:
- MerkleTree: recursive leaf/branch node with insert, membership,
  proof extraction and root recomputation
- MerkleProver / MerkleVerifier: convenience wrappers for the
  prove/verify round trip

Usage:
    from hashtree.merkle import MerkleTree, MerkleVerifier

    tree = MerkleTree("0")
    for i in range(1, 1001):
        tree.insert(str(i))

    root = tree.get_hash()              # published by the data owner
    proof = tree.get_proof_tree_for("42")

    # third party, holding only proof and root
    assert MerkleVerifier.verify(proof, "42", root)
"""
from .merkle_tree import MerkleTree

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    "MerkleTree",
    "MerkleProver",
    "MerkleVerifier",
]
