"""
hashtree - Merkle trees with compact membership proofs.

A holder of a large dataset publishes one root digest; anyone holding a
small proof tree can then confirm that a given item belongs to the set.
"""

from hashtree.crypto import digest, from_hex, hash_canonical, to_hex
from hashtree.merkle import MerkleProver, MerkleTree, MerkleVerifier
from hashtree.schemas.errors import (
    EncodingException,
    MerkleException,
    NotFoundException,
)

__version__ = "0.1.0"

__all__ = [
    "MerkleTree",
    "MerkleProver",
    "MerkleVerifier",
    "digest",
    "hash_canonical",
    "to_hex",
    "from_hex",
    "MerkleException",
    "EncodingException",
    "NotFoundException",
]
