"""
Core cryptographic utilities.

Provides the digest provider used by the Merkle tree.
"""
from .hashing import (
    resolve_algorithm,
    sha3_256,
    hash_bytes,
    digest_size,
    to_bytes,
    digest,
    hash_concat,
    canonical_bytes,
    hash_canonical,
    to_hex,
    from_hex,
)

__all__ = [
    "resolve_algorithm",
    "sha3_256",
    "hash_bytes",
    "digest_size",
    "to_bytes",
    "digest",
    "hash_concat",
    "canonical_bytes",
    "hash_canonical",
    "to_hex",
    "from_hex",
]
