"""
Hashing Utilities
Digest provider for Merkle leaves and branches.

This module provides:
- SHA3-256 hashing for raw bytes (the default algorithm)
- Digests of str/bytes data under the configured algorithm
- Canonical hashing for structured records (via dumps_canonical)
- Hex encoding/decoding of digests

Determinism Notes:
- Same input always yields the same digest
- str data is always encoded as UTF-8 and never normalized or stripped,
  so a str leaf has the same digest whatever the runtime configuration
"""
from __future__ import annotations

import hashlib
from typing import Any

from hashtree.config.runtime import SUPPORTED_HASH_ALGORITHMS, get_default_config
from hashtree.schemas.canonical import dumps_canonical
from hashtree.schemas.errors import EncodingException

# Encoding for str leaves. Not configurable: it is part of every str digest.
TEXT_ENCODING = "utf-8"


def resolve_algorithm(algorithm: str | None = None) -> str:
    """Normalize an algorithm name, falling back to the configured default."""
    if algorithm is None:
        return get_default_config().hashing.algorithm
    name = algorithm.lower()
    if name not in SUPPORTED_HASH_ALGORITHMS:
        raise ValueError(f"Unsupported hash algorithm: {algorithm}")
    return name


def sha3_256(data: bytes) -> bytes:
    """
    Compute SHA3-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA3-256 digest

    Example:
        >>> sha3_256(b"").hex()
        'a7ffc6f8bf1ed76651c14756a061d662f580ff4de43b49fa82d80a4b80f8434a'
    """
    return hashlib.sha3_256(data).digest()


def hash_bytes(data: bytes, algorithm: str | None = None) -> bytes:
    """
    Hash raw bytes with the given (or configured) algorithm.

    Raises:
        ValueError: If the algorithm is not supported
    """
    return hashlib.new(resolve_algorithm(algorithm), data).digest()


def digest_size(algorithm: str | None = None) -> int:
    """Length in bytes of digests produced by the algorithm."""
    return hashlib.new(resolve_algorithm(algorithm)).digest_size


def to_bytes(data: str | bytes) -> bytes:
    """
    Convert leaf data to bytes for hashing.

    bytes-like input is passed through unchanged; str input is encoded as
    UTF-8.

    Raises:
        EncodingException: If the data cannot be encoded, e.g. a str
            holding lone surrogates, or the input is not str/bytes.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if not isinstance(data, str):
        raise EncodingException(
            f"Cannot hash data of type {type(data).__name__}; expected str or bytes",
            details={"type": type(data).__name__},
        )

    try:
        return data.encode(TEXT_ENCODING)
    except UnicodeEncodeError as e:
        raise EncodingException(
            f"Cannot encode data as {TEXT_ENCODING}: {e}",
            encoding=TEXT_ENCODING,
        ) from e


def digest(data: str | bytes, algorithm: str | None = None) -> bytes:
    """
    Compute the digest of a data value.

    For str input this is equivalent to digest(data.encode("utf-8")).

    Raises:
        EncodingException: If str data cannot be encoded
    """
    return hash_bytes(to_bytes(data), algorithm)


def hash_concat(left: bytes, right: bytes, algorithm: str | None = None) -> bytes:
    """
    Hash the concatenation of two digests.

    This is the branch rule: branch = hash(left || right)
    """
    return hash_bytes(left + right, algorithm)


def canonical_bytes(obj: Any) -> bytes:
    """
    Serialize a structured record to the bytes that get hashed.

    Also handy for checking how large a record is once serialized.

    Raises:
        CanonicalizationException: If the record cannot be serialized
    """
    return dumps_canonical(obj).encode("utf-8")


def hash_canonical(obj: Any, algorithm: str | None = None) -> bytes:
    """
    Hash a structured record using canonical JSON serialization.

    Rule: leaf = hash(dumps_canonical(obj).encode("utf-8"))

    Two records with equal field values hash equally, even when they are
    distinct objects or their dicts were built in different key orders.

    Raises:
        CanonicalizationException: If the record cannot be serialized
    """
    return hash_bytes(canonical_bytes(obj), algorithm)


def to_hex(data: bytes) -> str:
    """
    Render a digest as lowercase hex, two characters per byte, no prefix.

    Example:
        >>> to_hex(bytes.fromhex("e04fd020"))
        'e04fd020'
    """
    return data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Parse a hex digest as produced by to_hex().

    An optional 0x prefix is accepted for roots published elsewhere.

    Raises:
        ValueError: On odd length or invalid hex characters
    """
    hex_content = hex_string[2:] if hex_string[:2].lower() == "0x" else hex_string

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length, got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "TEXT_ENCODING",
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
