"""
Schemas & Canonicalization
File: __init__.py

Purpose: Export the error taxonomy and canonical serialization helpers.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonical_equals,
    canonicalize_value,
    dumps_canonical,
    format_datetime_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    ConfigurationException,
    EncodingException,
    ErrorCodes,
    LeafNotInProofException,
    MerkleError,
    MerkleException,
    NotFoundException,
    RootMismatchException,
    VerificationError,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonical_equals",
    "canonicalize_value",
    "dumps_canonical",
    "format_datetime_canonical",
    # Errors
    "CanonicalizationException",
    "ConfigurationException",
    "EncodingException",
    "ErrorCodes",
    "LeafNotInProofException",
    "MerkleError",
    "MerkleException",
    "NotFoundException",
    "RootMismatchException",
    "VerificationError",
]
