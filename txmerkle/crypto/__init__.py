"""
Core cryptographic utilities.

Module 02 provides the DoubleHash primitive.
"""
from .hashing import (
    DIGEST_HEX_LENGTH,
    to_bytes,
    sha256_hex,
    double_sha256,
    merkle_parent,
    is_digest,
)

__all__ = [
    "DIGEST_HEX_LENGTH",
    "to_bytes",
    "sha256_hex",
    "double_sha256",
    "merkle_parent",
    "is_digest",
]
