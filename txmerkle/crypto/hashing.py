"""
Module 02 - Hashing Utilities
Double SHA-256 commitment primitive used for every digest in the tree.

This module provides:
- sha256_hex for a single SHA-256 pass rendered as lowercase hex
- double_sha256 (DoubleHash): sha256 over the hex text of sha256(data)
- merkle_parent for combining two sibling digests

Determinism Notes:
- str input is encoded as UTF-8; bytes are hashed as-is
- Sibling digests are combined as hex TEXT, never as raw bytes
"""
from __future__ import annotations

import hashlib


# Length of every digest produced here (64 hex chars = 256 bits)
DIGEST_HEX_LENGTH = 64


def to_bytes(data: str | bytes) -> bytes:
    """
    Normalize a leaf identifier or digest to bytes.

    Args:
        data: str (UTF-8 encoded) or bytes

    Returns:
        Raw bytes to feed into the hash function

    Raises:
        TypeError: If data is neither str nor bytes
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return data.encode("utf-8")
    raise TypeError(f"Expected str or bytes, got {type(data).__name__}")


def sha256_hex(data: str | bytes) -> str:
    """
    Compute a single SHA-256 pass as lowercase hex.

    Example:
        >>> sha256_hex("hello")
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(to_bytes(data)).hexdigest()


def double_sha256(data: str | bytes) -> str:
    """
    Compute the DoubleHash of data.

    The second pass hashes the hex representation of the first digest,
    not its raw bytes:

        double_sha256(x) = sha256_hex(sha256_hex(x))

    Args:
        data: str or bytes to hash

    Returns:
        64-character lowercase hex digest
    """
    return sha256_hex(sha256_hex(data))


def merkle_parent(left: str, right: str) -> str:
    """
    Combine two sibling digests into their parent digest.

    Parent = double_sha256(left + right) with hex-string concatenation,
    left first. Order matters: merkle_parent(a, b) != merkle_parent(b, a).
    """
    return double_sha256(left + right)


def is_digest(value: object) -> bool:
    """Check whether value looks like a digest produced by this module."""
    if not isinstance(value, str) or len(value) != DIGEST_HEX_LENGTH:
        return False
    return all(c in "0123456789abcdef" for c in value)


__all__ = [
    "DIGEST_HEX_LENGTH",
    "to_bytes",
    "sha256_hex",
    "double_sha256",
    "merkle_parent",
    "is_digest",
]
