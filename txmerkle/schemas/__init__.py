"""
Module 01 - Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Error models and exceptions
from .errors import (
    ConfigurationException,
    ErrorCodes,
    InvalidInputError,
    MerkleVerificationException,
    NotBuiltError,
    ProofFormatException,
    TxMerkleError,
    TxMerkleException,
)

# Proof schemas
from .proof import (
    LEFT,
    PROOF_SCHEMA_VERSION,
    RIGHT,
    InclusionProof,
    ProofPosition,
    ProofStep,
    QueryResult,
)

__all__ = [
    # Errors
    "ConfigurationException",
    "ErrorCodes",
    "InvalidInputError",
    "MerkleVerificationException",
    "NotBuiltError",
    "ProofFormatException",
    "TxMerkleError",
    "TxMerkleException",
    # Proofs
    "LEFT",
    "PROOF_SCHEMA_VERSION",
    "RIGHT",
    "InclusionProof",
    "ProofPosition",
    "ProofStep",
    "QueryResult",
]
