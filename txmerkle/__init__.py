"""
txmerkle - double-SHA-256 Merkle trees and inclusion proofs over
ordered transaction identifiers.
"""

from txmerkle.crypto.hashing import double_sha256, merkle_parent
from txmerkle.merkle import (
    MerkleEngine,
    MerkleTree,
    MerkleVerifier,
    build_inclusion_proof,
    build_merkle_root,
    build_merkle_tree,
    query_inclusion,
    verify_inclusion_proof,
    verify_merkle_proof,
)
from txmerkle.schemas import (
    InclusionProof,
    InvalidInputError,
    NotBuiltError,
    ProofStep,
    QueryResult,
)

__version__ = "0.1.0"

__all__ = [
    "double_sha256",
    "merkle_parent",
    "MerkleEngine",
    "MerkleTree",
    "MerkleVerifier",
    "build_inclusion_proof",
    "build_merkle_root",
    "build_merkle_tree",
    "query_inclusion",
    "verify_inclusion_proof",
    "verify_merkle_proof",
    "InclusionProof",
    "InvalidInputError",
    "NotBuiltError",
    "ProofStep",
    "QueryResult",
]
