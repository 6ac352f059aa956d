"""
Module 02 - Merkle Tree and Inclusion Proofs
Deterministic Merkle tree construction + proof extraction/verification.

This module provides:
- MerkleTree: Immutable layered tree (root-first)
- build_merkle_tree / build_merkle_root: Fold ordered leaf ids into a root
- query_inclusion: Presence check + inclusion path
- verify_merkle_proof: Recompute a root from leaf id + proof alone
- MerkleEngine: Build-once, query-many facade with a cached tree

Canonical Commitment Rules:
1. Leaf hashing: double_sha256(leaf_id)
2. Parent hashing: double_sha256(left_hex + right_hex)
3. Odd node: promoted unchanged to the next layer
4. Empty input: InvalidInputError
5. Single leaf: root = leaf hash

Usage:
    from txmerkle.merkle import MerkleEngine, verify_merkle_proof

    engine = MerkleEngine()
    root = engine.build_root(["tx1", "tx2", "tx3", "tx4"])

    result = engine.query("tx3")
    assert verify_merkle_proof("tx3", result.proof, root)
"""
from .merkle_tree import (
    MerkleTree,
    next_layer,
    build_merkle_tree,
    build_merkle_root,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleVerifier,
    query_inclusion,
    build_inclusion_proof,
    verify_merkle_proof,
    verify_inclusion_proof,
)

from .engine import MerkleEngine


__all__ = [
    # Core types
    "MerkleTree",
    "MerkleEngine",
    # Construction
    "next_layer",
    "build_merkle_tree",
    "build_merkle_root",
    "compute_tree_depth",
    # Proofs
    "query_inclusion",
    "build_inclusion_proof",
    "verify_merkle_proof",
    "verify_inclusion_proof",
    "MerkleVerifier",
]
