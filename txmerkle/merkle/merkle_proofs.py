"""
Module 02 - Merkle Proofs
Containment queries, inclusion-path extraction and standalone verification.

This module provides:
- query_inclusion: presence check + proof path against a built MerkleTree
- build_inclusion_proof: wrap a positive query into a portable document
- verify_merkle_proof: recompute a root from leaf id + proof steps alone
- verify_inclusion_proof: verify a portable InclusionProof document

Verification depends only on the DoubleHash primitive; it never needs
access to the tree.
"""
from __future__ import annotations

import logging
from typing import Any, Sequence

from pydantic import ValidationError

from txmerkle.crypto.hashing import double_sha256, merkle_parent
from txmerkle.merkle.merkle_tree import LeafId, MerkleTree
from txmerkle.schemas.errors import ErrorCodes, InvalidInputError, MerkleVerificationException
from txmerkle.schemas.proof import LEFT, RIGHT, InclusionProof, ProofStep, QueryResult


logger = logging.getLogger(__name__)


def _require_leaf_id(leaf_id: Any) -> None:
    if not isinstance(leaf_id, (str, bytes)):
        raise InvalidInputError(
            f"leaf id must be str or bytes, got {type(leaf_id).__name__}"
        )


def query_inclusion(tree: MerkleTree, leaf_id: LeafId) -> QueryResult:
    """
    Check whether leaf_id is a leaf of tree and extract its inclusion path.

    Algorithm:
    1. target = double_sha256(leaf_id)
    2. If target is not in the base layer, the leaf is absent (the base
       layer is the exhaustive leaf set)
    3. Otherwise walk layers base -> root, tracking target's index:
       - layer of fewer than 2 nodes (root): stop
       - even index with a right neighbour: sibling on the right
       - even index without a right neighbour: node was promoted
         unchanged during construction, no step is emitted
       - odd index: sibling on the left
       - index = index // 2

    With duplicate leaf ids, the proof is for the first occurrence.

    Args:
        tree: A built MerkleTree
        leaf_id: Identifier to look up

    Returns:
        QueryResult (present + proof + root, or absent)

    Raises:
        InvalidInputError: If leaf_id is not str/bytes
        MerkleVerificationException: If the tree's layers do not
            reproduce its own root
    """
    _require_leaf_id(leaf_id)

    target = double_sha256(leaf_id)
    index = tree.index_of(target)
    if index is None:
        return QueryResult.absent()

    leaf_index = index
    steps: list[ProofStep] = []

    for layer in reversed(tree.layers):
        if len(layer) < 2:
            break

        if index % 2 == 0:
            if index + 1 < len(layer):
                sibling = layer[index + 1]
                steps.append(ProofStep(sibling=sibling, position=RIGHT))
                target = merkle_parent(target, sibling)
        else:
            sibling = layer[index - 1]
            steps.append(ProofStep(sibling=sibling, position=LEFT))
            target = merkle_parent(sibling, target)

        index //= 2

    if target != tree.root:
        raise MerkleVerificationException(
            "Inclusion path does not reproduce the tree root",
            leaf_index=leaf_index,
            details={"computed": target, "root": tree.root},
            code=ErrorCodes.ROOT_MISMATCH,
        )

    return QueryResult(present=True, proof=steps, root=tree.root)


def build_inclusion_proof(tree: MerkleTree, leaf_id: LeafId) -> InclusionProof | None:
    """
    Build a portable InclusionProof for leaf_id, or None if it is absent.

    Bytes identifiers must be valid UTF-8 so the document stays JSON text.
    """
    result = query_inclusion(tree, leaf_id)
    if not result.present:
        return None

    if isinstance(leaf_id, bytes):
        try:
            leaf_text = leaf_id.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidInputError("leaf id is not valid UTF-8 text") from e
    else:
        leaf_text = leaf_id

    return InclusionProof(
        leaf_id=leaf_text,
        leaf_hash=double_sha256(leaf_id),
        root=result.root,
        steps=list(result.proof or []),
    )


def verify_merkle_proof(
    leaf_id: LeafId,
    proof: Sequence[ProofStep | dict[str, Any]],
    claimed_root: str,
) -> bool:
    """
    Verify that leaf_id is committed to by claimed_root.

    Algorithm:
    1. acc = double_sha256(leaf_id)
    2. For each step in order:
       - "right": acc = parent(acc, sibling)
       - "left":  acc = parent(sibling, acc)
    3. Check acc == claimed_root

    Args:
        leaf_id: The identifier being proven
        proof: Steps from the base layer upward (ProofStep or plain dicts)
        claimed_root: Root digest the verifier trusts

    Returns:
        True if the proof is valid, False otherwise (never raises for
        tampered or malformed proofs)
    """
    if not isinstance(leaf_id, (str, bytes)) or not isinstance(claimed_root, str):
        return False

    try:
        steps = [
            step if isinstance(step, ProofStep) else ProofStep.model_validate(step)
            for step in proof
        ]
    except (ValidationError, TypeError) as e:
        logger.debug(f"Rejecting malformed proof: {e}")
        return False

    acc = double_sha256(leaf_id)
    for step in steps:
        if step.position == RIGHT:
            acc = merkle_parent(acc, step.sibling)
        else:
            acc = merkle_parent(step.sibling, acc)

    return acc == claimed_root


def verify_inclusion_proof(document: InclusionProof) -> bool:
    """
    Verify a portable proof document.

    The recorded leaf_hash must match the leaf id, and the steps must
    lead from it to the recorded root.
    """
    if double_sha256(document.leaf_id) != document.leaf_hash:
        logger.debug("Proof document leaf_hash does not match its leaf_id")
        return False
    return verify_merkle_proof(document.leaf_id, document.steps, document.root)


class MerkleVerifier:
    """
    Convenience class for third parties holding only a root.

    Example:
        >>> verifier = MerkleVerifier(root)
        >>> verifier.verify("tx3", proof_steps)
        True
    """

    def __init__(self, trusted_root: str) -> None:
        self.trusted_root = trusted_root

    def verify(self, leaf_id: LeafId, proof: Sequence[ProofStep | dict[str, Any]]) -> bool:
        return verify_merkle_proof(leaf_id, proof, self.trusted_root)

    def verify_document(self, document: InclusionProof) -> bool:
        """Verify a document, also requiring it to target the trusted root."""
        if document.root != self.trusted_root:
            return False
        return verify_inclusion_proof(document)


__all__ = [
    "query_inclusion",
    "build_inclusion_proof",
    "verify_merkle_proof",
    "verify_inclusion_proof",
    "MerkleVerifier",
]
