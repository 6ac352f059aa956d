"""
Module 02 - Merkle Engine
Caching facade over tree construction and proof extraction.

The engine keeps the most recently built MerkleTree so callers can build
once and then issue many containment queries. Every build replaces the
cached tree; nothing accumulates across calls.

The engine is not safe for concurrent build/query on one instance;
serialize access externally or share the immutable MerkleTree instead.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from txmerkle.config.runtime import EngineConfig, get_default_config
from txmerkle.merkle.merkle_proofs import build_inclusion_proof, query_inclusion
from txmerkle.merkle.merkle_tree import Layer, LeafId, MerkleTree, build_merkle_tree
from txmerkle.schemas.errors import NotBuiltError
from txmerkle.schemas.proof import InclusionProof, QueryResult


logger = logging.getLogger(__name__)


class MerkleEngine:
    """
    Build a Merkle tree from transaction ids and answer inclusion queries.

    Example:
        >>> engine = MerkleEngine()
        >>> root = engine.build_root(["tx1", "tx2", "tx3", "tx4"])
        >>> result = engine.query("tx3")
        >>> result.present, len(result.proof)
        (True, 2)
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or get_default_config().engine
        self._tree: Optional[MerkleTree] = None

    @property
    def is_built(self) -> bool:
        return self._tree is not None

    @property
    def tree(self) -> MerkleTree:
        """The cached tree. Raises NotBuiltError before the first build."""
        if self._tree is None:
            raise NotBuiltError()
        return self._tree

    @property
    def root(self) -> str:
        return self.tree.root

    @property
    def layers(self) -> tuple[Layer, ...]:
        """Cached layers, root first (read-only diagnostic view)."""
        return self.tree.layers

    def build_root(self, leaf_ids: Sequence[LeafId] | None) -> str:
        """
        Build the tree for leaf_ids, cache it and return its root.

        Any previously cached tree is discarded first, so a failed build
        leaves the engine unbuilt.

        Raises:
            InvalidInputError: If leaf_ids is missing, empty or violates
                the configured limits
        """
        self._tree = None
        tree = build_merkle_tree(
            leaf_ids,
            max_leaves=self.config.max_leaves,
            allow_duplicates=self.config.allow_duplicates,
        )
        self._tree = tree
        logger.info(f"Merkle root generated for {tree.leaf_count} leaves: {tree.root}")
        return tree.root

    def query(self, leaf_id: LeafId) -> QueryResult:
        """
        Check whether leaf_id is in the cached tree and return its proof.

        Raises:
            NotBuiltError: If no tree has been built yet
        """
        result = query_inclusion(self.tree, leaf_id)
        logger.debug(
            f"Query {leaf_id!r}: present={result.present} steps={result.proof_length}"
        )
        return result

    def prove(self, leaf_id: LeafId) -> InclusionProof | None:
        """
        Return a portable proof document for leaf_id, or None if absent.

        Raises:
            NotBuiltError: If no tree has been built yet
        """
        return build_inclusion_proof(self.tree, leaf_id)

    def reset(self) -> None:
        """Drop the cached tree."""
        self._tree = None
