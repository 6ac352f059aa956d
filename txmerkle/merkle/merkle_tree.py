"""
Module 02 - Merkle Tree Implementation
Deterministic layered Merkle tree construction over ordered leaf identifiers.

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = double_sha256(leaf_id)
2. Parent hashing: parent = double_sha256(left_hex + right_hex)
3. Odd rule: an unpaired trailing node is promoted unchanged to the next
   layer (it is NOT paired with a duplicate of itself)
4. Empty leaves: rejected with InvalidInputError
5. Single leaf: root = double_sha256(leaf_id)

Determinism Notes:
- This module never sorts leaves - it trusts input order
- Layers are stored root-first: layers[0] is the root layer,
  layers[-1] is the base (leaf) layer
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from txmerkle.crypto.hashing import double_sha256, merkle_parent
from txmerkle.schemas.errors import InvalidInputError


logger = logging.getLogger(__name__)

Layer = tuple[str, ...]
LeafId = str | bytes


@dataclass(frozen=True)
class MerkleTree:
    """
    An immutable, fully built Merkle tree.

    Attributes:
        layers: Layers from root (length 1) down to the base layer
                (one hash per leaf, in caller order)
    """
    layers: tuple[Layer, ...]

    def __post_init__(self) -> None:
        """Validate tree shape."""
        if not self.layers:
            raise ValueError("A merkle tree needs at least one layer")
        if len(self.layers[0]) != 1:
            raise ValueError(
                f"Top layer must hold exactly one root, got {len(self.layers[0])}"
            )
        for upper, lower in zip(self.layers, self.layers[1:]):
            if len(upper) != (len(lower) + 1) // 2:
                raise ValueError(
                    f"Layer of {len(upper)} nodes cannot sit above a layer of {len(lower)}"
                )

    @property
    def root(self) -> str:
        return self.layers[0][0]

    @property
    def base_layer(self) -> Layer:
        """The leaf hashes, in the order the leaves were supplied."""
        return self.layers[-1]

    @property
    def leaf_count(self) -> int:
        return len(self.base_layer)

    @property
    def depth(self) -> int:
        """Number of layers, root and base included."""
        return len(self.layers)

    def index_of(self, leaf_hash: str) -> int | None:
        """Return the first base-layer index holding leaf_hash, or None."""
        try:
            return self.base_layer.index(leaf_hash)
        except ValueError:
            return None


def next_layer(layer: Sequence[str]) -> Layer:
    """
    Derive the layer above `layer`.

    Pairs are combined left-to-right; a lone trailing node is carried
    forward verbatim.

    Example: [a, b, c] -> [parent(a, b), c]
    """
    parents: list[str] = []
    for i in range(0, len(layer), 2):
        if i + 1 < len(layer):
            parents.append(merkle_parent(layer[i], layer[i + 1]))
        else:
            parents.append(layer[i])
    return tuple(parents)


def _validate_leaf_ids(
    leaf_ids: Sequence[LeafId] | None,
    max_leaves: int,
    allow_duplicates: bool,
) -> list[LeafId]:
    if leaf_ids is None:
        raise InvalidInputError("no leaves supplied")
    if isinstance(leaf_ids, (str, bytes)):
        raise InvalidInputError(
            "leaf ids must be a sequence of identifiers, not a single string"
        )

    ids = list(leaf_ids)
    if not ids:
        raise InvalidInputError("no leaves supplied")

    for i, leaf_id in enumerate(ids):
        if not isinstance(leaf_id, (str, bytes)):
            raise InvalidInputError(
                f"leaf id at index {i} must be str or bytes, got {type(leaf_id).__name__}",
                leaf_index=i,
            )

    if max_leaves and len(ids) > max_leaves:
        raise InvalidInputError(
            f"{len(ids)} leaves supplied, limit is {max_leaves}",
            details={"max_leaves": max_leaves, "leaf_count": len(ids)},
        )

    if not allow_duplicates:
        seen: dict[LeafId, int] = {}
        for i, leaf_id in enumerate(ids):
            if leaf_id in seen:
                raise InvalidInputError(
                    f"duplicate leaf id at index {i} (first seen at {seen[leaf_id]})",
                    leaf_index=i,
                )
            seen[leaf_id] = i

    return ids


def build_merkle_tree(
    leaf_ids: Sequence[LeafId] | None,
    *,
    max_leaves: int = 0,
    allow_duplicates: bool = True,
) -> MerkleTree:
    """
    Build a Merkle tree from an ordered sequence of leaf identifiers.

    Algorithm:
    1. Hash every leaf id with double_sha256, preserving order (base layer)
    2. Derive the next layer up from the current top until a layer of
       length 1 is produced, inserting each new layer as the new top

    Args:
        leaf_ids: Ordered, non-empty sequence of str/bytes identifiers
        max_leaves: Reject inputs larger than this (0 disables the limit)
        allow_duplicates: When False, repeated leaf ids are rejected

    Returns:
        MerkleTree with layers stored root-first

    Raises:
        InvalidInputError: If leaf_ids is missing, empty, or violates limits
    """
    ids = _validate_leaf_ids(leaf_ids, max_leaves, allow_duplicates)

    layers: list[Layer] = [tuple(double_sha256(leaf_id) for leaf_id in ids)]
    while len(layers[0]) > 1:
        layers.insert(0, next_layer(layers[0]))

    tree = MerkleTree(layers=tuple(layers))
    logger.debug(
        f"Built merkle tree: leaves={tree.leaf_count} layers={tree.depth} root={tree.root}"
    )
    return tree


def build_merkle_root(leaf_ids: Sequence[LeafId] | None) -> str:
    """
    Compute only the root digest for an ordered sequence of leaf ids.

    Raises:
        InvalidInputError: If leaf_ids is missing or empty
    """
    return build_merkle_tree(leaf_ids).root


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the number of layers a tree of num_leaves leaves has.

    Each layer is ceil(half) of the one below, so a single leaf has
    depth 1, two leaves depth 2, and three leaves depth 3 ([3] -> [2] -> [1]).

    Args:
        num_leaves: Number of leaves in the tree

    Returns:
        Tree depth (0 for an empty tree)
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


__all__ = [
    "Layer",
    "LeafId",
    "MerkleTree",
    "next_layer",
    "build_merkle_tree",
    "build_merkle_root",
    "compute_tree_depth",
]
