"""
Read-only diagnostic rendering of a built tree (layer count and per-layer
hash listing). Nothing here participates in roots or proofs.
"""
from __future__ import annotations

import logging
from typing import Any

from txmerkle.merkle.merkle_tree import MerkleTree


def layer_label(tree: MerkleTree, position: int) -> str:
    """Name the layer at root-first `position`."""
    if position == 0:
        return "root"
    if position == tree.depth - 1:
        return "base"
    return "intermediate"


def describe_tree(tree: MerkleTree) -> dict[str, Any]:
    """Structured summary, suitable for JSON output."""
    return {
        "root": tree.root,
        "leaf_count": tree.leaf_count,
        "layer_count": tree.depth,
        "layers": [
            {
                "level": tree.depth - 1 - position,
                "kind": layer_label(tree, position),
                "hashes": list(layer),
            }
            for position, layer in enumerate(tree.layers)
        ],
    }


def format_layers(tree: MerkleTree) -> list[str]:
    """
    Human-readable lines, root first.

    Levels count upward from the base layer (level 0).
    """
    lines = [f"Merkle tree: {tree.depth} layer(s), {tree.leaf_count} leaf/leaves"]
    for position, layer in enumerate(tree.layers):
        level = tree.depth - 1 - position
        kind = layer_label(tree, position)
        lines.append(f"  level {level} ({kind}, {len(layer)} node(s)):")
        for i, digest in enumerate(layer):
            lines.append(f"    [{i}] {digest}")
    return lines


def log_tree(tree: MerkleTree, logger: logging.Logger, level: int = logging.DEBUG) -> None:
    """Emit format_layers() through logger."""
    if not logger.isEnabledFor(level):
        return
    for line in format_layers(tree):
        logger.log(level, line)
