"""
Module 04 - CLI Build Command

Build a Merkle tree from transaction ids and print its root.

Usage:
    txmerkle build tx1 tx2 tx3 [--file ids.txt] [--layers] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from pathlib import Path
from typing import Sequence

from txmerkle.merkle.display import describe_tree, format_layers, log_tree
from txmerkle.merkle.engine import MerkleEngine
from txmerkle.schemas.errors import InvalidInputError


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def read_leaf_file(path: Path) -> list[str]:
    """
    Read one leaf id per line.

    Only the line terminator is removed, so surrounding whitespace stays
    part of the id. Blank (whitespace-only) lines are skipped.

    Raises:
        InvalidInputError: If the file is not valid UTF-8 text
    """
    logger.info(f"Reading leaf ids from: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = [line.rstrip("\r\n") for line in f]
    except UnicodeDecodeError as e:
        raise InvalidInputError(
            "leaf file is not valid UTF-8 text", details={"path": str(path)}
        ) from e
    return [line for line in lines if line.strip()]


def collect_leaf_ids(leaves: Sequence[str] | None, leaf_file: str | None) -> list[str]:
    """Combine positional leaf ids with ids read from --file (file ids last)."""
    leaf_ids = list(leaves or [])
    if leaf_file:
        leaf_ids.extend(read_leaf_file(Path(leaf_file)))
    return leaf_ids


def wants_json(args: Namespace) -> bool:
    """True if --json was given or the configured output format is json."""
    if getattr(args, "json", False):
        return True
    config = getattr(args, "cli_config", None)
    return config is not None and config.output.format == "json"


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Returns:
        Exit code (0=success, 1=error)
    """
    leaf_ids = collect_leaf_ids(args.leaves, args.file)

    engine = MerkleEngine(config=args.cli_config.engine)
    root = engine.build_root(leaf_ids)
    log_tree(engine.tree, logger)

    if wants_json(args):
        if args.layers:
            payload = describe_tree(engine.tree)
        else:
            payload = {
                "root": root,
                "leaf_count": engine.tree.leaf_count,
                "layer_count": engine.tree.depth,
            }
        print(json.dumps(payload, indent=2))
    else:
        print(f"Merkle root: {root}")
        if args.layers:
            for line in format_layers(engine.tree):
                print(line)

    return EXIT_SUCCESS
