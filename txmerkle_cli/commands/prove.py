"""
Module 04 - CLI Prove Command

Build a tree, look up one transaction id and emit its inclusion proof.

Usage:
    txmerkle prove tx3 tx1 tx2 tx3 tx4 [--file ids.txt] [--out proof.json] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from pathlib import Path

from txmerkle.merkle.engine import MerkleEngine
from txmerkle.schemas.proof import InclusionProof
from txmerkle_cli.commands.build import collect_leaf_ids, wants_json


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_NOT_FOUND = 2


def save_proof(document: InclusionProof, out_path: Path) -> None:
    """Write a proof document as JSON."""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(document.to_json() + "\n", encoding="utf-8")
    logger.info(f"Proof written to: {out_path}")


def print_proof(document: InclusionProof) -> None:
    print(f"Leaf:      {document.leaf_id}")
    print(f"Leaf hash: {document.leaf_hash}")
    print(f"Root:      {document.root}")
    print(f"Steps:     {document.depth}")
    for i, step in enumerate(document.steps):
        print(f"  [{i}] {step.position:<5} {step.sibling}")


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Returns:
        Exit code (0=present, 1=error, 2=target not among the leaves)
    """
    leaf_ids = collect_leaf_ids(args.leaves, args.file)

    engine = MerkleEngine(config=args.cli_config.engine)
    engine.build_root(leaf_ids)
    document = engine.prove(args.target)

    if document is None:
        logger.warning(f"Leaf not found in tree: {args.target!r}")
        if wants_json(args):
            print(json.dumps({"present": False, "leaf_id": args.target}, indent=2))
        else:
            print(f"Leaf {args.target!r} is not included in the tree")
        return EXIT_NOT_FOUND

    if args.out:
        save_proof(document, Path(args.out))

    if wants_json(args):
        payload = {"present": True, **document.model_dump()}
        print(json.dumps(payload, indent=2))
    else:
        print_proof(document)

    return EXIT_SUCCESS
