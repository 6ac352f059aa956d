"""
Module 04 - CLI Verify Command

Verify a saved inclusion proof offline, without the tree.

Usage:
    txmerkle verify --proof proof.json [--leaf tx3] [--root <hex>] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path

from txmerkle.crypto.hashing import double_sha256
from txmerkle.merkle.merkle_proofs import verify_merkle_proof
from txmerkle.schemas.errors import ProofFormatException
from txmerkle.schemas.proof import InclusionProof
from txmerkle_cli.commands.build import wants_json


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str
    leaf_id: str
    root: str
    steps: int
    leaf_hash_ok: bool
    root_ok: bool

    @property
    def all_ok(self) -> bool:
        return self.leaf_hash_ok and self.root_ok

    def to_dict(self) -> dict:
        d = asdict(self)
        d["ok"] = self.all_ok
        return d


def load_proof(path: Path) -> InclusionProof:
    """
    Load a proof document from disk.

    Raises:
        ProofFormatException: If the file is missing or not a proof document
    """
    if not path.exists():
        raise ProofFormatException(f"Proof file not found: {path}", source=str(path))
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ProofFormatException(
            "Proof file is not valid UTF-8 text", source=str(path)
        ) from e
    return InclusionProof.from_json(text, source=str(path))


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    --leaf and --root replace the values recorded in the document, so a
    verifier can check a proof against a root it obtained independently.

    Returns:
        Exit code (0=valid, 1=error, 2=verification failed)
    """
    proof_path = Path(args.proof)
    document = load_proof(proof_path)

    leaf_id = args.leaf if args.leaf is not None else document.leaf_id
    root = args.root if args.root is not None else document.root

    # The recorded leaf hash only binds when the leaf id was not overridden
    leaf_hash_ok = args.leaf is not None or double_sha256(leaf_id) == document.leaf_hash
    root_ok = verify_merkle_proof(leaf_id, document.steps, root)

    summary = VerifySummary(
        proof_path=str(proof_path),
        leaf_id=leaf_id,
        root=root,
        steps=document.depth,
        leaf_hash_ok=leaf_hash_ok,
        root_ok=root_ok,
    )
    logger.info(f"Verified {proof_path}: ok={summary.all_ok}")

    if wants_json(args):
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        status = "VALID" if summary.all_ok else "INVALID"
        print(f"Proof {status}: leaf {leaf_id!r} against root {root}")
        if not leaf_hash_ok:
            print("  leaf_hash does not match leaf_id")
        if not root_ok:
            print("  proof steps do not lead to the root")

    return EXIT_SUCCESS if summary.all_ok else EXIT_VERIFICATION_FAILED
