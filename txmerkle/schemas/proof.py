"""
Module 01 - Schemas
File: proof.py

Purpose: Inclusion proof schemas.

- ProofStep: one sibling digest plus the side it sits on
- QueryResult: outcome of a containment query against a built tree
- InclusionProof: portable proof document that a third party can verify
  from the leaf id, the steps and the root alone
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import ProofFormatException


PROOF_SCHEMA_VERSION = "v1"

# Side of the sibling relative to the hash carried forward:
# "right" -> parent(carried, sibling), "left" -> parent(sibling, carried)
ProofPosition = Literal["right", "left"]

RIGHT: ProofPosition = "right"
LEFT: ProofPosition = "left"


class ProofStep(BaseModel):
    """A single hop of an inclusion path."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sibling: str = Field(..., description="Hex digest of the sibling node", min_length=1)
    position: ProofPosition = Field(..., description="Side the sibling sits on")

    @property
    def offset(self) -> int:
        """Numeric side marker: +1 when the sibling is appended, -1 when prepended."""
        return 1 if self.position == RIGHT else -1


class QueryResult(BaseModel):
    """
    Result of a containment query.

    When the leaf is absent, proof and root are both None. When present,
    both are set (the proof may be empty for a single-leaf tree).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    present: bool
    proof: list[ProofStep] | None = None
    root: str | None = None

    @model_validator(mode="after")
    def validate_presence(self) -> "QueryResult":
        """Keep proof/root consistent with the presence flag."""
        if self.present:
            if self.proof is None or self.root is None:
                raise ValueError("a present result must carry both proof and root")
        elif self.proof is not None or self.root is not None:
            raise ValueError("an absent result must not carry proof or root")
        return self

    @classmethod
    def absent(cls) -> "QueryResult":
        """Create a negative result."""
        return cls(present=False)

    @property
    def proof_length(self) -> int:
        return len(self.proof) if self.proof else 0


class InclusionProof(BaseModel):
    """
    Portable inclusion proof document.

    This is what the CLI writes with `prove --out` and reads back with
    `verify --proof`. The tree itself is never part of the document.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default=PROOF_SCHEMA_VERSION)
    leaf_id: str = Field(..., description="The leaf identifier being proven")
    leaf_hash: str = Field(..., description="DoubleHash of the leaf identifier", min_length=1)
    root: str = Field(..., description="Root the proof resolves to", min_length=1)
    steps: list[ProofStep] = Field(default_factory=list)

    @property
    def depth(self) -> int:
        """Number of combination steps in the proof."""
        return len(self.steps)

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to JSON text."""
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, text: str | bytes, source: str | None = None) -> "InclusionProof":
        """
        Parse a proof document from JSON text.

        Raises:
            ProofFormatException: If the text is not a valid proof document
        """
        try:
            return cls.model_validate_json(text)
        except ValidationError as e:
            raise ProofFormatException(
                f"Invalid proof document: {e.error_count()} validation error(s)",
                source=source,
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e


__all__ = [
    "PROOF_SCHEMA_VERSION",
    "ProofPosition",
    "RIGHT",
    "LEFT",
    "ProofStep",
    "QueryResult",
    "InclusionProof",
]
