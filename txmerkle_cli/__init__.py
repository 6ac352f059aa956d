"""
Module 04 - txmerkle CLI

Command-line interface for building Merkle roots and inclusion proofs.

Usage:
    python -m txmerkle_cli build tx1 tx2 tx3 tx4
    python -m txmerkle_cli prove tx3 tx1 tx2 tx3 tx4 --out proof.json
    python -m txmerkle_cli verify --proof proof.json
"""

__version__ = "0.1.0"
