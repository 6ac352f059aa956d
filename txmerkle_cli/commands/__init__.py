"""
CLI command modules.
"""

from txmerkle_cli.commands import build, prove, verify

__all__ = ["build", "prove", "verify"]
