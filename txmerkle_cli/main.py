"""
Module 04 - CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m txmerkle_cli build tx1 tx2 tx3 tx4 [--file PATH] [--layers] [--json]
    python -m txmerkle_cli prove tx3 tx1 tx2 tx3 tx4 [--out proof.json] [--json]
    python -m txmerkle_cli verify --proof proof.json [--leaf ID] [--root HEX] [--json]
    python -m txmerkle_cli config --init

Environment Variables:
    TXMERKLE_MAX_LEAVES         Leaf limit for construction (default: 0, unlimited)
    TXMERKLE_ALLOW_DUPLICATES   Accept repeated leaf ids (default: true)
    TXMERKLE_LOG_LEVEL          Log level (default: INFO)
    TXMERKLE_LOG_FILE           Also write logs to this file
    TXMERKLE_OUTPUT_FORMAT      human or json (default: human)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from txmerkle import __version__
from txmerkle.schemas.errors import TxMerkleException
from txmerkle_cli.commands import build, prove, verify
from txmerkle_cli.config import load_config, get_default_config_template


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="txmerkle",
        description="Build Merkle roots over transaction ids, produce and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./txmerkle.json or ~/.config/txmerkle/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Compute the Merkle root of transaction ids",
        description="Fold the given transaction ids, in order, into a Merkle root.",
    )
    build_parser.add_argument(
        "leaves",
        nargs="*",
        help="Transaction ids, in order",
    )
    build_parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Read additional transaction ids from a file (one per line)",
    )
    build_parser.add_argument(
        "--layers",
        action="store_true",
        default=False,
        help="Also print every layer of the tree",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Produce an inclusion proof for one transaction id",
        description="Build the tree and emit the inclusion path for TARGET.",
    )
    prove_parser.add_argument(
        "target",
        type=str,
        help="Transaction id to prove",
    )
    prove_parser.add_argument(
        "leaves",
        nargs="*",
        help="Transaction ids of the tree, in order",
    )
    prove_parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Read additional transaction ids from a file (one per line)",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof document to this JSON file",
    )
    prove_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a saved inclusion proof offline",
        description="Recompute the root from a proof document without the tree.",
    )
    verify_parser.add_argument(
        "--proof", "-p",
        type=str,
        required=True,
        help="Path to a proof document written by 'prove --out'",
    )
    verify_parser.add_argument(
        "--leaf",
        type=str,
        default=None,
        help="Transaction id to check (default: the one recorded in the proof)",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Trusted root to check against (default: the one recorded in the proof)",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="txmerkle.json",
        help="Path for config file (default: txmerkle.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (TXMERKLE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: txmerkle config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def report_error(error: TxMerkleException, as_json: bool) -> None:
    """Print a library error without a traceback."""
    if as_json:
        print(json.dumps({"error": error.to_error_model().model_dump()}, indent=2))
    else:
        print(f"Error [{error.code}]: {error.message}", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=not found / verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except (OSError, TxMerkleException) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except TxMerkleException as e:
        report_error(e, as_json=build.wants_json(args))
        return EXIT_RUNTIME_ERROR
    except OSError as e:
        if args.log_level == "DEBUG":
            traceback.print_exc()
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
