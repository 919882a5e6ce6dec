"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m hashtree_cli build ITEM... [--from-file PATH] [--append ITEM...] [--json]
    python -m hashtree_cli prove ITEM... --index N [--append ITEM...] [--json]
    python -m hashtree_cli verify ITEM... --value V --index N --proof HEX... [--json]
    python -m hashtree_cli demo [--json]
    python -m hashtree_cli config --show | --init [--path PATH]

Environment Variables:
    HASHTREE_HASH_ALGORITHM     Hash algorithm (blake2b-64, fnv1a-64, sha256)
    HASHTREE_PADDING_VALUE      Padding sentinel, parsed as JSON (default: 0)
    HASHTREE_LOG_LEVEL          Log level (default: INFO)
    HASHTREE_LOG_FILE           Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from hashtree.config import get_default_config_template, load_config
from hashtree.crypto.hashing import available_hashers
from hashtree.schemas.errors import HashTreeException
from hashtree_cli import __version__
from hashtree_cli.commands import build, demo, prove, verify
from hashtree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    print_error,
)


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
    )


def _add_tree_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "items",
        nargs="*",
        help="Items to build the tree from (JSON literals, otherwise strings)",
    )
    parser.add_argument(
        "--from-file", "-f",
        type=str,
        default=None,
        help="YAML or JSON file holding a list of items (appended after ITEMs)",
    )
    parser.add_argument(
        "--append", "-a",
        nargs="+",
        default=None,
        metavar="ITEM",
        help="Items pushed one by one after the tree is built",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="hashtree",
        description="Build Merkle trees, generate and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: ./hashtree.yaml or ~/.config/hashtree/config.yaml)",
    )
    parser.add_argument(
        "--hash",
        type=str,
        default=None,
        choices=available_hashers(),
        help="Hash algorithm (overrides config)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build a tree and print its levels",
        description="Hash the items into leaves, pad to a power of two and print every level.",
    )
    _add_tree_arguments(build_parser)
    build_parser.set_defaults(func=build.build_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate an inclusion proof",
        description="Print the sibling hashes needed to prove the leaf at INDEX.",
    )
    _add_tree_arguments(prove_parser)
    prove_parser.add_argument(
        "--index", "-i",
        type=int,
        required=True,
        help="0-based leaf index",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof",
        description="Check that VALUE sits at INDEX of the tree built from the items.",
    )
    _add_tree_arguments(verify_parser)
    verify_parser.add_argument(
        "--value", "-v",
        type=str,
        required=True,
        help="Claimed value (JSON literal, otherwise string)",
    )
    verify_parser.add_argument(
        "--index", "-i",
        type=int,
        required=True,
        help="Claimed 0-based leaf index",
    )
    verify_parser.add_argument(
        "--proof", "-p",
        nargs="*",
        default=[],
        metavar="HEX",
        help="Proof entries as 0x-prefixed hex, leaf to root",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- demo command ---
    demo_parser = subparsers.add_parser(
        "demo",
        help="Compare an appended tree with a directly built one",
    )
    demo_parser.add_argument("--json", action="store_true", help="JSON output")
    demo_parser.set_defaults(func=demo.demo_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
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
        default="hashtree.yaml",
        help="Path for config file (default: hashtree.yaml)",
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
        print("You can also use environment variables (HASHTREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2, default=str))
        return EXIT_SUCCESS

    print("Usage: hashtree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except (OSError, HashTreeException) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.hash:
        config.tree.hash_algorithm = args.hash

    setup_logging(level=args.log_level or config.logging.level, log_file=config.logging.file)

    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except HashTreeException as e:
        if args.debug:
            traceback.print_exc()
        print_error(e, getattr(args, "json", False))
        return EXIT_RUNTIME_ERROR
    except (OSError, ValueError) as e:
        if args.debug:
            traceback.print_exc()
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
