"""
CLI Verify Command

Verify that a value sits at an index of the tree built from the given items.

Usage:
    hashtree verify 1 2 3 4 --value 3 --index 2 --proof 0x.. 0x.. [--json]

Exit code 2 when the proof does not verify.
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace

from hashtree.crypto.hashing import from_hex, to_hex
from hashtree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    build_tree,
    collect_items,
    parse_item,
)


logger = logging.getLogger(__name__)


def verify_cmd(args: Namespace) -> int:
    """Handle verify command."""
    try:
        proof = [from_hex(entry) for entry in args.proof or []]
    except ValueError as e:
        print(f"Error: invalid proof entry: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    tree = build_tree(args, collect_items(args))
    for raw in args.append or []:
        tree.push(parse_item(raw))

    value = parse_item(args.value)
    ok = tree.verify(value, args.index, proof)
    logger.info("Verification of index %d: %s", args.index, "ok" if ok else "failed")

    if args.json:
        print(json.dumps({
            "ok": ok,
            "index": args.index,
            "value": value,
            "root": to_hex(tree.root),
        }, indent=2, default=str))
    else:
        status = "VALID" if ok else "INVALID"
        print(f"{status}: value {value!r} at index {args.index} under root {to_hex(tree.root)}")

    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
