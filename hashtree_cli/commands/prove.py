"""
CLI Prove Command

Generate an inclusion proof for one leaf position.

Usage:
    hashtree prove 1 2 3 4 5 --index 2 [--append 6 ...] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace

from hashtree.crypto.hashing import to_hex
from hashtree.schemas.errors import IndexOutOfBoundsException
from hashtree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    build_tree,
    collect_items,
    parse_item,
    print_error,
)


logger = logging.getLogger(__name__)


def prove_cmd(args: Namespace) -> int:
    """Handle prove command."""
    tree = build_tree(args, collect_items(args))
    for raw in args.append or []:
        tree.push(parse_item(raw))

    try:
        proof = tree.generate_proof(args.index)
    except IndexOutOfBoundsException as e:
        logger.warning("Proof requested outside the tree: %s", e.message)
        print_error(e, args.json)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps({
            "index": args.index,
            "root": to_hex(tree.root),
            "proof": [to_hex(sibling) for sibling in proof],
        }, indent=2))
    else:
        print(f"root: {to_hex(tree.root)}")
        print(f"index: {args.index}")
        print("proof: " + " ".join(to_hex(sibling) for sibling in proof))
    return EXIT_SUCCESS
