"""
CLI Demo Command

Shows that appending to a full tree gives the same tree as building from
the longer sequence: [0, 0, 0, 0] + push(0) versus [0, 0, 0, 0, 0].
"""

from __future__ import annotations

import json
from argparse import Namespace

from hashtree_cli.commands.common import (
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    build_tree,
    print_tree,
    tree_to_dict,
)

SEPARATOR = "=" * 40


def demo_cmd(args: Namespace) -> int:
    """Handle demo command."""
    appended = build_tree(args, [0, 0, 0, 0])
    appended.push(0)
    built = build_tree(args, [0, 0, 0, 0, 0])

    same = appended.tree == built.tree

    if args.json:
        print(json.dumps({
            "equal": same,
            "appended": tree_to_dict(appended),
            "built": tree_to_dict(built),
        }, indent=2))
    else:
        print(SEPARATOR)
        print("[0, 0, 0, 0] + push(0)")
        print_tree(appended)
        print(SEPARATOR)
        print("[0, 0, 0, 0, 0]")
        print_tree(built)
        print(SEPARATOR)
        print("trees are equal" if same else "trees differ")

    return EXIT_SUCCESS if same else EXIT_VERIFICATION_FAILED
