"""
CLI Build Command

Build a tree from items and print every level and the root.

Usage:
    hashtree build 1 2 3 4 5 [--from-file items.yaml] [--append 6 ...] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace

from hashtree_cli.commands.common import (
    EXIT_SUCCESS,
    build_tree,
    collect_items,
    parse_item,
    print_tree,
    tree_to_dict,
)


logger = logging.getLogger(__name__)


def build_cmd(args: Namespace) -> int:
    """Handle build command."""
    items = collect_items(args)
    logger.info("Building tree from %d items", len(items))

    tree = build_tree(args, items)
    for raw in args.append or []:
        tree.push(parse_item(raw))

    if args.json:
        print(json.dumps(tree_to_dict(tree), indent=2))
    else:
        print_tree(tree)
    return EXIT_SUCCESS
