"""
Shared helpers for CLI commands: item parsing, tree construction, output.
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

import yaml

from hashtree.config import RuntimeConfig
from hashtree.crypto.hashing import to_hex
from hashtree.merkle import MerkleTree
from hashtree.schemas.errors import HashTreeException


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def parse_item(raw: str) -> Any:
    """
    Parse a command-line item.

    JSON literals become their Python value ("1" -> 1, "[1, 2]" -> [1, 2]);
    anything else is kept as a plain string.
    """
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def load_items_file(path: str | Path) -> list[Any]:
    """Read a YAML or JSON list of items."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Items file not found: {path}")
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"Items file must contain a list, got {type(data).__name__}")
    return data


def collect_items(args: Namespace) -> list[Any]:
    items = [parse_item(raw) for raw in getattr(args, "items", None) or []]
    if getattr(args, "from_file", None):
        items.extend(load_items_file(args.from_file))
    return items


def build_tree(args: Namespace, items: list[Any]) -> MerkleTree:
    config: RuntimeConfig = getattr(args, "runtime_config", None) or RuntimeConfig()
    return MerkleTree.from_config(items, config)


def tree_to_dict(tree: MerkleTree) -> dict[str, Any]:
    return {
        "hash_algorithm": tree.hasher.name,
        "leaf_count": tree.leaf_count,
        "capacity": tree.capacity,
        "depth": tree.depth,
        "root": to_hex(tree.root),
        "levels": [[to_hex(node) for node in level] for level in tree.tree],
    }


def print_tree(tree: MerkleTree) -> None:
    for number, level in enumerate(tree.tree):
        print(f"level {number} ({len(level)}): " + " ".join(to_hex(node) for node in level))
    print(f"root: {to_hex(tree.root)}")
    print(f"leaf_count: {tree.leaf_count} / capacity: {tree.capacity}")


def print_error(error: HashTreeException, as_json: bool) -> None:
    if as_json:
        print(json.dumps({"error": error.to_error_model().model_dump()}, indent=2, default=str))
    else:
        print(f"Error [{error.code}]: {error.message}", file=sys.stderr)
