"""
hashtree CLI

Command-line interface for building trees, generating and verifying proofs.

Usage:
    python -m hashtree_cli build 1 2 3 4 5
    python -m hashtree_cli prove 1 2 3 4 5 --index 2
    python -m hashtree_cli verify 1 2 3 4 5 --value 3 --index 2 --proof 0x.. 0x.. 0x..
    python -m hashtree_cli demo
    python -m hashtree_cli config --show
"""

__version__ = "0.1.0"
