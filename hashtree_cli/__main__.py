"""
Module execution entry point.

Allows running with: python -m hashtree_cli
"""

import sys
from hashtree_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
