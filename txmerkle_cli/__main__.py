"""
Module execution entry point.

Allows running with: python -m txmerkle_cli
"""

import sys
from txmerkle_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
