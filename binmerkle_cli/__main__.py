"""
Module execution entry point.

Allows running with: python -m binmerkle_cli
"""

import sys
from binmerkle_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
