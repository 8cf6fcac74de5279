"""
binmerkle CLI

Command-line interface for building Merkle roots and inclusion proofs.

Usage:
    python -m binmerkle_cli root --lines data.txt
    python -m binmerkle_cli verify --lines data.txt --root 0x...
    python -m binmerkle_cli prove --lines data.txt --target "row 3"
    python -m binmerkle_cli check-proof --proof proof.json --target "row 3"
"""

__version__ = "0.1.0"
