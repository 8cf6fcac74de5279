"""
CLI command modules.
"""

from binmerkle_cli.commands import inputs, proof, root, verify

__all__ = ["inputs", "proof", "root", "verify"]
