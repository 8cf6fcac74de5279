"""
CLI Input Helpers

Turns command-line arguments into data blocks and trees.

Data blocks come from exactly one source:
    --item TEXT     one block per occurrence (UTF-8 encoded)
    --file PATH     one block per file (raw bytes)
    --lines PATH    one block per line of a file (line endings stripped)
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from binmerkle.config import TreeConfig
from binmerkle.merkle import MerkleTree


logger = logging.getLogger(__name__)


def add_data_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the mutually exclusive data block sources on parser."""
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "--item",
        dest="items",
        action="append",
        metavar="TEXT",
        help="Literal data block (repeatable, order preserved)",
    )
    group.add_argument(
        "--file",
        dest="files",
        action="append",
        metavar="PATH",
        help="File whose contents form one data block (repeatable, order preserved)",
    )
    group.add_argument(
        "--lines",
        type=str,
        metavar="PATH",
        help="File with one data block per line",
    )


def add_target_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the data block being proved or checked."""
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "--target",
        type=str,
        metavar="TEXT",
        help="Literal data block (UTF-8 encoded)",
    )
    group.add_argument(
        "--target-file",
        type=str,
        metavar="PATH",
        help="File whose contents form the data block",
    )


def load_blocks(args: argparse.Namespace) -> list[bytes]:
    """Collect data blocks from whichever source was given."""
    if getattr(args, "items", None):
        blocks = [item.encode("utf-8") for item in args.items]
    elif getattr(args, "files", None):
        blocks = [Path(p).read_bytes() for p in args.files]
    elif getattr(args, "lines", None):
        blocks = Path(args.lines).read_bytes().splitlines()
    else:
        blocks = []

    logger.info(f"Loaded {len(blocks)} data blocks")
    return blocks


def load_target(args: argparse.Namespace) -> bytes:
    if args.target is not None:
        return args.target.encode("utf-8")
    return Path(args.target_file).read_bytes()


def tree_config(args: argparse.Namespace) -> TreeConfig:
    cli_config = getattr(args, "cli_config", None)
    if cli_config is None:
        return TreeConfig()
    return cli_config.tree


def build_tree(args: argparse.Namespace) -> MerkleTree:
    """Build a tree from the data arguments using the configured policy."""
    return MerkleTree.from_config(load_blocks(args), tree_config(args))
