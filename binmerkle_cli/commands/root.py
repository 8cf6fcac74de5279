"""
CLI Root Command

Print the Merkle root of a dataset.

Usage:
    binmerkle root --lines data.txt [--json]
"""

from __future__ import annotations

import json
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from binmerkle.crypto import to_hex
from binmerkle_cli.commands.inputs import build_tree


EXIT_SUCCESS = 0


@dataclass
class RootSummary:
    """Summary of a built tree for CLI output."""
    root: str = ""
    leaf_count: int = 0
    depth: int = 0
    policy: str = ""
    hash_algorithm: str = ""
    level_sizes: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    tree = build_tree(args)

    summary = RootSummary(
        root=to_hex(tree.root()),
        leaf_count=tree.leaf_count,
        depth=tree.depth,
        policy=tree.policy.value,
        hash_algorithm=tree.hasher.name,
        level_sizes=[len(level) for level in tree.levels],
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"root: {summary.root}")
        print(f"leaves: {summary.leaf_count}")
        print(f"depth: {summary.depth}")
        print(f"policy: {summary.policy}")

    return EXIT_SUCCESS
