"""
CLI Proof Commands

prove:       emit an inclusion proof document for one data block
check-proof: verify a proof document without the dataset

Usage:
    binmerkle prove --lines data.txt --target "line 3" [--out proof.json]
    binmerkle check-proof --proof proof.json --target "line 3" [--root 0x...]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from binmerkle.crypto import from_hex, get_hasher, to_hex
from binmerkle.merkle import compute_root_from_proof
from binmerkle.schemas.errors import ProofDecodeException
from binmerkle.schemas.proof import ProofDocument, load_proof_document
from binmerkle_cli.commands.inputs import build_tree, load_target


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Returns:
        Exit code (0 proof written, 2 target not in dataset)
    """
    tree = build_tree(args)
    target = load_target(args)

    index = tree.leaf_index(target)
    if index is None:
        print("Error: target is not a data block of this dataset", file=sys.stderr)
        return EXIT_VERIFICATION_FAILED

    proof = tree.prove_index(index)
    document = ProofDocument.from_proof(
        proof,
        root_hash=tree.root(),
        leaf_index=index,
        hash_algorithm=tree.hasher.name,
    )
    payload = document.to_json()

    if args.out:
        Path(args.out).write_text(payload + "\n")
        logger.info(f"Wrote proof for leaf {index} to {args.out}")
        print(f"Saved proof ({len(proof)} steps) to: {args.out}")
    else:
        print(payload)

    return EXIT_SUCCESS


def check_proof_cmd(args: Namespace) -> int:
    """
    Execute the check-proof command.

    The root comes from --root when given, otherwise from the document.

    Returns:
        Exit code (0 valid, 2 invalid, 1 error)
    """
    proof_path = Path(args.proof)
    if not proof_path.exists():
        print(f"Error: Proof file not found: {proof_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        document = load_proof_document(proof_path.read_bytes())
    except ProofDecodeException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        for msg in e.details.get("errors", [])[:10]:
            print(f"  - {msg}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        root_hash = from_hex(args.root) if args.root else document.root_bytes()
    except ValueError as e:
        print(f"Error: invalid --root: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    if root_hash is None:
        print("Error: no root given and the proof document carries none", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    hasher = get_hasher(document.hash_algorithm)
    computed = compute_root_from_proof(load_target(args), document.to_proof(), hasher)
    ok = computed == root_hash
    logger.info(f"Proof check {'passed' if ok else 'failed'}")

    if args.json:
        print(json.dumps({
            "ok": ok,
            "root": to_hex(root_hash),
            "computed_root": to_hex(computed),
            "steps": len(document.steps),
        }, indent=2))
    else:
        print(f"ok: {str(ok).lower()}")
        print(f"root: {to_hex(root_hash)}")
        print(f"computed_root: {to_hex(computed)}")

    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
