"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    binmerkle root (--item TEXT ... | --file PATH ... | --lines PATH) [--json]
    binmerkle verify (--item ... | --file ... | --lines PATH) --root HEX [--json]
    binmerkle prove (--item ... | --file ... | --lines PATH) (--target TEXT | --target-file PATH) [--out PATH]
    binmerkle check-proof --proof PATH (--target TEXT | --target-file PATH) [--root HEX] [--json]
    binmerkle config --init | --show

Environment Variables:
    BINMERKLE_LOG_LEVEL          Log level (default: WARNING)
    BINMERKLE_LOG_FILE           Optional log file
    BINMERKLE_OUTPUT_FORMAT      human or json
    BINMERKLE_ODD_LEVEL_POLICY   strict, promote or duplicate (default: strict)
    BINMERKLE_HASH_ALGORITHM     sha256
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from binmerkle.schemas.errors import MerkleException
from binmerkle_cli import __version__
from binmerkle_cli.commands import proof, root, verify
from binmerkle_cli.commands.inputs import add_data_arguments, add_target_arguments
from binmerkle_cli.config import get_default_config_template, load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_output_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=None,
        help="Output machine-readable JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="binmerkle",
        description="Build Merkle roots, verify datasets, and produce or check inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./binmerkle.json or ~/.config/binmerkle/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--policy",
        type=str,
        default=None,
        choices=["strict", "promote", "duplicate"],
        help="Odd-level policy (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the Merkle root of a dataset",
    )
    add_data_arguments(root_parser)
    _add_output_flags(root_parser)
    root_parser.set_defaults(func=root.root_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a full dataset against a known root",
    )
    add_data_arguments(verify_parser)
    verify_parser.add_argument(
        "--root",
        type=str,
        required=True,
        help="Expected root, 0x-prefixed hex",
    )
    _add_output_flags(verify_parser)
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Produce an inclusion proof document for one data block",
    )
    add_data_arguments(prove_parser)
    add_target_arguments(prove_parser)
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof document here instead of stdout",
    )
    prove_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )
    prove_parser.set_defaults(func=proof.prove_cmd)

    # --- check-proof command ---
    check_parser = subparsers.add_parser(
        "check-proof",
        help="Verify an inclusion proof document",
    )
    check_parser.add_argument(
        "--proof",
        type=str,
        required=True,
        help="Path to a proof document (JSON)",
    )
    add_target_arguments(check_parser)
    check_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Expected root, 0x-prefixed hex (default: root stored in the document)",
    )
    _add_output_flags(check_parser)
    check_parser.set_defaults(func=proof.check_proof_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="binmerkle.json",
        help="Path for config file (default: binmerkle.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (BINMERKLE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config = args.cli_config
        print(json.dumps({
            "log_level": config.log_level,
            "log_file": config.log_file,
            "default_output_format": config.default_output_format,
            "tree": config.tree.to_dict(),
        }, indent=2))
        return EXIT_SUCCESS

    print("Usage: binmerkle config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
        if args.policy:
            config.tree = config.tree.from_dict({
                **config.tree.to_dict(),
                "odd_level_policy": args.policy,
            })
    except (OSError, ValueError, MerkleException) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(level=args.log_level or config.log_level, log_file=config.log_file)

    if getattr(args, "json", False) is None:
        args.json = config.default_output_format == "json"

    # Commands read tree settings from here
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except MerkleException as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
