"""Main CLI entry point for scalewalk."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from ..cli.describe import describe_registry
from ..codec import DecodeConfig, decode_all, decode_hex
from ..exceptions import ScaleError
from ..registry import PortableRegistry
from ..utils.hexstr import hex_to_bytes


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the scalewalk CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="scalewalk: registry-driven SCALE decoder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  scalewalk --registry types.json --describe              List all types
  scalewalk --registry types.json --describe --type 5     Show one type
  scalewalk --registry types.json --type 5 --decode 0x0400
  scalewalk --version                                      Show version
        """,
    )

    parser.add_argument(
        "--registry",
        metavar="FILE",
        type=str,
        help="JSON registry: a list of types or an object with a 'types' list",
    )
    parser.add_argument(
        "--type",
        metavar="ID",
        type=int,
        help="Type id to describe or decode",
    )
    parser.add_argument(
        "--describe",
        action="store_true",
        help="Print the rendered type expression of registry types",
    )
    parser.add_argument(
        "--decode",
        metavar="HEX",
        type=str,
        help="Decode hex-encoded bytes as --type and print JSON",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="With --decode, decode back-to-back values until the input is exhausted",
    )
    parser.add_argument(
        "--lenient-compact",
        action="store_true",
        help="Accept non-minimal compact integer encodings",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log decoding steps to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="scalewalk 0.1.0",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not args.describe and args.decode is None:
        parser.print_help()
        return 0

    if args.registry is None:
        print("Error: --registry is required", file=sys.stderr)
        return 1

    registry_path = Path(args.registry)
    if not registry_path.exists():
        print(f"Error: File not found: {registry_path}", file=sys.stderr)
        return 1

    try:
        registry = PortableRegistry.from_file(registry_path)

        if args.describe:
            describe_registry(registry, args.type)
            return 0

        if args.type is None:
            print("Error: --decode requires --type", file=sys.stderr)
            return 1

        config = DecodeConfig(strict_compact=not args.lenient_compact)
        if args.all:
            value = decode_all(args.type, hex_to_bytes(args.decode), registry, config)
        else:
            value = decode_hex(args.type, args.decode, registry, config)
    except ScaleError as e:
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Cannot read registry: {e}", file=sys.stderr)
        return 1

    print(json.dumps(value, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
