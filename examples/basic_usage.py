#!/usr/bin/env python3
"""Basic usage example for scalewalk.

This example demonstrates:
1. Building a portable registry from raw type definitions
2. Rendering registry types
3. Decoding a SCALE-encoded value and inspecting the unconsumed tail
4. Decoding from hex text
"""

from __future__ import annotations

from scalewalk import PortableRegistry, decode, decode_hex

# A small registry: ids must match list positions.
TYPES = [
    {"id": 0, "definition": {"primitive": "u8"}},
    {"id": 1, "definition": {"primitive": "str"}},
    {"id": 2, "definition": {"compact": {"type": 3}}},
    {"id": 3, "definition": {"primitive": "u128"}},
    {
        "id": 4,
        "definition": {
            "composite": {
                "fields": [
                    {"name": "age", "type": 0},
                    {"name": "name", "type": 1},
                    {"name": "balance", "type": 2},
                ]
            }
        },
    },
    {
        "id": 5,
        "definition": {
            "variant": {
                "variants": [
                    {"name": "Retired", "index": 0, "fields": []},
                    {"name": "Active", "index": 1, "fields": [{"type": 4}]},
                ]
            }
        },
    },
]


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("scalewalk Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Building the registry...")
    registry = PortableRegistry(TYPES)
    print(f"   {len(registry)} types loaded")
    print()

    print("2. Registry types:")
    for type_id in range(len(registry)):
        print(f"   {type_id}: {registry.describe(type_id)}")
    print()

    print("3. Decoding bytes...")
    data = b"\x01" + b"\x05" + b"\x0cbob" + b"\xa1\x0f" + b"\xff"
    value, tail = decode(5, data, registry)
    print(f"   Value: {value}")
    print(f"   Unconsumed tail: {tail.hex() or '(empty)'}")
    print()

    print("4. Decoding hex text...")
    print(f"   0x00 -> {decode_hex(5, '0x00', registry)}")


if __name__ == "__main__":
    main()
