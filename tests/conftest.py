"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from scalewalk import PortableRegistry

DATA_DIR = Path(__file__).parent / "data"


def build_registry(definitions: list[Any]) -> PortableRegistry:
    """Build a registry from definitions, assigning ids by position."""
    return PortableRegistry(
        [{"id": i, "definition": definition} for i, definition in enumerate(definitions)]
    )


@pytest.fixture(scope="session")
def make_registry() -> Callable[[list[Any]], PortableRegistry]:
    """Factory building a registry from a list of definitions."""
    return build_registry


@pytest.fixture(scope="session")
def registry() -> PortableRegistry:
    """Registry covering every descriptor kind."""
    return build_registry(
        [
            {"primitive": "u8"},  # 0
            {"primitive": "str"},  # 1
            {"primitive": "bool"},  # 2
            {"primitive": "u32"},  # 3
            {"compact": {"type": 3}},  # 4
            {"sequence": {"type": 0}},  # 5
            {"array": {"len": 4, "type": 0}},  # 6
            {"tuple": [0, 3]},  # 7
            {"tuple": [0]},  # 8
            {"composite": {"fields": [{"name": "age", "type": 0}, {"name": "name", "type": 1}]}},  # 9
            {"composite": {"fields": []}},  # 10
            {"composite": {"fields": [{"name": None, "type": 0}, {"type": 2}]}},  # 11
            {
                "variant": {
                    "variants": [
                        {"name": "B", "index": 5, "fields": [{"type": 0}]},
                        {"name": "A", "index": 0, "fields": []},
                        {"name": "C", "index": 2, "fields": [{"name": "x", "type": 3}]},
                    ]
                }
            },  # 12
            {"variant": {"variants": []}},  # 13
            {"bitSequence": {"bitStoreType": 0, "bitOrderType": 15}},  # 14
            {"variant": {"variants": [{"name": "Lsb0", "index": 0}]}},  # 15
            {"primitive": "i16"},  # 16
            {"primitive": "char"},  # 17
            {"compact": {}},  # 18
            {"sequence": {"type": 9}},  # 19
        ]
    )


@pytest.fixture(scope="session")
def event_registry_path() -> Path:
    """Path to an on-chain shaped registry JSON file."""
    return DATA_DIR / "event_registry.json"


@pytest.fixture(scope="session")
def event_registry(event_registry_path: Path) -> PortableRegistry:
    """Registry loaded from the on-chain shaped JSON file."""
    return PortableRegistry.from_file(event_registry_path)
