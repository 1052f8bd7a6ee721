"""Registry description CLI command."""

from __future__ import annotations

from typing import Optional

from ..registry import PortableRegistry


def describe_registry(registry: PortableRegistry, type_id: Optional[int] = None) -> None:
    """Print one line per type: id, declared path, and rendered type.

    Args:
        registry: Registry to describe
        type_id: Only describe this type when given
    """
    type_ids = range(len(registry)) if type_id is None else [type_id]

    if type_id is None:
        print(f"{len(registry)} type{'s' if len(registry) != 1 else ''} loaded.")
        print()

    for tid in type_ids:
        rendered = registry.describe(tid)
        path = "::".join(registry.path(tid))
        if path:
            print(f"{tid:>5}  {path} = {rendered}")
        else:
            print(f"{tid:>5}  {rendered}")
