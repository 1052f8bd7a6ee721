"""Decode policy configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DecodeConfig:
    """Policy knobs for the decode engine.

    Attributes:
        strict_compact: Reject compact integers encoded in a wider mode than
            their value needs (default True). With False, any well-formed
            compact is accepted.
        max_depth: Maximum nesting depth of compound types (default 200).
            A cyclic registry whose recursion consumes no bytes fails with
            RecursionDepthExceeded once this depth is reached.

    Examples:
        ```python
        from scalewalk import DecodeConfig, decode

        lenient = DecodeConfig(strict_compact=False)
        value, tail = decode(7, data, registry, config=lenient)
        ```
    """

    strict_compact: bool = True
    max_depth: int = 200

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")


DEFAULT_CONFIG = DecodeConfig()
