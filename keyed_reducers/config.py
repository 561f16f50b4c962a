"""
Composition settings.

Defaults come from the environment; combine() accepts an explicit config.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class CombineConfig:
    strict_shapes: bool = False
    warn_unexpected_keys: bool = True

    @staticmethod
    def from_env() -> "CombineConfig":
        strict_shapes = _env_flag("KEYED_REDUCERS_STRICT_SHAPES", "0")
        warn_unexpected_keys = _env_flag("KEYED_REDUCERS_WARN_UNEXPECTED_KEYS", "1")
        return CombineConfig(
            strict_shapes=strict_shapes,
            warn_unexpected_keys=warn_unexpected_keys,
        )
