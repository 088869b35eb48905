"""Configuration for the intersection engine.

The configuration is a small dataclass held in a module-level default.
Callers read a copy with get_intersector_config() and install a new one
with set_intersector_config(); the dispatcher reads the active value on
every call.

Example:
    >>> from src.shape3d.core.config import IntersectorConfig, set_intersector_config
    >>> set_intersector_config(IntersectorConfig(strict_dispatch=True))
"""

from __future__ import annotations

import copy
from dataclasses import dataclass


@dataclass
class IntersectorConfig:
    """Settings that change how the dispatcher treats unsupported pairs.

    Attributes:
        strict_dispatch: When True, an unsupported shape-kind pair raises
            UnsupportedShapePairError. When False (default), the pair is
            reported as a miss and a warning is logged.
    """

    strict_dispatch: bool = False


_INTERSECTOR_CONFIG = IntersectorConfig()


def get_intersector_config() -> IntersectorConfig:
    """Return a copy of the active configuration."""
    return copy.deepcopy(_INTERSECTOR_CONFIG)


def set_intersector_config(config: IntersectorConfig) -> None:
    """Install a new active configuration."""
    global _INTERSECTOR_CONFIG
    _INTERSECTOR_CONFIG = copy.deepcopy(config)


def is_strict_dispatch() -> bool:
    """Check the active strict_dispatch flag without copying the config."""
    return _INTERSECTOR_CONFIG.strict_dispatch
