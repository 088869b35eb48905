"""Core module.

This module contains the building blocks shared by shapes and intersectors:

Components:
    vector: NumPy float64 vector helpers and the EPSILON tolerance
    config: Intersector configuration (strict dispatch)
    errors: Exception hierarchy
"""

from .config import (
    IntersectorConfig,
    get_intersector_config,
    is_strict_dispatch,
    set_intersector_config,
)
from .errors import Shape3DError, ShapeError, UnsupportedShapePairError
from .vector import (
    EPSILON,
    Vec3,
    any_perpendicular,
    as_vec3,
    cross,
    distance,
    dot,
    frozen_vec3,
    length,
    length_squared,
    near_zero,
    normalize,
    vec3,
)

__all__ = [
    "EPSILON",
    "Vec3",
    "vec3",
    "as_vec3",
    "frozen_vec3",
    "dot",
    "cross",
    "length",
    "length_squared",
    "distance",
    "normalize",
    "near_zero",
    "any_perpendicular",
    "IntersectorConfig",
    "get_intersector_config",
    "set_intersector_config",
    "is_strict_dispatch",
    "Shape3DError",
    "ShapeError",
    "UnsupportedShapePairError",
]
