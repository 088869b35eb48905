"""Shape kind tags.

Every shape exposes a ``kind`` class attribute from the closed ShapeKind
enumeration. The integer values define the canonical ordering used by the
dispatch tables: a kind pair is always looked up with the lower value first.
"""

from __future__ import annotations

from enum import IntEnum


class ShapeKind(IntEnum):
    """Enumeration of supported shape kinds.

    Used for pairwise algorithm dispatch in the intersector.
    """

    LINE = 0
    RAY = 1
    SEGMENT = 2
    TRIANGLE = 3
    RECTANGLE = 4
    CIRCLE = 5
    SECTOR = 6
    SPHERE = 7


# Kind families sharing one algorithm per family pair
LINEAR_KINDS = frozenset({ShapeKind.LINE, ShapeKind.RAY, ShapeKind.SEGMENT})
POLYGON_KINDS = frozenset({ShapeKind.TRIANGLE, ShapeKind.RECTANGLE})
DISK_KINDS = frozenset({ShapeKind.CIRCLE, ShapeKind.SECTOR})
SOLID_KINDS = frozenset({ShapeKind.SPHERE})

PLANAR_KINDS = POLYGON_KINDS | DISK_KINDS


def kind_of(shape: object) -> ShapeKind | None:
    """Return the shape's kind tag, or None if it has no valid one."""
    kind = getattr(shape, "kind", None)
    if isinstance(kind, ShapeKind):
        return kind
    return None
