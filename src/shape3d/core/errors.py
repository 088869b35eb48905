"""Exception types raised by the shape3d package."""


class Shape3DError(Exception):
    """Base class for all shape3d errors."""


class ShapeError(Shape3DError, ValueError):
    """Raised when a shape factory receives malformed geometry."""


class UnsupportedShapePairError(Shape3DError, LookupError):
    """Raised in strict mode when no algorithm is registered for a kind pair.

    Attributes:
        kind_a: Kind tag (or type name) of the first shape.
        kind_b: Kind tag (or type name) of the second shape.
    """

    def __init__(self, kind_a: object, kind_b: object) -> None:
        self.kind_a = kind_a
        self.kind_b = kind_b
        super().__init__(f"No intersection algorithm registered for ({kind_a}, {kind_b})")
