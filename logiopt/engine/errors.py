"""Exception types raised at algorithm entry."""


class ShapeError(ValueError):
    """Matrix dimensions are inconsistent with the declared vertex count."""
