"""Exceptions raised at the mesh-building entry points."""


class InvalidPolygon(ValueError):
    """A footprint that cannot bound a prism (too few or malformed corners)."""

    def __init__(self, message: str, count: int = 0):
        super().__init__(message)
        self.count = count
