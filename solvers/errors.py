"""Errors raised while building the neighbor graph, assembling or scanning."""


class AssemblyError(ValueError):
    """The tile set cannot be assembled into a square image."""


class NoCornerError(AssemblyError):
    """No tile has exactly two adjacent unmatched sides."""


class InconsistentError(AssemblyError):
    """Traversal produced conflicting placements for the tile set."""


class AmbiguousBorderError(AssemblyError):
    """A border matches more than one other tile side."""


class PatternNotFoundError(ValueError):
    """The marker does not occur in any orientation of the canvas."""
