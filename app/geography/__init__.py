"""Location resolution against the target country table."""

from .resolver import GeographyResolver

__all__ = ["GeographyResolver"]
