"""Exceptions for the presentation layer."""


class PresentationError(Exception):
    """Raised when the listings page cannot be rendered."""

    pass
