"""Rendering of finished listings as an HTML page or JSON."""

from .models import PresentationError
from .renderer import (
    EMPTY_STATE_MESSAGE,
    ListingsRenderer,
    build_page_context,
    render_json,
    visa_label,
)

__all__ = [
    "ListingsRenderer",
    "PresentationError",
    "build_page_context",
    "render_json",
    "visa_label",
    "EMPTY_STATE_MESSAGE",
]
