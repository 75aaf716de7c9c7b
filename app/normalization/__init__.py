"""Plain-text extraction from posting markup.

This module provides:
- NormalizedText: single-line text, block chunks and heading of a body
- TextNormalizer: builds NormalizedText from an HTML fragment
- html_to_text / html_to_blocks / extract_heading: the underlying functions
"""

from .models import NormalizedText
from .service import TextNormalizer, extract_heading, html_to_blocks, html_to_text

__all__ = [
    "TextNormalizer",
    "NormalizedText",
    "html_to_text",
    "html_to_blocks",
    "extract_heading",
]
