"""HTML to plain text conversion for posting bodies.

Board APIs return the posting body as an HTML fragment, usually with its
markup entity-encoded ("&lt;p&gt;..."). This module turns that into:
1. A single-line, whitespace-collapsed string for keyword scanning
2. The list of block-level chunks (paragraphs, divs, list items) used as
   hard sentence boundaries by the visa classifier
3. The first <h1> heading, which some boards use as the real posting title
"""

import html
import re
from typing import List, Optional

from app.logging import get_logger

from .models import NormalizedText

logger = get_logger(__name__, component="normalization")

BLOCK_CLOSE_RE = re.compile(r"</(?:p|div|li)\s*>", re.IGNORECASE)
TAG_RE = re.compile(r"<[^>]+>")
ANGLE_RE = re.compile(r"[<>]")
WHITESPACE_RE = re.compile(r"\s+")
HEADING_RE = re.compile(r"<h1[^>]*>(.*?)</h1>", re.IGNORECASE | re.DOTALL)


def _strip_markup(html_text: str) -> str:
    """Decode entities, mark block ends with newlines and drop every tag.

    Leaves whitespace uncollapsed so callers can still see the newlines.
    """
    text = html.unescape(html_text)
    text = BLOCK_CLOSE_RE.sub("\n", text)
    text = TAG_RE.sub(" ", text)
    # Unbalanced brackets left over from text like "a < b"
    return ANGLE_RE.sub(" ", text)


def _collapse(text: str) -> str:
    return WHITESPACE_RE.sub(" ", text).strip()


def html_to_text(html_text: Optional[str]) -> str:
    """Convert an HTML fragment to single-line plain text.

    Args:
        html_text: HTML fragment, entity-encoded or not

    Returns:
        Plain text with no tags and single spaces only (empty string for empty input)

    Example:
        >>> html_to_text("<p>Hello</p><p>World</p>")
        'Hello World'
    """
    if not html_text:
        return ""
    return _collapse(_strip_markup(html_text))


def html_to_blocks(html_text: Optional[str]) -> List[str]:
    """Split an HTML fragment into collapsed plain-text blocks.

    Blocks end at closing </p>, </div> and </li> tags. Empty blocks are dropped.
    """
    if not html_text:
        return []
    blocks = (_collapse(chunk) for chunk in _strip_markup(html_text).split("\n"))
    return [block for block in blocks if block]


def extract_heading(html_text: Optional[str]) -> Optional[str]:
    """Return the plain text of the first <h1> element, if any."""
    if not html_text:
        return None
    match = HEADING_RE.search(html.unescape(html_text))
    if not match:
        return None
    heading = html_to_text(match.group(1))
    return heading or None


class TextNormalizer:
    """Produces the text variants the classifiers work on."""

    def normalize(self, html_text: Optional[str]) -> NormalizedText:
        """Normalize a posting body.

        Args:
            html_text: Posting body as returned by the board API

        Returns:
            NormalizedText with single-line text, blocks and heading
        """
        text = html_to_text(html_text)
        if html_text and not text:
            logger.debug(
                "Posting body contained markup only",
                extra={"event": "normalization.body.empty"},
            )
        return NormalizedText(
            text=text,
            blocks=html_to_blocks(html_text),
            heading=extract_heading(html_text),
        )
