"""Data models for the normalization layer."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class NormalizedText:
    """Plain-text views of one posting body.

    Attributes:
        text: Whole body on a single line, whitespace collapsed
        blocks: Body split at paragraph/div/list-item ends, each collapsed
        heading: Text of the first <h1>, or None
    """

    text: str
    blocks: List[str] = field(default_factory=list)
    heading: Optional[str] = None

    def summary(self, length: int = 200) -> str:
        """Leading slice of the text used as the listing summary."""
        return self.text[:length]
