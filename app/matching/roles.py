"""Title filter for marketing roles."""

import re
from typing import Iterable, List, Optional

from app.config.defaults import DEFAULT_ROLE_KEYWORDS


class RoleFilter:
    """Checks posting titles against case-insensitive role keyword patterns."""

    def __init__(self, patterns: Optional[Iterable[str]] = None):
        source = patterns if patterns is not None else DEFAULT_ROLE_KEYWORDS
        self.patterns: List[re.Pattern] = [re.compile(p, re.IGNORECASE) for p in source]

    def matches(self, title: Optional[str]) -> bool:
        """True when any pattern occurs in the title."""
        if not title:
            return False
        return any(pattern.search(title) for pattern in self.patterns)
