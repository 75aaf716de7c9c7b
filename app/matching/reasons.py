"""Match rationale selection.

Rules are evaluated in order and the first one whose pattern occurs in the
posting text supplies the rationale. Order matters: a posting mentioning
both WordPress and SEO gets the CMS rationale.
"""

import re
from typing import Iterable, List, Optional, Tuple

from app.config.defaults import DEFAULT_FALLBACK_REASON, DEFAULT_MATCH_REASON_RULES

from .models import ReasonRule


def compile_rules(rules: Iterable[Tuple[str, str]]) -> List[ReasonRule]:
    """Compile (pattern, reason) pairs into case-insensitive ReasonRules."""
    return [ReasonRule(pattern=re.compile(pattern, re.IGNORECASE), reason=reason) for pattern, reason in rules]


class MatchReasonClassifier:
    """First-match-wins evaluator over an ordered rule list."""

    def __init__(
        self,
        rules: Optional[Iterable[Tuple[str, str]]] = None,
        fallback: str = DEFAULT_FALLBACK_REASON,
    ):
        self.rules = compile_rules(rules if rules is not None else DEFAULT_MATCH_REASON_RULES)
        self.fallback = fallback

    def classify(self, text: str) -> str:
        """Return the rationale of the first matching rule, or the fallback."""
        for rule in self.rules:
            if rule.matches(text or ""):
                return rule.reason
        return self.fallback
