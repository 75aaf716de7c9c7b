"""Data models for the classifiers."""

import re
from dataclasses import dataclass
from typing import Optional

from app.domain.models import VisaStatus


@dataclass(frozen=True)
class VisaAssessment:
    """Outcome of scanning a posting body for visa language.

    Attributes:
        status: MENTIONED when any visa keyword occurs, else NOT_MENTIONED
        evidence: First sentence containing the matched keyword, if one could be isolated
        keyword: The keyword text that matched (as written in the body)
    """

    status: VisaStatus
    evidence: Optional[str] = None
    keyword: Optional[str] = None

    @property
    def mentioned(self) -> bool:
        return self.status == VisaStatus.MENTIONED


@dataclass(frozen=True)
class ReasonRule:
    """A compiled match-reason rule."""

    pattern: re.Pattern
    reason: str

    def matches(self, text: str) -> bool:
        return bool(self.pattern.search(text))
