"""Visa and relocation language detection.

A posting counts as mentioning visa support when its body contains any of
the configured keywords. The first sentence holding the matched keyword is
kept as evidence so readers can judge the wording themselves.
"""

import logging
import re
from typing import Iterable, List, Optional, Sequence

from app.config.defaults import DEFAULT_VISA_KEYWORDS
from app.domain.models import VisaStatus

from .models import VisaAssessment

logger = logging.getLogger(__name__)

# Split after sentence-ending punctuation, keeping the punctuation on the sentence
SENTENCE_BOUNDARY_RE = re.compile(r"(?<=[.?!])")
RELOCATION_RE = re.compile(r"\brelocation\b", re.IGNORECASE)


def build_keyword_pattern(keywords: Iterable[str]) -> Optional[re.Pattern]:
    """Compile keywords into one case-insensitive alternation.

    Only the first keyword is anchored at a word start; the others match
    anywhere, so "cosponsored" counts as a sponsor mention while "revisable"
    is not a visa mention. Multi-word keywords match with any run of
    whitespace between words. Returns None when no usable keywords are given.
    """
    parts = []
    for keyword in keywords:
        words = keyword.strip().split()
        if words:
            parts.append(r"\s+".join(re.escape(word) for word in words))
    if not parts:
        return None
    return re.compile(r"\b" + "|".join(parts), re.IGNORECASE)


def split_sentences(text: str) -> List[str]:
    """Split text after '.', '?' and '!'; fragments are returned untrimmed."""
    return [fragment for fragment in SENTENCE_BOUNDARY_RE.split(text) if fragment]


def has_relocation_support(text: str) -> bool:
    """True when the standalone word 'relocation' appears."""
    return bool(RELOCATION_RE.search(text or ""))


class VisaClassifier:
    """Labels posting text with a visa status and evidence sentence."""

    def __init__(self, keywords: Optional[Sequence[str]] = None):
        self.keywords = list(keywords if keywords is not None else DEFAULT_VISA_KEYWORDS)
        self.pattern = build_keyword_pattern(self.keywords)

    def classify(self, text: str, blocks: Optional[Sequence[str]] = None) -> VisaAssessment:
        """Classify normalized posting text.

        Args:
            text: Single-line plain text of the posting body
            blocks: Optional block chunks of the same body; when given, a
                sentence never spans two blocks

        Returns:
            VisaAssessment; evidence may be None even when status is MENTIONED
        """
        if not text or self.pattern is None:
            return VisaAssessment(status=VisaStatus.NOT_MENTIONED)

        match = self.pattern.search(text)
        if not match:
            return VisaAssessment(status=VisaStatus.NOT_MENTIONED)

        keyword = match.group(0)
        evidence = self._find_evidence(keyword, blocks or [text])
        if evidence is None:
            logger.debug(
                "Visa keyword found but no sentence isolated",
                extra={"event": "matching.visa.no_evidence", "keyword": keyword},
            )

        return VisaAssessment(status=VisaStatus.MENTIONED, evidence=evidence, keyword=keyword)

    @staticmethod
    def _find_evidence(keyword: str, blocks: Iterable[str]) -> Optional[str]:
        needle = " ".join(keyword.lower().split())
        for block in blocks:
            for sentence in split_sentences(block):
                if needle in " ".join(sentence.lower().split()):
                    trimmed = sentence.strip()
                    return trimmed or None
        return None
