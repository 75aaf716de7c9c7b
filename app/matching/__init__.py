"""Keyword classifiers for postings.

This module provides:
- RoleFilter: title keyword check used before detail fetches
- VisaClassifier: visa status and evidence sentence from body text
- MatchReasonClassifier: ordered topical rationale rules
- has_relocation_support: standalone "relocation" flag
"""

from .models import ReasonRule, VisaAssessment
from .reasons import MatchReasonClassifier
from .roles import RoleFilter
from .visa import VisaClassifier, has_relocation_support, split_sentences

__all__ = [
    "RoleFilter",
    "VisaClassifier",
    "VisaAssessment",
    "MatchReasonClassifier",
    "ReasonRule",
    "has_relocation_support",
    "split_sentences",
]
