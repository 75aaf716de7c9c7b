"""Unit tests for the role filter and the visa and match-reason classifiers."""

import pytest

from app.config.defaults import DEFAULT_FALLBACK_REASON
from app.domain.models import VisaStatus
from app.matching import (
    MatchReasonClassifier,
    RoleFilter,
    VisaClassifier,
    has_relocation_support,
    split_sentences,
)
from app.matching.visa import build_keyword_pattern

CMS_REASON = "Highlights hands-on CMS and WordPress content ownership."
SEO_REASON = "Looks for SEO optimisation and content growth know-how."
CAMPAIGN_REASON = "Focuses on digital campaign execution and performance marketing."


# ============================================================================
# Role filter
# ============================================================================


class TestRoleFilter:
    """Tests for RoleFilter."""

    @pytest.mark.parametrize(
        "title",
        [
            "Content Marketing Manager",
            "SOCIAL MEDIA LEAD",
            "Head of Brand",
            "Internal Communications Partner",
            "Communication Specialist",
            "Partnerships Manager",
            "SEO Analyst",
        ],
    )
    def test_matches_marketing_titles(self, title):
        assert RoleFilter().matches(title)

    @pytest.mark.parametrize("title", ["Backend Engineer", "Account Executive", "", None])
    def test_rejects_other_titles(self, title):
        assert not RoleFilter().matches(title)

    def test_custom_patterns(self):
        role_filter = RoleFilter([r"\bpr\b"])

        assert role_filter.matches("PR Manager")
        assert not role_filter.matches("Product Manager")

    def test_empty_pattern_list_matches_nothing(self):
        assert not RoleFilter([]).matches("Marketing Manager")


# ============================================================================
# Visa classifier
# ============================================================================


class TestSplitSentences:
    def test_splits_after_terminal_punctuation(self):
        assert split_sentences("One. Two? Three! Four") == ["One.", " Two?", " Three!", " Four"]

    def test_no_punctuation(self):
        assert split_sentences("no punctuation here") == ["no punctuation here"]

    def test_empty(self):
        assert split_sentences("") == []


class TestBuildKeywordPattern:
    def test_multiword_keyword_spans_whitespace(self):
        pattern = build_keyword_pattern(["work permit"])

        assert pattern.search("a WORK   permit is needed")

    def test_only_first_keyword_anchored_at_word_start(self):
        pattern = build_keyword_pattern(["visa", "sponsor", "work permit", "relocation"])

        assert pattern.search("Visas provided")
        assert not pattern.search("revisable terms")
        assert pattern.search("a cosponsored event").group(0) == "sponsor"
        assert pattern.search("nonrelocation package").group(0) == "relocation"

    def test_no_keywords(self):
        assert build_keyword_pattern(["", "  "]) is None


class TestVisaClassifier:
    """Tests for VisaClassifier."""

    def test_unanchored_keyword_inside_word_is_mentioned(self):
        result = VisaClassifier().classify("Talks are cosponsored by partners. Apply now.")

        assert result.status == VisaStatus.MENTIONED
        assert result.evidence == "Talks are cosponsored by partners."

    def test_mentioned_with_evidence(self):
        result = VisaClassifier().classify(
            "Join our team. We provide visa sponsorship for this role. Apply now."
        )

        assert result.status == VisaStatus.MENTIONED
        assert result.mentioned
        assert result.evidence == "We provide visa sponsorship for this role."
        assert result.keyword == "visa"

    def test_first_keyword_in_text_wins(self):
        result = VisaClassifier().classify(
            "Relocation support offered. Visa sponsorship also possible."
        )

        assert result.keyword == "Relocation"
        assert result.evidence == "Relocation support offered."

    def test_not_mentioned(self):
        result = VisaClassifier().classify("Great team, great snacks.")

        assert result.status == VisaStatus.NOT_MENTIONED
        assert result.evidence is None
        assert not result.mentioned

    def test_empty_text(self):
        assert VisaClassifier().classify("").status == VisaStatus.NOT_MENTIONED

    def test_work_permit_across_whitespace(self):
        result = VisaClassifier().classify("We help with your work  permit application.")

        assert result.status == VisaStatus.MENTIONED
        assert result.evidence == "We help with your work  permit application."

    def test_sponsor_prefix_matches_sponsorship(self):
        result = VisaClassifier().classify("Sponsorship available")

        assert result.status == VisaStatus.MENTIONED
        assert result.evidence == "Sponsorship available"

    def test_blocks_bound_sentences(self):
        """A sentence never runs across a paragraph end."""
        text = "Perks include lunch We sponsor visas."
        blocks = ["Perks include lunch", "We sponsor visas."]

        result = VisaClassifier().classify(text, blocks)

        assert result.evidence == "We sponsor visas."

    def test_without_blocks_sentence_spans_text(self):
        result = VisaClassifier().classify("Perks include lunch We sponsor visas.")

        assert result.evidence == "Perks include lunch We sponsor visas."

    def test_relocation_only_never_assigned(self):
        result = VisaClassifier().classify("We offer relocation packages.")

        assert result.status == VisaStatus.MENTIONED

    def test_custom_keywords(self):
        classifier = VisaClassifier(["blue card"])

        assert classifier.classify("EU Blue Card holders welcome.").mentioned
        assert not classifier.classify("Visa sponsorship available.").mentioned

    def test_no_keywords_never_mentions(self):
        assert not VisaClassifier([]).classify("Visa sponsorship available.").mentioned


class TestRelocationSupport:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Relocation assistance provided", True),
            ("full relocation.", True),
            ("We cover relocations", False),
            ("No mention", False),
            ("", False),
            (None, False),
        ],
    )
    def test_standalone_word(self, text, expected):
        assert has_relocation_support(text) is expected


# ============================================================================
# Match reasons
# ============================================================================


class TestMatchReasonClassifier:
    """Tests for MatchReasonClassifier."""

    def test_first_rule_wins(self):
        text = "Own our WordPress site and drive SEO improvements."

        assert MatchReasonClassifier().classify(text) == CMS_REASON

    def test_seo_without_cms(self):
        assert MatchReasonClassifier().classify("Grow organic traffic.") == SEO_REASON

    def test_case_insensitive(self):
        assert MatchReasonClassifier().classify("PERFORMANCE marketing") == CAMPAIGN_REASON

    def test_fallback(self):
        assert MatchReasonClassifier().classify("Manage stakeholders.") == DEFAULT_FALLBACK_REASON
        assert MatchReasonClassifier().classify("") == DEFAULT_FALLBACK_REASON

    def test_custom_rules_and_fallback(self):
        classifier = MatchReasonClassifier(
            [(r"podcast", "Audio storytelling role.")], fallback="Generic."
        )

        assert classifier.classify("Host our podcast") == "Audio storytelling role."
        assert classifier.classify("WordPress") == "Generic."
