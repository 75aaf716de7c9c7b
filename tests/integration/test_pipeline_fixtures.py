"""End-to-end pipeline run over recorded board fixtures.

Boards are served by FixtureAdapter, so everything except the HTTP layer
runs for real: filtering, normalization, classification, sorting and
rendering.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from app.config.models import AdvancedConfig, AppConfig, SourceConfig
from app.domain.models import VisaStatus
from app.pipeline import AggregationPipeline
from app.presentation import ListingsRenderer, render_json
from tests.helpers import FixtureAdapter

FIXTURE_PATH = Path(__file__).parent.parent / "fixtures" / "boards.yaml"


@pytest.fixture
def fixture_adapter():
    return FixtureAdapter(FIXTURE_PATH)


@pytest.fixture
def config():
    return AppConfig(
        sources=[
            SourceConfig(name="Alpha", identifier="alpha"),
            SourceConfig(name="Beta", identifier="beta"),
        ],
        advanced=AdvancedConfig(cache_ttl_seconds=0),
    )


@pytest.fixture
def run(config, fixture_adapter):
    with patch("app.pipeline.runner.get_adapter", return_value=fixture_adapter):
        return AggregationPipeline(config).run_once()


def test_listings_sorted_by_update(run):
    assert [listing.id for listing in run.listings] == ["beta-201", "alpha-101", "alpha-102"]


def test_irrelevant_postings_never_fetched(run, fixture_adapter):
    assert "alpha/103" not in fixture_adapter.detail_calls
    assert sorted(fixture_adapter.detail_calls) == ["alpha/101", "alpha/102", "beta/201", "beta/202"]


def test_missing_detail_dropped_and_counted(run):
    beta = next(s for s in run.source_stats if s.source_id == "beta")

    assert beta.relevant_count == 2
    assert beta.listed_count == 1
    assert beta.dropped_count == 1
    assert beta.error_count == 1
    assert beta.had_errors is False
    assert run.had_errors is False


def test_classification(run):
    by_id = {listing.id: listing for listing in run.listings}

    growth = by_id["alpha-101"]
    assert growth.country == "NL"
    assert growth.visa_status == VisaStatus.MENTIONED
    assert growth.visa_evidence == "Visa sponsorship is available for this role."
    assert growth.relocation_support is False
    assert growth.match_reason == "Focuses on digital campaign execution and performance marketing."

    video = by_id["alpha-102"]
    assert video.title == "Senior Video Producer"
    assert video.country == "IT"
    assert video.visa_status == VisaStatus.NOT_MENTIONED
    assert video.visa_evidence is None
    assert video.match_reason == "Requests strong video production and editing skills."
    assert video.updated_at is None

    comms = by_id["beta-201"]
    assert comms.country == "BE"
    assert comms.visa_evidence == "We offer relocation assistance."
    assert comms.relocation_support is True
    assert comms.match_reason == "Broad marketing role aligned with your multi-channel experience."


def test_unknown_board_skipped(fixture_adapter):
    config = AppConfig(
        sources=[
            SourceConfig(name="Ghost", identifier="ghost"),
            SourceConfig(name="Alpha", identifier="alpha"),
        ],
        advanced=AdvancedConfig(cache_ttl_seconds=0),
    )

    with patch("app.pipeline.runner.get_adapter", return_value=fixture_adapter):
        result = AggregationPipeline(config).run_once()

    assert [listing.id for listing in result.listings] == ["alpha-101", "alpha-102"]
    assert result.source_stats[0].had_errors is True
    assert result.had_errors is True
    assert "ghost" in result.source_stats[0].error_message


def test_outputs_render(run):
    document = json.loads(render_json(run.listings))
    html = ListingsRenderer().render(run.listings)

    assert document["count"] == 3
    assert html.count('class="card"') == 3
    assert "Senior Video Producer" in html
