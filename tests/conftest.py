"""Shared fixtures for the test suite."""

import json
from pathlib import Path

import pytest

from app.config.models import AdvancedConfig, AppConfig, SourceConfig
from app.logging.context import clear_log_context
from app.pipeline.runner import clear_shared_caches

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def clean_log_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture(autouse=True)
def clean_shared_caches():
    """Start each test without board responses cached by an earlier one."""
    clear_shared_caches()
    yield
    clear_shared_caches()


@pytest.fixture
def greenhouse_list_response():
    """Recorded Greenhouse list response with 4 postings."""
    with open(FIXTURES_DIR / "greenhouse" / "board_jobs.json") as f:
        return json.load(f)


@pytest.fixture
def greenhouse_detail_response():
    """Recorded Greenhouse detail response for posting 5001."""
    with open(FIXTURES_DIR / "greenhouse" / "job_detail.json") as f:
        return json.load(f)


@pytest.fixture
def source_config():
    return SourceConfig(name="Example Corp", identifier="examplecorp")


@pytest.fixture
def app_config():
    """Two enabled boards and one disabled board, caching off."""
    return AppConfig(
        sources=[
            SourceConfig(name="Alpha", identifier="alpha"),
            SourceConfig(name="Beta", identifier="beta"),
            SourceConfig(name="Disabled", identifier="disabled", enabled=False),
        ],
        advanced=AdvancedConfig(cache_ttl_seconds=0),
    )
