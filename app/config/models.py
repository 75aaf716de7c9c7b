"""Configuration schema models using Pydantic."""

import re
from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator, model_validator

from .defaults import (
    DEFAULT_COUNTRY_KEYWORDS,
    DEFAULT_FALLBACK_REASON,
    DEFAULT_MATCH_REASON_RULES,
    DEFAULT_ROLE_KEYWORDS,
    DEFAULT_SOURCES,
    DEFAULT_VISA_KEYWORDS,
    GREENHOUSE_API_BASE_URL,
)


class ATSType(str, Enum):
    """Supported job board types."""

    GREENHOUSE = "greenhouse"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class SourceConfig(BaseModel):
    """Configuration for a single job board."""

    name: str = Field(..., min_length=1, description="Display label for the board")
    identifier: str = Field(..., min_length=1, description="Board token used in API endpoint")
    type: ATSType = Field(ATSType.GREENHOUSE, validate_default=True, description="Board type")
    enabled: bool = Field(True, description="Whether to scan this board")

    @field_validator("name", "identifier")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from string fields."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    model_config = {"use_enum_values": True}


class MatchReasonRule(BaseModel):
    """A topical rule: regex pattern and the rationale shown when it matches."""

    pattern: str = Field(..., min_length=1, description="Case-insensitive regular expression")
    reason: str = Field(..., min_length=1, description="Human-readable rationale")

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Ensure the pattern compiles."""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid regular expression '{v}': {e}") from e
        return v


class MatchingConfig(BaseModel):
    """Keyword tables driving the cheap filter and the classifiers."""

    role_keywords: List[str] = Field(
        default_factory=lambda: list(DEFAULT_ROLE_KEYWORDS),
        description="Title patterns; a posting needs at least one to be relevant",
    )
    country_keywords: Dict[str, List[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_COUNTRY_KEYWORDS.items()},
        description="Country code -> location substrings, checked in order",
    )
    visa_keywords: List[str] = Field(
        default_factory=lambda: list(DEFAULT_VISA_KEYWORDS),
        description="Terms signalling visa or relocation support",
    )
    match_reason_rules: List[MatchReasonRule] = Field(
        default_factory=lambda: [
            MatchReasonRule(pattern=p, reason=r) for p, r in DEFAULT_MATCH_REASON_RULES
        ],
        description="Ordered rationale rules, first match wins",
    )
    fallback_reason: str = Field(DEFAULT_FALLBACK_REASON, min_length=1)
    summary_length: int = Field(200, ge=0, description="Characters of body text kept as summary")

    @field_validator("role_keywords")
    @classmethod
    def validate_role_keywords(cls, v: List[str]) -> List[str]:
        """Drop blanks and make sure every pattern compiles."""
        patterns = [p.strip() for p in v if p and p.strip()]
        for pattern in patterns:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid role keyword pattern '{pattern}': {e}") from e
        return patterns

    @field_validator("visa_keywords")
    @classmethod
    def normalize_visa_keywords(cls, v: List[str]) -> List[str]:
        """Strip and lowercase terms, removing empty strings."""
        return [term.strip().lower() for term in v if term and term.strip()]

    @field_validator("country_keywords")
    @classmethod
    def normalize_country_keywords(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        """Uppercase country codes and lowercase their keywords."""
        normalized: Dict[str, List[str]] = {}
        for country, keywords in v.items():
            code = country.strip().upper()
            if not code:
                raise ValueError("Country code cannot be empty")
            terms = [kw.strip().lower() for kw in keywords if kw and kw.strip()]
            if not terms:
                raise ValueError(f"Country {code} must have at least one keyword")
            normalized[code] = terms
        return normalized


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, validate_default=True, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE,
        validate_default=True,
        description="Log output format (json or key-value)",
    )

    model_config = {"use_enum_values": True}


class AdvancedConfig(BaseModel):
    """Advanced runtime settings."""

    http_request_timeout: int = Field(
        30, ge=5, le=300, description="Request timeout for board API calls (seconds)"
    )
    user_agent: str = Field(
        "VisaReadyJobs/1.0",
        min_length=1,
        description="User-Agent string for HTTP requests",
    )
    max_jobs_per_source: int = Field(
        1000, ge=0, description="Maximum postings to consider per board (0 = unlimited)"
    )
    cache_ttl_seconds: int = Field(
        1800, ge=0, description="How long board responses are reused (0 = no caching)"
    )
    api_base_url: str = Field(GREENHOUSE_API_BASE_URL, min_length=1)

    @field_validator("user_agent", "api_base_url")
    @classmethod
    def strip_value(cls, v: str) -> str:
        """Strip whitespace (and a trailing slash for URLs)."""
        stripped = v.strip().rstrip("/")
        if not stripped:
            raise ValueError("Value cannot be empty")
        return stripped


class AppConfig(BaseModel):
    """Root configuration object for the aggregator."""

    sources: List[SourceConfig] = Field(
        default_factory=lambda: [SourceConfig(identifier=t, name=n) for t, n in DEFAULT_SOURCES],
        description="Job boards to aggregate",
    )
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    advanced: AdvancedConfig = Field(
        default_factory=AdvancedConfig, description="Advanced runtime settings"
    )

    @model_validator(mode="after")
    def validate_sources(self):
        """Reject duplicate boards."""
        seen_sources = set()
        for source in self.sources:
            source_key = (source.type, source.identifier)
            if source_key in seen_sources:
                raise ValueError(
                    f"Duplicate source: {source.type}/{source.identifier} appears multiple times"
                )
            seen_sources.add(source_key)
        return self

    def get_enabled_sources(self) -> List[SourceConfig]:
        """Get list of enabled sources."""
        return [source for source in self.sources if source.enabled]
