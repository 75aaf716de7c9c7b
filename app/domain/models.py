"""Core domain models for postings and finished listings.

This module defines the data structures used throughout the application:
- RawListing: minimal posting data from a board's list endpoint
- DetailDocument: full posting body from a board's per-job endpoint
- FinishedListing: classified, presentation-ready posting
- VisaStatus: visa/relocation classification labels
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


class VisaStatus(str, Enum):
    """How a posting talks about visa sponsorship.

    RELOCATION_ONLY is part of the published vocabulary but the classifier
    never assigns it.
    """

    MENTIONED = "mentioned"
    RELOCATION_ONLY = "relocation_only"
    NOT_MENTIONED = "not_mentioned"


class RawListing(BaseModel):
    """Posting as returned by a board's list endpoint.

    Only used to decide whether the posting is worth a detail fetch.
    """

    id: str = Field(..., description="Posting ID on the board")
    title: str = Field(..., description="Posting title")
    location: str = Field("", description="Free-text location name")
    absolute_url: str = Field(..., description="Public link to the posting")
    first_published: Optional[str] = Field(None, description="ISO timestamp of first publication")
    updated_at: Optional[str] = Field(None, description="ISO timestamp of last update")

    @field_validator("id", "title", "absolute_url", mode="before")
    @classmethod
    def coerce_required(cls, v) -> str:
        """Accept numeric IDs and strip whitespace."""
        if v is None:
            raise ValueError("Field is required")
        stripped = str(v).strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @field_validator("location", mode="before")
    @classmethod
    def strip_location(cls, v) -> str:
        """Missing locations become the empty string."""
        return str(v).strip() if v else ""


class MetadataField(BaseModel):
    """A name/value pair from a posting's custom metadata."""

    name: str
    value: Any = None


class DetailDocument(BaseModel):
    """Full posting as returned by a board's per-job endpoint."""

    id: str = Field(..., description="Posting ID on the board")
    content: str = Field("", description="Posting body, HTML (possibly entity-encoded)")
    location: str = Field("", description="Free-text location name")
    absolute_url: Optional[str] = Field(None, description="Public link to the posting")
    first_published: Optional[str] = None
    updated_at: Optional[str] = None
    metadata: List[MetadataField] = Field(default_factory=list)
    departments: List[str] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v) -> str:
        """Accept numeric IDs."""
        if v is None or not str(v).strip():
            raise ValueError("id is required")
        return str(v).strip()

    @field_validator("content", "location", mode="before")
    @classmethod
    def default_empty(cls, v) -> str:
        """Treat null text fields as empty."""
        return str(v) if v else ""


class FinishedListing(BaseModel):
    """Classified posting ready for display.

    The id combines the board token and the upstream posting ID, so it is
    unique across boards within one run.
    """

    id: str = Field(..., description="'{board token}-{posting id}'")
    source: str = Field(..., description="Board display label")
    title: str
    company: str
    country: str = Field(..., description="Resolved target country code")
    city: Optional[str] = None
    location_label: str
    onsite: bool = True
    visa_status: VisaStatus = VisaStatus.NOT_MENTIONED
    visa_evidence: Optional[str] = None
    relocation_support: bool = False
    url: str
    published_at: Optional[str] = None
    updated_at: Optional[str] = None
    match_reason: str
    summary: str = ""

    model_config = {"frozen": True, "json_schema_extra": {"example": {
        "id": "stripe-5432101",
        "source": "Stripe",
        "title": "Content Marketing Manager",
        "company": "Stripe",
        "country": "IE",
        "city": "Dublin",
        "location_label": "Dublin",
        "onsite": True,
        "visa_status": "mentioned",
        "visa_evidence": "We offer visa sponsorship for this role.",
        "relocation_support": False,
        "url": "https://stripe.com/jobs/listing/content-marketing-manager/5432101",
        "published_at": "2024-02-10T09:00:00-05:00",
        "updated_at": "2024-03-01T12:30:00-05:00",
        "match_reason": "Centres on content strategy and copy development.",
        "summary": "Stripe is looking for a content marketer...",
    }}}
