"""Domain models for the aggregator."""

from .models import DetailDocument, FinishedListing, MetadataField, RawListing, VisaStatus

__all__ = ["RawListing", "DetailDocument", "MetadataField", "FinishedListing", "VisaStatus"]
