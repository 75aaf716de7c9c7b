"""Listings page rendering using Jinja2.

Turns the pipeline's ordered FinishedListings into either a standalone HTML
page (result count, one card per listing, empty-state message) or a JSON
document for other consumers.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from app.domain.models import FinishedListing, VisaStatus
from app.utils.timestamps import format_relative, utc_now

from .models import PresentationError

logger = logging.getLogger(__name__)

EMPTY_STATE_MESSAGE = "No suitable roles surfaced right now. Try again later today."

VISA_LABELS = {
    VisaStatus.MENTIONED: "Visa sponsorship mentioned",
    VisaStatus.RELOCATION_ONLY: "Relocation support noted",
    VisaStatus.NOT_MENTIONED: "Visa sponsorship not mentioned",
}


def visa_label(status: VisaStatus) -> str:
    """Card headline for a visa status."""
    return VISA_LABELS.get(VisaStatus(status), VISA_LABELS[VisaStatus.NOT_MENTIONED])


def build_card(listing: FinishedListing, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Flatten one listing into the values its card displays.

    Shows "Posted ..." when a publish date exists, otherwise "Updated ...".
    """
    published = format_relative(listing.published_at, now)
    updated = format_relative(listing.updated_at, now)
    return {
        "id": listing.id,
        "title": listing.title,
        "company": listing.company,
        "source": listing.source,
        "location_label": listing.location_label,
        "onsite": listing.onsite,
        "visa_label": visa_label(listing.visa_status),
        "visa_evidence": listing.visa_evidence,
        "match_reason": listing.match_reason,
        "summary": listing.summary,
        "relocation_support": listing.relocation_support,
        "url": listing.url,
        "posted": published,
        "updated": None if published else updated,
    }


def build_page_context(
    listings: Sequence[FinishedListing], now: Optional[datetime] = None
) -> Dict[str, Any]:
    """Template variables for the listings page."""
    now = now or utc_now()
    return {
        "count": len(listings),
        "cards": [build_card(listing, now) for listing in listings],
        "empty_message": EMPTY_STATE_MESSAGE,
        "generated_at": now.strftime("%Y-%m-%d %H:%M UTC"),
    }


def render_json(listings: Sequence[FinishedListing], indent: Optional[int] = 2) -> str:
    """Serialize listings (in the given order) as a JSON document."""
    payload = {
        "count": len(listings),
        "listings": [listing.model_dump(mode="json") for listing in listings],
    }
    return json.dumps(payload, indent=indent, ensure_ascii=False)


class ListingsRenderer:
    """Renders the listings page from the package's Jinja2 templates."""

    def __init__(self, template_dir: str = "templates", page_template: str = "listings.html.j2"):
        self.page_template_name = page_template
        self.env = Environment(
            loader=PackageLoader("app.presentation", template_dir),
            autoescape=True,
            undefined=StrictUndefined,
        )

    def render(self, listings: List[FinishedListing], now: Optional[datetime] = None) -> str:
        """Render the full HTML page.

        Raises:
            PresentationError: If the template is missing or fails to render
        """
        try:
            template = self.env.get_template(self.page_template_name)
            html = template.render(build_page_context(listings, now))
        except TemplateError as e:
            error_msg = f"Template rendering failed: {e}"
            logger.error(error_msg, exc_info=True)
            raise PresentationError(error_msg) from e

        logger.debug("Rendered listings page", extra={"count": len(listings)})
        return html
