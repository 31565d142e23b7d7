from __future__ import annotations

import logging
from datetime import date

from django.conf import settings

from deals.models import OfferDocument
from deals.services.offers import PORTALS, Offer
from deals.services.validity import is_active

logger = logging.getLogger(__name__)

PortalOfferSet = dict[str, list[Offer]]


def load_active_offers(travel_date_iso: str) -> PortalOfferSet:
    """Coupon offers usable on ``travel_date_iso``, grouped by portal.

    Every portal gets a key, in portal order; offers keep insertion order,
    which is what the selector breaks ties on.
    """
    rows = (
        OfferDocument.objects.filter(is_expired=False, source_portal__in=PORTALS)
        .exclude(coupon_code="")
        .order_by("id")
    )

    by_portal: PortalOfferSet = {portal: [] for portal in PORTALS}
    for row in rows.iterator():
        offer = Offer.from_document(row.as_document())
        if not is_active(offer, travel_date_iso):
            continue
        by_portal[row.source_portal].append(offer)

    logger.info(
        "Loaded active offers",
        extra={"travel_date": travel_date_iso, "counts": {p: len(o) for p, o in by_portal.items()}},
    )
    return by_portal


def sample_active_offers(limit: int | None = None, today: str | None = None) -> list[Offer]:
    """Up to ``limit`` non-expired offers active today, across all portals."""
    if limit is None:
        limit = getattr(settings, "PAYMENT_OPTIONS_SAMPLE_LIMIT", 4000)
    today = today or date.today().isoformat()

    offers: list[Offer] = []
    for row in OfferDocument.objects.filter(is_expired=False).order_by("id").iterator():
        offer = Offer.from_document(row.as_document())
        if not is_active(offer, today):
            continue
        offers.append(offer)
        if len(offers) >= limit:
            break
    return offers
