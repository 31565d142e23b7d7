from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from deals.services.dates import to_iso_date

if TYPE_CHECKING:
    from deals.services.offers import Offer

# Upstream sources name the end of the validity window differently.
# Priority order matters: the first non-null key wins.
VALIDITY_END_KEYS = ("end", "to", "endDate", "till", "until")


def resolve_validity_end(validity_period: Mapping[str, Any] | None) -> str | None:
    """ISO end date of a validity window, or None for open-ended offers."""
    if not isinstance(validity_period, Mapping):
        return None
    for key in VALIDITY_END_KEYS:
        value = validity_period.get(key)
        if value is not None:
            return to_iso_date(value)
    return None


def is_active(offer: "Offer", travel_date_iso: str) -> bool:
    if offer.is_expired:
        return False
    if not offer.valid_until:
        return True
    return travel_date_iso <= offer.valid_until
