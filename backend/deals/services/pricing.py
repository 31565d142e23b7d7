"""Discount math and best-offer selection for a single portal."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from deals.services.banks import extract_display_label
from deals.services.offers import Offer
from deals.services.payments import matches
from deals.services.validity import is_active

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiscountResult:
    discount: float = 0
    eligible: bool = False


@dataclass(frozen=True)
class AppliedOffer:
    portal: str
    coupon_code: str
    discount_percent: float | None
    max_discount_amount: float | None
    min_transaction_value: float | None
    validity_period: dict | None
    raw_discount: str | None
    title: str | None
    offer_id: str | None
    payment_method_label: str

    def to_dict(self) -> dict:
        return {
            "portal": self.portal,
            "couponCode": self.coupon_code,
            "discountPercent": self.discount_percent,
            "maxDiscountAmount": self.max_discount_amount,
            "minTransactionValue": self.min_transaction_value,
            "validityPeriod": self.validity_period,
            "rawDiscount": self.raw_discount,
            "title": self.title,
            "offerId": self.offer_id,
            "paymentMethodLabel": self.payment_method_label,
        }


@dataclass(frozen=True)
class PriceQuote:
    portal: str
    base_price: float
    final_price: float
    discount_applied: float = 0
    applied_offer: AppliedOffer | None = None

    def to_dict(self) -> dict:
        payload = {
            "portal": self.portal,
            "basePrice": self.base_price,
            "finalPrice": self.final_price,
        }
        if self.discount_applied > 0:
            payload["discountApplied"] = self.discount_applied
        payload["appliedOffer"] = self.applied_offer.to_dict() if self.applied_offer else None
        return payload


def _check_base_price(base_price) -> float:
    if isinstance(base_price, bool) or not isinstance(base_price, (int, float)):
        raise ValueError(f"Base price must be a number, got {base_price!r}")
    if not math.isfinite(base_price) or base_price < 0:
        raise ValueError(f"Base price must be a finite, non-negative number, got {base_price!r}")
    return base_price


def compute_discount(offer: Offer, base_price: float) -> DiscountResult:
    base_price = _check_base_price(base_price)

    if not offer.coupon_code:
        return DiscountResult()
    if "maxDiscountAmount" in offer.malformed_fields:
        return DiscountResult()

    percent = offer.discount_percent
    if percent is None or not math.isfinite(percent) or percent <= 0:
        return DiscountResult()

    min_txn = offer.min_transaction_value or 0
    if base_price < min_txn:
        return DiscountResult()

    discount = math.floor(base_price * percent / 100)
    cap = offer.max_discount_amount
    if cap is not None and cap > 0:
        discount = min(discount, cap)
    if discount <= 0:
        return DiscountResult()
    return DiscountResult(discount=discount, eligible=True)


def snapshot_offer(offer: Offer, portal: str) -> AppliedOffer:
    return AppliedOffer(
        portal=offer.source_portal or portal,
        coupon_code=offer.coupon_code,
        discount_percent=offer.discount_percent,
        max_discount_amount=offer.max_discount_amount,
        min_transaction_value=offer.min_transaction_value or None,
        validity_period=offer.validity_period,
        raw_discount=offer.raw_discount,
        title=offer.title,
        offer_id=offer.offer_id,
        payment_method_label=extract_display_label(offer),
    )


def select_best(
    base_price: float,
    portal: str,
    offers: Sequence[Offer],
    travel_date_iso: str,
    user_selection: Iterable[str] | None = None,
) -> PriceQuote:
    """Cheapest price reachable on ``portal`` with a single coupon.

    Offers are tried in the given order and a later offer only wins when it
    is strictly cheaper, so ties go to the earliest offer.
    """
    base_price = _check_base_price(base_price)
    best = PriceQuote(portal=portal, base_price=base_price, final_price=base_price)

    for offer in offers:
        if not offer.coupon_code:
            continue
        if not is_active(offer, travel_date_iso):
            continue
        if not matches(offer, user_selection):
            continue

        result = compute_discount(offer, base_price)
        if not result.eligible:
            if offer.malformed_fields:
                logger.debug(
                    "Skipping malformed offer",
                    extra={"offer_id": offer.offer_id, "fields": offer.malformed_fields},
                )
            continue

        final_price = base_price - result.discount
        if final_price < best.final_price:
            best = PriceQuote(
                portal=portal,
                base_price=base_price,
                final_price=final_price,
                discount_applied=result.discount,
                applied_offer=snapshot_offer(offer, portal),
            )
    return best
