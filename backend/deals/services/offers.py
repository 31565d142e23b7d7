"""Typed view over free-form offer documents.

Offer documents come from several scrapers and are inconsistently shaped:
payment methods mix plain strings with objects, numeric fields may be
strings, and the end of the validity window hides under one of several keys.
``Offer.from_document`` resolves all of that once so the pricing rules can
work on plain attributes.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from deals.services.validity import resolve_validity_end

PORTALS = ("MakeMyTrip", "Goibibo", "EaseMyTrip", "Yatra", "Cleartrip")

PAYMENT_TYPES = ("Credit Card", "Debit Card", "EMI", "NetBanking", "Wallet", "UPI")

BANK_KEYS = ("bank", "cardBank", "issuer", "cardIssuer", "provider")
TYPE_KEYS = ("type", "method", "category", "mode")


@dataclass(frozen=True)
class RawLabel:
    """Payment method given as free text, e.g. ``"HDFC Credit Card"``."""

    text: str


@dataclass(frozen=True)
class StructuredMethod:
    """Payment method given as an object with bank/type/network parts."""

    bank: str = ""
    type: str = ""
    network: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.bank or self.type or self.network)


PaymentMethod = Union[RawLabel, StructuredMethod]


def as_money(value) -> float | None:
    """Finite float for numbers and numeric strings, None otherwise."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _first_present(entry: Mapping[str, Any], keys) -> str:
    for key in keys:
        value = entry.get(key)
        if value:
            return str(value)
    return ""


def parse_payment_method(entry) -> PaymentMethod | None:
    if isinstance(entry, str):
        return RawLabel(entry)
    if isinstance(entry, Mapping):
        return StructuredMethod(
            bank=_first_present(entry, BANK_KEYS),
            type=_first_present(entry, TYPE_KEYS),
            network=str(entry.get("cardNetwork") or ""),
        )
    return None


def _source_portal(doc: Mapping[str, Any]) -> str | None:
    portal = doc.get("sourcePortal")
    if not portal:
        metadata = doc.get("sourceMetadata")
        if isinstance(metadata, Mapping):
            portal = metadata.get("sourcePortal")
    return str(portal) if portal else None


@dataclass(frozen=True)
class Offer:
    coupon_code: str = ""
    discount_percent: float | None = None
    max_discount_amount: float | None = None
    min_transaction_value: float | None = None
    validity_period: dict | None = None
    valid_until: str | None = None
    is_expired: bool = False
    payment_methods: tuple = ()
    source_portal: str | None = None
    payment_method_label: str | None = None
    title: str | None = None
    raw_discount: str | None = None
    offer_id: str | None = None
    # Names of fields present in the document but unusable (e.g. a text cap).
    malformed_fields: tuple = field(default=(), compare=False)

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Offer":
        malformed = []

        raw_cap = doc.get("maxDiscountAmount")
        cap = as_money(raw_cap)
        if raw_cap not in (None, "") and cap is None:
            malformed.append("maxDiscountAmount")

        raw_percent = doc.get("discountPercent")
        percent = as_money(raw_percent)
        if raw_percent is not None and percent is None:
            malformed.append("discountPercent")

        validity = doc.get("validityPeriod")
        if not isinstance(validity, Mapping):
            validity = None

        methods = doc.get("paymentMethods")
        parsed_methods = []
        if isinstance(methods, (list, tuple)):
            # Unreadable entries stay as empty placeholders so the first
            # entry keeps its position.
            parsed_methods = [parse_payment_method(entry) or StructuredMethod() for entry in methods]

        offer_id = doc.get("id", doc.get("_id"))

        return cls(
            coupon_code=str(doc.get("couponCode") or "").strip(),
            discount_percent=percent,
            max_discount_amount=cap,
            min_transaction_value=as_money(doc.get("minTransactionValue")),
            validity_period=dict(validity) if validity is not None else None,
            valid_until=resolve_validity_end(validity),
            is_expired=doc.get("isExpired") is True,
            payment_methods=tuple(parsed_methods),
            source_portal=_source_portal(doc),
            payment_method_label=doc.get("paymentMethodLabel") or None,
            title=doc.get("title") or None,
            raw_discount=doc.get("rawDiscount") or None,
            offer_id=str(offer_id) if offer_id is not None else None,
            malformed_fields=tuple(malformed),
        )
