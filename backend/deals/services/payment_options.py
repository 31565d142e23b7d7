"""Catalogue of payment options offered across active coupons.

Feeds the frontend's payment picker: every label lands in one of the fixed
payment-type buckets. EMI issuers are also listed under Credit Card so
they can be found from either bucket.
"""
from __future__ import annotations

import re
from datetime import date
from typing import Iterable

from deals.services.banks import canonicalize_bank, title_case
from deals.services.offers import PAYMENT_TYPES, Offer, RawLabel, StructuredMethod
from deals.services.validity import is_active

EMI_RE = re.compile(r"\bemi\b", re.I)
CREDIT_RE = re.compile(r"credit|cc", re.I)
DEBIT_RE = re.compile(r"debit", re.I)
NETBANKING_RE = re.compile(r"net\s*bank|netbank", re.I)
WALLET_RE = re.compile(r"wallet", re.I)
UPI_RE = re.compile(r"\bupi\b", re.I)
TYPE_VOCABULARY_RE = re.compile(
    r"credit\s*card|debit\s*card|\bemi\b|net\s*bank(?:ing)?|upi|wallet", re.I
)


def _bucket_for(type_text: str) -> str | None:
    if CREDIT_RE.search(type_text):
        return "Credit Card"
    if DEBIT_RE.search(type_text):
        return "Debit Card"
    if NETBANKING_RE.search(type_text):
        return "NetBanking"
    if WALLET_RE.search(type_text):
        return "Wallet"
    if UPI_RE.search(type_text):
        return "UPI"
    return None


def _add(buckets: dict[str, set], bank: str, type_text: str, debit_emi: bool) -> None:
    if EMI_RE.search(type_text):
        kind = "Debit Card EMI" if debit_emi else "Credit Card EMI"
        buckets["EMI"].add(f"{bank} ({kind})")
        buckets["Credit Card"].add(bank)
        return
    bucket = _bucket_for(type_text)
    if bucket:
        buckets[bucket].add(bank)


def build_payment_options(offers: Iterable[Offer], today: str | None = None) -> dict[str, list[str]]:
    today = today or date.today().isoformat()
    buckets: dict[str, set] = {payment_type: set() for payment_type in PAYMENT_TYPES}

    for offer in offers:
        if not is_active(offer, today):
            continue
        for method in offer.payment_methods:
            if isinstance(method, StructuredMethod):
                bank = title_case(canonicalize_bank(method.bank))
                if not bank:
                    continue
                type_text = method.type.lower()
                _add(buckets, bank, type_text, debit_emi=bool(DEBIT_RE.search(type_text)))
            elif isinstance(method, RawLabel):
                bank = title_case(canonicalize_bank(TYPE_VOCABULARY_RE.sub("", method.text).strip()))
                if not bank:
                    continue
                _add(buckets, bank, method.text, debit_emi=False)

    return {payment_type: sorted(buckets[payment_type]) for payment_type in PAYMENT_TYPES}
