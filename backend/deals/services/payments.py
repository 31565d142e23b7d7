from __future__ import annotations

import re
from typing import Iterable

from deals.services.banks import canonicalize_bank
from deals.services.offers import Offer, RawLabel, StructuredMethod

EMI_RE = re.compile(r"\bemi\b")
CREDIT_RE = re.compile(r"credit|cc")
DEBIT_RE = re.compile(r"debit")


def normalize_user_selection(values: Iterable | None) -> list[str] | None:
    """Lower-cased, trimmed selection tokens; None means "no filter"."""
    if not values or isinstance(values, str):
        return None
    tokens = [str(v or "").strip().lower() for v in values]
    tokens = [t for t in tokens if t]
    return tokens or None


def payment_labels(offer: Offer) -> list[str]:
    labels: list[str] = []
    for method in offer.payment_methods:
        if isinstance(method, RawLabel):
            # A blank label is contained in every token, so it matches anything.
            labels.append(method.text.strip().lower())
            continue

        if isinstance(method, StructuredMethod):
            bank = canonicalize_bank(method.bank).strip().lower()
            if not bank:
                continue
            labels.append(bank)

            type_str = method.type.lower()
            if EMI_RE.search(type_str):
                kind = "debit card emi" if DEBIT_RE.search(type_str) else "credit card emi"
                labels.append(f"{bank} {kind}")
            elif CREDIT_RE.search(type_str):
                labels.append(f"{bank} credit card")
            elif DEBIT_RE.search(type_str):
                labels.append(f"{bank} debit card")
    return labels


def matches(offer: Offer, user_selection: Iterable[str] | None) -> bool:
    """True when the offer accepts any of the user's payment instruments.

    Containment is checked both ways ("hdfc" matches "hdfc bank credit card"
    and "hdfc bank credit card" matches "hdfc bank"), so short tokens can
    over-match.
    """
    selection = normalize_user_selection(user_selection)
    if not selection:
        return True
    labels = payment_labels(offer)
    return any(
        token in label or label in token
        for token in selection
        for label in labels
    )
