"""Canonical bank names and payment-method display labels.

Offer scrapers spell issuers every which way ("Amazon Pay ICICI credit
cards", "HDFC Bank Ltd", "hdfc"). Everything user facing goes through
``canonicalize_bank`` so the same issuer always renders and matches the same.
"""
from __future__ import annotations

import re

from deals.services.offers import Offer, RawLabel, StructuredMethod

WHITESPACE_RE = re.compile(r"\s+")
WORD_START_RE = re.compile(r"\b[a-z]")
CORPORATE_SUFFIX_RES = (
    re.compile(r"\bltd\.?\b"),
    re.compile(r"\blimited\b"),
    re.compile(r"\bplc\b"),
)
GENERIC_WORDS_RE = re.compile(r"\b(bank|card|cards)\b", re.IGNORECASE)

# Evaluated top to bottom, first match wins. Co-branded cards must come
# before the bare issuer ("amazon pay icici" before "icici").
BANK_RULES = (
    (re.compile(r"amazon\s*pay\s*icici", re.I), "ICICI Bank"),
    (re.compile(r"^icici\b", re.I), "ICICI Bank"),
    (re.compile(r"flipkart\s*axis", re.I), "Axis Bank"),
    (re.compile(r"^axis\b", re.I), "Axis Bank"),
    (re.compile(r"\bau\s*small\s*finance\b", re.I), "AU Small Finance Bank"),
    (re.compile(r"\bbobcard\b", re.I), "Bank of Baroda"),
    (re.compile(r"bank\s*of\s*baroda|^bob\b", re.I), "Bank of Baroda"),
    (re.compile(r"\bsbi\b|state\s*bank\s*of\s*india", re.I), "State Bank of India"),
    (re.compile(r"hdfc", re.I), "HDFC Bank"),
    (re.compile(r"kotak", re.I), "Kotak"),
    (re.compile(r"yes\s*bank", re.I), "YES Bank"),
    (re.compile(r"idfc", re.I), "IDFC First Bank"),
    (re.compile(r"indusind", re.I), "IndusInd Bank"),
    (re.compile(r"federal", re.I), "Federal Bank"),
    (re.compile(r"rbl", re.I), "RBL Bank"),
    (re.compile(r"standard\s*chartered", re.I), "Standard Chartered"),
    (re.compile(r"hsbc", re.I), "HSBC"),
    (re.compile(r"canara", re.I), "Canara Bank"),
)

TYPE_DISPLAY = {
    "credit card": "Credit Card",
    "debit card": "Debit Card",
    "emi": "Credit Card EMI",
    "netbanking": "NetBanking",
    "wallet": "Wallet",
    "upi": "UPI",
}

ANY_BANK_RE = re.compile(r"^(all|any)$", re.I)
COMPLETE_LABEL_RE = re.compile(r"(card|emi|net ?bank|wallet|upi)", re.I)

# Keyword sniffing over offer text, first match wins.
TEXT_LABEL_RULES = (
    (re.compile(r"wallet", re.I), "Wallet"),
    (re.compile(r"\bupi\b", re.I), "UPI"),
    (re.compile(r"net\s*bank|netbank", re.I), "NetBanking"),
    (re.compile(r"debit", re.I), "Debit Card"),
    (re.compile(r"credit|emi", re.I), "Credit Card"),
)
UNKNOWN_LABEL = "—"


def collapse_whitespace(value) -> str:
    return WHITESPACE_RE.sub(" ", str(value or "")).strip()


def title_case(value) -> str:
    text = collapse_whitespace(value).lower()
    return WORD_START_RE.sub(lambda m: m.group(0).upper(), text)


def canonicalize_bank(raw) -> str:
    if not raw:
        return ""
    raw_text = str(raw)
    cleaned = collapse_whitespace(raw_text).lower()
    for suffix_re in CORPORATE_SUFFIX_RES:
        cleaned = suffix_re.sub("", cleaned)
    cleaned = cleaned.strip()

    for pattern, canonical in BANK_RULES:
        if pattern.search(raw_text) or pattern.search(cleaned):
            return canonical

    # "Bank ICICI" only hits the anchored rules once the generic word is gone.
    stripped = collapse_whitespace(GENERIC_WORDS_RE.sub("", cleaned))
    for pattern, canonical in BANK_RULES:
        if stripped and pattern.search(stripped):
            return canonical

    return title_case(stripped) or title_case(raw_text)


def type_display(payment_type) -> str:
    payment_type = str(payment_type or "")
    return TYPE_DISPLAY.get(payment_type.lower(), payment_type)


def synthesize_label(bank, payment_type) -> str:
    bank = str(bank or "")
    if ANY_BANK_RE.match(bank):
        return type_display(payment_type)
    if COMPLETE_LABEL_RE.search(bank):
        return title_case(bank)
    return f"{title_case(bank)} {type_display(payment_type)}".strip()


def extract_display_label(offer: Offer) -> str:
    if offer.payment_method_label:
        return offer.payment_method_label

    if offer.payment_methods:
        first = offer.payment_methods[0]
        if isinstance(first, StructuredMethod) and not first.is_empty:
            return synthesize_label(canonicalize_bank(first.bank), first.type)
        if isinstance(first, RawLabel) and first.text.strip():
            return first.text.strip()

    text = f"{offer.title or ''} {offer.raw_discount or ''}"
    for pattern, label in TEXT_LABEL_RULES:
        if pattern.search(text):
            return label
    return UNKNOWN_LABEL
