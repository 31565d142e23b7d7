from django.test import SimpleTestCase

from deals.services.offers import PAYMENT_TYPES, Offer
from deals.services.payment_options import build_payment_options

TODAY = "2025-01-10"


def offer_with(*methods, **extra):
    return Offer.from_document({"paymentMethods": list(methods), **extra})


class BuildPaymentOptionsTests(SimpleTestCase):
    def test_every_bucket_is_present(self):
        options = build_payment_options([], today=TODAY)
        self.assertEqual(list(options), list(PAYMENT_TYPES))
        self.assertTrue(all(labels == [] for labels in options.values()))

    def test_structured_entries(self):
        offers = [
            offer_with(
                {"bank": "HSBC", "type": "Credit Card EMI"},
                {"cardBank": "kotak mahindra", "category": "debit card emi"},
                {"bank": "HDFC Bank Ltd", "type": "credit card"},
                {"bank": "sbi", "type": "Debit Card"},
                {"bank": "Axis", "type": "NetBanking"},
                {"provider": "Paytm", "type": "wallet"},
                {"bank": "ICICI", "type": "UPI"},
                {"type": "credit card"},
            )
        ]
        options = build_payment_options(offers, today=TODAY)
        self.assertEqual(options["EMI"], ["Hsbc (Credit Card EMI)", "Kotak (Debit Card EMI)"])
        self.assertEqual(options["Credit Card"], ["Hdfc Bank", "Hsbc", "Kotak"])
        self.assertEqual(options["Debit Card"], ["State Bank Of India"])
        self.assertEqual(options["NetBanking"], ["Axis Bank"])
        self.assertEqual(options["Wallet"], ["Paytm"])
        self.assertEqual(options["UPI"], ["Icici Bank"])

    def test_string_entries(self):
        offers = [
            offer_with("HDFC Credit Card", "RBL Bank EMI", "MobiKwik Wallet", "Federal Bank NetBanking")
        ]
        options = build_payment_options(offers, today=TODAY)
        self.assertEqual(options["Credit Card"], ["Hdfc Bank", "Rbl Bank"])
        self.assertEqual(options["EMI"], ["Rbl Bank (Credit Card EMI)"])
        self.assertEqual(options["Wallet"], ["Mobikwik"])
        self.assertEqual(options["NetBanking"], ["Federal Bank"])

    def test_labels_are_deduplicated_and_sorted(self):
        offers = [
            offer_with({"bank": "Kotak", "type": "credit card"}),
            offer_with({"bank": "HDFC", "type": "credit"}, "hdfc credit card"),
            offer_with({"bank": "Canara", "type": "cc"}),
        ]
        options = build_payment_options(offers, today=TODAY)
        self.assertEqual(options["Credit Card"], ["Canara Bank", "Hdfc Bank", "Kotak"])

    def test_inactive_offers_are_ignored(self):
        offers = [
            offer_with({"bank": "HDFC", "type": "credit"}, isExpired=True),
            offer_with({"bank": "Kotak", "type": "credit"}, validityPeriod={"end": "2025-01-09"}),
            offer_with({"bank": "Axis", "type": "credit"}, validityPeriod={"end": "2025-01-10"}),
        ]
        options = build_payment_options(offers, today=TODAY)
        self.assertEqual(options["Credit Card"], ["Axis Bank"])
