from django.test import SimpleTestCase

from deals.services.offers import Offer
from deals.services.pricing import compute_discount, select_best

TRAVEL_DATE = "2025-01-10"


def make_offer(**doc):
    doc.setdefault("couponCode", "SAVE")
    return Offer.from_document(doc)


class ComputeDiscountTests(SimpleTestCase):
    def test_percentage_with_cap(self):
        offer = make_offer(discountPercent=10, maxDiscountAmount=300, minTransactionValue=1000)
        result = compute_discount(offer, 5000)
        self.assertTrue(result.eligible)
        self.assertEqual(result.discount, 300)

    def test_uncapped_discount_is_floored(self):
        offer = make_offer(discountPercent=12.5)
        self.assertEqual(compute_discount(offer, 4999).discount, 624)

    def test_non_positive_cap_is_ignored(self):
        offer = make_offer(discountPercent=10, maxDiscountAmount=0)
        self.assertEqual(compute_discount(offer, 5000).discount, 500)

    def test_numeric_strings_are_accepted(self):
        offer = make_offer(discountPercent="10", maxDiscountAmount="250", minTransactionValue="")
        self.assertEqual(compute_discount(offer, 5000).discount, 250)

    def test_below_minimum_transaction(self):
        offer = make_offer(discountPercent=10, minTransactionValue=1000)
        self.assertFalse(compute_discount(offer, 800).eligible)

    def test_unusable_offers(self):
        cases = [
            make_offer(couponCode="", discountPercent=10),
            make_offer(discountPercent=None),
            make_offer(discountPercent="ten"),
            make_offer(discountPercent=0),
            make_offer(discountPercent=-5),
            make_offer(discountPercent=10, maxDiscountAmount="lots"),
        ]
        for offer in cases:
            with self.subTest(offer=offer):
                self.assertFalse(compute_discount(offer, 5000).eligible)

    def test_discount_rounding_to_zero_is_rejected(self):
        offer = make_offer(discountPercent=1)
        self.assertFalse(compute_discount(offer, 50).eligible)

    def test_negative_base_price_fails_fast(self):
        with self.assertRaises(ValueError):
            compute_discount(make_offer(discountPercent=10), -1)


class SelectBestTests(SimpleTestCase):
    def test_capped_offer(self):
        offer = make_offer(discountPercent=10, maxDiscountAmount=300, minTransactionValue=1000)
        quote = select_best(5000, "MakeMyTrip", [offer], TRAVEL_DATE, None)
        self.assertEqual(quote.final_price, 4700)
        self.assertEqual(quote.discount_applied, 300)

    def test_minimum_transaction_leaves_price_unchanged(self):
        offer = make_offer(discountPercent=10, minTransactionValue=1000)
        quote = select_best(800, "MakeMyTrip", [offer], TRAVEL_DATE, None)
        self.assertEqual(quote.final_price, 800)
        self.assertIsNone(quote.applied_offer)
        self.assertNotIn("discountApplied", quote.to_dict())

    def test_first_offer_wins_ties(self):
        first = make_offer(couponCode="A", discountPercent=10, maxDiscountAmount=300)
        second = make_offer(couponCode="B", discountPercent=6)
        quote = select_best(5000, "Yatra", [first, second], TRAVEL_DATE, None)
        self.assertEqual(quote.final_price, 4700)
        self.assertEqual(quote.applied_offer.coupon_code, "A")

    def test_strictly_cheaper_later_offer_wins(self):
        first = make_offer(couponCode="A", discountPercent=5)
        second = make_offer(couponCode="B", discountPercent=8)
        quote = select_best(5000, "Yatra", [first, second], TRAVEL_DATE, None)
        self.assertEqual(quote.applied_offer.coupon_code, "B")
        self.assertEqual(quote.final_price, 4600)

    def test_filters_inactive_and_unmatched_offers(self):
        offers = [
            make_offer(couponCode="OLD", discountPercent=50, validityPeriod={"end": "2025-01-09"}),
            make_offer(couponCode="DEAD", discountPercent=50, isExpired=True),
            make_offer(couponCode="ICICI", discountPercent=40, paymentMethods=[{"bank": "ICICI", "type": "credit"}]),
            make_offer(couponCode="HDFC", discountPercent=20, paymentMethods=[{"bank": "HDFC", "type": "credit"}]),
        ]
        quote = select_best(1000, "Goibibo", offers, TRAVEL_DATE, ["hdfc"])
        self.assertEqual(quote.applied_offer.coupon_code, "HDFC")
        self.assertEqual(quote.final_price, 800)

    def test_end_to_end_single_offer(self):
        offer = make_offer(couponCode="X10", discountPercent=10, minTransactionValue=0, id="abc123")
        payload = select_best(4500, "Cleartrip", [offer], TRAVEL_DATE, None).to_dict()
        self.assertEqual(payload["finalPrice"], 4050)
        self.assertEqual(payload["discountApplied"], 450)
        self.assertEqual(payload["basePrice"], 4500)
        applied = payload["appliedOffer"]
        self.assertEqual(applied["couponCode"], "X10")
        self.assertEqual(applied["portal"], "Cleartrip")
        self.assertEqual(applied["offerId"], "abc123")
        self.assertIsNone(applied["minTransactionValue"])
        self.assertEqual(applied["paymentMethodLabel"], "—")

    def test_snapshot_keeps_offer_portal_and_window(self):
        offer = make_offer(
            discountPercent=10,
            maxDiscountAmount=400,
            minTransactionValue=2000,
            validityPeriod={"from": "2025-01-01", "till": "2025-01-31"},
            sourceMetadata={"sourcePortal": "EaseMyTrip"},
            title="Flat 10% off",
            rawDiscount="10% up to Rs 400",
            paymentMethods=[{"bank": "Kotak", "type": "debit card"}],
        )
        applied = select_best(3000, "EaseMyTrip", [offer], TRAVEL_DATE, None).applied_offer.to_dict()
        self.assertEqual(
            applied,
            {
                "portal": "EaseMyTrip",
                "couponCode": "SAVE",
                "discountPercent": 10.0,
                "maxDiscountAmount": 400.0,
                "minTransactionValue": 2000.0,
                "validityPeriod": {"from": "2025-01-01", "till": "2025-01-31"},
                "rawDiscount": "10% up to Rs 400",
                "title": "Flat 10% off",
                "offerId": None,
                "paymentMethodLabel": "Kotak Debit Card",
            },
        )

    def test_no_offers(self):
        quote = select_best(4500.0, "Goibibo", [], TRAVEL_DATE, None)
        self.assertEqual(quote.to_dict(), {
            "portal": "Goibibo",
            "basePrice": 4500.0,
            "finalPrice": 4500.0,
            "appliedOffer": None,
        })

    def test_invalid_base_price(self):
        for base_price in (-10, float("nan"), "4500"):
            with self.subTest(base_price=base_price):
                with self.assertRaises(ValueError):
                    select_best(base_price, "Goibibo", [], TRAVEL_DATE, None)
