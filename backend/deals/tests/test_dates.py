from datetime import date, datetime

from django.test import SimpleTestCase

from deals.services.dates import to_iso_date


class ToIsoDateTests(SimpleTestCase):
    def test_day_month_year_is_reordered(self):
        self.assertEqual(to_iso_date("10/01/2025"), "2025-01-10")

    def test_iso_passes_through(self):
        self.assertEqual(to_iso_date(" 2025-01-10 "), "2025-01-10")

    def test_generic_datetime_is_truncated_to_day(self):
        self.assertEqual(to_iso_date("2025-01-10T08:45:00"), "2025-01-10")
        self.assertEqual(to_iso_date("Jan 10 2025"), "2025-01-10")

    def test_aware_datetime_is_truncated_in_utc(self):
        self.assertEqual(to_iso_date("2025-01-10T22:00:00-05:00"), "2025-01-11")

    def test_date_objects(self):
        self.assertEqual(to_iso_date(date(2025, 1, 10)), "2025-01-10")
        self.assertEqual(to_iso_date(datetime(2025, 1, 10, 23, 59)), "2025-01-10")

    def test_unparseable_values_return_none(self):
        self.assertIsNone(to_iso_date(None))
        self.assertIsNone(to_iso_date(""))
        self.assertIsNone(to_iso_date("   "))
        self.assertIsNone(to_iso_date("soon"))
