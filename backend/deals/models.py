from django.db import models

from deals.services.offers import PORTALS


class OfferDocument(models.Model):
    """Scraped coupon offer.

    The columns hold what the repository filters on; everything else stays
    in ``document`` exactly as the scraper produced it.
    """

    PORTAL_CHOICES = [(portal, portal) for portal in PORTALS]

    coupon_code = models.CharField(max_length=64, blank=True, default="", db_index=True)
    source_portal = models.CharField(max_length=32, blank=True, default="", db_index=True)
    is_expired = models.BooleanField(default=False, db_index=True)
    document = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.source_portal or '?'}:{self.coupon_code or '-'}"

    def as_document(self) -> dict:
        """Scraped body merged with the indexed columns."""
        return {
            **(self.document or {}),
            "id": self.pk,
            "couponCode": self.coupon_code,
            "sourcePortal": self.source_portal,
            "isExpired": self.is_expired,
        }
