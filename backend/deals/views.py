import logging

from django.db import DatabaseError
from django.utils import timezone
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from deals.providers.base import ProviderError
from deals.repository import sample_active_offers
from deals.serializers import FareSearchSerializer
from deals.services.payment_options import build_payment_options
from deals.services.search import search_fares

logger = logging.getLogger(__name__)


class HealthView(APIView):
    def get(self, request):
        return Response({"status": "ok", "now": timezone.now().isoformat()})


class FareSearchView(APIView):
    def post(self, request):
        serializer = FareSearchSerializer(data=request.data)
        if not serializer.is_valid():
            logger.warning("Rejected search request", extra={"errors": serializer.errors})
            return Response(
                {
                    "error": "Missing required fields",
                    "missing": list(serializer.errors.keys()),
                    "details": serializer.errors,
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            result = search_fares(serializer.validated_data)
        except ProviderError as exc:
            payload = {"message": str(exc)}
            return Response(payload, status=exc.status_code or status.HTTP_502_BAD_GATEWAY)

        return Response(result)


class PaymentOptionsView(APIView):
    def get(self, request):
        try:
            offers = sample_active_offers()
        except DatabaseError:
            logger.exception("Payment options lookup failed.")
            return Response({"options": {}}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"options": build_payment_options(offers)})
