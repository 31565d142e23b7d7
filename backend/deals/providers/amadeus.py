import logging
import threading
import time

import requests
from django.conf import settings

from deals.providers.base import FlightProvider, ProviderError
from deals.services.normalize import normalize_flight_offers

logger = logging.getLogger(__name__)

TOKEN_PATH = "/v1/security/oauth2/token"
FLIGHT_OFFERS_PATH = "/v2/shopping/flight-offers"

DEFAULT_TOKEN_TTL = 1800
# Refresh a little before the provider-side expiry.
TOKEN_REFRESH_MARGIN = 30
MAX_RESULTS = 20


class AccessTokenCache:
    """Single cached bearer token with its expiry.

    ``get_token`` returns the cached token while it is fresh. Otherwise the
    refresh runs under a lock, so concurrent callers wait for one token
    request instead of issuing their own.
    """

    def __init__(self, clock=time.monotonic, margin=TOKEN_REFRESH_MARGIN):
        self._clock = clock
        self._margin = margin
        self._lock = threading.Lock()
        self._token = None
        self._expires_at = 0.0

    def _fresh(self):
        return self._token is not None and self._clock() < self._expires_at - self._margin

    def get_token(self, fetch):
        """``fetch()`` must return ``(token, expires_in_seconds)``."""
        if self._fresh():
            return self._token
        with self._lock:
            if self._fresh():
                return self._token
            token, expires_in = fetch()
            self._token = token
            self._expires_at = self._clock() + (expires_in or DEFAULT_TOKEN_TTL)
            return token

    def clear(self):
        with self._lock:
            self._token = None
            self._expires_at = 0.0


def _request_json(method, url, *, timeout=25, **kwargs):
    try:
        response = requests.request(method, url, timeout=timeout, **kwargs)
    except requests.RequestException as exc:
        logger.exception("Amadeus request failed.")
        raise ProviderError(
            "Amadeus request failed.",
            status_code=502,
            details={"error": str(exc)},
        )

    if response.status_code >= 400:
        try:
            details = response.json()
        except ValueError:
            details = {"error": response.text[:500]}
        logger.warning(
            "Amadeus error response",
            extra={"status_code": response.status_code, "details": details},
        )
        raise ProviderError(
            f"Amadeus returned an error ({response.status_code}).",
            status_code=502,
            details=details,
        )

    try:
        return response.json()
    except ValueError:
        raise ProviderError("Amadeus response was not valid JSON.")


class AmadeusProvider(FlightProvider):
    name = "amadeus"

    # Shared by every instance: one token per process.
    token_cache = AccessTokenCache()

    def __init__(self, api_key=None, api_secret=None, base_url=None):
        self.api_key = api_key or getattr(settings, "AMADEUS_API_KEY", None)
        self.api_secret = api_secret or getattr(settings, "AMADEUS_API_SECRET", None)
        self.base_url = (
            base_url or getattr(settings, "AMADEUS_BASE_URL", "https://test.api.amadeus.com")
        ).rstrip("/")

    def _fetch_token(self):
        payload = _request_json(
            "POST",
            self.base_url + TOKEN_PATH,
            data={
                "grant_type": "client_credentials",
                "client_id": self.api_key,
                "client_secret": self.api_secret,
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise ProviderError("Amadeus token response had no access_token.")
        logger.info("Fetched a new Amadeus access token.")
        return token, payload.get("expires_in") or DEFAULT_TOKEN_TTL

    def get_access_token(self):
        if not self.api_key or not self.api_secret:
            raise ProviderError("Amadeus API credentials are not configured.", status_code=500)
        return self.token_cache.get_token(self._fetch_token)

    def search_flights(self, params):
        token = self.get_access_token()
        query = {
            "originLocationCode": params["origin"],
            "destinationLocationCode": params["destination"],
            "departureDate": params["date"],
            "adults": str(params.get("adults") or 1),
            "travelClass": params.get("travelClass") or "ECONOMY",
            "currencyCode": getattr(settings, "DEFAULT_CURRENCY", "INR"),
            "max": str(MAX_RESULTS),
        }
        payload = _request_json(
            "GET",
            self.base_url + FLIGHT_OFFERS_PATH,
            params=query,
            headers={"Authorization": f"Bearer {token}"},
        )
        return normalize_flight_offers(payload)
