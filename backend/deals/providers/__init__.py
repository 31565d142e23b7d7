from django.conf import settings

from deals.providers.amadeus import AmadeusProvider
from deals.providers.base import ProviderError
from deals.providers.mock import MockFlightProvider


def get_flight_provider():
    """Return the configured flight provider instance."""

    raw_name = getattr(settings, "FLIGHTS_PROVIDER", None) or "amadeus"
    provider_name = str(raw_name).strip().lower()

    aliases = {
        "amadeus": "amadeus",
        "amadeus-test": "amadeus",
        "mock": "mock",
        "synthetic": "mock",
    }

    provider_name = aliases.get(provider_name, provider_name)

    if provider_name == "amadeus":
        return AmadeusProvider()

    if provider_name == "mock":
        return MockFlightProvider()

    raise ProviderError(f"Unknown flights provider: {provider_name}", status_code=500)
