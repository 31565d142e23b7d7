"""Fare search: flight quotes decorated with the best coupon price per portal."""
from __future__ import annotations

import logging
from typing import Iterable, Mapping

from deals.providers import get_flight_provider
from deals.providers.base import ProviderError
from deals.providers.mock import MockFlightProvider
from deals.repository import load_active_offers
from deals.services.offers import PORTALS, as_money
from deals.services.payments import normalize_user_selection
from deals.services.pricing import select_best

logger = logging.getLogger(__name__)

ROUND_TRIP = "round-trip"
ONE_WAY = "one-way"


def price_flight(flight: Mapping, offer_set: Mapping, travel_date_iso: str, user_selection=None) -> dict:
    base_price = as_money(flight.get("price")) or 0
    portal_prices = [
        select_best(
            base_price,
            portal,
            offer_set.get(portal) or [],
            travel_date_iso,
            user_selection,
        ).to_dict()
        for portal in PORTALS
    ]
    return {**flight, "portalPrices": portal_prices}


def price_flights(
    flights: Iterable[Mapping],
    travel_date_iso: str,
    user_selection: Iterable[str] | None,
    offer_set: Mapping,
) -> list[dict]:
    selection = normalize_user_selection(user_selection)
    return [price_flight(flight, offer_set, travel_date_iso, selection) for flight in flights]


def _fetch_leg(provider, params: dict) -> tuple[list[dict], bool]:
    """Quotes for one direction and whether they are synthetic."""
    try:
        return provider.search_flights(params), False
    except ProviderError as exc:
        logger.warning(
            "Flight provider failed, using synthetic quotes",
            extra={
                "provider": getattr(provider, "name", type(provider).__name__),
                "origin": params["origin"],
                "destination": params["destination"],
                "date": params["date"],
                "details": exc.details,
            },
        )
        return MockFlightProvider().search_flights(params), True


def search_fares(query: Mapping, provider=None, load_offers=load_active_offers) -> dict:
    """Run a full search.

    ``query`` holds origin, destination, departure_date and optionally
    return_date, passengers, travel_class, trip_type and payment_methods.
    Dates must already be ISO (YYYY-MM-DD).
    """
    provider = provider or get_flight_provider()
    departure_date = query["departure_date"]
    return_date = query.get("return_date")
    selection = normalize_user_selection(query.get("payment_methods"))

    offer_set = load_offers(departure_date)

    leg = {
        "adults": query.get("passengers") or 1,
        "travelClass": query.get("travel_class") or "ECONOMY",
    }
    outbound, outbound_mock = _fetch_leg(
        provider,
        {**leg, "origin": query["origin"], "destination": query["destination"], "date": departure_date},
    )

    inbound, inbound_mock = [], False
    if (query.get("trip_type") or ROUND_TRIP) == ROUND_TRIP and return_date:
        inbound, inbound_mock = _fetch_leg(
            provider,
            {**leg, "origin": query["destination"], "destination": query["origin"], "date": return_date},
        )

    return {
        "outboundFlights": price_flights(outbound, departure_date, selection, offer_set),
        "returnFlights": price_flights(inbound, return_date or departure_date, selection, offer_set),
        "meta": {"fallback": "mock" if (outbound_mock or inbound_mock) else "live"},
    }
