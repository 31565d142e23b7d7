import hashlib
from datetime import datetime, timedelta

from deals.providers.base import FlightProvider

CARRIERS = [
    {"code": "AI", "name": "Air India"},
    {"code": "UK", "name": "Vistara"},
    {"code": "6E", "name": "IndiGo"},
    {"code": "SG", "name": "SpiceJet"},
    {"code": "G8", "name": "Go First"},
]

BASE_PRICE = 4500
PRICE_STEP = 350
MAX_JITTER = 400


def _jitter(origin, destination, travel_date, index) -> int:
    """Stable 0..MAX_JITTER-1 offset so the same search yields the same fares."""
    key = f"{origin}:{destination}:{travel_date}:{index}".encode("utf-8")
    return int(hashlib.sha1(key).hexdigest()[:8], 16) % MAX_JITTER


class MockFlightProvider(FlightProvider):
    """Synthetic quotes used when no live provider is reachable."""

    name = "mock"

    def __init__(self, count=6):
        self.count = count

    def search_flights(self, params):
        origin = params.get("origin")
        destination = params.get("destination")
        travel_date = params["date"]
        day = datetime.fromisoformat(travel_date)

        flights = []
        for i in range(self.count):
            carrier = CARRIERS[i % len(CARRIERS)]
            departure = day + timedelta(hours=(8 + i) % 10)
            arrival = departure + timedelta(minutes=90 + i * 10)
            price = BASE_PRICE + i * PRICE_STEP + _jitter(origin, destination, travel_date, i)
            flights.append(
                {
                    "flightNumber": f"{carrier['code']} {100 + i}",
                    "airlineName": carrier["name"],
                    "departure": departure.strftime("%H:%M"),
                    "arrival": arrival.strftime("%H:%M"),
                    "price": f"{price:.2f}",
                    "stops": 1 if i % 3 == 0 else 0,
                }
            )
        return flights
