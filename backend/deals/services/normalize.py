from datetime import datetime

NO_TIME = "--:--"


def _first_segment(offer):
    itineraries = offer.get("itineraries") or []
    if not itineraries:
        return {}
    segments = itineraries[0].get("segments") or []
    return segments[0] if segments else {}


def _clock_time(value):
    if not value or not isinstance(value, str):
        return NO_TIME
    try:
        return datetime.fromisoformat(value).strftime("%H:%M")
    except ValueError:
        return NO_TIME


def _parse_total(price):
    if not isinstance(price, dict):
        return 0.0
    raw = price.get("grandTotal") or price.get("total") or 0
    try:
        return float(raw)
    except (TypeError, ValueError):
        return 0.0


def normalize_flight_offer(offer, carriers):
    """Map one Amadeus flight-offer into the flight record priced per portal."""
    segment = _first_segment(offer)
    validating = offer.get("validatingAirlineCodes") or []
    carrier_code = segment.get("carrierCode") or (validating[0] if validating else None) or "NA"

    itineraries = offer.get("itineraries") or []
    segment_count = len(itineraries[0].get("segments") or []) if itineraries else 0
    stops = max(segment_count, 1) - 1

    return {
        "flightNumber": f"{carrier_code} {segment.get('number') or ''}".strip(),
        "airlineName": carriers.get(carrier_code) or carrier_code,
        "departure": _clock_time((segment.get("departure") or {}).get("at")),
        "arrival": _clock_time((segment.get("arrival") or {}).get("at")),
        "price": f"{_parse_total(offer.get('price')):.2f}",
        "stops": stops,
    }


def normalize_flight_offers(raw):
    if not isinstance(raw, dict):
        return []
    dictionaries = raw.get("dictionaries") or {}
    carriers = dictionaries.get("carriers") or {}
    return [
        normalize_flight_offer(offer, carriers)
        for offer in raw.get("data") or []
        if isinstance(offer, dict)
    ]
