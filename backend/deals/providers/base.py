class ProviderError(Exception):
    def __init__(self, message, status_code=502, details=None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details or {}


class FlightProvider:
    name = "base"

    def search_flights(self, params):
        """
        Returns normalized flight records for one direction:
        [{flightNumber, airlineName, departure, arrival, price, stops}, ...]

        params: origin, destination, date (YYYY-MM-DD), adults, travelClass.
        """
        raise NotImplementedError
