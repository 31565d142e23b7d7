from rest_framework import serializers

from deals.services.dates import to_iso_date

TRAVEL_CLASSES = ["ECONOMY", "PREMIUM_ECONOMY", "BUSINESS", "FIRST"]
TRIP_TYPES = ["round-trip", "one-way"]


class FareSearchSerializer(serializers.Serializer):
    # Exposed as "from"/"to" in the payload; see get_fields().
    origin = serializers.CharField(min_length=3, max_length=8)
    destination = serializers.CharField(min_length=3, max_length=8)
    departureDate = serializers.CharField()
    returnDate = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    passengers = serializers.IntegerField(min_value=1, max_value=9, default=1)
    travelClass = serializers.ChoiceField(choices=TRAVEL_CLASSES, default="ECONOMY")
    tripType = serializers.ChoiceField(choices=TRIP_TYPES, default="round-trip")
    paymentMethods = serializers.ListField(
        child=serializers.CharField(allow_blank=True), required=False, default=list
    )

    def get_fields(self):
        fields = super().get_fields()
        fields["from"] = fields.pop("origin")
        fields["to"] = fields.pop("destination")
        return fields

    def validate_departureDate(self, value):
        iso = to_iso_date(value)
        if not iso:
            raise serializers.ValidationError("Invalid date format.")
        return iso

    def validate_returnDate(self, value):
        # An unreadable return date degrades to a one-way search.
        return to_iso_date(value)

    def validate(self, attrs):
        origin = attrs["from"].strip().upper()
        destination = attrs["to"].strip().upper()
        if origin == destination:
            raise serializers.ValidationError({"to": "Destination must be different from origin."})

        return_date = attrs.get("returnDate")
        if return_date and return_date < attrs["departureDate"]:
            raise serializers.ValidationError({"returnDate": "Return date must be on or after departure date."})

        return {
            "origin": origin,
            "destination": destination,
            "departure_date": attrs["departureDate"],
            "return_date": return_date,
            "passengers": attrs["passengers"],
            "travel_class": attrs["travelClass"],
            "trip_type": attrs["tripType"],
            "payment_methods": attrs.get("paymentMethods") or [],
        }
