from django.urls import path

from deals.views import FareSearchView, HealthView, PaymentOptionsView

urlpatterns = [
    path("health", HealthView.as_view(), name="health"),
    path("search", FareSearchView.as_view(), name="fare-search"),
    path("payment-options", PaymentOptionsView.as_view(), name="payment-options"),
]
