"""Shipping URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.shipping.views import ShipmentViewSet, ShippingAddressViewSet

router = DefaultRouter(trailing_slash=True)
router.register(
    "shipping-addresses", ShippingAddressViewSet, basename="shipping-address"
)
router.register("shipments", ShipmentViewSet, basename="shipment")

urlpatterns = router.urls
