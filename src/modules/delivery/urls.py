"""Delivery URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.delivery.views import DeliveryMethodViewSet, DeliverySlotViewSet

router = DefaultRouter(trailing_slash=True)
router.register("delivery-methods", DeliveryMethodViewSet, basename="delivery-method")
router.register("delivery-slots", DeliverySlotViewSet, basename="delivery-slot")

urlpatterns = router.urls
