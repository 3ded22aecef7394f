"""Payment URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.payments.views import PaymentInfoViewSet, PaymentMethodViewSet

router = DefaultRouter(trailing_slash=True)
router.register("payment-methods", PaymentMethodViewSet, basename="payment-method")
router.register("payment-info", PaymentInfoViewSet, basename="payment-info")

urlpatterns = router.urls
