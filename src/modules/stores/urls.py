"""Site and Shop URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.stores.views import ShopViewSet, SiteViewSet

router = DefaultRouter(trailing_slash=True)
router.register("sites", SiteViewSet, basename="site")
router.register("shops", ShopViewSet, basename="shop")

urlpatterns = router.urls
