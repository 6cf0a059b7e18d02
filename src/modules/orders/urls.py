"""Order routes: ``/orders/`` and ``/orders/{id}/`` (integer ids only)."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.orders.views import OrderViewSet

app_name = "orders"

router = SimpleRouter(trailing_slash=True)
router.register("orders", OrderViewSet, basename="order")

urlpatterns = router.urls
