"""Product URL configuration.

Routes are mounted at the site root without trailing slashes:
``/products``, ``/products/brand-summary`` and ``/products/{key}``.
"""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.products.views import ProductViewSet

router = SimpleRouter(trailing_slash=False)
router.register("products", ProductViewSet, basename="product")

urlpatterns = router.urls
