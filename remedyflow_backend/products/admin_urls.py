# products/admin_urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from products.views import AdminCategoryViewSet, AdminProductViewSet

router = SimpleRouter()

router.register(r"categories", AdminCategoryViewSet, basename="admin-categories")
router.register(r"products", AdminProductViewSet, basename="admin-products")

urlpatterns = [
    path("", include(router.urls)),
]
