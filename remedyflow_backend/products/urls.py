# products/urls.py

"""
PRODUCTS URLS

Public (mounted under /api/):
    products/, products/<id>/, categories/

Admin routes live in products/admin_urls.py (mounted under /api/admin/).
"""

from django.urls import path

from products.views import PublicCategoryListView, PublicProductDetailView, PublicProductListView

urlpatterns = [
    path("products/", PublicProductListView.as_view(), name="public-products"),
    path("products/<uuid:pk>/", PublicProductDetailView.as_view(), name="public-product-detail"),
    path("categories/", PublicCategoryListView.as_view(), name="public-categories"),
]
