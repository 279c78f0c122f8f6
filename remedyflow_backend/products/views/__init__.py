# products/views/__init__.py

"""
Products views package exports (public routes + admin router).
"""

from .category import AdminCategoryViewSet, PublicCategoryListView
from .product import AdminProductViewSet, PublicProductDetailView, PublicProductListView

__all__ = [
    "AdminCategoryViewSet",
    "AdminProductViewSet",
    "PublicCategoryListView",
    "PublicProductDetailView",
    "PublicProductListView",
]
