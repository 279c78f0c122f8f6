# products/serializers/__init__.py

from .category import CategorySerializer
from .product import AdminProductSerializer, PublicProductSerializer

__all__ = [
    "CategorySerializer",
    "AdminProductSerializer",
    "PublicProductSerializer",
]
