# products/views/product.py

"""
PRODUCT ENDPOINTS

Public (AllowAny):
- GET /api/products/?search=&category=&categoryId=&page=&limit=
- GET /api/products/<id>/

Admin (IsAdmin):
- GET|POST        /api/admin/products/
- GET|PATCH|DELETE /api/admin/products/<id>/   (DELETE = soft delete)

Key rule alignment:
- Stock totals come from products.services.stock (annotated, no N+1).
- Public payloads never carry purchasePrice or the stock number.
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import AllowAny, IsAuthenticated

from common.coercion import parse_flag
from common.responses import success_response
from permissions.roles import IsAdmin
from products.serializers.product import AdminProductSerializer, PublicProductSerializer
from products.services import catalog

_CATALOG_PARAMS = [
    OpenApiParameter("search", str, required=False, description="Name/description contains"),
    OpenApiParameter("category", str, required=False, description="Category name (exact, case-insensitive)"),
    OpenApiParameter("categoryId", str, required=False, description="Category UUID"),
    OpenApiParameter("page", int, required=False),
    OpenApiParameter("limit", int, required=False),
]


class PublicProductListView(GenericAPIView):
    permission_classes = [AllowAny]
    serializer_class = PublicProductSerializer

    @extend_schema(tags=["storefront"], parameters=_CATALOG_PARAMS, responses=PublicProductSerializer(many=True))
    def get(self, request):
        params = request.query_params
        qs = catalog.public_products(
            search=params.get("search"),
            category=params.get("category"),
            category_id=params.get("categoryId"),
        )
        page = self.paginate_queryset(qs)
        return self.get_paginated_response(self.get_serializer(page, many=True).data)


class PublicProductDetailView(GenericAPIView):
    permission_classes = [AllowAny]
    serializer_class = PublicProductSerializer

    @extend_schema(tags=["storefront"], responses=PublicProductSerializer)
    def get(self, request, pk):
        product = catalog.public_product(pk)
        return success_response(self.get_serializer(product).data)


class AdminProductViewSet(viewsets.ModelViewSet):
    """
    Back-office product management.

    - list/retrieve include totalPurchases, totalSales, currentStock
    - destroy deactivates (is_active=False); history stays intact
    """

    serializer_class = AdminProductSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def get_queryset(self):
        params = self.request.query_params
        return catalog.admin_products(
            search=params.get("search"),
            category=params.get("category"),
            category_id=params.get("categoryId"),
            is_active=parse_flag(params.get("isActive")),
        )

    def get_object(self):
        return catalog.get_product(self.kwargs["pk"])

    @extend_schema(
        tags=["admin: products"],
        parameters=_CATALOG_PARAMS + [OpenApiParameter("isActive", bool, required=False)],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(tags=["admin: products"])
    def retrieve(self, request, *args, **kwargs):
        return success_response(self.get_serializer(self.get_object()).data)

    @extend_schema(tags=["admin: products"])
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = serializer.save()
        return success_response(
            self.get_serializer(catalog.get_product(product.id)).data,
            message="Product created successfully",
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(tags=["admin: products"])
    def partial_update(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        product = serializer.save()
        return success_response(
            self.get_serializer(catalog.get_product(product.id)).data,
            message="Product updated successfully",
        )

    @extend_schema(tags=["admin: products"])
    def destroy(self, request, *args, **kwargs):
        catalog.soft_delete_product(self.kwargs["pk"])
        return success_response(None, message="Product deleted successfully")
