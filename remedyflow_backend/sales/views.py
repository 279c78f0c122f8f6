# sales/views.py

"""
ADMIN SALE ENDPOINTS

- GET  /api/admin/sales/?productId=&source=order|manual
- POST /api/admin/sales/          manual sale (stock-checked)
- GET  /api/admin/sales/<id>/
- GET  /api/admin/sales/stats/

Order-originated sales are never created here; they come from
PATCH /api/admin/orders/<id>/status/ with status=CONFIRMED.
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated

from common.exceptions import InvalidInputError
from common.responses import success_response
from permissions.roles import IsAdmin
from sales.serializers import SaleCreateSerializer, SaleSerializer, SaleStatsSerializer
from sales.services import sale_service


class SaleListCreateView(GenericAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = SaleSerializer

    @extend_schema(
        tags=["admin: sales"],
        parameters=[
            OpenApiParameter("productId", str, required=False),
            OpenApiParameter("source", str, required=False, enum=["order", "manual"]),
        ],
        responses=SaleSerializer(many=True),
    )
    def get(self, request):
        source = (request.query_params.get("source") or "").strip().lower() or None
        if source not in (None, "order", "manual"):
            raise InvalidInputError("source must be 'order' or 'manual'")

        qs = sale_service.list_sales(
            product_id=request.query_params.get("productId"),
            source=source,
        )
        page = self.paginate_queryset(qs)
        return self.get_paginated_response(SaleSerializer(page, many=True).data)

    @extend_schema(
        tags=["admin: sales"],
        request=SaleCreateSerializer,
        responses={201: SaleSerializer},
    )
    def post(self, request):
        s = SaleCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        sale = sale_service.record_manual_sale(
            product_id=data["productId"],
            quantity=data["quantity"],
            sale_price=data["salePrice"],
            notes=data["notes"],
            sale_date=data["saleDate"],
            user=request.user,
        )

        return success_response(
            SaleSerializer(sale).data,
            message="Sale recorded successfully",
            status=status.HTTP_201_CREATED,
        )


class SaleDetailView(GenericAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = SaleSerializer

    @extend_schema(tags=["admin: sales"], responses=SaleSerializer)
    def get(self, request, pk):
        return success_response(SaleSerializer(sale_service.get_sale(pk)).data)


class SaleStatsView(GenericAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = SaleStatsSerializer

    @extend_schema(tags=["admin: sales"], responses=SaleStatsSerializer)
    def get(self, request):
        return success_response(SaleStatsSerializer(sale_service.sales_stats()).data)
