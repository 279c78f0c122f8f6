# purchases/views.py

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated

from common.responses import success_response
from permissions.roles import IsAdmin
from purchases.serializers import PurchaseCreateSerializer, PurchaseSerializer, PurchaseStatsSerializer
from purchases.services import purchase_service


class PurchaseListCreateView(GenericAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = PurchaseSerializer

    @extend_schema(
        tags=["admin: purchases"],
        parameters=[OpenApiParameter("productId", str, required=False)],
        responses=PurchaseSerializer(many=True),
    )
    def get(self, request):
        qs = purchase_service.list_purchases(product_id=request.query_params.get("productId"))
        page = self.paginate_queryset(qs)
        return self.get_paginated_response(PurchaseSerializer(page, many=True).data)

    @extend_schema(
        tags=["admin: purchases"],
        request=PurchaseCreateSerializer,
        responses={201: PurchaseSerializer},
    )
    def post(self, request):
        s = PurchaseCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        purchase = purchase_service.record_purchase(
            product_id=data["productId"],
            quantity=data["quantity"],
            unit_cost=data["purchasePrice"],
            supplier=data["supplier"],
            notes=data["notes"],
            purchase_date=data["purchaseDate"],
            user=request.user,
        )

        return success_response(
            PurchaseSerializer(purchase).data,
            message="Purchase recorded successfully",
            status=status.HTTP_201_CREATED,
        )


class PurchaseDetailView(GenericAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = PurchaseSerializer

    @extend_schema(tags=["admin: purchases"], responses=PurchaseSerializer)
    def get(self, request, pk):
        return success_response(PurchaseSerializer(purchase_service.get_purchase(pk)).data)


class PurchaseStatsView(GenericAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = PurchaseStatsSerializer

    @extend_schema(tags=["admin: purchases"], responses=PurchaseStatsSerializer)
    def get(self, request):
        return success_response(PurchaseStatsSerializer(purchase_service.purchase_stats()).data)
