# orders/views.py

"""
ORDER ENDPOINTS

Public (AllowAny, throttled):
- POST /api/orders/                       place an order (no stock change)

Admin (IsAdmin):
- GET   /api/admin/orders/?status=&email=&productId=&page=&limit=
- GET   /api/admin/orders/<id>/
- PATCH /api/admin/orders/<id>/status/    {"status": "CONFIRMED"}
- GET   /api/admin/orders/stats/

Confirming is the only transition that moves stock; see
orders.services.order_service.update_order_status.
"""

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.throttling import AnonRateThrottle

from common.responses import success_response
from orders.filters import OrderFilter
from orders.serializers import (
    OrderCreateSerializer,
    OrderSerializer,
    OrderStatsSerializer,
    OrderStatusUpdateSerializer,
    PublicOrderSerializer,
)
from orders.services import order_service
from permissions.roles import IsAdmin


class PublicWriteThrottle(AnonRateThrottle):
    """
    Public checkout is an abuse target.
    Uses REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['public_write'].
    """

    scope = "public_write"


class PublicOrderCreateView(GenericAPIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    parser_classes = [JSONParser]
    throttle_classes = [PublicWriteThrottle]
    serializer_class = OrderCreateSerializer

    @extend_schema(
        tags=["storefront"],
        request=OrderCreateSerializer,
        responses={
            201: PublicOrderSerializer,
            400: OpenApiResponse(description="Validation error"),
            404: OpenApiResponse(description="Product not found or inactive"),
            429: OpenApiResponse(description="Rate limited"),
        },
    )
    def post(self, request):
        s = OrderCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        order = order_service.create_order(
            customer_name=data["customerName"],
            email=data["email"],
            phone=data["phone"],
            province=data["province"],
            city=data["city"],
            area=data["area"],
            address=data["address"],
            product_id=data["productId"],
            quantity=data["quantity"],
            notes=data["notes"],
        )

        return success_response(
            PublicOrderSerializer(order).data,
            message="Order placed successfully",
            status=status.HTTP_201_CREATED,
        )


class AdminOrderListView(GenericAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = OrderSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = OrderFilter

    def get_queryset(self):
        return order_service.list_orders()

    @extend_schema(
        tags=["admin: orders"],
        parameters=[
            OpenApiParameter("page", int, required=False),
            OpenApiParameter("limit", int, required=False),
        ],
        responses=OrderSerializer(many=True),
    )
    def get(self, request):
        qs = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(qs)
        return self.get_paginated_response(self.get_serializer(page, many=True).data)


class AdminOrderDetailView(GenericAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = OrderSerializer

    @extend_schema(tags=["admin: orders"], responses=OrderSerializer)
    def get(self, request, pk):
        return success_response(OrderSerializer(order_service.get_order(pk)).data)


class AdminOrderStatusView(GenericAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = OrderStatusUpdateSerializer

    @extend_schema(
        tags=["admin: orders"],
        request=OrderStatusUpdateSerializer,
        responses={
            200: OrderSerializer,
            400: OpenApiResponse(description="Validation error, insufficient stock or already confirmed"),
            404: OpenApiResponse(description="Order not found"),
        },
    )
    def patch(self, request, pk):
        s = OrderStatusUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        order = order_service.update_order_status(pk, s.validated_data["status"], user=request.user)

        return success_response(
            OrderSerializer(order).data,
            message=f"Order status updated to {order.status}",
        )


class AdminOrderStatsView(GenericAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = OrderStatsSerializer

    @extend_schema(tags=["admin: orders"], responses=OrderStatsSerializer)
    def get(self, request):
        return success_response(OrderStatsSerializer(order_service.order_stats()).data)
