# products/views/category.py

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import AllowAny, IsAuthenticated

from common.coercion import parse_flag
from common.responses import success_response
from permissions.roles import IsAdmin
from products.serializers.category import CategorySerializer
from products.services import categories


class PublicCategoryListView(GenericAPIView):
    """Active categories for the storefront sidebar (unpaginated)."""

    permission_classes = [AllowAny]
    serializer_class = CategorySerializer
    pagination_class = None

    @extend_schema(tags=["storefront"], responses=CategorySerializer(many=True))
    def get(self, request):
        qs = categories.list_categories(include_inactive=False)
        return success_response(self.get_serializer(qs, many=True).data)


class AdminCategoryViewSet(viewsets.ViewSet):
    """
    Category API (admin)

    Policy:
    - name reuse -> 400 NameConflict
    - delete while products reference it -> 400 ReferentialBlock
    """

    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = CategorySerializer

    @extend_schema(
        tags=["admin: categories"],
        parameters=[OpenApiParameter("includeInactive", bool, required=False)],
        responses=CategorySerializer(many=True),
    )
    def list(self, request):
        include_inactive = parse_flag(request.query_params.get("includeInactive")) or False
        qs = categories.list_categories(include_inactive=include_inactive)
        return success_response(CategorySerializer(qs, many=True).data)

    @extend_schema(tags=["admin: categories"], responses=CategorySerializer)
    def retrieve(self, request, pk=None):
        return success_response(CategorySerializer(categories.get_category(pk)).data)

    @extend_schema(tags=["admin: categories"], request=CategorySerializer, responses={201: CategorySerializer})
    def create(self, request):
        s = CategorySerializer(data=request.data)
        s.is_valid(raise_exception=True)
        category = categories.create_category(**s.validated_data)
        return success_response(
            CategorySerializer(categories.get_category(category.id)).data,
            message="Category created successfully",
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(tags=["admin: categories"], request=CategorySerializer, responses=CategorySerializer)
    def partial_update(self, request, pk=None):
        s = CategorySerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        category = categories.update_category(pk, **s.validated_data)
        return success_response(
            CategorySerializer(categories.get_category(category.id)).data,
            message="Category updated successfully",
        )

    @extend_schema(tags=["admin: categories"], responses={200: None})
    def destroy(self, request, pk=None):
        categories.delete_category(pk)
        return success_response(None, message="Category deleted successfully")
