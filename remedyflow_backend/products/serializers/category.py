# products/serializers/category.py

from rest_framework import serializers

from products.models import Category


class CategorySerializer(serializers.ModelSerializer):
    """
    Category serializer (public list + admin CRUD).

    Rules:
    - name is 2..100 chars, trimmed
    - uniqueness is checked by products.services.categories (NameConflict),
      so the model-level unique validator is dropped here
    """

    name = serializers.CharField(min_length=2, max_length=100, validators=[])
    description = serializers.CharField(max_length=500, required=False, allow_blank=True)
    isActive = serializers.BooleanField(source="is_active", required=False, default=True)
    productCount = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Category
        fields = [
            "id",
            "name",
            "description",
            "isActive",
            "productCount",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["id", "productCount", "createdAt", "updatedAt"]

    def get_productCount(self, obj) -> int:
        annotated = getattr(obj, "product_count", None)
        if annotated is None:
            return obj.products.count()
        return int(annotated)

    def validate_name(self, value: str):
        v = (value or "").strip()
        if len(v) < 2:
            raise serializers.ValidationError("name must be at least 2 characters")
        return v
