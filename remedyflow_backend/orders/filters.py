# orders/filters.py

import django_filters

from orders.models import Order, OrderStatus


class OrderFilter(django_filters.FilterSet):
    """?status=PENDING&email=jane@&productId=<uuid>"""

    status = django_filters.ChoiceFilter(choices=OrderStatus.choices)
    email = django_filters.CharFilter(field_name="email", lookup_expr="icontains")
    productId = django_filters.UUIDFilter(field_name="product_id")

    class Meta:
        model = Order
        fields = ["status", "email", "productId"]
