# orders/urls.py

from django.urls import path

from orders.views import PublicOrderCreateView

urlpatterns = [
    path("orders/", PublicOrderCreateView.as_view(), name="public-order-create"),
]
