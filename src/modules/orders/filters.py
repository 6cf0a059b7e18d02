import django_filters

from modules.orders.constants import OrderStatus
from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(
        field_name="status", choices=OrderStatus.choices
    )
    customer = django_filters.NumberFilter(field_name="customer_id")

    class Meta:
        model = Order
        fields = ["status", "customer"]
