import django_filters

from modules.orders.models import Order, OrderLine


class OrderFilter(django_filters.FilterSet):
    client = django_filters.NumberFilter(field_name="client_id")
    start_date = django_filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    end_date = django_filters.DateFilter(field_name="created_at", lookup_expr="date__lte")
    min_total = django_filters.NumberFilter(field_name="total", lookup_expr="gte")
    max_total = django_filters.NumberFilter(field_name="total", lookup_expr="lte")

    class Meta:
        model = Order
        fields = ["client", "start_date", "end_date", "min_total", "max_total"]


class OrderLineFilter(django_filters.FilterSet):
    order = django_filters.NumberFilter(field_name="order_id")
    product = django_filters.NumberFilter(field_name="product_id")

    class Meta:
        model = OrderLine
        fields = ["order", "product"]
