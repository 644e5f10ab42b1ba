import django_filters

from modules.clients.models import Client


class ClientFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    identity_document = django_filters.CharFilter(
        field_name="identity_document", lookup_expr="iexact"
    )

    class Meta:
        model = Client
        fields = ["name", "identity_document"]
