"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from modules.orders.models import Order, OrderLine

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderLineSerializer(serializers.Serializer):
    """Validates a single line in an order creation request."""

    product_id = serializers.IntegerField()
    quantity = serializers.DecimalField(
        max_digits=18, decimal_places=2, min_value=Decimal("0.01")
    )


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload."""

    order_id = serializers.IntegerField(required=False, default=0)
    client_id = serializers.IntegerField()
    lines = CreateOrderLineSerializer(many=True, allow_empty=False)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderLineSerializer(serializers.ModelSerializer):
    """Read serializer for order lines with the product name and price paid."""

    order_id = serializers.IntegerField(read_only=True)
    product_id = serializers.IntegerField(read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)

    class Meta:
        model = OrderLine
        fields = [
            "id",
            "order_id",
            "product_id",
            "product_name",
            "quantity",
            "unit_price",
            "subtotal",
            "tax",
            "total",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested lines."""

    client_id = serializers.IntegerField(read_only=True)
    lines = OrderLineSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "client_id",
            "subtotal",
            "tax",
            "total",
            "created_at",
            "lines",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for order lists (no nested lines)."""

    client_id = serializers.IntegerField(read_only=True)
    client_name = serializers.CharField(source="client.name", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "client_id",
            "client_name",
            "subtotal",
            "tax",
            "total",
            "created_at",
        ]
        read_only_fields = fields
