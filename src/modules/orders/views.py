"""Order API views.

Exposes ``OrderService`` and ``OrderLineService`` via HTTP using DRF
ViewSets.  Domain exceptions are caught and rendered as envelope
responses; anything unexpected propagates to the project exception
handler, which answers 500 after the transaction has been rolled back.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.clients.repositories.django_repository import ClientDjangoRepository
from modules.core.exceptions import domain_error_response
from modules.core.pagination import StandardResultsSetPagination
from modules.core.responses import error_response, pydantic_errors, success_response
from modules.orders.dtos import CreateOrderDTO, CreateOrderLineDTO
from modules.orders.exceptions import (
    AmountOutOfRange,
    ClientNotFound,
    InsufficientStock,
    OrderIdNotAllowed,
    OrderLineNotFound,
    OrderNotFound,
    ProductNotFound,
)
from modules.orders.filters import OrderFilter, OrderLineFilter
from modules.orders.models import Order, OrderLine
from modules.orders.repositories.django_repository import (
    OrderDjangoRepository,
    OrderLineDjangoRepository,
)
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderLineSerializer,
    OrderListSerializer,
    OrderSerializer,
)
from modules.orders.services import OrderLineService, OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Orders are created and read; there is no update or delete, since the
    order amounts must keep matching the lines they were computed from.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    ordering_fields = ["id", "created_at", "total"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        order_repository = OrderDjangoRepository()
        order_line_repository = OrderLineDjangoRepository()
        self._service = OrderService(
            order_repository=order_repository,
            order_line_repository=order_line_repository,
            client_repository=ClientDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )
        self._line_service = OrderLineService(
            order_line_repository=order_line_repository,
            order_repository=order_repository,
        )

    def get_throttles(self) -> list[BaseThrottle]:
        """Throttling scope per action."""
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "order_creation"
        elif self.action in {"list", "retrieve", "lines"}:
            throttle_scope = "order_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    @extend_schema(request=CreateOrderSerializer, responses={201: OrderSerializer})
    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        create_serializer = CreateOrderSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)

        data = create_serializer.validated_data
        try:
            dto = CreateOrderDTO(
                order_id=data["order_id"],
                client_id=data["client_id"],
                lines=[
                    CreateOrderLineDTO(
                        product_id=line["product_id"],
                        quantity=line["quantity"],
                    )
                    for line in data["lines"]
                ],
            )
        except PydanticValidationError as exc:
            return error_response("Validation failed", errors=pydantic_errors(exc))

        try:
            order = self._service.create_order(dto)
        except (
            OrderIdNotAllowed,
            ClientNotFound,
            ProductNotFound,
            InsufficientStock,
            AmountOutOfRange,
        ) as exc:
            return domain_error_response(exc)

        return success_response(
            OrderSerializer(order).data,
            "Order created successfully",
            status=status.HTTP_201_CREATED,
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        return self._service.list_orders()

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Filtering (client, date range, total range) is handled by
        ``OrderFilter``; ordering by ``OrderingFilter``.  Results are
        paginated.
        """
        queryset = self.filter_queryset(self.get_queryset())

        paginator = StandardResultsSetPagination(message="Orders retrieved successfully")
        page = paginator.paginate_queryset(queryset, request, view=self)
        serializer = OrderListSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(pk)
        except OrderNotFound as exc:
            return domain_error_response(exc)
        return success_response(OrderSerializer(order).data, "Order retrieved successfully")

    @extend_schema(responses=OrderLineSerializer(many=True))
    @action(detail=True, methods=["get"])
    def lines(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/lines/"""
        try:
            lines = self._line_service.list_lines_for_order(pk)
        except OrderNotFound as exc:
            return domain_error_response(exc)
        return success_response(
            OrderLineSerializer(lines, many=True).data,
            "Order lines retrieved successfully",
        )


class OrderLineViewSet(GenericViewSet):
    """Read-only access to order lines across orders."""

    queryset = OrderLine.objects.all()
    serializer_class = OrderLineSerializer
    filterset_class = OrderLineFilter
    ordering_fields = ["id", "total"]
    ordering = ["id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderLineService(
            order_line_repository=OrderLineDjangoRepository(),
            order_repository=OrderDjangoRepository(),
        )

    def get_queryset(self):
        return self._service.list_lines()

    def list(self, request: Request) -> Response:
        """GET /api/v1/order-lines/"""
        queryset = self.filter_queryset(self.get_queryset())

        paginator = StandardResultsSetPagination(
            message="Order lines retrieved successfully"
        )
        page = paginator.paginate_queryset(queryset, request, view=self)
        serializer = OrderLineSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/order-lines/{pk}/"""
        try:
            line = self._service.get_line(pk)
        except OrderLineNotFound as exc:
            return domain_error_response(exc)
        return success_response(
            OrderLineSerializer(line).data, "Order line retrieved successfully"
        )
