"""Product API views.

Exposes the ``ProductService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and rendered as envelope responses.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import domain_error_response
from modules.core.pagination import StandardResultsSetPagination
from modules.core.responses import error_response, pydantic_errors, success_response
from modules.products.dtos import PartialProductDTO, ProductDTO
from modules.products.exceptions import (
    ProductIdMismatch,
    ProductIdNotAllowed,
    ProductNotFound,
)
from modules.products.filters import ProductFilter
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService


class ProductViewSet(GenericViewSet):
    """ViewSet for Product operations.

    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.  Products are never deleted over the API.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    filterset_class = ProductFilter
    search_fields = ["name", "description"]
    ordering_fields = ["id", "name", "unit_price", "stock_quantity"]
    ordering = ["id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        return self._service.list_products()

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/"""
        queryset = self.filter_queryset(self.get_queryset())

        paginator = StandardResultsSetPagination(message="Products retrieved successfully")
        page = paginator.paginate_queryset(queryset, request, view=self)
        serializer = ProductSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        try:
            product = self._service.get_product(pk)
        except ProductNotFound as exc:
            return domain_error_response(exc)
        return success_response(
            ProductSerializer(product).data, "Product retrieved successfully"
        )

    # ------------------------------------------------------------------
    # Create / Update
    # ------------------------------------------------------------------

    @extend_schema(request=ProductSerializer)
    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        try:
            dto = ProductDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return error_response("Validation failed", errors=pydantic_errors(exc))

        try:
            product = self._service.create_product(dto)
        except ProductIdNotAllowed as exc:
            return domain_error_response(exc)

        return success_response(
            ProductSerializer(product).data,
            "Product created successfully",
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=ProductSerializer)
    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/{pk}/"""
        return self._update(request, pk, ProductDTO)

    @extend_schema(request=ProductSerializer)
    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/"""
        return self._update(request, pk, PartialProductDTO)

    def _update(self, request: Request, pk, dto_class) -> Response:
        try:
            dto = dto_class.model_validate(request.data)
        except PydanticValidationError as exc:
            return error_response("Validation failed", errors=pydantic_errors(exc))

        try:
            product = self._service.update_product(pk, dto)
        except (ProductNotFound, ProductIdMismatch) as exc:
            return domain_error_response(exc)

        return success_response(
            ProductSerializer(product).data, "Product updated successfully"
        )
