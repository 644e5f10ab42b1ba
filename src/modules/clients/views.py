"""Client API views.

Exposes the ``ClientService`` via HTTP using DRF ViewSets.
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

from modules.clients.dtos import ClientDTO, PartialClientDTO
from modules.clients.exceptions import (
    ClientAlreadyExists,
    ClientIdMismatch,
    ClientIdNotAllowed,
    ClientNotFound,
)
from modules.clients.filters import ClientFilter
from modules.clients.models import Client
from modules.clients.repositories.django_repository import ClientDjangoRepository
from modules.clients.serializers import ClientSerializer
from modules.clients.services import ClientService
from modules.core.exceptions import domain_error_response
from modules.core.pagination import StandardResultsSetPagination
from modules.core.responses import error_response, pydantic_errors, success_response


class ClientViewSet(GenericViewSet):
    """ViewSet for Client operations.

    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.  Clients are never deleted over the API.
    """

    queryset = Client.objects.all()
    serializer_class = ClientSerializer
    filterset_class = ClientFilter
    search_fields = ["name", "identity_document"]
    ordering_fields = ["id", "name", "created_at"]
    ordering = ["id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ClientService(repository=ClientDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        return self._service.list_clients()

    def list(self, request: Request) -> Response:
        """GET /api/v1/clients/"""
        queryset = self.filter_queryset(self.get_queryset())

        paginator = StandardResultsSetPagination(message="Clients retrieved successfully")
        page = paginator.paginate_queryset(queryset, request, view=self)
        serializer = ClientSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/clients/{pk}/"""
        try:
            client = self._service.get_client(pk)
        except ClientNotFound as exc:
            return domain_error_response(exc)
        return success_response(
            ClientSerializer(client).data, "Client retrieved successfully"
        )

    # ------------------------------------------------------------------
    # Create / Update
    # ------------------------------------------------------------------

    @extend_schema(request=ClientSerializer)
    def create(self, request: Request) -> Response:
        """POST /api/v1/clients/"""
        try:
            dto = ClientDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return error_response("Validation failed", errors=pydantic_errors(exc))

        try:
            client = self._service.create_client(dto)
        except (ClientIdNotAllowed, ClientAlreadyExists) as exc:
            return domain_error_response(exc)

        return success_response(
            ClientSerializer(client).data,
            "Client created successfully",
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=ClientSerializer)
    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/clients/{pk}/"""
        return self._update(request, pk, ClientDTO)

    @extend_schema(request=ClientSerializer)
    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/clients/{pk}/"""
        return self._update(request, pk, PartialClientDTO)

    def _update(self, request: Request, pk, dto_class) -> Response:
        try:
            dto = dto_class.model_validate(request.data)
        except PydanticValidationError as exc:
            return error_response("Validation failed", errors=pydantic_errors(exc))

        try:
            client = self._service.update_client(pk, dto)
        except (ClientNotFound, ClientIdMismatch, ClientAlreadyExists) as exc:
            return domain_error_response(exc)

        return success_response(
            ClientSerializer(client).data, "Client updated successfully"
        )
