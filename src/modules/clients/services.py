"""Client service layer (Use Cases).

Orchestrates business logic for the Client aggregate, delegating
persistence to the injected ``IClientRepository``.

Rules enforced here:
- New clients are created with ``client_id == 0``.
- The identity document is unique (checked up front and backed by the
  unique index for concurrent writers).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import IntegrityError, transaction

from modules.clients.exceptions import (
    ClientAlreadyExists,
    ClientIdMismatch,
    ClientIdNotAllowed,
    ClientNotFound,
)
from modules.clients.models import Client

if TYPE_CHECKING:
    from django.db import models

    from modules.clients.dtos import ClientDTO, PartialClientDTO
    from modules.clients.repositories.interfaces import IClientRepository

logger = structlog.get_logger(__name__)


class ClientService:
    """Application service for Client use-cases.

    Receives an ``IClientRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IClientRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_client(self, dto: ClientDTO) -> Client:
        """Create a new client.

        Raises:
            ClientIdNotAllowed: ``dto.client_id`` is not ``0``.
            ClientAlreadyExists: the identity document is already taken.
        """
        if dto.client_id != 0:
            raise ClientIdNotAllowed()

        if self._repo.get_by_identity_document(dto.identity_document):
            logger.warning("client.duplicate_identity_document")
            raise ClientAlreadyExists(dto.identity_document)

        client = Client(name=dto.name, identity_document=dto.identity_document)
        client = self._save_unique(client)
        logger.info("client.created", client_id=client.id)
        return client

    @transaction.atomic
    def update_client(
        self, client_id: Any, dto: ClientDTO | PartialClientDTO
    ) -> Client:
        """Update an existing client with the fields present in ``dto``.

        Keeping one's own identity document is allowed; taking another
        client's is not.

        Raises:
            ClientNotFound: no client with ``client_id``.
            ClientIdMismatch: the body names a different client.
            ClientAlreadyExists: the identity document belongs to another client.
        """
        client = self.get_client(client_id)
        if dto.client_id not in (0, client.id):
            raise ClientIdMismatch(client.id, dto.client_id)

        changes = dto.model_dump(exclude={"client_id"}, exclude_none=True)
        document = changes.get("identity_document")
        if document is not None and document != client.identity_document:
            owner = self._repo.get_by_identity_document(document)
            if owner is not None and owner.id != client.id:
                logger.warning("client.duplicate_identity_document", client_id=client.id)
                raise ClientAlreadyExists(document)

        for field, value in changes.items():
            setattr(client, field, value)

        client = self._save_unique(client)
        logger.info("client.updated", client_id=client.id, fields=sorted(changes))
        return client

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_client(self, client_id: Any) -> Client:
        """Raises ``ClientNotFound`` when the client does not exist."""
        client = self._repo.get_by_id(client_id)
        if client is None:
            raise ClientNotFound(client_id)
        return client

    def list_clients(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> models.QuerySet[Client]:
        return self._repo.list(filters)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _save_unique(self, client: Client) -> Client:
        # A concurrent writer can take the document between the check and
        # the insert; the unique index is the final arbiter.
        try:
            return self._repo.save(client)
        except IntegrityError as exc:
            raise ClientAlreadyExists(client.identity_document) from exc
