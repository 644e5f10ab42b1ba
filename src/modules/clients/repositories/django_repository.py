"""Django ORM implementation of the Client repository.

Methods return ``None`` instead of raising for missing rows; the Service
Layer decides how to translate a missing entity into an error.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.clients.models import Client
from modules.clients.repositories.interfaces import IClientRepository

logger = structlog.get_logger(__name__)


class ClientDjangoRepository(IClientRepository):
    """Concrete Client repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Client]:
        """Retrieve a client by primary key.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return Client.objects.filter(id=id).first()
        except (TypeError, ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Client]:
        """List clients with optional Django ORM look-ups.

        Example::

            {"name__icontains": "maria"}
        """
        queryset = Client.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Client) -> Client:
        """Persist (create or update) a client."""
        is_new = entity._state.adding
        entity.save()
        logger.info("client.saved", client_id=entity.id, is_new=is_new)
        return entity

    def get_by_identity_document(self, identity_document: str) -> Optional[Client]:
        return Client.objects.filter(identity_document=identity_document).first()
