"""Client repository interface.

Extends ``IRepository[Client]`` with the identity-document look-up the
uniqueness rule needs.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.clients.models import Client


class IClientRepository(IRepository["Client"]):
    """Repository contract for the Client aggregate."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Client]":
        """List clients with optional filters."""

    @abstractmethod
    def get_by_identity_document(self, identity_document: str) -> Optional[Client]:
        """Retrieve a client by its identity document."""
