"""Client DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer and the Service layer.
DTOs are immutable (``frozen=True``).

- ``ClientDTO``: input for creation and full replacement (PUT).
- ``PartialClientDTO``: input for partial updates (PATCH).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ClientDTO(BaseModel):
    """Immutable DTO for client creation and replacement.

    ``client_id`` is ``0`` for new clients; on update it is either ``0`` or
    the id in the URL.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    client_id: int = 0
    name: str = Field(min_length=2, max_length=100)
    identity_document: str = Field(min_length=5, max_length=50)


class PartialClientDTO(BaseModel):
    """Immutable DTO for partial updates: only supplied fields change."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    client_id: int = 0
    name: str | None = Field(default=None, min_length=2, max_length=100)
    identity_document: str | None = Field(default=None, min_length=5, max_length=50)
