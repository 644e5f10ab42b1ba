"""Client domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
envelope responses.
"""

from __future__ import annotations

from modules.core.exceptions import Conflict, InvalidRequest, NotFound


class ClientNotFound(NotFound):
    """The requested client does not exist."""

    def __init__(self, client_id) -> None:
        super().__init__(f"Client with ID {client_id} not found")
        self.client_id = client_id


class ClientAlreadyExists(Conflict):
    """Another client already owns the identity document."""

    def __init__(self, identity_document: str) -> None:
        super().__init__(
            f"A client with identity document '{identity_document}' already exists",
            errors=["Identity document must be unique"],
        )


class ClientIdNotAllowed(InvalidRequest):
    """A creation payload tried to pre-assign the client id."""

    def __init__(self) -> None:
        super().__init__("client_id must be 0 for new clients")


class ClientIdMismatch(InvalidRequest):
    def __init__(self, url_id, body_id) -> None:
        super().__init__(
            f"client_id {body_id} in the body does not match client {url_id} in the URL"
        )
