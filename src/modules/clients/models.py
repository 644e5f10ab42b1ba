"""Client model.

- The identity document is unique across all clients.
- The identity document is masked in ``__str__`` so it never leaks into
  logs or the admin change list.
"""

from __future__ import annotations

from django.core.validators import MinLengthValidator
from django.db import models

from modules.core.models import BaseModel


class Client(BaseModel):
    """A customer that places orders.

    Orders reference clients with ``PROTECT``: a client with orders cannot be
    removed from under them.
    """

    name = models.CharField(max_length=100, validators=[MinLengthValidator(2)])
    identity_document = models.CharField(
        max_length=50,
        unique=True,
        validators=[MinLengthValidator(5)],
    )

    class Meta:
        db_table = "clients"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["name"], name="clients_name_idx"),
        ]

    def __str__(self) -> str:
        suffix = self.identity_document[-4:] if self.identity_document else "????"
        return f"{self.name} (***{suffix})"
