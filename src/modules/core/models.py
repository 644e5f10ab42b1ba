"""Base abstract model shared by every persisted entity.

Primary keys come from ``DEFAULT_AUTO_FIELD`` (``BigAutoField``), so ids
are positive integers assigned by the database and ``0`` can act as the
"not yet assigned" sentinel in creation payloads.
"""

from __future__ import annotations

from django.db import models


class BaseModel(models.Model):
    """Abstract base with ``created_at`` / ``updated_at`` bookkeeping."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        """Ensure ``updated_at`` is refreshed even when ``update_fields`` is passed."""
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)
