"""Client DRF serializers.

Response rendering only; request payloads are parsed into Pydantic DTOs
from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.clients.models import Client


class ClientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Client
        fields = ["id", "name", "identity_document", "created_at", "updated_at"]
        read_only_fields = fields
