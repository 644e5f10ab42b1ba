from collections import OrderedDict

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from modules.core.responses import envelope


class StandardResultsSetPagination(PageNumberPagination):
    """Page-number pagination whose page is wrapped in the response envelope.

    ``?page=<n>&page_size=<m>`` (``page_size`` capped at 100).
    """

    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100

    def __init__(self, message: str = "") -> None:
        self.message = message

    def get_paginated_response(self, data) -> Response:
        return Response(
            envelope(
                data=OrderedDict(
                    [
                        ("count", self.page.paginator.count),
                        ("next", self.get_next_link()),
                        ("previous", self.get_previous_link()),
                        ("results", data),
                    ]
                ),
                message=self.message,
            )
        )

    def get_paginated_response_schema(self, schema: dict) -> dict:
        return {
            "type": "object",
            "properties": {
                "success": {"type": "boolean"},
                "message": {"type": "string"},
                "errors": {"type": "array", "items": {"type": "string"}},
                "data": super().get_paginated_response_schema(schema),
            },
        }
