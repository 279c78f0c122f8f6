# common/pagination.py

"""
ENVELOPE PAGINATION

Query params: ?page=<n>&limit=<n> (limit capped at 100)

Response:
{
  "data": [...],
  "pagination": {"page": 1, "limit": 10, "total": 42, "totalPages": 5},
  "success": true
}
"""

from __future__ import annotations

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class EnvelopePagination(PageNumberPagination):
    page_size = 10
    page_size_query_param = "limit"
    max_page_size = 100

    def get_paginated_response(self, data):
        paginator = self.page.paginator
        return Response(
            {
                "data": data,
                "pagination": {
                    "page": self.page.number,
                    "limit": paginator.per_page,
                    "total": paginator.count,
                    "totalPages": paginator.num_pages if paginator.count else 0,
                },
                "success": True,
            }
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                "data": schema,
                "pagination": {
                    "type": "object",
                    "properties": {
                        "page": {"type": "integer"},
                        "limit": {"type": "integer"},
                        "total": {"type": "integer"},
                        "totalPages": {"type": "integer"},
                    },
                },
                "success": {"type": "boolean"},
            },
        }
