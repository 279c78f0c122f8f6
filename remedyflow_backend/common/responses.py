# common/responses.py

"""
RESPONSE ENVELOPE

Success: {"data": ..., "success": true, "message"?: "..."}
Failure: {"error": "...", "message": "...", "success": false, "details"?: {...}}
"""

from __future__ import annotations

from rest_framework import status as http_status
from rest_framework.response import Response


def success_response(data=None, *, message: str | None = None, status: int = http_status.HTTP_200_OK, **extra) -> Response:
    body = {"data": data, "success": True}
    if message:
        body["message"] = message
    body.update(extra)
    return Response(body, status=status)


def error_body(error: str, message: str, *, details=None) -> dict:
    body = {"error": error, "message": message, "success": False}
    if details is not None:
        body["details"] = details
    return body

