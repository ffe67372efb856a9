from typing import Dict

from fastapi import Request, Response

from vod_edge.core.config import settings
from vod_edge.handlers import context_from_headers
from vod_edge.models.schemas import EdgeContext
from vod_edge.services.edge_response import header_value


def get_edge_context(request: Request) -> EdgeContext:
    """Origin custom headers if the caller sent them, the environment otherwise."""
    headers = {name.lower(): value for name, value in request.headers.items()}
    return context_from_headers(headers, defaults=settings.default_context())


def as_http_response(edge_response: Dict) -> Response:
    headers = {
        values[0]["key"]: header_value(edge_response, name)
        for name, values in edge_response["headers"].items()
    }
    return Response(
        content=edge_response.get("body", ""),
        status_code=int(edge_response["status"]),
        headers=headers,
    )
