from http import HTTPStatus
from typing import Dict, Optional


def cache_control(max_age: int, no_cache: bool = False) -> str:
    if no_cache:
        return f"no-cache, max-age={max_age}"
    return f"max-age={max_age}"


def create_response(
    status: int,
    body: Optional[str] = None,
    max_age: int = 0,
    content_type: Optional[str] = None,
    no_cache: bool = False,
) -> Dict:
    """
    CloudFront Lambda@Edge generated response:
        {"status": "200", "statusDescription": "OK",
         "headers": {"cache-control": [{"key": "Cache-Control", "value": "max-age=30"}]},
         "body": "..."}
    """
    headers = {
        "cache-control": [{"key": "Cache-Control", "value": cache_control(max_age, no_cache)}],
    }
    if content_type:
        headers["content-type"] = [{"key": "Content-Type", "value": content_type}]

    response = {
        "status": str(status),
        "statusDescription": HTTPStatus(status).phrase,
        "headers": headers,
    }
    if body is not None:
        response["body"] = body
    return response


def header_value(response: Dict, name: str) -> Optional[str]:
    values = response.get("headers", {}).get(name.lower())
    return values[0]["value"] if values else None
