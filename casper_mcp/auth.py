"""
Shared-secret authentication for the HTTP transport.

Clients present the secret in the ``X-API-Key`` header or, when the header is
absent, in the ``api_key`` query parameter. Paths under ``/health`` are always
open so liveness probes work without the secret. The middleware is installed
only when a server secret is configured.
"""

from __future__ import annotations

import hmac
import json
import logging
from typing import Mapping, Optional
from urllib.parse import parse_qs

from casper_mcp.metrics import default_metrics

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"
API_KEY_QUERY_PARAM = "api_key"
HEALTH_PATH = "/health"
UNAUTHORIZED_MESSAGE = "Unauthorized. Provide a valid API key via X-API-Key header or api_key query parameter."


def is_health_path(path: str) -> bool:
    normalized = path.lower()
    return normalized == HEALTH_PATH or normalized.startswith(HEALTH_PATH + "/")


def presented_key(headers: Mapping[str, str], query_params: Mapping[str, str]) -> Optional[str]:
    """The header wins whenever it is present, even if empty."""
    header_value = headers.get(API_KEY_HEADER)
    if header_value is not None:
        return header_value
    return query_params.get(API_KEY_QUERY_PARAM)


def is_request_authorized(
    path: str,
    headers: Mapping[str, str],
    query_params: Mapping[str, str],
    expected_key: Optional[str],
) -> bool:
    if not expected_key or is_health_path(path):
        return True
    candidate = presented_key(headers, query_params)
    if not candidate:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), expected_key.encode("utf-8"))


class ApiKeyAuthMiddleware:
    """Pure ASGI middleware so streaming SSE responses pass through untouched."""

    def __init__(self, app, *, expected_key: str) -> None:
        self.app = app
        self.expected_key = expected_key

    async def __call__(self, scope, receive, send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = {
            name.decode("latin-1").lower(): value.decode("latin-1")
            for name, value in scope.get("headers") or []
        }
        query = parse_qs(scope.get("query_string", b"").decode("latin-1"), keep_blank_values=True)
        query_params = {name: values[0] for name, values in query.items() if values}

        if is_request_authorized(scope.get("path", ""), headers, query_params, self.expected_key):
            await self.app(scope, receive, send)
            return

        logger.warning("auth outcome=rejected path=%s", scope.get("path", ""))
        default_metrics.incr_unauthorized()
        body = json.dumps({"error": UNAUTHORIZED_MESSAGE}, separators=(",", ":")).encode("utf-8")
        await send(
            {
                "type": "http.response.start",
                "status": 401,
                "headers": [
                    (b"content-type", b"application/json"),
                    (b"content-length", str(len(body)).encode("ascii")),
                ],
            }
        )
        await send({"type": "http.response.body", "body": body})
