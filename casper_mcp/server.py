"""FastAPI application wiring the Casper MCP tools to the HTTP (sse) transport."""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from casper_mcp import __version__, registry
from casper_mcp.auth import ApiKeyAuthMiddleware
from casper_mcp.config import CasperMcpConfig
from casper_mcp.cspr_cloud.client import CsprCloudClient
from casper_mcp.metrics import default_metrics
from casper_mcp.transports import SERVER_NAME, SseBridge, build_mcp_server, invoke_tool

logger = logging.getLogger(__name__)

APP_VERSION = __version__
MCP_SERVER_NAME = SERVER_NAME
MCP_SERVER_VERSION = APP_VERSION
REQUEST_ID_HEADER = b"x-request-id"


class RequestContextMiddleware:
    """Tag every request with an ID, echo it as ``X-Request-ID`` and time it."""

    def __init__(self, app) -> None:
        self.app = app

    async def __call__(self, scope, receive, send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id
        start = time.time()
        default_metrics.incr_request()

        async def send_with_request_id(message) -> None:
            if message["type"] == "http.response.start":
                headers = [
                    (name, value) for name, value in message.get("headers", []) if name.lower() != REQUEST_ID_HEADER
                ]
                headers.append((REQUEST_ID_HEADER, request_id.encode("ascii")))
                message = {**message, "headers": headers}
            await send(message)

        try:
            await self.app(scope, receive, send_with_request_id)
        finally:
            default_metrics.record_duration(request_id, (time.time() - start) * 1000)


def _jsonrpc_success_payload(rpc_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "result": result}


def _jsonrpc_error_payload(rpc_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "error": {"code": code, "message": message}}


def _wrap_tool_result(result: str) -> Dict[str, Any]:
    """Shape a tool report into an MCP content array."""
    wrapped: Dict[str, Any] = {"content": [{"type": "text", "text": result}]}
    # Tool-level errors are returned in-band with the isError flag.
    if registry.is_error_result(result):
        wrapped["isError"] = True
    return wrapped


def create_app(config: CasperMcpConfig, client: CsprCloudClient) -> FastAPI:
    """Build the HTTP app for ``config``; the app owns ``client`` and closes it on shutdown."""
    endpoint = client.endpoint()
    bridge = SseBridge(build_mcp_server(endpoint))

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info("server starting network=%s auth=%s", config.network.value, config.auth_enabled)
        yield
        await client.aclose()

    app = FastAPI(
        title="Casper MCP Server",
        description="CSPR.cloud blockchain-explorer tool surface for LLM agents.",
        version=APP_VERSION,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.endpoint = endpoint

    if config.auth_enabled:
        app.add_middleware(ApiKeyAuthMiddleware, expected_key=config.server_api_key)
    # Added last so it wraps auth and rejected requests carry an ID too.
    app.add_middleware(RequestContextMiddleware)

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {
            "status": "healthy",
            "server": MCP_SERVER_NAME,
            "transport": "sse",
            "network": config.network.value,
        }

    @app.get("/metrics")
    async def metrics() -> Dict[str, object]:
        return default_metrics.snapshot()

    app.add_route("/sse", bridge.handle_sse, methods=["GET"])
    app.mount("/messages/", app=bridge.handle_post_message)

    @app.post("/mcp")
    async def mcp_gateway(request: Request) -> Response:
        """
        Minimal JSON-RPC gateway for MCP-style integrations.

        Supported methods:
          - initialize
          - tools/list (alias list_tools)
          - tools/call (alias call_tool)
          - notifications/initialized
        """
        request_id = getattr(request.state, "request_id", None)
        start_time = time.time()

        def _respond(
            payload: Dict[str, Any],
            status_code: int = 200,
            *,
            outcome: str,
            method_label: Optional[str] = None,
            tool_label: Optional[str] = None,
            error_code: Optional[int] = None,
        ) -> JSONResponse:
            duration_ms = (time.time() - start_time) * 1000
            logger.debug(
                "mcp outcome=%s method=%s tool=%s id=%s status=%s duration_ms=%.2f error_code=%s",
                outcome,
                method_label,
                tool_label,
                payload.get("id"),
                status_code,
                duration_ms,
                error_code,
                extra={"request_id": request_id, "tool": tool_label, "error": error_code},
            )
            return JSONResponse(status_code=status_code, content=payload)

        try:
            body = await request.json()
        except ValueError:
            payload = _jsonrpc_error_payload(None, -32700, "Parse error")
            return _respond(payload, status_code=400, outcome="error", error_code=-32700)

        if not isinstance(body, dict):
            payload = _jsonrpc_error_payload(None, -32600, "Invalid request")
            return _respond(payload, status_code=400, outcome="error", error_code=-32600)

        method = body.get("method")
        rpc_id = body.get("id")
        raw_params = body.get("params")
        if raw_params is None:
            params = {}
        elif isinstance(raw_params, dict):
            params = raw_params
        else:
            payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
            return _respond(payload, outcome="error", method_label=method, error_code=-32602)

        if not method:
            payload = _jsonrpc_error_payload(rpc_id, -32600, "Invalid request")
            return _respond(payload, outcome="error", error_code=-32600)

        if method == "initialize":
            protocol_version = params.get("protocolVersion")
            if not isinstance(protocol_version, str) or not protocol_version:
                payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
                return _respond(payload, outcome="error", method_label=method, error_code=-32602)
            result = {
                "protocolVersion": protocol_version,
                "serverInfo": {"name": MCP_SERVER_NAME, "version": MCP_SERVER_VERSION},
                "capabilities": {"tools": {"listChanged": False}},
            }
            return _respond(_jsonrpc_success_payload(rpc_id, result), outcome="success", method_label=method)

        if method in ("list_tools", "tools/list"):
            result = {"tools": registry.list_tools()}
            return _respond(_jsonrpc_success_payload(rpc_id, result), outcome="success", method_label=method)

        if method in ("call_tool", "tools/call"):
            tool_name = params.get("name") or params.get("tool")
            tool_params = params.get("arguments")
            if tool_params is None:
                tool_params = params.get("params") or {}
            if not isinstance(tool_name, str) or not tool_name.strip():
                payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
                return _respond(payload, outcome="error", method_label=method, error_code=-32602)
            if not isinstance(tool_params, dict):
                payload = _jsonrpc_error_payload(rpc_id, -32602, "Invalid params")
                return _respond(
                    payload, outcome="error", method_label=method, tool_label=tool_name, error_code=-32602
                )
            result = await invoke_tool(tool_name, tool_params, endpoint=endpoint, request_id=request_id)
            return _respond(
                _jsonrpc_success_payload(rpc_id, _wrap_tool_result(result)),
                outcome="success",
                method_label=method,
                tool_label=tool_name,
            )

        if method in ("notifications/initialized", "initialized"):
            # Notifications carry no JSON-RPC response body.
            logger.debug("mcp initialized notification received", extra={"request_id": request_id})
            return Response(status_code=204)

        payload = _jsonrpc_error_payload(rpc_id, -32601, "Method not found")
        return _respond(payload, outcome="error", method_label=method, error_code=-32601)

    return app
