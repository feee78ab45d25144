"""MCP SDK wiring: one low-level ``Server`` per process, served over stdio or SSE."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.server import Server
from mcp.server.sse import SseServerTransport
from mcp.server.stdio import stdio_server
from starlette.requests import Request
from starlette.responses import Response

from casper_mcp import registry
from casper_mcp.cspr_cloud.client import NetworkEndpoint
from casper_mcp.metrics import default_metrics

logger = logging.getLogger(__name__)

SERVER_NAME = "casper-mcp"
MESSAGES_PATH = "/messages/"
# Metrics key shared by every name outside the registry.
UNKNOWN_TOOL = "unknown"


async def invoke_tool(
    name: str,
    arguments: Optional[Dict[str, Any]],
    *,
    endpoint: NetworkEndpoint,
    request_id: Optional[str] = None,
) -> str:
    """Run one tool through the registry, logging and counting the outcome."""
    result = await registry.call_tool(name, arguments, endpoint=endpoint)
    metric_key = name if name in registry.TOOL_REGISTRY else UNKNOWN_TOOL
    if registry.is_error_result(result):
        logger.warning(
            "tool=%s outcome=error request_id=%s",
            name,
            request_id,
            extra={"tool": name, "request_id": request_id, "error": result},
        )
        default_metrics.record_tool(metric_key, success=False)
    else:
        logger.info(
            "tool=%s outcome=success request_id=%s",
            name,
            request_id,
            extra={"tool": name, "request_id": request_id},
        )
        default_metrics.record_tool(metric_key, success=True)
    return result


def build_mcp_server(endpoint: NetworkEndpoint) -> Server:
    server: Server = Server(SERVER_NAME)

    @server.list_tools()
    async def _list_tools() -> List[types.Tool]:
        return [
            types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
            for tool in registry.TOOL_REGISTRY.values()
        ]

    @server.call_tool()
    async def _call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
        result = await invoke_tool(name, arguments, endpoint=endpoint)
        return [types.TextContent(type="text", text=result)]

    return server


async def run_stdio(endpoint: NetworkEndpoint) -> None:
    server = build_mcp_server(endpoint)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


class SseBridge:
    """The ``/sse`` stream endpoint and the ``/messages/`` post handler for one server."""

    def __init__(self, server: Server) -> None:
        self.server = server
        self.transport = SseServerTransport(MESSAGES_PATH)

    async def handle_sse(self, request: Request) -> Response:
        async with self.transport.connect_sse(
            request.scope,
            request.receive,
            request._send,  # noqa: SLF001
        ) as (read_stream, write_stream):
            await self.server.run(read_stream, write_stream, self.server.create_initialization_options())
        return Response()

    @property
    def handle_post_message(self):
        return self.transport.handle_post_message
