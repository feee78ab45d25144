"""Process entry point: ``casper-mcp`` / ``python -m casper_mcp``."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import List, Optional, Sequence, TextIO

import uvicorn

from casper_mcp.config import CasperMcpConfig, ConfigError, load_config
from casper_mcp.cspr_cloud.client import CsprCloudClient
from casper_mcp.logging_setup import configure_logging, effective_level
from casper_mcp.server import create_app
from casper_mcp.transports import run_stdio

logger = logging.getLogger(__name__)

LISTEN_HOST = "0.0.0.0"


def banner_lines(config: CasperMcpConfig) -> List[str]:
    auth = "enabled (X-API-Key)" if config.auth_enabled else "disabled"
    return [
        f"Casper MCP server starting on http://{LISTEN_HOST}:{config.port}",
        "  Transport: SSE",
        f"  Network:   {config.network.value}",
        f"  Auth:      {auth}",
        f"  Health:    http://localhost:{config.port}/health",
        f"  MCP:       http://localhost:{config.port}/sse",
    ]


def serve_sse(config: CasperMcpConfig, client: CsprCloudClient, *, stream: TextIO = sys.stderr) -> None:
    for line in banner_lines(config):
        print(line, file=stream)
    app = create_app(config, client)
    uvicorn.run(
        app,
        host=LISTEN_HOST,
        port=config.port,
        log_level=logging.getLevelName(effective_level(config)).lower(),
        log_config=None,
    )


async def serve_stdio(client: CsprCloudClient) -> None:
    try:
        await run_stdio(client.endpoint())
    finally:
        await client.aclose()


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        config = load_config(argv)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    configure_logging(config)
    client = CsprCloudClient(config)
    if config.is_sse:
        serve_sse(config, client)
    else:
        logger.info("serving stdio network=%s", config.network.value)
        asyncio.run(serve_stdio(client))
    return 0


if __name__ == "__main__":
    sys.exit(main())
