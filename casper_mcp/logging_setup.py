"""Process-wide logging configuration."""

from __future__ import annotations

import json
import logging
import sys

from casper_mcp.config import CasperMcpConfig

RECORD_EXTRAS = ("tool", "request_id", "error")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        for key in RECORD_EXTRAS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def effective_level(config: CasperMcpConfig) -> int:
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    # stdout carries MCP framing on stdio; keep stderr quiet too.
    if not config.is_sse:
        level = max(level, logging.WARNING)
    return level


def configure_logging(config: CasperMcpConfig) -> None:
    handler = logging.StreamHandler(sys.stderr)
    if config.log_format.lower() == "json":
        handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=effective_level(config), handlers=[handler], force=True)
