"""Shared parameter helpers for Casper MCP tools."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from casper_mcp.config import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


class InvalidParameterError(ValueError):
    """Raised when a tool argument cannot be used for an upstream call."""


def clamp_page_size(value: Optional[int], *, default: int = DEFAULT_PAGE_SIZE, max_value: int = MAX_PAGE_SIZE) -> int:
    """Clamp a page size to ``1..max_value``; idempotent."""
    if value is None or isinstance(value, bool):
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    if parsed < 1:
        return default
    return min(parsed, max_value)


def normalize_page(value: Optional[int]) -> int:
    """Pages are 1-based; anything unusable falls back to the first page."""
    if value is None or isinstance(value, bool):
        return DEFAULT_PAGE
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return DEFAULT_PAGE
    return parsed if parsed >= 1 else DEFAULT_PAGE


def require_identifier(value: Any, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidParameterError(f"{label} is required.")
    return value.strip()


def optional_identifier(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    return value.strip() or None


def parse_deploy_json(raw: Any) -> Dict[str, Any]:
    """Decode a deploy supplied as JSON text; the result must be an object."""
    if isinstance(raw, dict):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidParameterError("Deploy JSON is required.")
    try:
        deploy = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidParameterError(f"Invalid deploy JSON: {exc.msg}") from None
    if not isinstance(deploy, dict):
        raise InvalidParameterError("Deploy JSON must be an object.")
    return deploy
