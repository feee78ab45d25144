"""CSPR.name resolution."""

from __future__ import annotations

from typing import Any, Dict, List

from casper_mcp.formatting import PLACEHOLDER, format_bool, format_hash, text
from casper_mcp.tools.base import field, lookup_record
from casper_mcp.tools.validators import require_identifier


def _resolution_lines(resolution: Dict[str, Any]) -> List[str]:
    is_primary = resolution.get("is_primary")
    return [
        field("Name", text(resolution.get("name"))),
        field("Token ID", text(resolution.get("name_token_id"))),
        field("Resolved Hash", format_hash(resolution.get("resolved_hash"))),
        field("Is Primary", PLACEHOLDER if is_primary is None else format_bool(is_primary)),
        field("Expires At", text(resolution.get("expires_at"))),
    ]


async def resolve_cspr_name(name: str, *, endpoint) -> str:
    return await lookup_record(
        action="resolving CSPR.name",
        fetch=lambda: endpoint.cspr_name.resolve(require_identifier(name, "Name")),
        title="CSPR.name Resolution",
        lines=_resolution_lines,
        not_found=f"CSPR.name not found: {name}",
    )
