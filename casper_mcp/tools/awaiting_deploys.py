"""
Awaiting-deploy tools.

Awaiting deploys are deploys parked on CSPR.cloud while their approvals
(signatures) are collected. Two of these tools write upstream; the outcome is
reported from the boolean ``data`` field of the response.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from casper_mcp.tools.base import data_of, field, join_lines, resolve
from casper_mcp.tools.validators import parse_deploy_json, require_identifier


def _render_awaiting_deploy(deploy_hash: str):
    def render(payload: Any) -> Optional[str]:
        record = data_of(payload)
        if not isinstance(record, dict):
            record = payload if isinstance(payload, dict) else {}
        deploy = record.get("deploy")
        if deploy is None:
            return None
        return join_lines(
            [
                "## Awaiting Deploy",
                field("Deploy Hash", deploy_hash),
                "- **Deploy JSON:**",
                "```json",
                json.dumps(deploy, indent=2, ensure_ascii=False),
                "```",
            ]
        )

    return render


def _accepted(payload: Any) -> bool:
    return data_of(payload) is True


async def get_awaiting_deploy(deploy_hash: str, *, endpoint) -> str:
    return await resolve(
        action="retrieving awaiting deploy",
        fetch=lambda: endpoint.awaiting_deploy.get_awaiting_deploy(require_identifier(deploy_hash, "Deploy hash")),
        render=_render_awaiting_deploy(deploy_hash),
        not_found=f"Awaiting deploy not found: {deploy_hash}",
    )


async def create_awaiting_deploy(deploy_json: str, *, endpoint) -> str:
    """Submit a deploy (JSON text) for multi-signature collection."""
    return await resolve(
        action="creating awaiting deploy",
        fetch=lambda: endpoint.awaiting_deploy.create_awaiting_deploy(parse_deploy_json(deploy_json)),
        render=lambda payload: (
            "Awaiting deploy created successfully." if _accepted(payload) else "Failed to create awaiting deploy."
        ),
        not_found=None,
    )


async def add_awaiting_deploy_approval(deploy_hash: str, signer: str, signature: str, *, endpoint) -> str:
    async def fetch():
        target = require_identifier(deploy_hash, "Deploy hash")
        return await endpoint.awaiting_deploy.add_approval(
            target,
            signer=require_identifier(signer, "Signer"),
            signature=require_identifier(signature, "Signature"),
        )

    return await resolve(
        action="adding approval to awaiting deploy",
        fetch=fetch,
        render=lambda payload: (
            f"Approval added successfully to deploy: {deploy_hash}"
            if _accepted(payload)
            else f"Failed to add approval to deploy: {deploy_hash}"
        ),
        not_found=None,
    )
