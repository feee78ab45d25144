"""Deploy (transaction) tools."""

from __future__ import annotations

from typing import Any, Dict, List

from casper_mcp.formatting import format_hash, format_timestamp, motes_to_cspr, text
from casper_mcp.tools.base import field, lookup_catalog, lookup_page, lookup_record, paging
from casper_mcp.tools.validators import require_identifier


def _deploy_lines(deploy: Dict[str, Any]) -> List[str]:
    lines = [
        field("Deploy Hash", format_hash(deploy.get("deploy_hash"))),
        field("Block Hash", format_hash(deploy.get("block_hash"))),
        field("Block Height", text(deploy.get("block_height"))),
        field("Caller", format_hash(deploy.get("caller_public_key"))),
        field("Status", text(deploy.get("status"))),
        field("Cost", motes_to_cspr(deploy.get("cost"))),
        field("Payment Amount", motes_to_cspr(deploy.get("payment_amount"))),
        field("Timestamp", format_timestamp(deploy.get("timestamp"))),
    ]
    if deploy.get("contract_hash"):
        lines.append(field("Contract Hash", format_hash(deploy["contract_hash"])))
    if deploy.get("contract_package_hash"):
        lines.append(field("Contract Package", format_hash(deploy["contract_package_hash"])))
    if deploy.get("error_message"):
        lines.append(field("Error", deploy["error_message"]))

    transfers = [item for item in deploy.get("transfers") or [] if isinstance(item, dict)]
    if transfers:
        lines.append("")
        lines.append(f"### Transfers ({len(transfers)})")
        for transfer in transfers:
            lines.append(
                f"- From: {format_hash(transfer.get('from_purse_public_key'))}"
                f" → To: {format_hash(transfer.get('to_public_key'))}"
                f" | Amount: {motes_to_cspr(transfer.get('amount'))}"
            )
    return lines


async def get_deploy(deploy_hash: str, *, endpoint) -> str:
    """Deploy details, including any native transfers it made."""
    return await lookup_record(
        action="retrieving deploy",
        fetch=lambda: endpoint.deploy.get_deploy(require_identifier(deploy_hash, "Deploy hash")),
        title="Deploy Information",
        lines=_deploy_lines,
        not_found=f"Deploy not found: {deploy_hash}",
    )


async def get_deploys(*, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving deploys",
        fetch=lambda: endpoint.deploy.get_deploys(page=page, page_size=page_size),
        title="Deploys",
        page=page,
        row=lambda deploy: [
            field("Deploy Hash", format_hash(deploy.get("deploy_hash"))),
            f"  Caller: {format_hash(deploy.get('caller_public_key'))}",
            f"  Status: {text(deploy.get('status'))} | Cost: {motes_to_cspr(deploy.get('cost'))}",
            f"  Block Height: {text(deploy.get('block_height'))} | {format_timestamp(deploy.get('timestamp'))}",
        ],
        empty="No deploys found.",
    )


async def get_block_deploys(block_hash: str, *, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving block deploys",
        fetch=lambda: endpoint.deploy.get_block_deploys(
            require_identifier(block_hash, "Block hash"), page=page, page_size=page_size
        ),
        title="Block Deploys",
        page=page,
        preamble=[f"Block: {block_hash}"],
        row=lambda deploy: [
            field("Deploy Hash", format_hash(deploy.get("deploy_hash"))),
            f"  Caller: {format_hash(deploy.get('caller_public_key'))}",
            f"  Status: {text(deploy.get('status'))} | Cost: {motes_to_cspr(deploy.get('cost'))}",
            f"  Timestamp: {format_timestamp(deploy.get('timestamp'))}",
        ],
        empty=f"No deploys found for block: {block_hash}",
    )


async def get_deploy_execution_types(*, endpoint) -> str:
    return await lookup_catalog(
        action="retrieving deploy execution types",
        fetch=endpoint.deploy.get_deploy_execution_types,
        title="Deploy Execution Types",
        empty="No deploy execution types found.",
    )
