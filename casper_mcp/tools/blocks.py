"""Block tools."""

from __future__ import annotations

from typing import Any, Dict, List

from casper_mcp.formatting import format_bool, format_hash, format_timestamp, text
from casper_mcp.tools.base import field, lookup_page, lookup_record, or_zero, paging
from casper_mcp.tools.validators import require_identifier


def _block_lines(block: Dict[str, Any]) -> List[str]:
    return [
        field("Block Height", text(block.get("block_height"))),
        field("Block Hash", format_hash(block.get("block_hash"))),
        field("Parent Hash", format_hash(block.get("parent_block_hash"))),
        field("State Root Hash", format_hash(block.get("state_root_hash"))),
        field("Era ID", text(block.get("era_id"))),
        field("Proposer", format_hash(block.get("proposer_public_key"))),
        field("Native Transfers", or_zero(block.get("native_transfers_number"))),
        field("Contract Calls", or_zero(block.get("contract_calls_number"))),
        field("Switch Block", format_bool(block.get("is_switch_block"))),
        field("Timestamp", format_timestamp(block.get("timestamp"))),
    ]


def _block_row(block: Dict[str, Any]) -> List[str]:
    block_hash = block.get("block_hash") or ""
    short_hash = f"{block_hash[:16]}..." if block_hash else "N/A"
    return [
        f"- **Height:** {text(block.get('block_height'))} | **Hash:** {short_hash}",
        f"  Era: {text(block.get('era_id'))} | Transfers: {or_zero(block.get('native_transfers_number'))}"
        f" | Calls: {or_zero(block.get('contract_calls_number'))} | {format_timestamp(block.get('timestamp'))}",
    ]


async def get_block(block_hash: str, *, endpoint) -> str:
    return await lookup_record(
        action="retrieving block",
        fetch=lambda: endpoint.block.get_block(require_identifier(block_hash, "Block hash")),
        title="Block Information",
        lines=_block_lines,
        not_found=f"Block not found: {block_hash}",
    )


async def get_latest_blocks(*, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving latest blocks",
        fetch=lambda: endpoint.block.get_blocks(page=page, page_size=page_size),
        title="Latest Blocks",
        page=page,
        row=_block_row,
        empty="No blocks found.",
    )


async def get_validator_blocks(public_key: str, *, page: int = 1, page_size: int = 10, endpoint) -> str:
    """Blocks proposed by a validator, newest first."""
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving validator blocks",
        fetch=lambda: endpoint.block.get_validator_blocks(
            require_identifier(public_key, "Public key"), page=page, page_size=page_size
        ),
        title="Validator Blocks",
        page=page,
        row=_block_row,
        empty=f"No blocks found for validator: {public_key}",
    )
