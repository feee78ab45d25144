"""DEX reference list and token swap tools."""

from __future__ import annotations

from typing import Any, Optional

from casper_mcp.formatting import format_hash, text
from casper_mcp.tools.base import field, first_present, join_lines, lookup_page, or_zero, paging, resolve, rows_of


def _render_dexes(payload: Any) -> Optional[str]:
    dexes = rows_of(payload)
    if not dexes:
        return None
    lines = ["## Decentralized Exchanges"]
    lines.extend(f"- **ID:** {text(dex.get('id'))} | **Name:** {text(dex.get('name'))}" for dex in dexes)
    return join_lines(lines)


async def get_dexes(*, endpoint) -> str:
    return await resolve(
        action="retrieving DEXes",
        fetch=endpoint.dex.get_dexes,
        render=_render_dexes,
        not_found="No DEXes found.",
    )


async def get_swaps(*, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving swaps",
        fetch=lambda: endpoint.swap.get_swaps(page=page, page_size=page_size),
        title="Token Swaps",
        page=page,
        row=lambda swap: [
            field("Transaction", format_hash(swap.get("transaction_hash"))),
            f"  Sender: {format_hash(first_present(swap.get('sender_public_key'), swap.get('sender_hash')))}",
            f"  Token0: {format_hash(swap.get('token0_contract_package_hash'))}"
            f" | Token1: {format_hash(swap.get('token1_contract_package_hash'))}",
            f"  Amount0 In: {or_zero(swap.get('amount0_in'))} | Amount1 In: {or_zero(swap.get('amount1_in'))}",
            f"  Amount0 Out: {or_zero(swap.get('amount0_out'))} | Amount1 Out: {or_zero(swap.get('amount1_out'))}",
            f"  DEX ID: {text(swap.get('dex_id'))} | Block: {text(swap.get('block_height'))}",
            f"  Timestamp: {text(swap.get('timestamp'))}",
        ],
        empty="No swaps found.",
    )
