"""Native CSPR transfer tools."""

from __future__ import annotations

from typing import Any, Dict, List

from casper_mcp.formatting import format_hash, format_timestamp, motes_to_cspr, text
from casper_mcp.tools.base import field, first_present, lookup_page, paging
from casper_mcp.tools.validators import require_identifier


def _parties(transfer: Dict[str, Any]) -> tuple[str, str]:
    sender = first_present(transfer.get("from_purse_public_key"), transfer.get("initiator_account_hash"))
    recipient = first_present(transfer.get("to_public_key"), transfer.get("to_account_hash"))
    return format_hash(sender), format_hash(recipient)


def _transfer_tail(transfer: Dict[str, Any]) -> List[str]:
    return [
        f"  Amount: {motes_to_cspr(transfer.get('amount'))}",
        f"  Block: {text(transfer.get('block_height'))} | {format_timestamp(transfer.get('timestamp'))}",
    ]


def _account_transfer_row(transfer: Dict[str, Any]) -> List[str]:
    sender, recipient = _parties(transfer)
    return [
        field("Deploy", format_hash(transfer.get("deploy_hash"))),
        f"  From: {sender}",
        f"  To: {recipient}",
        *_transfer_tail(transfer),
    ]


def _deploy_transfer_row(transfer: Dict[str, Any]) -> List[str]:
    sender, recipient = _parties(transfer)
    return [f"- From: {sender}", f"  To: {recipient}", *_transfer_tail(transfer)]


async def get_transfers(account_identifier: str, *, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving transfers",
        fetch=lambda: endpoint.transfer.get_account_transfers(
            require_identifier(account_identifier, "Account identifier"), page=page, page_size=page_size
        ),
        title="Account Transfers",
        page=page,
        row=_account_transfer_row,
        empty=f"No transfers found for account: {account_identifier}",
    )


async def get_deploy_transfers(deploy_hash: str, *, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving deploy transfers",
        fetch=lambda: endpoint.transfer.get_deploy_transfers(
            require_identifier(deploy_hash, "Deploy hash"), page=page, page_size=page_size
        ),
        title="Deploy Transfers",
        page=page,
        preamble=[f"Deploy: {deploy_hash}"],
        row=_deploy_transfer_row,
        empty=f"No transfers found for deploy: {deploy_hash}",
    )
