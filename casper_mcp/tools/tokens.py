"""CEP-18 fungible token tools: token info, holders, balances and actions."""

from __future__ import annotations

from typing import Any, Dict, List

from casper_mcp.formatting import format_hash, format_timestamp, text
from casper_mcp.tools.base import field, first_present, lookup_page, lookup_record, nested, paging
from casper_mcp.tools.validators import require_identifier


def _action_row(action: Dict[str, Any], *, with_token: bool = True) -> List[str]:
    lines = [field("Deploy", format_hash(action.get("deploy_hash")))]
    if with_token:
        lines.append(f"  Token: {format_hash(action.get('contract_package_hash'))}")
    sender = first_present(action.get("from_public_key"), action.get("from_hash"))
    recipient = first_present(action.get("to_public_key"), action.get("to_hash"))
    lines.extend(
        [
            f"  From: {format_hash(sender)}",
            f"  To: {format_hash(recipient)}",
            f"  Amount: {text(action.get('amount'))} | {format_timestamp(action.get('timestamp'))}",
        ]
    )
    return lines


async def get_ft_token_info(contract_package_hash: str, *, endpoint) -> str:
    return await lookup_record(
        action="retrieving token info",
        fetch=lambda: endpoint.contract.get_contract_package(
            require_identifier(contract_package_hash, "Contract package hash")
        ),
        title="Fungible Token Information",
        lines=lambda package: [
            field("Contract Package", format_hash(package.get("contract_package_hash"))),
            field("Name", text(package.get("name"))),
            field("Description", text(package.get("description"))),
            field("Owner", format_hash(package.get("owner_public_key"))),
            field("Deploys", text(package.get("deploys_number"))),
            field("Created", format_timestamp(package.get("timestamp"))),
        ],
        not_found=f"Token contract package not found: {contract_package_hash}",
    )


async def get_ft_token_holders(
    contract_package_hash: str, *, page: int = 1, page_size: int = 10, endpoint
) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving token holders",
        fetch=lambda: endpoint.ft.get_contract_package_ft_ownership(
            require_identifier(contract_package_hash, "Contract package hash"), page=page, page_size=page_size
        ),
        title="Token Holders",
        page=page,
        row=lambda holder: [
            field("Owner", format_hash(holder.get("owner_hash"))),
            f"  Balance: {text(holder.get('balance'))}",
        ],
        empty=f"No holders found for token: {contract_package_hash}",
    )


def _balance_row(balance: Dict[str, Any]) -> List[str]:
    lines = [field("Token", format_hash(balance.get("contract_package_hash")))]
    package = nested(balance, "contract_package")
    if package:
        lines.append(f"  Name: {text(package.get('name'))}")
    lines.append(f"  Balance: {text(balance.get('balance'))}")
    return lines


async def get_account_ft_balances(
    account_identifier: str, *, page: int = 1, page_size: int = 10, endpoint
) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving account FT balances",
        fetch=lambda: endpoint.ft.get_account_ft_ownership(
            require_identifier(account_identifier, "Account identifier"), page=page, page_size=page_size
        ),
        title="Account Fungible Token Balances",
        page=page,
        row=_balance_row,
        empty=f"No fungible token balances found for account: {account_identifier}",
    )


async def get_fungible_token_actions(*, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving fungible token actions",
        fetch=lambda: endpoint.ft.get_ft_actions(page=page, page_size=page_size),
        title="Fungible Token Actions",
        page=page,
        row=_action_row,
        empty="No fungible token actions found.",
    )


async def get_account_fungible_token_actions(
    account_identifier: str, *, page: int = 1, page_size: int = 10, endpoint
) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving account fungible token actions",
        fetch=lambda: endpoint.ft.get_account_ft_actions(
            require_identifier(account_identifier, "Account identifier"), page=page, page_size=page_size
        ),
        title="Account Fungible Token Actions",
        page=page,
        row=_action_row,
        empty=f"No fungible token actions found for account: {account_identifier}",
    )


async def get_contract_package_fungible_token_actions(
    contract_package_hash: str, *, page: int = 1, page_size: int = 10, endpoint
) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving contract package FT actions",
        fetch=lambda: endpoint.ft.get_contract_package_ft_actions(
            require_identifier(contract_package_hash, "Contract package hash"), page=page, page_size=page_size
        ),
        title="Contract Package FT Actions",
        page=page,
        row=lambda action: _action_row(action, with_token=False),
        empty=f"No fungible token actions found for contract package: {contract_package_hash}",
    )
