"""Account-related tools."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from casper_mcp.formatting import (
    format_hash,
    format_timestamp,
    motes_to_cspr,
    parse_motes,
    text,
)
from casper_mcp.tools.base import data_of, field, join_lines, lookup_page, lookup_record, paging, resolve
from casper_mcp.tools.validators import require_identifier


def _account_info_lines(account: Dict[str, Any]) -> List[str]:
    return [
        field("Public Key", format_hash(account.get("public_key"))),
        field("Account Hash", format_hash(account.get("account_hash"))),
        field("Balance", motes_to_cspr(account.get("balance"))),
        field("Staked Balance", motes_to_cspr(account.get("staked_balance"))),
        field("Delegated Balance", motes_to_cspr(account.get("delegated_balance"))),
        field("Undelegated Balance", motes_to_cspr(account.get("undelegated_balance"))),
        field("Auction Status", text(account.get("auction_status"))),
        field("Main Purse", format_hash(account.get("main_purse_uref"))),
    ]


def _account_balance_lines(account: Dict[str, Any]) -> List[str]:
    liquid = account.get("balance")
    staked = account.get("staked_balance")
    delegated = account.get("delegated_balance")
    # Missing components count as zero in the total.
    total = sum(parse_motes(value) or 0 for value in (liquid, staked, delegated))
    return [
        field("Public Key", format_hash(account.get("public_key"))),
        field("Liquid Balance", motes_to_cspr(liquid)),
        field("Staked Balance", motes_to_cspr(staked)),
        field("Delegated Balance", motes_to_cspr(delegated)),
        field("Total (liquid + staked + delegated)", motes_to_cspr(total)),
    ]


async def get_account_info(account_identifier: str, *, endpoint) -> str:
    """Account balances, staking figures and main purse for a public key or account hash."""
    return await lookup_record(
        action="retrieving account info",
        fetch=lambda: endpoint.account.get_account(require_identifier(account_identifier, "Account identifier")),
        title="Account Information",
        lines=_account_info_lines,
        not_found=f"Account not found: {account_identifier}",
    )


async def get_account_balance(account_identifier: str, *, endpoint) -> str:
    return await lookup_record(
        action="retrieving account balance",
        fetch=lambda: endpoint.account.get_account(require_identifier(account_identifier, "Account identifier")),
        title="Account Balance",
        lines=_account_balance_lines,
        not_found=f"Account not found: {account_identifier}",
    )


def _deploy_row(deploy: Dict[str, Any]) -> List[str]:
    lines = [
        field("Deploy Hash", format_hash(deploy.get("deploy_hash"))),
        field("Status", text(deploy.get("status"))),
        field("Cost", motes_to_cspr(deploy.get("cost"))),
        field("Block Height", text(deploy.get("block_height"))),
        field("Timestamp", format_timestamp(deploy.get("timestamp"))),
    ]
    if deploy.get("error_message"):
        lines.append(field("Error", deploy["error_message"]))
    return lines


async def get_account_deploys(public_key: str, *, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving account deploys",
        fetch=lambda: endpoint.deploy.get_account_deploys(
            require_identifier(public_key, "Public key"), page=page, page_size=page_size
        ),
        title="Account Deploys",
        page=page,
        row=_deploy_row,
        empty=f"No deploys found for account: {public_key}",
    )


async def get_account_delegations(public_key: str, *, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving account delegations",
        fetch=lambda: endpoint.delegate.get_account_delegations(
            require_identifier(public_key, "Public key"), page=page, page_size=page_size
        ),
        title="Account Delegations",
        page=page,
        row=lambda delegation: [
            field("Validator", format_hash(delegation.get("validator_public_key"))),
            field("Staked Amount", motes_to_cspr(delegation.get("stake"))),
        ],
        empty=f"No delegations found for account: {public_key}",
    )


async def get_accounts(*, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving accounts",
        fetch=lambda: endpoint.account.get_accounts(page=page, page_size=page_size),
        title="Accounts",
        page=page,
        row=lambda account: [
            field("Public Key", format_hash(account.get("public_key"))),
            f"  Account Hash: {format_hash(account.get('account_hash'))}",
            f"  Balance: {motes_to_cspr(account.get('balance'))}",
        ],
        empty="No accounts found.",
    )


async def get_account_contract_packages(
    public_key: str, *, page: int = 1, page_size: int = 10, endpoint
) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving account contract packages",
        fetch=lambda: endpoint.contract.get_account_contract_packages(
            require_identifier(public_key, "Public key"), page=page, page_size=page_size
        ),
        title="Account Contract Packages",
        page=page,
        row=lambda package: [
            field("Package Hash", format_hash(package.get("contract_package_hash"))),
            f"  Name: {text(package.get('name'))}",
            f"  Description: {text(package.get('description'))}",
            f"  Owner: {format_hash(package.get('owner_public_key'))}",
            f"  Created: {format_timestamp(package.get('timestamp'))}",
        ],
        empty=f"No contract packages found for account: {public_key}",
    )


async def get_account_delegation_rewards(
    public_key: str, *, page: int = 1, page_size: int = 10, endpoint
) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving account delegation rewards",
        fetch=lambda: endpoint.delegate.get_account_delegation_rewards(
            require_identifier(public_key, "Public key"), page=page, page_size=page_size
        ),
        title="Account Delegation Rewards",
        page=page,
        row=lambda reward: [
            field("Era", text(reward.get("era_id"))),
            f"  Validator: {format_hash(reward.get('validator_public_key'))}",
            f"  Amount: {motes_to_cspr(reward.get('amount'))}",
            f"  Timestamp: {format_timestamp(reward.get('timestamp'))}",
        ],
        empty=f"No delegation rewards found for account: {public_key}",
    )


def _render_total(title: str, key_label: str, public_key: str):
    def render(payload: Any) -> Optional[str]:
        total = data_of(payload)
        if total is None or isinstance(total, (dict, list)):
            return None
        return join_lines(
            [
                f"## {title}",
                field(key_label, format_hash(public_key)),
                field("Total Rewards", motes_to_cspr(total)),
            ]
        )

    return render


async def get_total_account_delegation_rewards(public_key: str, *, endpoint) -> str:
    return await resolve(
        action="retrieving total account delegation rewards",
        fetch=lambda: endpoint.delegate.get_total_account_delegation_rewards(
            require_identifier(public_key, "Public key")
        ),
        render=_render_total("Total Account Delegation Rewards", "Public Key", public_key),
        not_found=f"No delegation rewards found for account: {public_key}",
    )


async def get_total_validator_delegator_rewards(public_key: str, *, endpoint) -> str:
    """Total rewards a validator has paid out to its delegators."""
    return await resolve(
        action="retrieving total validator delegator rewards",
        fetch=lambda: endpoint.delegate.get_total_validator_delegator_rewards(
            require_identifier(public_key, "Public key")
        ),
        render=_render_total("Total Validator Delegator Rewards", "Validator Public Key", public_key),
        not_found=f"No delegator rewards found for validator: {public_key}",
    )
