"""Validator, bidder and reward tools."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from casper_mcp.cspr_cloud.client import CsprCloudNotFoundError
from casper_mcp.formatting import (
    format_bool,
    format_decimal,
    format_hash,
    format_number,
    format_percentage,
    format_timestamp,
    motes_to_cspr,
    text,
)
from casper_mcp.tools.base import (
    MissingPrecondition,
    data_of,
    field,
    join_lines,
    lookup_page,
    lookup_record,
    paging,
    record_of,
    resolve,
)
from casper_mcp.tools.validators import require_identifier


async def _current_era_id(endpoint, subject: str) -> str:
    """Validator endpoints need the current era; read it from the auction metrics."""
    message = f"Unable to determine current era. Cannot fetch {subject}."
    try:
        metrics = await endpoint.auction.get_auction_metrics()
    except CsprCloudNotFoundError:
        raise MissingPrecondition(message) from None
    era_id = (record_of(metrics) or {}).get("current_era_id")
    if era_id is None or str(era_id) == "":
        raise MissingPrecondition(message)
    return str(era_id)


def _validator_row(validator: Dict[str, Any]) -> List[str]:
    return [
        f"- **Rank #{text(validator.get('rank'))}** | **Active:** {format_bool(validator.get('is_active'))}",
        f"  Public Key: {format_hash(validator.get('public_key'))}",
        f"  Fee: {format_percentage(validator.get('fee'))} | Delegators: {format_number(validator.get('delegators_number'))}",
        f"  Self Stake: {motes_to_cspr(validator.get('self_stake'))}"
        f" | Delegators Stake: {motes_to_cspr(validator.get('delegators_stake'))}",
        f"  Total Stake: {motes_to_cspr(validator.get('total_stake'))}",
        f"  Network Share: {format_percentage(validator.get('network_share'))}",
    ]


def _validator_lines(validator: Dict[str, Any]) -> List[str]:
    return [
        field("Rank", f"#{text(validator.get('rank'))}"),
        field("Public Key", format_hash(validator.get("public_key"))),
        field("Active", format_bool(validator.get("is_active"))),
        field("Era ID", text(validator.get("era_id"))),
        field("Fee", format_percentage(validator.get("fee"))),
        field("Delegators", format_number(validator.get("delegators_number"))),
        field("Self Stake", motes_to_cspr(validator.get("self_stake"))),
        field("Delegators Stake", motes_to_cspr(validator.get("delegators_stake"))),
        field("Total Stake", motes_to_cspr(validator.get("total_stake"))),
        field("Self Share", format_percentage(validator.get("self_share"))),
        field("Network Share", format_percentage(validator.get("network_share"))),
    ]


async def get_validators(*, page: int = 1, page_size: int = 10, endpoint) -> str:
    """
    List validators for the current era.

    The era is pre-fetched from the auction metrics; without it the listing is
    skipped with an explanatory sentence.
    """
    page, page_size = paging(page, page_size)

    async def fetch():
        era_id = await _current_era_id(endpoint, "validators")
        return await endpoint.validator.get_validators(era_id=era_id, page=page, page_size=page_size)

    return await lookup_page(
        action="retrieving validators",
        fetch=fetch,
        title="Validators",
        page=page,
        row=_validator_row,
        empty="No validators found.",
    )


async def get_validator_info(public_key: str, *, endpoint) -> str:
    async def fetch():
        key = require_identifier(public_key, "Public key")
        era_id = await _current_era_id(endpoint, "validator info")
        return await endpoint.validator.get_validator(key, era_id=era_id)

    return await lookup_record(
        action="retrieving validator info",
        fetch=fetch,
        title="Validator Information",
        lines=_validator_lines,
        not_found=f"Validator not found: {public_key}",
    )


async def get_validator_delegations(public_key: str, *, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving validator delegations",
        fetch=lambda: endpoint.delegate.get_validator_delegations(
            require_identifier(public_key, "Public key"), page=page, page_size=page_size
        ),
        title="Validator Delegations",
        page=page,
        row=lambda delegation: [
            field("Delegator", format_hash(delegation.get("public_key"))),
            f"  Staked Amount: {motes_to_cspr(delegation.get('stake'))}",
        ],
        empty=f"No delegations found for validator: {public_key}",
    )


def _reward_row(reward: Dict[str, Any]) -> List[str]:
    return [
        field("Era", text(reward.get("era_id"))),
        f"  Amount: {motes_to_cspr(reward.get('amount'))}",
        f"  Timestamp: {format_timestamp(reward.get('timestamp'))}",
    ]


async def get_validator_rewards(public_key: str, *, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving validator rewards",
        fetch=lambda: endpoint.validator.get_validator_rewards(
            require_identifier(public_key, "Public key"), page=page, page_size=page_size
        ),
        title="Validator Rewards",
        page=page,
        row=_reward_row,
        empty=f"No rewards found for validator: {public_key}",
    )


async def get_validator_total_rewards(public_key: str, *, endpoint) -> str:
    def render(payload: Any) -> Optional[str]:
        total = data_of(payload)
        if total is None or isinstance(total, (dict, list)):
            return None
        return join_lines(
            [
                "## Validator Total Rewards",
                field("Public Key", format_hash(public_key)),
                field("Total Rewards", motes_to_cspr(total)),
            ]
        )

    return await resolve(
        action="retrieving validator total rewards",
        fetch=lambda: endpoint.validator.get_validator_total_rewards(require_identifier(public_key, "Public key")),
        render=render,
        not_found=f"No rewards found for validator: {public_key}",
    )


async def get_historical_validator_performance(
    public_key: str, *, page: int = 1, page_size: int = 10, endpoint
) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving validator performance",
        fetch=lambda: endpoint.validator.get_historical_validator_performance(
            require_identifier(public_key, "Public key"), page=page, page_size=page_size
        ),
        title="Validator Historical Performance",
        page=page,
        row=lambda entry: [f"- **Era {text(entry.get('era_id'))}:** Score: {format_decimal(entry.get('score'))}"],
        empty=f"No performance data found for validator: {public_key}",
        divider=False,
    )


async def get_historical_validator_average_performance(
    public_key: str, *, page: int = 1, page_size: int = 10, endpoint
) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving validator average performance",
        fetch=lambda: endpoint.validator.get_historical_validator_average_performance(
            require_identifier(public_key, "Public key"), page=page, page_size=page_size
        ),
        title="Validator Historical Average Performance",
        page=page,
        row=lambda entry: [
            f"- **Era {text(entry.get('era_id'))}:** Average Score: {format_decimal(entry.get('average_score'))}"
        ],
        empty=f"No average performance data found for validator: {public_key}",
        divider=False,
    )


async def get_historical_validators_average_performance(*, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving validators average performance",
        fetch=lambda: endpoint.validator.get_historical_validators_average_performance(
            page=page, page_size=page_size
        ),
        title="Validators Historical Average Performance",
        page=page,
        row=lambda entry: [
            f"- **Era {text(entry.get('era_id'))}:** {format_hash(entry.get('public_key'))}"
            f" | Score: {format_decimal(entry.get('average_score'))}"
        ],
        empty="No validators average performance data found.",
        divider=False,
    )


async def get_validator_era_rewards(public_key: str, *, page: int = 1, page_size: int = 10, endpoint) -> str:
    """Validator rewards aggregated per era."""
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving validator era rewards",
        fetch=lambda: endpoint.validator.get_validator_era_rewards(
            require_identifier(public_key, "Public key"), page=page, page_size=page_size
        ),
        title="Validator Era Rewards",
        page=page,
        row=_reward_row,
        empty=f"No era rewards found for validator: {public_key}",
    )


def _fee(value: Any) -> str:
    return f"{text(value)}%"


async def get_bidder(public_key: str, *, endpoint) -> str:
    return await lookup_record(
        action="retrieving bidder",
        fetch=lambda: endpoint.bidder.get_bidder(require_identifier(public_key, "Public key")),
        title="Bidder Information",
        lines=lambda bidder: [
            field("Public Key", format_hash(bidder.get("public_key"))),
            field("Rank", f"#{text(bidder.get('rank'))}"),
            field("Active", format_bool(bidder.get("is_active"))),
            field("Fee", _fee(bidder.get("fee"))),
            field("Self Stake", motes_to_cspr(bidder.get("self_stake"))),
            field("Total Stake", motes_to_cspr(bidder.get("total_stake"))),
            field("Self Share", text(bidder.get("self_share"))),
            field("Network Share", text(bidder.get("network_share"))),
        ],
        not_found=f"Bidder not found: {public_key}",
    )


async def get_bidders(*, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving bidders",
        fetch=lambda: endpoint.bidder.get_bidders(page=page, page_size=page_size),
        title="Bidders",
        page=page,
        row=lambda bidder: [
            f"- **Rank #{text(bidder.get('rank'))}** | **Active:** {format_bool(bidder.get('is_active'))}",
            f"  Public Key: {format_hash(bidder.get('public_key'))}",
            f"  Fee: {_fee(bidder.get('fee'))} | Self Stake: {motes_to_cspr(bidder.get('self_stake'))}",
            f"  Total Stake: {motes_to_cspr(bidder.get('total_stake'))}"
            f" | Network Share: {text(bidder.get('network_share'))}",
        ],
        empty="No bidders found.",
    )
