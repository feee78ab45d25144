"""
Network-wide status tools backed by the auction metrics and supply endpoints.

Both metrics tools label their heading with the configured network, taken from
the endpoint the tool was called with.
"""

from __future__ import annotations

from casper_mcp.formatting import format_number, format_timestamp, motes_to_cspr, text
from casper_mcp.tools.base import field, lookup_record


def _network_label(endpoint) -> str:
    return "Testnet" if endpoint.is_testnet else "Mainnet"


async def get_network_status(*, endpoint) -> str:
    """Current era, validator and bid counts, and total active stake."""
    return await lookup_record(
        action="retrieving network status",
        fetch=endpoint.auction.get_auction_metrics,
        title=f"Casper Network Status ({_network_label(endpoint)})",
        lines=lambda metrics: [
            field("Current Era", text(metrics.get("current_era_id"))),
            field("Active Validators", format_number(metrics.get("active_validator_number"))),
            field("Total Bids", format_number(metrics.get("total_bids_number"))),
            field("Active Bids", format_number(metrics.get("active_bids_number"))),
            field("Total Active Era Stake", motes_to_cspr(metrics.get("total_active_era_stake"))),
        ],
        not_found="Unable to retrieve network status.",
    )


async def get_era_info(*, endpoint) -> str:
    return await lookup_record(
        action="retrieving era info",
        fetch=endpoint.auction.get_auction_metrics,
        title=f"Era Information ({_network_label(endpoint)})",
        lines=lambda metrics: [
            field("Current Era ID", text(metrics.get("current_era_id"))),
            field("Active Validators", format_number(metrics.get("active_validator_number"))),
            field("Total Active Era Stake", motes_to_cspr(metrics.get("total_active_era_stake"))),
        ],
        not_found="Unable to retrieve era info.",
    )


async def get_supply_info(*, endpoint) -> str:
    return await lookup_record(
        action="retrieving supply info",
        fetch=endpoint.supply.get_supply,
        title="CSPR Supply Information",
        lines=lambda supply: [
            field("Token", supply.get("token") or "CSPR"),
            field("Total Supply", motes_to_cspr(supply.get("total"))),
            field("Circulating Supply", motes_to_cspr(supply.get("circulating"))),
            field("Last Updated", format_timestamp(supply.get("timestamp"))),
        ],
        not_found="Unable to retrieve supply info.",
    )
