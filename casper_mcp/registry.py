"""
Table-driven tool registry shared by the stdio, SSE and JSON-RPC surfaces.

Each entry maps a tool name to its implementation plus the JSON schema the
MCP client sees. Page sizes carry no schema maximum; oversized values are
clamped by the tools themselves.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

from casper_mcp import tools
from casper_mcp.config import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

ToolCallable = Callable[..., Awaitable[str]]
Param = Tuple[str, Dict[str, Any]]


def _string(description: str) -> Dict[str, Any]:
    return {"type": "string", "description": description}


PAGE: Param = (
    "page",
    {"type": "integer", "description": f"Page number (default: {DEFAULT_PAGE})"},
)
PAGE_SIZE: Param = (
    "page_size",
    {
        "type": "integer",
        "description": f"Number of results per page (default: {DEFAULT_PAGE_SIZE}, max: {MAX_PAGE_SIZE})",
    },
)

ACCOUNT_IDENTIFIER: Param = ("account_identifier", _string("The public key or account hash"))
ACCOUNT_PUBLIC_KEY: Param = ("public_key", _string("The public key of the account"))
VALIDATOR_PUBLIC_KEY: Param = ("public_key", _string("The public key of the validator"))
BIDDER_PUBLIC_KEY: Param = ("public_key", _string("The public key of the bidder"))
BLOCK_HASH: Param = ("block_hash", _string("The block hash"))
DEPLOY_HASH: Param = ("deploy_hash", _string("The deploy hash"))
CONTRACT_HASH: Param = ("contract_hash", _string("The contract hash"))
CONTRACT_PACKAGE_HASH: Param = ("contract_package_hash", _string("The contract package hash"))
FT_PACKAGE_HASH: Param = (
    "contract_package_hash",
    _string("The contract package hash of the fungible token"),
)
NFT_PACKAGE_HASH: Param = (
    "contract_package_hash",
    _string("The contract package hash of the NFT collection"),
)
TOKEN_ID: Param = ("token_id", _string("The token ID"))
CURRENCY_ID: Param = ("currency_id", _string("The currency ID (e.g., 1 for USD)"))
CURRENCY_FILTER: Param = ("currency_id", _string("Optional currency ID to filter by"))
TARGET_PACKAGE_FILTER: Param = (
    "target_contract_package_hash",
    _string("Optional target token contract package hash"),
)


@dataclass(slots=True)
class ToolDefinition:
    name: str
    description: str
    params: Dict[str, Any]
    input_schema: Dict[str, Any]
    callable: ToolCallable


def _tool(
    callable: ToolCallable,
    description: str,
    *,
    required: Sequence[Param] = (),
    optional: Sequence[Param] = (),
    paged: bool = False,
) -> ToolDefinition:
    if paged:
        optional = (*optional, PAGE, PAGE_SIZE)
    params: Dict[str, Any] = {}
    properties: Dict[str, Any] = {}
    for name, schema in required:
        params[name] = schema["type"]
        properties[name] = schema
    for name, schema in optional:
        params[name] = f"{schema['type']} (optional)"
        properties[name] = schema
    return ToolDefinition(
        name=callable.__name__,
        description=description,
        params=params,
        input_schema={
            "type": "object",
            "properties": properties,
            "required": [name for name, _ in required],
            "additionalProperties": False,
        },
        callable=callable,
    )


_DEFINITIONS: List[ToolDefinition] = [
    # Network
    _tool(
        tools.get_network_status,
        "Get current Casper Network status including active validators, era info, and total stake.",
    ),
    _tool(tools.get_era_info, "Get current Casper Network era information from auction metrics."),
    _tool(
        tools.get_supply_info,
        "Get CSPR token supply information including total and circulating supply.",
    ),
    # Accounts
    _tool(
        tools.get_account_info,
        "Get detailed information about a Casper Network account by public key or account hash, "
        "including balance, staking info, and delegation status.",
        required=[ACCOUNT_IDENTIFIER],
    ),
    _tool(
        tools.get_account_balance,
        "Get the CSPR balance of a Casper Network account.",
        required=[ACCOUNT_IDENTIFIER],
    ),
    _tool(
        tools.get_account_deploys,
        "Get recent deploys (transactions) for a Casper Network account.",
        required=[ACCOUNT_PUBLIC_KEY],
        paged=True,
    ),
    _tool(
        tools.get_account_delegations,
        "Get delegation information for a Casper Network account, "
        "showing which validators the account has delegated to.",
        required=[ACCOUNT_PUBLIC_KEY],
        paged=True,
    ),
    _tool(tools.get_accounts, "Get a paginated list of all accounts on the Casper Network.", paged=True),
    _tool(
        tools.get_account_contract_packages,
        "Get contract packages deployed by a Casper Network account.",
        required=[ACCOUNT_PUBLIC_KEY],
        paged=True,
    ),
    _tool(
        tools.get_account_delegation_rewards,
        "Get delegation rewards for a Casper Network account.",
        required=[ACCOUNT_PUBLIC_KEY],
        paged=True,
    ),
    _tool(
        tools.get_total_account_delegation_rewards,
        "Get the total delegation rewards for a Casper Network account.",
        required=[ACCOUNT_PUBLIC_KEY],
    ),
    _tool(
        tools.get_total_validator_delegator_rewards,
        "Get the total delegation rewards paid out by a validator to its delegators.",
        required=[VALIDATOR_PUBLIC_KEY],
    ),
    # Blocks
    _tool(
        tools.get_block,
        "Get detailed information about a specific Casper Network block by its hash.",
        required=[BLOCK_HASH],
    ),
    _tool(tools.get_latest_blocks, "Get the latest blocks from the Casper Network.", paged=True),
    _tool(
        tools.get_validator_blocks,
        "Get blocks proposed by a specific validator on the Casper Network.",
        required=[VALIDATOR_PUBLIC_KEY],
        paged=True,
    ),
    # Validators and bidders
    _tool(
        tools.get_validators,
        "Get a list of validators on the Casper Network with their stake, fee, and performance info.",
        paged=True,
    ),
    _tool(
        tools.get_validator_info,
        "Get detailed information about a specific Casper Network validator by public key.",
        required=[VALIDATOR_PUBLIC_KEY],
    ),
    _tool(
        tools.get_validator_delegations,
        "Get delegations to a specific validator on the Casper Network.",
        required=[VALIDATOR_PUBLIC_KEY],
        paged=True,
    ),
    _tool(
        tools.get_validator_rewards,
        "Get rewards earned by a specific validator on the Casper Network.",
        required=[VALIDATOR_PUBLIC_KEY],
        paged=True,
    ),
    _tool(
        tools.get_validator_total_rewards,
        "Get the total rewards earned by a validator on the Casper Network.",
        required=[VALIDATOR_PUBLIC_KEY],
    ),
    _tool(
        tools.get_historical_validator_performance,
        "Get historical performance scores for a specific validator on the Casper Network.",
        required=[VALIDATOR_PUBLIC_KEY],
        paged=True,
    ),
    _tool(
        tools.get_historical_validator_average_performance,
        "Get historical average performance for a specific validator on the Casper Network.",
        required=[VALIDATOR_PUBLIC_KEY],
        paged=True,
    ),
    _tool(
        tools.get_historical_validators_average_performance,
        "Get historical average performance for all validators on the Casper Network.",
        paged=True,
    ),
    _tool(
        tools.get_validator_era_rewards,
        "Get validator rewards aggregated by era on the Casper Network.",
        required=[VALIDATOR_PUBLIC_KEY],
        paged=True,
    ),
    _tool(
        tools.get_bidder,
        "Get information about a specific bidder on the Casper Network by public key.",
        required=[BIDDER_PUBLIC_KEY],
    ),
    _tool(tools.get_bidders, "Get a list of bidders on the Casper Network.", paged=True),
    # Deploys
    _tool(
        tools.get_deploy,
        "Get detailed information about a specific Casper Network deploy (transaction) by its hash.",
        required=[DEPLOY_HASH],
    ),
    _tool(
        tools.get_deploys,
        "Get a paginated list of all deploys (transactions) on the Casper Network.",
        paged=True,
    ),
    _tool(
        tools.get_block_deploys,
        "Get deploys (transactions) included in a specific block on the Casper Network.",
        required=[BLOCK_HASH],
        paged=True,
    ),
    _tool(tools.get_deploy_execution_types, "Get the list of deploy execution types on the Casper Network."),
    _tool(
        tools.get_awaiting_deploy,
        "Get an awaiting deploy by its deploy hash on the Casper Network.",
        required=[DEPLOY_HASH],
    ),
    _tool(
        tools.create_awaiting_deploy,
        "Create an awaiting deploy on the Casper Network. Submits a deploy JSON for multi-signature collection.",
        required=[("deploy_json", _string("The deploy JSON string"))],
    ),
    _tool(
        tools.add_awaiting_deploy_approval,
        "Add an approval (signature) to an awaiting deploy on the Casper Network.",
        required=[
            DEPLOY_HASH,
            ("signer", _string("The signer's public key")),
            ("signature", _string("The signature")),
        ],
    ),
    # Transfers
    _tool(
        tools.get_transfers,
        "Get native CSPR transfer history for a Casper Network account.",
        required=[("account_identifier", _string("The public key or account hash of the account"))],
        paged=True,
    ),
    _tool(
        tools.get_deploy_transfers,
        "Get native CSPR transfers for a specific deploy on the Casper Network.",
        required=[DEPLOY_HASH],
        paged=True,
    ),
    # Contracts
    _tool(
        tools.get_contract,
        "Get information about a Casper Network smart contract by its hash.",
        required=[CONTRACT_HASH],
    ),
    _tool(
        tools.get_contract_entry_points,
        "Get the entry points (callable functions) of a Casper Network smart contract.",
        required=[CONTRACT_HASH],
    ),
    _tool(tools.get_contracts, "Get a paginated list of all contracts on the Casper Network.", paged=True),
    _tool(tools.get_contract_types, "Get the list of contract types on the Casper Network."),
    _tool(
        tools.get_contract_entry_point_costs,
        "Get cost statistics for a specific contract entry point on the Casper Network.",
        required=[CONTRACT_HASH, ("entry_point_name", _string("The entry point name"))],
    ),
    _tool(
        tools.get_contract_packages,
        "Get a paginated list of contract packages on the Casper Network.",
        paged=True,
    ),
    _tool(
        tools.get_contracts_by_contract_package,
        "Get contracts belonging to a specific contract package on the Casper Network.",
        required=[CONTRACT_PACKAGE_HASH],
        paged=True,
    ),
    # Fungible tokens
    _tool(
        tools.get_ft_token_info,
        "Get information about a fungible token (CEP-18) contract package on the Casper Network.",
        required=[FT_PACKAGE_HASH],
    ),
    _tool(
        tools.get_ft_token_holders,
        "Get the holders (ownership list) of a fungible token on the Casper Network.",
        required=[FT_PACKAGE_HASH],
        paged=True,
    ),
    _tool(
        tools.get_account_ft_balances,
        "Get fungible token balances for a Casper Network account.",
        required=[ACCOUNT_IDENTIFIER],
        paged=True,
    ),
    _tool(
        tools.get_fungible_token_actions,
        "Get fungible token actions (transfers, mints, burns) on the Casper Network.",
        paged=True,
    ),
    _tool(
        tools.get_account_fungible_token_actions,
        "Get fungible token actions for a specific account on the Casper Network.",
        required=[ACCOUNT_IDENTIFIER],
        paged=True,
    ),
    _tool(
        tools.get_contract_package_fungible_token_actions,
        "Get fungible token actions for a specific contract package on the Casper Network.",
        required=[CONTRACT_PACKAGE_HASH],
        paged=True,
    ),
    _tool(
        tools.get_ft_rate_latest,
        "Get the latest fungible token rate for a contract package on the Casper Network.",
        required=[FT_PACKAGE_HASH],
        optional=[CURRENCY_FILTER],
    ),
    _tool(
        tools.get_ft_rates,
        "Get historical fungible token rates for a contract package on the Casper Network.",
        required=[FT_PACKAGE_HASH],
        paged=True,
    ),
    _tool(
        tools.get_ft_daily_rate_latest,
        "Get the latest daily aggregated fungible token rate on the Casper Network.",
        required=[FT_PACKAGE_HASH],
        optional=[CURRENCY_FILTER],
    ),
    _tool(
        tools.get_ft_daily_rates,
        "Get historical daily aggregated fungible token rates on the Casper Network.",
        required=[FT_PACKAGE_HASH],
        paged=True,
    ),
    _tool(
        tools.get_ft_dex_rate_latest,
        "Get the latest token-to-token DEX rate for a fungible token on the Casper Network.",
        required=[FT_PACKAGE_HASH],
        optional=[TARGET_PACKAGE_FILTER],
    ),
    _tool(
        tools.get_ft_dex_rates,
        "Get historical token-to-token DEX rates for a fungible token on the Casper Network.",
        required=[FT_PACKAGE_HASH],
        paged=True,
    ),
    _tool(
        tools.get_ft_daily_dex_rate_latest,
        "Get the latest daily token-to-token DEX rate for a fungible token on the Casper Network.",
        required=[FT_PACKAGE_HASH],
        optional=[TARGET_PACKAGE_FILTER],
    ),
    _tool(
        tools.get_ft_daily_dex_rates,
        "Get historical daily token-to-token DEX rates for a fungible token on the Casper Network.",
        required=[FT_PACKAGE_HASH],
        paged=True,
    ),
    # NFTs
    _tool(
        tools.get_nft_collection,
        "Get information about an NFT collection (contract package) on the Casper Network.",
        required=[NFT_PACKAGE_HASH],
        paged=True,
    ),
    _tool(
        tools.get_account_nfts,
        "Get NFTs owned by a Casper Network account.",
        required=[ACCOUNT_IDENTIFIER],
        paged=True,
    ),
    _tool(
        tools.get_nft,
        "Get a specific NFT by contract package hash and token ID on the Casper Network.",
        required=[NFT_PACKAGE_HASH, TOKEN_ID],
    ),
    _tool(tools.get_nft_standards, "Get the list of NFT standards supported on the Casper Network."),
    _tool(
        tools.get_nft_metadata_statuses,
        "Get the list of offchain NFT metadata statuses on the Casper Network.",
    ),
    _tool(
        tools.get_nft_actions_for_token,
        "Get NFT actions for a specific token in a collection on the Casper Network.",
        required=[NFT_PACKAGE_HASH, TOKEN_ID],
        paged=True,
    ),
    _tool(
        tools.get_account_nft_actions,
        "Get NFT actions for a specific account on the Casper Network.",
        required=[ACCOUNT_IDENTIFIER],
        paged=True,
    ),
    _tool(
        tools.get_contract_package_nft_actions,
        "Get NFT actions for a specific contract package on the Casper Network.",
        required=[CONTRACT_PACKAGE_HASH],
        paged=True,
    ),
    _tool(tools.get_nft_action_types, "Get the list of NFT action types on the Casper Network."),
    _tool(
        tools.get_contract_package_nft_ownership,
        "Get NFT ownership distribution for a specific contract package on the Casper Network.",
        required=[CONTRACT_PACKAGE_HASH],
        paged=True,
    ),
    _tool(
        tools.get_account_nft_ownership,
        "Get NFT ownership summary for a specific account on the Casper Network.",
        required=[ACCOUNT_IDENTIFIER],
        paged=True,
    ),
    # Market data
    _tool(
        tools.get_current_currency_rate,
        "Get the current CSPR exchange rate for a specific currency.",
        required=[CURRENCY_ID],
    ),
    _tool(
        tools.get_historical_currency_rates,
        "Get historical CSPR exchange rates for a specific currency.",
        required=[CURRENCY_ID],
        paged=True,
    ),
    _tool(tools.get_currencies, "Get a list of supported currencies for CSPR exchange rates.", paged=True),
    _tool(tools.get_dexes, "Get a list of all decentralized exchanges (DEXes) on the Casper Network."),
    _tool(tools.get_swaps, "Get a paginated list of token swaps on the Casper Network DEXes.", paged=True),
    # Identity
    _tool(
        tools.get_centralized_account_info,
        "Get centralized account information for a Casper Network account by account hash.",
        required=[("account_hash", _string("The account hash"))],
    ),
    _tool(
        tools.get_centralized_accounts,
        "Get a list of centralized account information entries on the Casper Network.",
        paged=True,
    ),
    _tool(
        tools.resolve_cspr_name,
        "Resolve a CSPR.name to an account hash on the Casper Network.",
        required=[("name", _string("The CSPR.name to resolve (e.g., 'alice.cspr')"))],
    ),
]

TOOL_REGISTRY: Dict[str, ToolDefinition] = {tool.name: tool for tool in _DEFINITIONS}


def list_tools() -> List[Dict[str, Any]]:
    """Return a simple list of available tools."""
    return [
        {
            "name": tool.name,
            "description": tool.description,
            "params": tool.params,
            "inputSchema": tool.input_schema,
        }
        for tool in TOOL_REGISTRY.values()
    ]


def _accepts(tool: ToolDefinition, params: Dict[str, Any]) -> bool:
    if set(params) - set(tool.input_schema["properties"]):
        return False
    try:
        inspect.signature(tool.callable).bind(**params, endpoint=None)
    except TypeError:
        return False
    return True


async def call_tool(tool_name: str, params: Optional[Dict[str, Any]] = None, *, endpoint) -> str:
    """Dispatch to a tool by name against the given network endpoint."""
    params = params or {}
    tool = TOOL_REGISTRY.get(tool_name)
    if tool is None:
        return f"Unknown tool: {tool_name}"
    if not isinstance(params, dict) or not _accepts(tool, params):
        return f"Invalid parameters for tool: {tool_name}"
    # Tools report their own failures as text.
    return await tool.callable(**params, endpoint=endpoint)


def is_error_result(result: str) -> bool:
    """True for upstream failures and dispatch rejections."""
    return result.startswith(("Error ", "Unknown tool: ", "Invalid parameters for tool: "))
