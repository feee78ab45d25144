"""LLM-facing tool implementations."""

from .accounts import (
    get_account_balance,
    get_account_contract_packages,
    get_account_delegation_rewards,
    get_account_delegations,
    get_account_deploys,
    get_account_info,
    get_accounts,
    get_total_account_delegation_rewards,
    get_total_validator_delegator_rewards,
)
from .awaiting_deploys import add_awaiting_deploy_approval, create_awaiting_deploy, get_awaiting_deploy
from .blocks import get_block, get_latest_blocks, get_validator_blocks
from .centralized_accounts import get_centralized_account_info, get_centralized_accounts
from .contracts import (
    get_contract,
    get_contract_entry_point_costs,
    get_contract_entry_points,
    get_contract_packages,
    get_contract_types,
    get_contracts,
    get_contracts_by_contract_package,
)
from .currency import get_currencies, get_current_currency_rate, get_historical_currency_rates
from .deploys import get_block_deploys, get_deploy, get_deploy_execution_types, get_deploys
from .dex import get_dexes, get_swaps
from .ft_rates import (
    get_ft_daily_dex_rate_latest,
    get_ft_daily_dex_rates,
    get_ft_daily_rate_latest,
    get_ft_daily_rates,
    get_ft_dex_rate_latest,
    get_ft_dex_rates,
    get_ft_rate_latest,
    get_ft_rates,
)
from .names import resolve_cspr_name
from .network import get_era_info, get_network_status, get_supply_info
from .nfts import (
    get_account_nft_actions,
    get_account_nft_ownership,
    get_account_nfts,
    get_contract_package_nft_actions,
    get_contract_package_nft_ownership,
    get_nft,
    get_nft_action_types,
    get_nft_actions_for_token,
    get_nft_collection,
    get_nft_metadata_statuses,
    get_nft_standards,
)
from .staking import (
    get_bidder,
    get_bidders,
    get_historical_validator_average_performance,
    get_historical_validator_performance,
    get_historical_validators_average_performance,
    get_validator_delegations,
    get_validator_era_rewards,
    get_validator_info,
    get_validator_rewards,
    get_validator_total_rewards,
    get_validators,
)
from .tokens import (
    get_account_ft_balances,
    get_account_fungible_token_actions,
    get_contract_package_fungible_token_actions,
    get_ft_token_holders,
    get_ft_token_info,
    get_fungible_token_actions,
)
from .transfers import get_deploy_transfers, get_transfers

__all__ = [
    "add_awaiting_deploy_approval",
    "create_awaiting_deploy",
    "get_account_balance",
    "get_account_contract_packages",
    "get_account_delegation_rewards",
    "get_account_delegations",
    "get_account_deploys",
    "get_account_ft_balances",
    "get_account_fungible_token_actions",
    "get_account_info",
    "get_account_nft_actions",
    "get_account_nft_ownership",
    "get_account_nfts",
    "get_accounts",
    "get_awaiting_deploy",
    "get_bidder",
    "get_bidders",
    "get_block",
    "get_block_deploys",
    "get_centralized_account_info",
    "get_centralized_accounts",
    "get_contract",
    "get_contract_entry_point_costs",
    "get_contract_entry_points",
    "get_contract_package_fungible_token_actions",
    "get_contract_package_nft_actions",
    "get_contract_package_nft_ownership",
    "get_contract_packages",
    "get_contract_types",
    "get_contracts",
    "get_contracts_by_contract_package",
    "get_currencies",
    "get_current_currency_rate",
    "get_deploy",
    "get_deploy_execution_types",
    "get_deploy_transfers",
    "get_deploys",
    "get_dexes",
    "get_era_info",
    "get_ft_daily_dex_rate_latest",
    "get_ft_daily_dex_rates",
    "get_ft_daily_rate_latest",
    "get_ft_daily_rates",
    "get_ft_dex_rate_latest",
    "get_ft_dex_rates",
    "get_ft_rate_latest",
    "get_ft_rates",
    "get_ft_token_holders",
    "get_ft_token_info",
    "get_fungible_token_actions",
    "get_historical_currency_rates",
    "get_historical_validator_average_performance",
    "get_historical_validator_performance",
    "get_historical_validators_average_performance",
    "get_latest_blocks",
    "get_network_status",
    "get_nft",
    "get_nft_action_types",
    "get_nft_actions_for_token",
    "get_nft_collection",
    "get_nft_metadata_statuses",
    "get_nft_standards",
    "get_supply_info",
    "get_swaps",
    "get_total_account_delegation_rewards",
    "get_total_validator_delegator_rewards",
    "get_transfers",
    "get_validator_blocks",
    "get_validator_delegations",
    "get_validator_era_rewards",
    "get_validator_info",
    "get_validator_rewards",
    "get_validator_total_rewards",
    "get_validators",
    "resolve_cspr_name",
]
