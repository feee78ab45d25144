"""
CSPR.cloud sub-resource accessors.

Each method maps to exactly one REST operation and returns the decoded JSON body.
Single-record endpoints answer ``{"data": {...}}``; list endpoints answer
``{"data": [...], "item_count": N, "page_count": M}``. Paging values are passed
through as given; callers clamp them first.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import quote


def _segment(value: Any) -> str:
    return quote(str(value), safe="")


def _page_params(page: int, page_size: int, **filters: Any) -> Dict[str, Any]:
    params: Dict[str, Any] = {"page": page, "page_size": page_size}
    params.update({key: value for key, value in filters.items() if value is not None})
    return params


class _Resource:
    def __init__(self, session) -> None:
        self._session = session

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self._session.get(path, params=params)


class AccountResource(_Resource):
    async def get_account(self, account_identifier: str) -> Any:
        """Fetch one account by public key or account hash."""
        return await self._get(f"/accounts/{_segment(account_identifier)}")

    async def get_accounts(self, *, page: int, page_size: int) -> Any:
        return await self._get("/accounts", _page_params(page, page_size))


class BlockResource(_Resource):
    async def get_block(self, block_hash: str) -> Any:
        return await self._get(f"/blocks/{_segment(block_hash)}")

    async def get_blocks(self, *, page: int, page_size: int) -> Any:
        return await self._get("/blocks", _page_params(page, page_size))

    async def get_validator_blocks(self, public_key: str, *, page: int, page_size: int) -> Any:
        """Blocks proposed by one validator."""
        return await self._get(f"/validators/{_segment(public_key)}/blocks", _page_params(page, page_size))


class DeployResource(_Resource):
    async def get_deploy(self, deploy_hash: str) -> Any:
        """Fetch a deploy together with its native transfers."""
        return await self._get(f"/deploys/{_segment(deploy_hash)}", {"includes": "transfers"})

    async def get_deploys(self, *, page: int, page_size: int) -> Any:
        return await self._get("/deploys", _page_params(page, page_size))

    async def get_account_deploys(self, public_key: str, *, page: int, page_size: int) -> Any:
        return await self._get(f"/accounts/{_segment(public_key)}/deploys", _page_params(page, page_size))

    async def get_block_deploys(self, block_hash: str, *, page: int, page_size: int) -> Any:
        return await self._get(f"/blocks/{_segment(block_hash)}/deploys", _page_params(page, page_size))

    async def get_deploy_execution_types(self) -> Any:
        return await self._get("/deploy-execution-types")


class ValidatorResource(_Resource):
    async def get_validators(self, *, era_id: str, page: int, page_size: int) -> Any:
        return await self._get("/validators", _page_params(page, page_size, era_id=era_id))

    async def get_validator(self, public_key: str, *, era_id: str) -> Any:
        return await self._get(f"/validators/{_segment(public_key)}", {"era_id": era_id})

    async def get_validator_rewards(self, public_key: str, *, page: int, page_size: int) -> Any:
        return await self._get(f"/validators/{_segment(public_key)}/rewards", _page_params(page, page_size))

    async def get_validator_total_rewards(self, public_key: str) -> Any:
        return await self._get(f"/validators/{_segment(public_key)}/total-rewards")

    async def get_validator_era_rewards(self, public_key: str, *, page: int, page_size: int) -> Any:
        return await self._get(f"/validators/{_segment(public_key)}/era-rewards", _page_params(page, page_size))

    async def get_historical_validator_performance(self, public_key: str, *, page: int, page_size: int) -> Any:
        return await self._get(
            f"/validators/{_segment(public_key)}/historical-performance", _page_params(page, page_size)
        )

    async def get_historical_validator_average_performance(
        self, public_key: str, *, page: int, page_size: int
    ) -> Any:
        return await self._get(
            f"/validators/{_segment(public_key)}/historical-average-performance", _page_params(page, page_size)
        )

    async def get_historical_validators_average_performance(self, *, page: int, page_size: int) -> Any:
        return await self._get("/validators/historical-average-performance", _page_params(page, page_size))


class ContractResource(_Resource):
    async def get_contract(self, contract_hash: str) -> Any:
        """Fetch a contract with its owning package embedded."""
        return await self._get(f"/contracts/{_segment(contract_hash)}", {"includes": "contract_package"})

    async def get_contracts(self, *, page: int, page_size: int) -> Any:
        return await self._get("/contracts", _page_params(page, page_size))

    async def get_contract_entry_points(self, contract_hash: str) -> Any:
        return await self._get(f"/contracts/{_segment(contract_hash)}/entry-points")

    async def get_contract_entry_point_costs(self, contract_hash: str, entry_point_name: str) -> Any:
        return await self._get(
            f"/contracts/{_segment(contract_hash)}/entry-points/{_segment(entry_point_name)}/costs"
        )

    async def get_contract_types(self) -> Any:
        return await self._get("/contract-types")

    async def get_contract_package(self, contract_package_hash: str) -> Any:
        return await self._get(f"/contract-packages/{_segment(contract_package_hash)}")

    async def get_contract_packages(self, *, page: int, page_size: int) -> Any:
        return await self._get("/contract-packages", _page_params(page, page_size))

    async def get_account_contract_packages(self, public_key: str, *, page: int, page_size: int) -> Any:
        return await self._get(
            f"/accounts/{_segment(public_key)}/contract-packages", _page_params(page, page_size)
        )

    async def get_contracts_by_contract_package(
        self, contract_package_hash: str, *, page: int, page_size: int
    ) -> Any:
        return await self._get(
            f"/contract-packages/{_segment(contract_package_hash)}/contracts", _page_params(page, page_size)
        )


class DelegateResource(_Resource):
    async def get_account_delegations(self, public_key: str, *, page: int, page_size: int) -> Any:
        return await self._get(f"/accounts/{_segment(public_key)}/delegations", _page_params(page, page_size))

    async def get_validator_delegations(self, public_key: str, *, page: int, page_size: int) -> Any:
        return await self._get(f"/validators/{_segment(public_key)}/delegations", _page_params(page, page_size))

    async def get_account_delegation_rewards(self, public_key: str, *, page: int, page_size: int) -> Any:
        return await self._get(
            f"/accounts/{_segment(public_key)}/delegation-rewards", _page_params(page, page_size)
        )

    async def get_total_account_delegation_rewards(self, public_key: str) -> Any:
        return await self._get(f"/accounts/{_segment(public_key)}/total-delegation-rewards")

    async def get_total_validator_delegator_rewards(self, public_key: str) -> Any:
        return await self._get(f"/validators/{_segment(public_key)}/total-delegator-rewards")


class TransferResource(_Resource):
    async def get_account_transfers(self, account_identifier: str, *, page: int, page_size: int) -> Any:
        return await self._get(
            f"/accounts/{_segment(account_identifier)}/transfers", _page_params(page, page_size)
        )

    async def get_deploy_transfers(self, deploy_hash: str, *, page: int, page_size: int) -> Any:
        return await self._get(f"/deploys/{_segment(deploy_hash)}/transfers", _page_params(page, page_size))


class NFTResource(_Resource):
    async def get_contract_package_nfts(self, contract_package_hash: str, *, page: int, page_size: int) -> Any:
        return await self._get(
            f"/contract-packages/{_segment(contract_package_hash)}/nft-tokens", _page_params(page, page_size)
        )

    async def get_account_nfts(self, account_identifier: str, *, page: int, page_size: int) -> Any:
        return await self._get(
            f"/accounts/{_segment(account_identifier)}/nft-tokens",
            _page_params(page, page_size, includes="contract_package"),
        )

    async def get_nft(self, contract_package_hash: str, token_id: str) -> Any:
        return await self._get(
            f"/contract-packages/{_segment(contract_package_hash)}/nft-tokens/{_segment(token_id)}"
        )

    async def get_nft_standards(self) -> Any:
        return await self._get("/nft-token-standards")

    async def get_nft_metadata_statuses(self) -> Any:
        return await self._get("/nft-token-metadata-statuses")

    async def get_nft_action_types(self) -> Any:
        return await self._get("/nft-token-action-types")

    async def get_nft_actions_for_token(
        self, contract_package_hash: str, token_id: str, *, page: int, page_size: int
    ) -> Any:
        return await self._get(
            f"/contract-packages/{_segment(contract_package_hash)}/nft-tokens/{_segment(token_id)}/actions",
            _page_params(page, page_size),
        )

    async def get_account_nft_actions(self, account_identifier: str, *, page: int, page_size: int) -> Any:
        return await self._get(
            f"/accounts/{_segment(account_identifier)}/nft-token-actions", _page_params(page, page_size)
        )

    async def get_contract_package_nft_actions(
        self, contract_package_hash: str, *, page: int, page_size: int
    ) -> Any:
        return await self._get(
            f"/contract-packages/{_segment(contract_package_hash)}/nft-token-actions",
            _page_params(page, page_size),
        )

    async def get_contract_package_nft_ownership(
        self, contract_package_hash: str, *, page: int, page_size: int
    ) -> Any:
        return await self._get(
            f"/contract-packages/{_segment(contract_package_hash)}/nft-token-ownership",
            _page_params(page, page_size),
        )

    async def get_account_nft_ownership(self, account_identifier: str, *, page: int, page_size: int) -> Any:
        return await self._get(
            f"/accounts/{_segment(account_identifier)}/nft-token-ownership",
            _page_params(page, page_size, includes="contract_package"),
        )


class FTResource(_Resource):
    async def get_contract_package_ft_ownership(
        self, contract_package_hash: str, *, page: int, page_size: int
    ) -> Any:
        """Holders of a CEP-18 token."""
        return await self._get(
            f"/contract-packages/{_segment(contract_package_hash)}/ft-token-ownership",
            _page_params(page, page_size),
        )

    async def get_account_ft_ownership(self, account_identifier: str, *, page: int, page_size: int) -> Any:
        return await self._get(
            f"/accounts/{_segment(account_identifier)}/ft-token-ownership",
            _page_params(page, page_size, includes="contract_package"),
        )

    async def get_ft_actions(self, *, page: int, page_size: int) -> Any:
        return await self._get("/ft-token-actions", _page_params(page, page_size))

    async def get_account_ft_actions(self, account_identifier: str, *, page: int, page_size: int) -> Any:
        return await self._get(
            f"/accounts/{_segment(account_identifier)}/ft-token-actions", _page_params(page, page_size)
        )

    async def get_contract_package_ft_actions(
        self, contract_package_hash: str, *, page: int, page_size: int
    ) -> Any:
        return await self._get(
            f"/contract-packages/{_segment(contract_package_hash)}/ft-token-actions",
            _page_params(page, page_size),
        )

    async def get_rate_latest(self, contract_package_hash: str, *, currency_id: Optional[str] = None) -> Any:
        return await self._get(
            f"/ft/{_segment(contract_package_hash)}/rates/latest", {"currency_id": currency_id}
        )

    async def get_rates(self, contract_package_hash: str, *, page: int, page_size: int) -> Any:
        return await self._get(f"/ft/{_segment(contract_package_hash)}/rates", _page_params(page, page_size))

    async def get_daily_rate_latest(
        self, contract_package_hash: str, *, currency_id: Optional[str] = None
    ) -> Any:
        return await self._get(
            f"/ft/{_segment(contract_package_hash)}/daily-rates/latest", {"currency_id": currency_id}
        )

    async def get_daily_rates(self, contract_package_hash: str, *, page: int, page_size: int) -> Any:
        return await self._get(
            f"/ft/{_segment(contract_package_hash)}/daily-rates", _page_params(page, page_size)
        )

    async def get_dex_rate_latest(
        self, contract_package_hash: str, *, target_contract_package_hash: Optional[str] = None
    ) -> Any:
        return await self._get(
            f"/ft/{_segment(contract_package_hash)}/dex-rates/latest",
            {"target_contract_package_hash": target_contract_package_hash},
        )

    async def get_dex_rates(self, contract_package_hash: str, *, page: int, page_size: int) -> Any:
        return await self._get(f"/ft/{_segment(contract_package_hash)}/dex-rates", _page_params(page, page_size))

    async def get_daily_dex_rate_latest(
        self, contract_package_hash: str, *, target_contract_package_hash: Optional[str] = None
    ) -> Any:
        return await self._get(
            f"/ft/{_segment(contract_package_hash)}/daily-dex-rates/latest",
            {"target_contract_package_hash": target_contract_package_hash},
        )

    async def get_daily_dex_rates(self, contract_package_hash: str, *, page: int, page_size: int) -> Any:
        return await self._get(
            f"/ft/{_segment(contract_package_hash)}/daily-dex-rates", _page_params(page, page_size)
        )


class RateResource(_Resource):
    async def get_current_currency_rate(self, currency_id: str) -> Any:
        return await self._get(f"/rates/{_segment(currency_id)}/amount")

    async def get_historical_currency_rates(self, currency_id: str, *, page: int, page_size: int) -> Any:
        return await self._get(f"/rates/{_segment(currency_id)}", _page_params(page, page_size))

    async def get_currencies(self, *, page: int, page_size: int) -> Any:
        return await self._get("/currencies", _page_params(page, page_size))


class AuctionResource(_Resource):
    async def get_auction_metrics(self) -> Any:
        """Current era, validator and bid counters."""
        return await self._get("/auction-metrics")


class SupplyResource(_Resource):
    async def get_supply(self) -> Any:
        return await self._get("/supply")


class DexResource(_Resource):
    async def get_dexes(self) -> Any:
        return await self._get("/dexes")


class SwapResource(_Resource):
    async def get_swaps(self, *, page: int, page_size: int) -> Any:
        return await self._get("/swaps", _page_params(page, page_size))


class CentralizedAccountResource(_Resource):
    async def get_centralized_account_info(self, account_hash: str) -> Any:
        return await self._get(f"/centralized-account-info/{_segment(account_hash)}")

    async def get_centralized_accounts(self, *, page: int, page_size: int) -> Any:
        return await self._get("/centralized-account-info", _page_params(page, page_size))


class CsprNameResource(_Resource):
    async def resolve(self, name: str) -> Any:
        return await self._get(f"/cspr-name-resolutions/{_segment(name)}")


class AwaitingDeployResource(_Resource):
    async def get_awaiting_deploy(self, deploy_hash: str) -> Any:
        return await self._get(f"/awaiting-deploys/{_segment(deploy_hash)}")

    async def create_awaiting_deploy(self, deploy: Dict[str, Any]) -> Any:
        """Submit a deploy for multi-signature collection."""
        return await self._session.post("/awaiting-deploys", payload={"deploy": deploy})

    async def add_approval(self, deploy_hash: str, *, signer: str, signature: str) -> Any:
        return await self._session.post(
            f"/awaiting-deploys/{_segment(deploy_hash)}/approvals",
            payload={"signer": signer, "signature": signature},
        )


class BidderResource(_Resource):
    async def get_bidder(self, public_key: str) -> Any:
        return await self._get(f"/bidders/{_segment(public_key)}")

    async def get_bidders(self, *, page: int, page_size: int) -> Any:
        return await self._get("/bidders", _page_params(page, page_size))
