"""
Thin HTTP client for the CSPR.cloud REST API.

One ``ApiSession`` is kept per network; each is wrapped in a ``NetworkEndpoint``
exposing the same set of sub-resources, so callers choose mainnet or testnet once
and write the rest of their code against the common shape. Upstream failures are
mapped to internal exceptions that the tool layer turns into report text.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from casper_mcp.config import CasperMcpConfig, Network
from casper_mcp.cspr_cloud.resources import (
    AccountResource,
    AuctionResource,
    AwaitingDeployResource,
    BidderResource,
    BlockResource,
    CentralizedAccountResource,
    ContractResource,
    CsprNameResource,
    DelegateResource,
    DeployResource,
    DexResource,
    FTResource,
    NFTResource,
    RateResource,
    SupplyResource,
    SwapResource,
    TransferResource,
    ValidatorResource,
)

logger = logging.getLogger(__name__)


class CsprCloudError(Exception):
    """Base exception for CSPR.cloud API errors."""

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class CsprCloudNotFoundError(CsprCloudError):
    """Raised when the requested record does not exist upstream."""


class CsprCloudUnauthorizedError(CsprCloudError):
    """Raised when CSPR.cloud rejects the API key."""


class CsprCloudUnreachableError(CsprCloudError):
    """Raised when the API cannot be reached at all."""


def _error_details(data: Any) -> tuple[Optional[str], Optional[str]]:
    """Pull ``(code, message)`` out of an upstream error body."""
    if not isinstance(data, dict):
        return None, None
    error = data.get("error")
    if isinstance(error, dict):
        code = error.get("code")
        message = error.get("message") or error.get("description")
        return (str(code) if code is not None else None), (str(message) if message else None)
    message = data.get("message")
    if isinstance(error, str) and error:
        return error, str(message) if message else error
    return None, str(message) if message else None


class ApiSession:
    """Authenticated request helper bound to one CSPR.cloud base URL."""

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str,
        timeout: float,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = async_client
        self._owns_client = async_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self._timeout)
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": self._api_key, "Accept": "application/json"}

    def _process_response(self, response: httpx.Response) -> Any:
        if response.status_code >= 400:
            try:
                data = response.json()
            except ValueError:
                data = None
            code, message = _error_details(data)
            message = message or f"CSPR.cloud API error (HTTP {response.status_code})"
            if response.status_code == 404:
                raise CsprCloudNotFoundError(message, code=code, status_code=404)
            if response.status_code in {401, 403}:
                raise CsprCloudUnauthorizedError(message, code=code, status_code=response.status_code)
            raise CsprCloudError(message, code=code, status_code=response.status_code)

        try:
            return response.json()
        except ValueError:
            raise CsprCloudError(
                "Unexpected response from CSPR.cloud API.", status_code=response.status_code
            ) from None

    async def get(self, path: str, *, params: Optional[Dict[str, Any]] = None) -> Any:
        client = await self._get_client()
        query = {key: value for key, value in (params or {}).items() if value is not None}
        try:
            response = await client.get(path, params=query or None, headers=self._headers())
        except httpx.RequestError as exc:
            logger.warning("CSPR.cloud unreachable for GET %s", path)
            raise CsprCloudUnreachableError("CSPR.cloud API unreachable") from exc
        return self._process_response(response)

    async def post(self, path: str, *, payload: Any) -> Any:
        client = await self._get_client()
        try:
            response = await client.post(path, json=payload, headers=self._headers())
        except httpx.RequestError as exc:
            logger.warning("CSPR.cloud unreachable for POST %s", path)
            raise CsprCloudUnreachableError("CSPR.cloud API unreachable") from exc
        return self._process_response(response)


class NetworkEndpoint:
    """The full sub-resource surface of one network."""

    def __init__(self, network: Network, session: ApiSession) -> None:
        self.network = network
        self.session = session
        self.account = AccountResource(session)
        self.block = BlockResource(session)
        self.deploy = DeployResource(session)
        self.validator = ValidatorResource(session)
        self.contract = ContractResource(session)
        self.delegate = DelegateResource(session)
        self.transfer = TransferResource(session)
        self.nft = NFTResource(session)
        self.ft = FTResource(session)
        self.rate = RateResource(session)
        self.auction = AuctionResource(session)
        self.supply = SupplyResource(session)
        self.dex = DexResource(session)
        self.swap = SwapResource(session)
        self.centralized_account = CentralizedAccountResource(session)
        self.cspr_name = CsprNameResource(session)
        self.awaiting_deploy = AwaitingDeployResource(session)
        self.bidder = BidderResource(session)

    @property
    def is_testnet(self) -> bool:
        return self.network is Network.TESTNET


class CsprCloudClient:
    """Holds both pre-built network endpoints and resolves the configured one."""

    def __init__(
        self,
        config: CasperMcpConfig,
        *,
        mainnet_client: Optional[httpx.AsyncClient] = None,
        testnet_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config
        self.mainnet = NetworkEndpoint(
            Network.MAINNET,
            ApiSession(
                config.mainnet_url,
                api_key=config.api_key,
                timeout=config.timeout,
                async_client=mainnet_client,
            ),
        )
        self.testnet = NetworkEndpoint(
            Network.TESTNET,
            ApiSession(
                config.testnet_url,
                api_key=config.api_key,
                timeout=config.timeout,
                async_client=testnet_client,
            ),
        )

    def endpoint(self, network: Optional[Network] = None) -> NetworkEndpoint:
        """Return the endpoint for ``network`` (defaults to the configured one)."""
        selected = network or self.config.network
        return self.testnet if selected is Network.TESTNET else self.mainnet

    async def aclose(self) -> None:
        await self.mainnet.session.aclose()
        await self.testnet.session.aclose()
