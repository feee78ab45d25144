import os

import pytest
import pytest_asyncio

from casper_mcp.config import CasperMcpConfig, Network
from casper_mcp.cspr_cloud.client import CsprCloudClient
from casper_mcp.tools import get_latest_blocks, get_network_status, get_supply_info, get_validators

LIVE = os.getenv("LIVE_CSPR_CLOUD") in {"1", "true", "yes"}
API_KEY = os.getenv("CSPR_CLOUD_API_KEY", "")
NETWORK = Network.TESTNET if os.getenv("CASPER_MCP_NETWORK", "").lower() == "testnet" else Network.MAINNET


pytestmark = pytest.mark.skipif(not (LIVE and API_KEY), reason="Live CSPR.cloud integration tests are disabled")


@pytest_asyncio.fixture
async def live_endpoint():
    client = CsprCloudClient(CasperMcpConfig(api_key=API_KEY, network=NETWORK))
    yield client.endpoint()
    await client.aclose()


@pytest.mark.asyncio
async def test_live_network_status(live_endpoint):
    result = await get_network_status(endpoint=live_endpoint)
    assert result.startswith("## Casper Network Status")
    assert "- **Current Era:**" in result


@pytest.mark.asyncio
async def test_live_supply(live_endpoint):
    result = await get_supply_info(endpoint=live_endpoint)
    assert result.startswith("## CSPR Supply Information")


@pytest.mark.asyncio
async def test_live_latest_blocks(live_endpoint):
    result = await get_latest_blocks(page_size=3, endpoint=live_endpoint)
    assert result.startswith("## Latest Blocks (Page 1,")


@pytest.mark.asyncio
async def test_live_validators(live_endpoint):
    result = await get_validators(page_size=3, endpoint=live_endpoint)
    assert result.startswith("## Validators")
