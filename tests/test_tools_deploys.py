import json

import pytest

from casper_mcp.cspr_cloud.client import CsprCloudError, CsprCloudNotFoundError
from casper_mcp.tools.awaiting_deploys import (
    add_awaiting_deploy_approval,
    create_awaiting_deploy,
    get_awaiting_deploy,
)
from casper_mcp.tools.deploys import get_block_deploys, get_deploy, get_deploy_execution_types
from casper_mcp.tools.transfers import get_deploy_transfers, get_transfers


@pytest.mark.asyncio
async def test_deploy_with_transfers(stub_endpoint):
    endpoint = stub_endpoint(
        {
            "deploy.get_deploy": {
                "data": {
                    "deploy_hash": "dh",
                    "status": "processed",
                    "cost": "100000000",
                    "contract_hash": "ch",
                    "transfers": [
                        {"from_purse_public_key": "01aa", "to_public_key": "01bb", "amount": "2500000000"}
                    ],
                }
            }
        }
    )
    result = await get_deploy("dh", endpoint=endpoint)
    assert result.startswith("## Deploy Information\n- **Deploy Hash:** dh\n")
    assert "- **Contract Hash:** ch\n" in result
    assert "- **Contract Package:**" not in result
    assert "### Transfers (1)\n- From: 01aa → To: 01bb | Amount: 2.500000000 CSPR\n" in result


@pytest.mark.asyncio
async def test_deploy_not_found(stub_endpoint):
    endpoint = stub_endpoint({"deploy.get_deploy": CsprCloudNotFoundError("no")})
    assert await get_deploy("dh", endpoint=endpoint) == "Deploy not found: dh"


@pytest.mark.asyncio
async def test_block_deploys_preamble(stub_endpoint):
    endpoint = stub_endpoint(
        {"deploy.get_block_deploys": {"data": [{"deploy_hash": "d1"}], "item_count": 1, "page_count": 1}}
    )
    result = await get_block_deploys("bh", endpoint=endpoint)
    assert result.startswith("## Block Deploys (Page 1, 1 total)\nBlock: bh\n---\n- **Deploy Hash:** d1\n")


@pytest.mark.asyncio
async def test_execution_types_catalog(stub_endpoint):
    endpoint = stub_endpoint(
        {"deploy.get_deploy_execution_types": {"data": [{"id": 1, "name": "ModuleBytes"}, {"id": 6, "name": "Transfer"}]}}
    )
    result = await get_deploy_execution_types(endpoint=endpoint)
    assert result == (
        "## Deploy Execution Types (2 total)\n"
        "- **ID:** 1 | **Name:** ModuleBytes\n"
        "- **ID:** 6 | **Name:** Transfer\n"
    )


@pytest.mark.asyncio
async def test_transfers_fall_back_to_hashes(stub_endpoint):
    endpoint = stub_endpoint(
        {
            "transfer.get_account_transfers": {
                "data": [
                    {
                        "deploy_hash": "d1",
                        "from_purse_public_key": None,
                        "initiator_account_hash": "acc-from",
                        "to_public_key": "",
                        "to_account_hash": "acc-to",
                        "amount": "1000000000",
                        "block_height": 9,
                    }
                ],
                "item_count": 1,
                "page_count": 1,
            }
        }
    )
    result = await get_transfers("01aa", endpoint=endpoint)
    assert "  From: acc-from\n  To: acc-to\n  Amount: 1.000000000 CSPR\n  Block: 9 | N/A\n" in result


@pytest.mark.asyncio
async def test_deploy_transfers_empty(stub_endpoint):
    endpoint = stub_endpoint({"transfer.get_deploy_transfers": {"data": []}})
    assert await get_deploy_transfers("dh", endpoint=endpoint) == "No transfers found for deploy: dh"


@pytest.mark.asyncio
async def test_awaiting_deploy_renders_json(stub_endpoint):
    deploy = {"hash": "dh", "approvals": []}
    endpoint = stub_endpoint({"awaiting_deploy.get_awaiting_deploy": {"data": {"deploy": deploy}}})
    result = await get_awaiting_deploy("dh", endpoint=endpoint)
    assert result == (
        "## Awaiting Deploy\n"
        "- **Deploy Hash:** dh\n"
        "- **Deploy JSON:**\n"
        "```json\n"
        f"{json.dumps(deploy, indent=2)}\n"
        "```\n"
    )


@pytest.mark.asyncio
async def test_create_awaiting_deploy_success(stub_endpoint):
    endpoint = stub_endpoint({"awaiting_deploy.create_awaiting_deploy": {"data": True}})
    result = await create_awaiting_deploy('{"hash": "dh"}', endpoint=endpoint)
    assert result == "Awaiting deploy created successfully."
    assert endpoint.calls == [("awaiting_deploy.create_awaiting_deploy", ({"hash": "dh"},), {})]


@pytest.mark.asyncio
async def test_create_awaiting_deploy_rejected(stub_endpoint):
    endpoint = stub_endpoint({"awaiting_deploy.create_awaiting_deploy": {"data": False}})
    assert await create_awaiting_deploy('{"hash": "dh"}', endpoint=endpoint) == "Failed to create awaiting deploy."


@pytest.mark.asyncio
async def test_create_awaiting_deploy_bad_json_skips_upstream(stub_endpoint):
    endpoint = stub_endpoint()
    result = await create_awaiting_deploy("[1]", endpoint=endpoint)
    assert result == "Error creating awaiting deploy: Deploy JSON must be an object."
    assert endpoint.calls == []


@pytest.mark.asyncio
async def test_add_approval_outcomes(stub_endpoint):
    endpoint = stub_endpoint({"awaiting_deploy.add_approval": {"data": True}})
    result = await add_awaiting_deploy_approval("dh", "01aa", "sig", endpoint=endpoint)
    assert result == "Approval added successfully to deploy: dh"
    assert endpoint.calls == [("awaiting_deploy.add_approval", ("dh",), {"signer": "01aa", "signature": "sig"})]

    endpoint = stub_endpoint({"awaiting_deploy.add_approval": CsprCloudError("Invalid signature", status_code=400)})
    result = await add_awaiting_deploy_approval("dh", "01aa", "sig", endpoint=endpoint)
    assert result == "Error adding approval to awaiting deploy: Invalid signature"


@pytest.mark.asyncio
async def test_write_tools_report_upstream_404_as_error(stub_endpoint):
    missing = CsprCloudNotFoundError("Awaiting deploy does not exist", status_code=404)
    endpoint = stub_endpoint(
        {"awaiting_deploy.add_approval": missing, "awaiting_deploy.create_awaiting_deploy": missing}
    )

    result = await add_awaiting_deploy_approval("dh", "01aa", "sig", endpoint=endpoint)
    assert result == "Error adding approval to awaiting deploy: Awaiting deploy does not exist"

    result = await create_awaiting_deploy('{"hash": "dh"}', endpoint=endpoint)
    assert result == "Error creating awaiting deploy: Awaiting deploy does not exist"
